# python imports
import logging
from datetime import datetime

# package imports
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

# projects imports
from external.database import db
from app.libs.session import session_scope
from app.libs.errors import AuthError, ConflictError, NotFoundError, StoreError, ValidationError

# app imports
from .models import User, UserRole, PersonType

logger = logging.getLogger(__name__)


class AuthService:
    @staticmethod
    def register_user(data):
        email = data["email"].strip().lower()
        try:
            with session_scope() as session:
                if session.execute(select(User.id).where(User.email == email)).first():
                    raise ConflictError("Email already registered")

                user = User(
                    email=email,
                    full_name=data.get("full_name"),
                    phone=data.get("phone"),
                    role=UserRole.USER,
                    active=True,
                )
                user.set_password(data["password"])
                session.add(user)
                session.flush()

                logger.info(f"Registered user {user.id}")
                return user
        except SQLAlchemyError as e:
            logger.error(f"Database error registering user: {str(e)}")
            raise StoreError()

    @staticmethod
    def login_user(email, password):
        with session_scope() as session:
            user = session.execute(
                select(User).where(User.email == email.strip().lower())
            ).scalar_one_or_none()
            if not user or not user.check_password(password):
                logger.warning(f"Failed login attempt for {email}")
                raise AuthError("Invalid credentials")

            if not user.is_active:
                raise AuthError("Account is deactivated")

            user.last_login_at = datetime.utcnow()
            return user

    @staticmethod
    def load_user(user_id):
        return db.session.get(User, str(user_id))


class UserService:
    @staticmethod
    def get_user_profile(user_id):
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def update_user_profile(user_id, data):
        with session_scope() as session:
            user = session.get(User, user_id)
            if not user:
                raise NotFoundError("User not found")

            for key in ("full_name", "phone"):
                if key in data:
                    setattr(user, key, data[key])
            return user

    @staticmethod
    def set_person_type(user_id, person_type):
        """Record whether the account belongs to a private person or a company"""
        try:
            value = PersonType(person_type)
        except ValueError:
            raise ValidationError("Invalid profile type")

        try:
            with session_scope() as session:
                user = session.get(User, user_id)
                if not user:
                    raise NotFoundError("User not found")
                user.person_type = value
                user.updated_at = datetime.utcnow()
                return user
        except SQLAlchemyError as e:
            logger.error(f"Database error updating profile {user_id}: {str(e)}")
            raise StoreError()
