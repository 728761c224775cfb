from enum import Enum
from flask_login import UserMixin

from app.libs.models import BaseModel
from external.database import db


class UserRole(Enum):
    ADMIN = "admin"
    USER = "user"


class PersonType(Enum):
    PRIVATE = "private"
    COMPANY = "company"


class User(BaseModel, UserMixin):
    __tablename__ = "users"

    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256))
    full_name = db.Column(db.String(120))
    phone = db.Column(db.String(30))
    role = db.Column(
        db.Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        default=UserRole.USER,
        nullable=False,
    )
    person_type = db.Column(
        db.Enum(
            PersonType, name="person_type", values_callable=lambda e: [m.value for m in e]
        )
    )
    active = db.Column(db.Boolean, default=True, nullable=False)
    last_login_at = db.Column(db.DateTime)

    def set_password(self, password):
        from passlib.hash import pbkdf2_sha256

        self.password_hash = pbkdf2_sha256.hash(password)

    def check_password(self, password):
        from passlib.hash import pbkdf2_sha256

        if not self.password_hash:
            return False
        return pbkdf2_sha256.verify(password, self.password_hash)

    @property
    def is_active(self):
        return self.active

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User {self.email}>"
