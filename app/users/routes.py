import logging

# package imports
from flask_smorest import Blueprint, abort
from flask.views import MethodView
from flask_login import login_user, logout_user, current_user

# project imports
from app.libs.errors import AuthError
from app.libs.decorators import login_required, rate_limit

# app imports
from .schemas import (
    UserSchema,
    UserRegisterSchema,
    UserLoginSchema,
    UserUpdateSchema,
    ProfileCreateSchema,
)
from .services import AuthService, UserService

logger = logging.getLogger(__name__)

bp = Blueprint("users", __name__, description="User operations", url_prefix="/users")


@bp.route("/register")
class UserRegister(MethodView):
    @rate_limit("auth")
    @bp.arguments(UserRegisterSchema)
    @bp.response(201, UserSchema)
    @bp.alt_response(409, description="Email already exists")
    def post(self, user_data):
        user = AuthService.register_user(user_data)
        login_user(user)
        return user


@bp.route("/login")
class UserLogin(MethodView):
    @rate_limit("auth")
    @bp.arguments(UserLoginSchema)
    @bp.response(200, UserSchema)
    @bp.alt_response(401, description="Invalid credentials")
    def post(self, credentials):
        try:
            user = AuthService.login_user(credentials["email"], credentials["password"])
        except AuthError as e:
            abort(e.status_code, message=e.message)
        login_user(user)
        return user


@bp.route("/logout")
class UserLogout(MethodView):
    @login_required
    @bp.response(204)
    def post(self):
        logout_user()
        return None


@bp.route("/profile")
class UserProfile(MethodView):
    @login_required
    @bp.response(200, UserSchema)
    def get(self):
        return UserService.get_user_profile(current_user.id)

    @login_required
    @bp.arguments(UserUpdateSchema)
    @bp.response(200, UserSchema)
    def patch(self, data):
        """Update user profile"""
        return UserService.update_user_profile(current_user.id, data)


@bp.route("/profile/create")
class ProfileCreate(MethodView):
    @rate_limit("auth")
    @login_required
    @bp.arguments(ProfileCreateSchema)
    @bp.response(200, UserSchema)
    @bp.alt_response(400, description="Invalid profile type")
    def post(self, data):
        """Choose between a private and a company profile"""
        return UserService.set_person_type(current_user.id, data.get("person_type"))
