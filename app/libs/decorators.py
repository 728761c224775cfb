# python imports
import logging
from functools import wraps

# package imports
from flask import request, current_app
from flask_login import current_user

# project imports
from .errors import AuthError, ForbiddenError, RateLimitError

logger = logging.getLogger(__name__)


def is_admin(user) -> bool:
    return bool(
        user is not None
        and getattr(user, "is_authenticated", False)
        and getattr(user, "is_admin", False)
    )


def require_admin():
    """Raise unless the current session belongs to an admin"""
    if not current_user.is_authenticated:
        raise AuthError("Authentication required")
    if not is_admin(current_user):
        logger.warning(f"Admin access denied for user {current_user.id}")
        raise ForbiddenError("Admin access required")


def admin_requested() -> bool:
    """``admin=true`` query flag, verified against the session"""
    if request.args.get("admin") != "true":
        return False
    require_admin()
    return True


def login_required(f):
    """Decorator to require an authenticated session"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthError("Authentication required")
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    """Decorator to require admin role"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        require_admin()
        return f(*args, **kwargs)

    return decorated_function


def client_key() -> str:
    """Identify the caller by its first forwarded hop, falling back to the peer"""
    forwarded = request.headers.get("X-Forwarded-For", "")
    ip = forwarded.split(",")[0].strip() if forwarded else ""
    return ip or request.headers.get("X-Real-IP") or request.remote_addr or "unknown"


def rate_limit(scope: str = "read"):
    """Gate a view behind the app's limiter for ``scope``

    Runs before argument parsing, so a rejected request never builds a query.
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            limiter = current_app.extensions["rate_limiters"][scope]
            key = client_key()
            if not limiter.check(key):
                logger.warning(f"Rate limit exceeded ({scope}) for {key}")
                raise RateLimitError()
            return f(*args, **kwargs)

        return decorated_function

    return decorator
