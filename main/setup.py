# python imports
import logging
import time

# package imports
from flask import Flask
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_cors import CORS

# app imports
from main.config import settings
from main.logger import setup_logging
from main.errors import handle_error
from main.extensions import StoreApi
from main.middleware import RequestLogMiddleware
from main.routes import register_blueprints, register_commands, create_root_routes

logger = logging.getLogger(__name__)


def configure_app(app, config_overrides=None):
    """Configure Flask application"""
    app.config.from_object(settings)
    if config_overrides:
        app.config.update(config_overrides)

    from external.database import db

    db.init_app(app)
    Migrate(app, db)
    CORS(app, supports_credentials=True, origins=app.config["CORS_ORIGINS"])

    # Setup extensions
    login_manager = LoginManager(app)

    # Initialize Flask-Smorest API
    api = StoreApi(app)

    from app.libs.rate_limit import build_rate_limiters
    from app.libs.aws.s3 import S3Service

    app.extensions["rate_limiters"] = build_rate_limiters(app.config)
    app.extensions["s3"] = S3Service.from_config(app.config)

    # Register error handler
    app.register_error_handler(Exception, handle_error)

    return login_manager, api


def create_app(config_overrides=None):
    """Application factory"""
    overrides = config_overrides or {}
    setup_logging(
        log_dir=overrides.get("LOG_DIR"), log_level=overrides.get("LOG_LEVEL")
    )

    app = Flask(__name__)
    app.wsgi_app = RequestLogMiddleware(app.wsgi_app)

    # Track application start time for health checks
    app.start_time = time.time()

    login_manager, api = configure_app(app, overrides)

    with app.app_context():
        # Setup user loader
        from app.users.services import AuthService
        from app.libs.errors import AuthError

        @login_manager.user_loader
        def load_user(user_id):
            return AuthService.load_user(user_id)

        @login_manager.unauthorized_handler
        def unauthorized():
            raise AuthError()

        # Register routes
        register_blueprints(app, api)
        register_commands(app)
        create_root_routes(app)

    logger.info("Application initialized")
    return app
