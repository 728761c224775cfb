import time
import logging
from importlib import import_module

from flask import current_app
from sqlalchemy import text

logger = logging.getLogger(__name__)

MODULES = ["users", "navigation", "products", "slider", "translations", "upload"]


def register_blueprints(app, api):
    """Register the blueprint of every app module"""
    for module in MODULES:
        mod = import_module(f"app.{module}.routes")
        api.register_blueprint(mod.bp)
        logger.info(f"Registered blueprint for {module}")


def register_commands(app):
    from app.navigation.management.commands.populate_navigation import (
        populate_navigation,
    )
    from app.translations.management.commands.import_translations import (
        import_translations,
    )
    from app.translations.management.commands.export_translations import (
        export_translations,
    )
    from external.database import init_db

    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables."""
        init_db()

    for command in (populate_navigation, import_translations, export_translations):
        app.cli.add_command(command)


def create_root_routes(app):
    @app.route("/status")
    def status():
        from external.database import db

        try:
            db.session.execute(text("SELECT 1"))
            database = "ok"
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            database = "unavailable"

        return {
            "status": "running",
            "environment": current_app.config["ENV"],
            "database": database,
            "uptime": round(time.time() - app.start_time, 1),
        }
