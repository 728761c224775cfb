from flask_sqlalchemy import SQLAlchemy
import logging

logger = logging.getLogger(__name__)

db = SQLAlchemy()


def init_db():
    # imports all models so metadata is complete
    import app.users.models  # noqa
    import app.navigation.models  # noqa
    import app.products.models  # noqa
    import app.slider.models  # noqa
    import app.translations.models  # noqa

    db.create_all()
    logger.info("Database initialized")
