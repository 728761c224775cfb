import logging
import logging.config
from pathlib import Path

from main.config import settings


def setup_logging(log_dir=None, log_level=None):
    log_dir = Path(log_dir or settings.LOG_DIR)
    log_level = log_level or settings.LOG_LEVEL
    log_dir.mkdir(parents=True, exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
        },
        "handlers": {
            "console": {
                "level": log_level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
            },
            "file": {
                "level": log_level,
                "class": "logging.FileHandler",
                "filename": str(log_dir / "mebeles.log"),
                "formatter": "standard",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": True,
            },
            "werkzeug": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "botocore": {
                "handlers": ["console", "file"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(config)
