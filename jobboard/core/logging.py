import logging
import logging.config
import os

from jobboard.core.config import get_settings


def build_logging_config(level: str, log_file: str = None) -> dict:
    """Build the dictConfig for console (and optional file) logging."""
    handlers = {
        "console": {
            "level": level,
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    }
    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "level": "DEBUG",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": log_file,
            "when": "midnight",
            "interval": 1,
            "backupCount": 30,
            "encoding": "utf-8",
            "formatter": "standard",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "jobboard": {
                "handlers": list(handlers),
                "level": level,
                "propagate": False,
            },
        },
    }


def setup_logging():
    """Apply logging configuration from settings."""
    settings = get_settings()
    logging.config.dictConfig(
        build_logging_config(settings.log_level.upper(), settings.log_file)
    )
