"""
Logging setup

One stdout handler shared by the application, uvicorn and SQLAlchemy. SQL
statements only reach it when DEBUG turns on engine echo.
"""

import logging.config

from content_store.config import get_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def _isolated(level: str) -> dict:
    return {"handlers": ["console"], "level": level, "propagate": False}


def setup_logging():
    debug = get_settings().DEBUG

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"handlers": ["console"], "level": "DEBUG" if debug else "INFO"},
            "loggers": {
                "uvicorn": _isolated("INFO"),
                "uvicorn.access": _isolated("INFO"),
                "sqlalchemy.engine": _isolated("INFO" if debug else "WARNING"),
            },
        }
    )
