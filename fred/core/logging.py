import sys
from logging.config import dictConfig

from fred.core.config import LOG_LEVEL

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | %(method)s | "
    "%(path)s | %(status_code)s | %(process_time_ms)sms"
)


def build_logging_config(level: str = LOG_LEVEL) -> dict:
    """
    Console-only logging.

    - root: everything at `level`
    - access: one line per request from the middleware, never propagated
    - fred.workflow: status changes and rejected transitions; stays at INFO
      or lower so rejections are visible even when the root is quieter
    """
    workflow_level = level if level in ("DEBUG", "INFO") else "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": DEFAULT_FORMAT},
            "access": {"format": ACCESS_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "default",
            },
            "access_console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "access",
            },
        },
        "loggers": {
            "access": {
                "handlers": ["access_console"],
                "level": "INFO",
                "propagate": False,
            },
            "fred.workflow": {
                "handlers": ["console"],
                "level": workflow_level,
                "propagate": False,
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def setup_logging(level: str = LOG_LEVEL):
    dictConfig(build_logging_config(level))
