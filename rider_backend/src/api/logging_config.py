import logging
import logging.config
from typing import Any, Dict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Return a dictConfig mapping with a single console handler."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "src.api": {"level": level, "handlers": ["console"], "propagate": False},
        },
        "root": {"level": level, "handlers": ["console"]},
    }


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO") -> None:
    """Configure stdlib logging for the application."""
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {level}")
    logging.config.dictConfig(build_logging_config(level))
