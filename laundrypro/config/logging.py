"""Logging configuration for the client."""
import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

from laundrypro.config.settings import Settings, get_settings


def build_logging_config(settings: Settings) -> dict:
    """Build the dictConfig mapping for the given settings."""

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    detailed_format = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"

    formatter = settings.LOG_FORMAT if settings.LOG_FORMAT in ("simple", "detailed", "json") else "simple"
    level = settings.LOG_LEVEL.upper()

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": log_format,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "detailed": {
                "format": detailed_format,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "json": {
                "()": "laundrypro.core.logging.JSONFormatter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": formatter,
                "stream": sys.stdout
            }
        },
        "loggers": {
            "laundrypro": {
                "level": level,
                "handlers": ["console"],
                "propagate": False
            },
            # HTTP library logger
            "aiohttp": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if settings.LOG_DIR:
        logs_dir = Path(settings.LOG_DIR)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": str(logs_dir / "laundrypro.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5
        }
        config["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": str(logs_dir / "error.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5
        }
        config["loggers"]["laundrypro"]["handlers"] = ["console", "file", "error_file"]

    return config


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Setup logging configuration."""
    settings = settings or get_settings()

    if settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(settings))

    logger = logging.getLogger("laundrypro")
    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")

    return logger