# emissions_aggregator/logging_config.py

import copy
import logging.config
import os
from datetime import date

# get log directory or default
LOG_DIR = os.getenv("LOG_DIR", "./data/logs")

# construct log file path
LOG_FILE = os.path.join(LOG_DIR, f"emissions_aggregator_{date.today():%Y-%m-%d}.log")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "standard",
            "stream": "ext://sys.stderr",
        },
        "file": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "standard",
            "filename": LOG_FILE,
            "encoding": "utf8",
            "delay": True,
        },
    },
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(module)-16s | %(levelname)-5s | %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S",
        },
    },
    "loggers": {
        "emissions_aggregator": {
            "level": "INFO",
            "handlers": ["console", "file"],
            "propagate": False,
        },
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console", "file"],
    },
}


def configure_logging() -> None:
    """
    Configure logging for the batch based on the LOG_CONFIG environment variable.

    The console handler, file handler and the emissions_aggregator logger share one
    level chosen by environment:
        - 'production': WARNING.
        - 'debug': DEBUG.
        - 'development' or unset: INFO.

    The log directory is created on first use.

    Args:
        None

    Returns:
        None
    """
    config = copy.deepcopy(LOGGING)
    os.makedirs(LOG_DIR, exist_ok=True)

    env = os.getenv("LOG_CONFIG", "development").lower()
    level_map = {
        "production": "WARNING",
        "debug": "DEBUG",
        "development": "INFO",
    }
    log_level_selected = level_map.get(env, "INFO")

    config["handlers"]["file"]["level"] = log_level_selected
    config["handlers"]["console"]["level"] = log_level_selected
    config["loggers"]["emissions_aggregator"]["level"] = log_level_selected

    logging.config.dictConfig(config)
