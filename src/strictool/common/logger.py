# logger.py
import logging
import logging.config
from typing import Any, Dict

from strictool.util.file_utils import from_json_or_yaml

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def default_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Console-only dictConfig used when no config file is given."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": DEFAULT_FORMAT},
        },
        "handlers": {
            "console_handler": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            "strictool": {
                "handlers": ["console_handler"],
                "level": level,
                "propagate": False,
            },
        },
    }


def setup_logging(
    config_file_path=None,
    log_file_path=None,
    verbose=False,
    level="INFO",
):
    """
    Loads logging config from 'config_file_path' (YAML or JSON) and sets up logging.
    Without a file, a console config at 'level' is used.
    Optionally override file handler's filename, and set root logger to DEBUG if 'verbose'.
    """
    if config_file_path:
        config = from_json_or_yaml(config_file_path)
    else:
        config = default_logging_config(level)

    # A custom log path replaces the "filename" of the file handler, if the config has one
    if log_file_path and "file_handler" in config.get("handlers", {}):
        config["handlers"]["file_handler"]["filename"] = str(log_file_path)

    logging.config.dictConfig(config)

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("strictool").setLevel(logging.DEBUG)

    return logging.getLogger("strictool")
