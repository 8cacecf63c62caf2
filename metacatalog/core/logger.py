"""
Logging for the metadata catalog.

Every catalog module logs below the ``metacatalog`` namespace. Handlers
are attached to that namespace logger only, so hosts embedding the
catalog (uvicorn, Streamlit) keep ownership of the root logger.
Per-module levels come from ``logging.levels`` in config.json, e.g.
``{"store": "DEBUG"}`` to trace every search.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config_loader import Config, LoggingConfig, get_config
from .exceptions import ConfigurationError


NAMESPACE = "metacatalog"
LOG_FILENAME = "metacatalog.log"

_logger_initialized = False
_installed_handlers: List[logging.Handler] = []
_leveled_loggers: List[str] = []


def qualify(name: str) -> str:
    """Place a logger name under the catalog namespace."""
    if name == NAMESPACE or name.startswith(NAMESPACE + "."):
        return name
    return f"{NAMESPACE}.{name}"


def setup_logging(
    settings: Optional[LoggingConfig] = None,
    logs_directory: Optional[Path] = None
) -> logging.Logger:
    """
    Attach console and rotating file handlers to the namespace logger.

    Runs once per process until reset_logging() is called.

    Args:
        settings: Logging section of the config. Defaults to built-in values.
        logs_directory: Directory for metacatalog.log. None disables file output.

    Returns:
        The namespace logger.
    """
    global _logger_initialized

    package_logger = logging.getLogger(NAMESPACE)
    if _logger_initialized:
        return package_logger

    settings = settings or Config.defaults().logging

    package_logger.setLevel(settings.level)
    package_logger.propagate = False

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=settings.max_file_size_mb * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8"
        ))

    formatter = logging.Formatter(settings.format)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        _installed_handlers.append(handler)

    for name, level in settings.levels.items():
        logging.getLogger(qualify(name)).setLevel(level)
        _leveled_loggers.append(qualify(name))

    _logger_initialized = True
    return package_logger


def reset_logging() -> None:
    """Detach and close the handlers installed by setup_logging."""
    global _logger_initialized

    package_logger = logging.getLogger(NAMESPACE)
    for handler in _installed_handlers:
        package_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    for name in _leveled_loggers:
        logging.getLogger(name).setLevel(logging.NOTSET)
    _leveled_loggers.clear()

    _logger_initialized = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the catalog namespace.

    The first call configures logging from config.json, or from
    built-in defaults (console only) when no valid config is found.

    Args:
        name: Logger name, typically __name__ of the calling module.
    """
    if not _logger_initialized:
        try:
            config = get_config()
        except ConfigurationError:
            setup_logging()
        else:
            setup_logging(config.logging, config.paths.logs_directory)

    return logging.getLogger(qualify(name))
