"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config, IndexConfig, StoreConfig
from .logger import get_logger
from .exceptions import (
    CatalogError,
    ConfigurationError,
    RecordValidationError,
    UnparsableRecordError,
    IndexingError,
    SearchError,
    QueryShapeError,
    SearchTimeoutError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "IndexConfig",
    "StoreConfig",
    "get_logger",
    "CatalogError",
    "ConfigurationError",
    "RecordValidationError",
    "UnparsableRecordError",
    "IndexingError",
    "SearchError",
    "QueryShapeError",
    "SearchTimeoutError"
]
