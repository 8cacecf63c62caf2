"""
Configuration loader for the metadata catalog.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import ConfigurationError


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    logs_directory: Path
    records_directory: Path


@dataclass
class IndexConfig:
    """Configuration for the per-field search indexes."""
    full_text_fields: List[str]
    tokenizer: str


@dataclass
class StoreConfig:
    """Configuration for the catalog store and its query join engine."""
    search_timeout_seconds: Optional[float]
    max_search_workers: Optional[int]
    strict_and_join: bool


@dataclass
class ServerConfig:
    """Configuration for the HTTP API server."""
    host: str
    port: int


@dataclass
class GUIConfig:
    """Configuration for Streamlit web interface."""
    page_title: str
    max_terms: int


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int
    levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    index: IndexConfig
    store: StoreConfig
    server: ServerConfig
    gui: GUIConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def defaults(cls, project_root: Path = None) -> "Config":
        """Build a Config populated entirely from default values."""
        return cls._parse_config({}, project_root or Path.cwd())

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root),
            records_directory=cls._resolve_path(paths_data.get("records_directory", "data/records"), project_root)
        )

        index_data = data.get("index", {})
        full_text_fields = index_data.get("full_text_fields", ["description"])
        if not isinstance(full_text_fields, list):
            raise ConfigurationError(
                "index.full_text_fields must be a list of field names",
                {"value": full_text_fields}
            )
        index = IndexConfig(
            full_text_fields=[str(name) for name in full_text_fields],
            tokenizer=index_data.get("tokenizer", "unicode61")
        )

        store_data = data.get("store", {})
        timeout = store_data.get("search_timeout_seconds", None)
        if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ConfigurationError(
                "store.search_timeout_seconds must be a positive number or null",
                {"value": timeout}
            )
        max_workers = store_data.get("max_search_workers", None)
        if max_workers is not None and (not isinstance(max_workers, int) or max_workers < 1):
            raise ConfigurationError(
                "store.max_search_workers must be a positive integer or null",
                {"value": max_workers}
            )
        store = StoreConfig(
            search_timeout_seconds=float(timeout) if timeout is not None else None,
            max_search_workers=max_workers,
            strict_and_join=bool(store_data.get("strict_and_join", True))
        )

        server_data = data.get("server", {})
        server = ServerConfig(
            host=server_data.get("host", "127.0.0.1"),
            port=server_data.get("port", 8888)
        )

        gui_data = data.get("gui", {})
        gui = GUIConfig(
            page_title=gui_data.get("page_title", "Metadata Catalog"),
            max_terms=gui_data.get("max_terms", 5)
        )

        log_data = data.get("logging", {})
        levels = log_data.get("levels", {})
        if not isinstance(levels, dict):
            raise ConfigurationError(
                "logging.levels must map logger names to level names",
                {"value": levels}
            )
        logging_cfg = LoggingConfig(
            level=cls._check_level(log_data.get("level", "INFO")),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5),
            levels={str(name): cls._check_level(level) for name, level in levels.items()}
        )

        return cls(
            paths=paths,
            index=index,
            store=store,
            server=server,
            gui=gui,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path

    @staticmethod
    def _check_level(name) -> str:
        """Normalize a level name, rejecting names logging does not know."""
        level = str(name).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(
                f"Unknown log level: {name}",
                {"level": name}
            )
        return level


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
