"""
Tests for the configuration loader module.

Tests config loading, parsing, defaults, validation and the singleton.
"""

import json
import pytest
from pathlib import Path

from metacatalog.core.config_loader import (
    Config,
    IndexConfig,
    get_config,
    reload_config,
)
from metacatalog.core.exceptions import ConfigurationError


def _write_config(temp_dir: Path, data: dict) -> Path:
    config_dir = temp_dir / "config"
    config_dir.mkdir(exist_ok=True)
    config_path = config_dir / "config.json"
    config_path.write_text(json.dumps(data))
    return config_path


class TestIndexConfig:
    """Tests for IndexConfig dataclass."""

    def test_index_config_creation(self):
        """Test creating IndexConfig with explicit values."""
        config = IndexConfig(full_text_fields=["description", "title"], tokenizer="porter")

        assert config.full_text_fields == ["description", "title"]
        assert config.tokenizer == "porter"


class TestConfigFromFile:
    """Tests for loading config from file."""

    def test_load_valid_config(self, temp_config: Path, reset_config_singleton):
        """Test loading a valid configuration file."""
        config = Config.from_file(temp_config)

        assert config.index.full_text_fields == ["description"]
        assert config.store.search_timeout_seconds == 5.0
        assert config.store.max_search_workers == 4
        assert config.server.port == 9999
        assert config.gui.page_title == "Test Catalog"

    def test_load_missing_config_raises_error(self, temp_dir: Path):
        """Test that loading non-existent config raises ConfigurationError."""
        fake_path = temp_dir / "nonexistent" / "config.json"

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(fake_path)

        assert "not found" in str(exc_info.value.message).lower()

    def test_load_invalid_json_raises_error(self, temp_dir: Path):
        """Test that invalid JSON raises ConfigurationError."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text("{ invalid json }")

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(config_path)

        assert "invalid json" in str(exc_info.value.message).lower()

    def test_non_object_config_raises_error(self, temp_dir: Path):
        """Test that a JSON array is rejected."""
        config_path = _write_config(temp_dir, [])

        with pytest.raises(ConfigurationError):
            Config.from_file(config_path)

    def test_config_resolves_relative_paths(self, temp_dir: Path):
        """Test that relative paths are resolved against the project root."""
        config_path = _write_config(temp_dir, {"paths": {"records_directory": "records"}})

        config = Config.from_file(config_path)

        assert config.paths.records_directory == temp_dir / "records"
        assert config.project_root == temp_dir

    def test_config_default_values(self, temp_dir: Path):
        """Test that missing config values get defaults."""
        config_path = _write_config(temp_dir, {"paths": {}, "store": {}})

        config = Config.from_file(config_path)

        assert config.index.full_text_fields == ["description"]
        assert config.index.tokenizer == "unicode61"
        assert config.store.search_timeout_seconds is None
        assert config.store.max_search_workers is None
        assert config.store.strict_and_join is True
        assert config.server.port == 8888
        assert config.gui.max_terms == 5

    def test_defaults_without_file(self, temp_dir: Path):
        """Test building a config with no file at all."""
        config = Config.defaults(temp_dir)

        assert config.paths.logs_directory == temp_dir / "output" / "logs"
        assert config.store.strict_and_join is True


class TestConfigValidation:
    """Tests for rejected configuration values."""

    def test_full_text_fields_must_be_list(self, temp_dir: Path):
        """Test that a string for full_text_fields is rejected."""
        config_path = _write_config(temp_dir, {"index": {"full_text_fields": "description"}})

        with pytest.raises(ConfigurationError):
            Config.from_file(config_path)

    @pytest.mark.parametrize("timeout", [0, -1, "ten"])
    def test_invalid_timeout(self, temp_dir: Path, timeout):
        """Test that a non-positive or non-numeric timeout is rejected."""
        config_path = _write_config(temp_dir, {"store": {"search_timeout_seconds": timeout}})

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(config_path)

        assert exc_info.value.details["value"] == timeout

    def test_invalid_worker_count(self, temp_dir: Path):
        """Test that zero workers is rejected."""
        config_path = _write_config(temp_dir, {"store": {"max_search_workers": 0}})

        with pytest.raises(ConfigurationError):
            Config.from_file(config_path)

    def test_unbounded_workers(self, temp_dir: Path):
        """Test that a null worker cap is accepted."""
        config_path = _write_config(temp_dir, {"store": {"max_search_workers": None}})

        config = Config.from_file(config_path)

        assert config.store.max_search_workers is None

    def test_lenient_join_can_be_enabled(self, temp_dir: Path):
        """Test reading strict_and_join = false."""
        config_path = _write_config(temp_dir, {"store": {"strict_and_join": False}})

        config = Config.from_file(config_path)

        assert config.store.strict_and_join is False


class TestGetConfig:
    """Tests for the get_config singleton function."""

    def test_get_config_returns_same_instance(self, temp_config: Path, reset_config_singleton):
        """Test that get_config returns singleton instance."""
        config1 = get_config(temp_config)
        config2 = get_config()

        assert config1 is config2

    def test_reload_config_creates_new_instance(self, temp_config: Path, reset_config_singleton):
        """Test that reload_config creates a fresh instance."""
        _config1 = get_config(temp_config)  # noqa: F841

        # Modify config file
        with open(temp_config, "r") as f:
            data = json.load(f)
        data["gui"]["page_title"] = "Modified Title"
        with open(temp_config, "w") as f:
            json.dump(data, f)

        config2 = reload_config(temp_config)

        assert config2.gui.page_title == "Modified Title"
