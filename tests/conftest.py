"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, record documents, stores and mock
configurations to ensure tests are isolated and safe.
"""

import json
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


TESTDATA_DIR = Path(__file__).parent / "testdata"


def make_record_yaml(
    title: str = "Valid App",
    version: str = "1.0.0",
    maintainers: list = None,
    company: str = "Random Inc.",
    website: str = "https://website.io",
    source: str = "https://github.com/random/repo",
    license: str = "Apache-2.0",
    description: str = "An application used in tests"
) -> str:
    """
    Build a YAML record document.

    Returns:
        YAML text with the given field values.
    """
    maintainers = maintainers or [("first maintainer", "man1@mail.com")]
    lines = [
        f"title: {title}",
        f"version: {version}",
        "maintainers:",
    ]
    for name, email in maintainers:
        lines.append(f"- name: {name}")
        lines.append(f"  email: {email}")
    lines.extend([
        f"company: {company}",
        f"website: {website}",
        f"source: {source}",
        f"license: {license}",
        "description: |",
        f"  {description}",
    ])
    return "\n".join(lines) + "\n"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="metacatalog_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    records_dir = temp_dir / "data" / "records"
    records_dir.mkdir(parents=True)

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "logs_directory": str(logs_dir),
            "records_directory": str(records_dir)
        },
        "index": {
            "full_text_fields": ["description"],
            "tokenizer": "unicode61"
        },
        "store": {
            "search_timeout_seconds": 5,
            "max_search_workers": 4,
            "strict_and_join": True
        },
        "server": {
            "host": "127.0.0.1",
            "port": 9999
        },
        "gui": {
            "page_title": "Test Catalog",
            "max_terms": 3
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def testdata_dir() -> Path:
    """Path to the YAML record fixtures."""
    return TESTDATA_DIR


@pytest.fixture
def valid_records_dir() -> Path:
    """Directory with the four valid scenario records."""
    return TESTDATA_DIR / "valid"


@pytest.fixture
def record_yaml() -> str:
    """A single valid record document."""
    return make_record_yaml()


@pytest.fixture
def store(temp_dir: Path):
    """
    Create an empty store from default configuration.

    Yields:
        CatalogStore, closed after the test.
    """
    from metacatalog.core import Config
    from metacatalog.store import CatalogStore

    config = Config.defaults(temp_dir)
    config.store.search_timeout_seconds = 5.0
    catalog = CatalogStore(config)
    yield catalog
    catalog.close()


@pytest.fixture
def loaded_store(store, valid_records_dir: Path):
    """
    Store preloaded with the four valid scenario records.

    Returns:
        The store, holding Valid App 1 to 4.
    """
    report = store.load_directory(valid_records_dir)
    assert report.appended == 4
    return store


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from metacatalog.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Detach catalog log handlers before and after a test.
    """
    from metacatalog.core.logger import reset_logging
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def make_record():
    """
    Factory fixture building YAML record documents.

    Returns:
        Callable accepting field overrides as keyword arguments.
    """
    return make_record_yaml
