"""
Tests for the index registry.
"""

import pytest

from metacatalog.core import ConfigurationError, IndexingError
from metacatalog.index.exact_index import ExactMatchIndex
from metacatalog.index.fulltext_index import FullTextIndex
from metacatalog.index.registry import IndexRegistry
from metacatalog.records import FIELD_EXTRACTORS, Maintainer, Record, SearchField


class TestIndexRegistry:
    """Tests for IndexRegistry construction and lookup."""

    def test_default_layout(self):
        """Test that description is full text and the rest exact."""
        registry = IndexRegistry()

        assert set(registry.fields()) == set(SearchField)
        assert isinstance(registry.get(SearchField.DESCRIPTION), FullTextIndex)
        for field in SearchField:
            if field is not SearchField.DESCRIPTION:
                assert isinstance(registry.get(field), ExactMatchIndex)
                assert not registry.is_full_text(field)

        registry.close()

    def test_configured_full_text_fields(self):
        """Test full-text fields given by name."""
        registry = IndexRegistry(full_text_fields=["description", "title"])

        assert registry.is_full_text(SearchField.TITLE)
        assert isinstance(registry.get(SearchField.TITLE), FullTextIndex)

        registry.close()

    def test_no_full_text_fields(self):
        """Test that every field can be exact."""
        registry = IndexRegistry(full_text_fields=[])

        assert all(isinstance(registry.get(f), ExactMatchIndex) for f in SearchField)

    def test_unknown_full_text_field(self):
        """Test that an unknown field name is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            IndexRegistry(full_text_fields=["summary"])

        assert exc_info.value.details["field"] == "summary"

    def test_missing_extractor(self):
        """Test that an incomplete extractor table fails construction."""
        partial = {
            f: e for f, e in FIELD_EXTRACTORS.items()
            if f is not SearchField.MAINTAINER_NAME
        }

        with pytest.raises(IndexingError) as exc_info:
            IndexRegistry(extractors=partial)

        assert exc_info.value.details["fields"] == ["maintainerName"]

    def test_failed_index_build_raises(self):
        """Test that a broken full-text index fails the whole registry."""
        with pytest.raises(IndexingError):
            IndexRegistry(tokenizer="no_such_tokenizer")

    def test_extract_values(self):
        """Test value extraction through the registry."""
        registry = IndexRegistry()
        record = Record(
            title="App",
            version="1",
            maintainers=(
                Maintainer(name="a", email="a@mail.com"),
                Maintainer(name="b", email="b@mail.com"),
            ),
            company="Co",
            website="https://site.io",
            source="https://github.com/co/app",
            license="MIT",
            description="text",
        )

        assert registry.extract(SearchField.MAINTAINER_EMAIL, record) == ["a@mail.com", "b@mail.com"]
        assert registry.extract(SearchField.TITLE, record) == ["App"]

        registry.close()
