"""
Index registry owning one field index per searchable field.

Built once at store construction; full-text fields get a FullTextIndex,
every other field an ExactMatchIndex.
"""

from typing import Dict, Iterable, List, Mapping, Protocol, Set

from ..core import get_logger, CatalogError, ConfigurationError, IndexingError
from ..records import FIELD_EXTRACTORS, Record, SearchField, missing_extractors
from ..records.models import FieldExtractor
from .exact_index import ExactMatchIndex
from .fulltext_index import FullTextIndex

logger = get_logger(__name__)

DEFAULT_FULL_TEXT_FIELDS = frozenset({SearchField.DESCRIPTION})


class FieldIndex(Protocol):
    """Capability shared by every field index variant."""

    def index(self, record: Record, value: str) -> None:
        ...

    def search(self, query: str) -> Set[Record]:
        ...

    def close(self) -> None:
        ...


class IndexRegistry:
    """
    Fixed mapping from every SearchField to its field index.

    Construction either builds every index or raises; a partially
    built registry is never returned.
    """

    def __init__(
        self,
        full_text_fields: Iterable = None,
        tokenizer: str = "unicode61",
        extractors: Mapping[SearchField, FieldExtractor] = None
    ):
        """
        Build one index per search field.

        Args:
            full_text_fields: Fields (or their names) indexed as full text.
                Defaults to the description field.
            tokenizer: FTS5 tokenizer for full-text indexes.
            extractors: Field extractor table. Defaults to FIELD_EXTRACTORS.

        Raises:
            ConfigurationError: If a full-text field name is unknown.
            IndexingError: If a field has no extractor or an index
                cannot be created.
        """
        self.extractors = dict(FIELD_EXTRACTORS if extractors is None else extractors)

        missing = missing_extractors(self.extractors)
        if missing:
            raise IndexingError(
                "no value extractor for search field(s): "
                + ",".join(f.value for f in missing),
                {"fields": [f.value for f in missing]}
            )

        self.full_text_fields = self._resolve_fields(
            DEFAULT_FULL_TEXT_FIELDS if full_text_fields is None else full_text_fields
        )

        self._indexes: Dict[SearchField, FieldIndex] = {}
        try:
            for field in SearchField:
                if field in self.full_text_fields:
                    self._indexes[field] = FullTextIndex(name=field.value, tokenizer=tokenizer)
                else:
                    self._indexes[field] = ExactMatchIndex(name=field.value)
        except CatalogError:
            logger.error("Index registry construction failed, releasing built indexes")
            self.close()
            raise

        logger.debug(
            f"Index registry built: {len(self._indexes)} indexes, "
            f"full text on {sorted(f.value for f in self.full_text_fields)}"
        )

    @staticmethod
    def _resolve_fields(fields: Iterable) -> Set[SearchField]:
        """Convert configured field names into SearchField members."""
        resolved = set()
        for name in fields:
            if isinstance(name, SearchField):
                resolved.add(name)
                continue
            try:
                resolved.add(SearchField(name))
            except ValueError:
                raise ConfigurationError(
                    f"Unknown full-text field in configuration: {name}",
                    {"field": name}
                )
        return resolved

    def get(self, field: SearchField) -> FieldIndex:
        """Return the index for a field."""
        return self._indexes[field]

    def extract(self, field: SearchField, record: Record) -> List[str]:
        """Return the values a record contributes to a field's index."""
        return self.extractors[field](record)

    def fields(self) -> List[SearchField]:
        """Return every registered field."""
        return list(self._indexes)

    def is_full_text(self, field: SearchField) -> bool:
        return field in self.full_text_fields

    def close(self) -> None:
        """Close every index."""
        for index in self._indexes.values():
            index.close()
