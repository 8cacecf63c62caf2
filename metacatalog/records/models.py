"""
Data models for catalog records and search requests.

Defines the immutable Record, the closed set of searchable fields,
join methods, search terms, and the table mapping each searchable
field to the values it extracts from a record.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple, Union

import yaml

from ..core import QueryShapeError


class SearchField(Enum):
    """Fields a search term may target."""
    TITLE = "title"
    VERSION = "version"
    MAINTAINER_EMAIL = "maintainerEmail"
    MAINTAINER_NAME = "maintainerName"
    COMPANY = "company"
    WEBSITE = "website"
    SOURCE = "source"
    LICENSE = "license"
    DESCRIPTION = "description"

    @classmethod
    def parse(cls, value: Union[str, "SearchField"]) -> "SearchField":
        """
        Convert a raw value into a SearchField.

        Raises:
            QueryShapeError: If the value names no known field.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise QueryShapeError(
                f"unsupported search field: {value}",
                details={"field": value}
            )


class JoinMethod(Enum):
    """How per-term results are combined."""
    AND = "and"
    OR = "or"

    @classmethod
    def parse(cls, value: Union[str, "JoinMethod"]) -> "JoinMethod":
        """
        Convert a raw value into a JoinMethod.

        Raises:
            QueryShapeError: If the value is not a known join method.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise QueryShapeError(
                "invalid join method type",
                details={"joinMethod": value}
            )


@dataclass(frozen=True)
class Maintainer:
    """A person responsible for the catalogued application."""
    name: str
    email: str


@dataclass(frozen=True, eq=False)
class Record:
    """
    A validated catalog entry.

    Records compare and hash by identity: two appends of identical
    content are two distinct records, and every index holding a record
    holds the same instance.

    Attributes:
        title: Application title.
        version: Application version, kept exactly as written.
        maintainers: Ordered, non-empty tuple of maintainers.
        company: Owning company.
        website: Product website URL.
        source: Source repository URL.
        license: License name.
        description: Free-text description.
    """
    title: str
    version: str
    maintainers: Tuple[Maintainer, ...]
    company: str
    website: str
    source: str
    license: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        """Render the record with its original key names."""
        return {
            "title": self.title,
            "version": self.version,
            "maintainers": [
                {"name": m.name, "email": m.email}
                for m in self.maintainers
            ],
            "company": self.company,
            "website": self.website,
            "source": self.source,
            "license": self.license,
            "description": self.description,
        }

    def to_yaml(self) -> str:
        """Render the record as a YAML document."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)


@dataclass(frozen=True)
class SearchTerm:
    """A single (field, query) pair of a search request."""
    field: SearchField
    query: str

    @classmethod
    def coerce(cls, raw: Union["SearchTerm", Mapping, Tuple[Any, Any]]) -> "SearchTerm":
        """
        Build a SearchTerm from a term, a (field, query) pair or a mapping.

        Raises:
            QueryShapeError: If the field is unknown or the query is blank.
        """
        if isinstance(raw, cls):
            field, query = raw.field, raw.query
        elif isinstance(raw, Mapping):
            field, query = raw.get("field"), raw.get("query")
        elif isinstance(raw, (tuple, list)) and len(raw) == 2:
            field, query = raw
        else:
            raise QueryShapeError(
                f"malformed search term: {raw!r}",
                details={"term": repr(raw)}
            )

        field = SearchField.parse(field)

        if not isinstance(query, str) or not query.strip():
            raise QueryShapeError(
                f"search term for field '{field.value}' must have a non-empty query",
                query=query if isinstance(query, str) else None,
                details={"field": field.value}
            )

        return cls(field=field, query=query)


def parse_terms(raw_terms: Iterable) -> List[SearchTerm]:
    """
    Validate the shape of a whole search request's terms.

    Every unsupported field is reported in one error before any
    other term problem.

    Raises:
        QueryShapeError: If the list is empty, names unsupported
            fields, or holds a malformed term.
    """
    raw_terms = list(raw_terms or [])
    if not raw_terms:
        raise QueryShapeError("at least one search term is required")

    unsupported = []
    for raw in raw_terms:
        if isinstance(raw, Mapping):
            field = raw.get("field")
        elif isinstance(raw, (tuple, list)) and len(raw) == 2:
            field = raw[0]
        else:
            continue
        if isinstance(field, SearchField):
            continue
        if not isinstance(field, str) or field not in _FIELD_VALUES:
            unsupported.append(str(field))

    if unsupported:
        raise QueryShapeError(
            "the following field(s) are not supported: " + ",".join(unsupported),
            details={"fields": unsupported}
        )

    return [SearchTerm.coerce(raw) for raw in raw_terms]


_FIELD_VALUES = frozenset(f.value for f in SearchField)

FieldExtractor = Callable[[Record], List[str]]

# Every SearchField must appear here; registry construction checks it.
FIELD_EXTRACTORS: Dict[SearchField, FieldExtractor] = {
    SearchField.TITLE: lambda r: [r.title],
    SearchField.VERSION: lambda r: [r.version],
    SearchField.MAINTAINER_EMAIL: lambda r: [m.email for m in r.maintainers],
    SearchField.MAINTAINER_NAME: lambda r: [m.name for m in r.maintainers],
    SearchField.COMPANY: lambda r: [r.company],
    SearchField.WEBSITE: lambda r: [r.website],
    SearchField.SOURCE: lambda r: [r.source],
    SearchField.LICENSE: lambda r: [r.license],
    SearchField.DESCRIPTION: lambda r: [r.description],
}


def missing_extractors(extractors: Mapping[SearchField, FieldExtractor] = None) -> List[SearchField]:
    """Return the search fields that have no extractor."""
    extractors = FIELD_EXTRACTORS if extractors is None else extractors
    return [f for f in SearchField if f not in extractors]
