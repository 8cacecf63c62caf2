"""
Records module defining the catalog data model.

Provides the immutable Record type, search request types, the
field extractor table, the YAML record validator, and record file
discovery.
"""

from .models import (
    Record,
    Maintainer,
    SearchField,
    JoinMethod,
    SearchTerm,
    parse_terms,
    FIELD_EXTRACTORS,
    missing_extractors
)
from .validator import RecordValidator, RecordSchema, validate_record
from .file_scanner import RecordFileScanner

__all__ = [
    "Record",
    "Maintainer",
    "SearchField",
    "JoinMethod",
    "SearchTerm",
    "parse_terms",
    "FIELD_EXTRACTORS",
    "missing_extractors",
    "RecordValidator",
    "RecordSchema",
    "validate_record",
    "RecordFileScanner"
]
