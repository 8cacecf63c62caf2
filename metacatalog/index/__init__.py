"""
Index module providing per-field search structures.

Contains the exact-match and full-text field indexes, the FTS5 query
parser, and the registry holding one index per search field.
"""

from .query_parser import QueryParser
from .exact_index import ExactMatchIndex
from .fulltext_index import FullTextIndex
from .registry import IndexRegistry, FieldIndex

__all__ = [
    "QueryParser",
    "ExactMatchIndex",
    "FullTextIndex",
    "IndexRegistry",
    "FieldIndex"
]
