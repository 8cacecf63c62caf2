"""
Store module exposing the catalog store.

Provides the CatalogStore with its append and search operations, the
query join engine, and the statistics models they report.
"""

from .models import SearchStats, AppendReport
from .join_engine import JoinEngine
from .catalog_store import CatalogStore

__all__ = [
    "SearchStats",
    "AppendReport",
    "JoinEngine",
    "CatalogStore"
]
