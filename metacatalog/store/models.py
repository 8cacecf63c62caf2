"""
Data models for store operations.

Defines dataclasses reporting search execution and bulk appends.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class SearchStats:
    """
    Statistics from a search execution.

    Attributes:
        join_method: Join method used ("and" / "or").
        term_count: Number of terms in the request.
        total_results: Number of records returned.
        execution_time_ms: Time spent in the join engine.
        term_hits: Hit count per term, in request order; None for a
            term whose search failed.
        errors: Messages of the per-term failures that were absorbed.
    """
    join_method: str
    term_count: int
    total_results: int = 0
    execution_time_ms: float = 0.0
    term_hits: List[Optional[int]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def failed_terms(self) -> int:
        return sum(1 for hits in self.term_hits if hits is None)


@dataclass
class AppendReport:
    """Outcome of replaying many raw records into a store."""
    appended: int = 0
    rejected: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.appended + len(self.rejected)
