"""
Exact-match field index.

Maps literal field values to the records stored under them.
"""

from collections import defaultdict
from typing import Dict, List, Set

from ..core import IndexingError, QueryShapeError
from ..records import Record


class ExactMatchIndex:
    """
    Equality lookup keyed by the literal value string.

    Holds no lock; callers serialize mutation against reads.
    """

    def __init__(self, name: str = ""):
        """
        Initialize an empty index.

        Args:
            name: Field name, used in error messages.
        """
        self.name = name
        self._entries: Dict[str, List[Record]] = defaultdict(list)

    def index(self, record: Record, value: str) -> None:
        """
        Store a record under an exact value.

        Args:
            record: Record to store.
            value: Field value to key the record by.

        Raises:
            IndexingError: If the record is missing or the value is empty.
        """
        if record is None:
            raise IndexingError("must pass a valid record", {"index": self.name})
        if not value:
            raise IndexingError("cannot index a record with empty data", {"index": self.name})

        self._entries[value].append(record)

    def search(self, query: str) -> Set[Record]:
        """
        Find records stored under exactly this value.

        Args:
            query: Value to look up.

        Returns:
            Matching records, empty when the value is unknown.

        Raises:
            QueryShapeError: If the query is empty.
        """
        if not query:
            raise QueryShapeError("must provide a valid search term", query=query)

        # get() avoids creating keys on the defaultdict during reads
        return set(self._entries.get(query, ()))

    def __len__(self) -> int:
        return len(self._entries)

    def close(self) -> None:
        pass
