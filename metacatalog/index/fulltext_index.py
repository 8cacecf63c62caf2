"""
Full-text field index backed by an in-memory SQLite FTS5 table.

Each indexed value gets a fresh integer id used as the FTS5 rowid;
search results are resolved back to record references through an id
lookup table.
"""

import itertools
import sqlite3
import threading
from typing import Dict, Set

from ..core import get_logger, IndexingError, QueryShapeError, SearchError
from ..records import Record
from .query_parser import QueryParser

logger = get_logger(__name__)


class FullTextIndex:
    """
    Tokenized, case-insensitive term matching over one field.

    The SQLite connection is guarded by an internal lock, so the index
    is safe to use without the store's reader/writer lock.
    """

    def __init__(self, name: str = "", tokenizer: str = "unicode61"):
        """
        Create the in-memory FTS5 table.

        Args:
            name: Field name, used in error messages.
            tokenizer: FTS5 tokenizer specification.

        Raises:
            IndexingError: If SQLite or FTS5 cannot be initialized.
        """
        self.name = name
        self.tokenizer = tokenizer
        self.parser = QueryParser()

        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._records: Dict[int, Record] = {}

        self._conn = sqlite3.connect(":memory:", check_same_thread=False)
        try:
            self._conn.execute(
                f"CREATE VIRTUAL TABLE entries USING fts5(value, tokenize='{tokenizer}')"
            )
        except sqlite3.Error as e:
            self._conn.close()
            raise IndexingError(
                f"Failed to initialize full-text index: {e}",
                {"index": name, "tokenizer": tokenizer}
            )

    def index(self, record: Record, value: str) -> None:
        """
        Add a record's field value to the text index.

        Args:
            record: Record to store.
            value: Text to tokenize and index.

        Raises:
            IndexingError: If the record is missing, the value is empty,
                or SQLite rejects the insert.
        """
        if record is None:
            raise IndexingError("must pass a valid record", {"index": self.name})
        if not value:
            raise IndexingError("cannot index a record with empty data", {"index": self.name})

        with self._lock:
            record_id = next(self._ids)
            try:
                with self._conn:
                    self._conn.execute(
                        "INSERT INTO entries(rowid, value) VALUES (?, ?)",
                        (record_id, value)
                    )
            except sqlite3.Error as e:
                raise IndexingError(
                    f"Failed to index value: {e}",
                    {"index": self.name}
                )
            self._records[record_id] = record

    def search(self, query: str) -> Set[Record]:
        """
        Find records whose value contains any token of the query.

        Args:
            query: Free text; matched case-insensitively on whole tokens.

        Returns:
            Matching records, empty when nothing matches.

        Raises:
            QueryShapeError: If the query is empty.
            SearchError: If the FTS5 query fails.
        """
        if not query:
            raise QueryShapeError("must provide a valid search term", query=query)

        expression = self.parser.parse(query)
        if not expression:
            return set()

        with self._lock:
            try:
                rows = self._conn.execute(
                    "SELECT rowid FROM entries WHERE entries MATCH ?",
                    (expression,)
                ).fetchall()
            except sqlite3.Error as e:
                logger.error(f"Full-text search failed on '{self.name}': {e}")
                raise SearchError(
                    f"Search execution failed: {e}",
                    query=query,
                    details={"index": self.name}
                )

            return {self._records[row[0]] for row in rows}

    def __len__(self) -> int:
        return len(self._records)

    def close(self) -> None:
        """Close the SQLite connection."""
        with self._lock:
            self._conn.close()
