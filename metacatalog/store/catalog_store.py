"""
Catalog store holding validated records in per-field indexes.

Appends fan each record out to every field index under an exclusive
write lock; searches run under a shared read lock through the query
join engine.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

from ..core import get_config, get_logger, Config, IndexingError, RecordValidationError
from ..index import IndexRegistry
from ..records import JoinMethod, Record, RecordFileScanner, RecordValidator, SearchField, parse_terms
from ..utils import ReadWriteLock
from .join_engine import JoinEngine
from .models import AppendReport, SearchStats

logger = get_logger(__name__)

RawRecord = Union[bytes, str]


class CatalogStore:
    """
    In-memory catalog of records searchable by field.

    One reader/writer lock guards the whole registry: any number of
    searches may run together, an append excludes everything else.
    """

    def __init__(self, config: Config = None, validator: RecordValidator = None):
        """
        Build the index registry and join engine.

        Args:
            config: Configuration. Defaults to the global config.
            validator: Record validator. Defaults to RecordValidator().

        Raises:
            IndexingError: If the index registry cannot be built.
            ConfigurationError: If the index configuration is invalid.
        """
        self.config = config or get_config()
        self.validator = validator or RecordValidator()

        self.registry = IndexRegistry(
            full_text_fields=self.config.index.full_text_fields,
            tokenizer=self.config.index.tokenizer
        )
        self.engine = JoinEngine(
            self.registry,
            max_workers=self.config.store.max_search_workers,
            strict_and=self.config.store.strict_and_join
        )
        self.default_timeout = self.config.store.search_timeout_seconds

        self._lock = ReadWriteLock()
        self._record_count = 0

    def append(self, raw_record: RawRecord) -> Record:
        """
        Validate a raw record and index all of its field values.

        Args:
            raw_record: YAML document as bytes or text.

        Returns:
            The stored Record.

        Raises:
            RecordValidationError: Passed through unchanged from the
                validator; nothing is indexed.
            IndexingError: If an index rejects a value.
        """
        with self._lock.write_locked():
            record = self.validator.validate(raw_record)

            entries = self._plan_entries(record)
            try:
                for field, value in entries:
                    self.registry.get(field).index(record, value)
            except IndexingError as e:
                logger.error(f"Append aborted, index rejected '{record.title}': {e.message}")
                raise

            self._record_count += 1

        logger.info(
            f"Appended record '{record.title}' {record.version} "
            f"({len(entries)} index entries)"
        )
        return record

    def _plan_entries(self, record: Record) -> List[Tuple[SearchField, str]]:
        """
        List every (field, value) pair the record adds to the indexes.

        Checked up front so an empty value aborts before any index
        is touched.
        """
        entries = []
        for field in self.registry.fields():
            for value in self.registry.extract(field, record):
                if not value:
                    logger.error(f"Record '{record.title}' has an empty value for '{field.value}'")
                    raise IndexingError(
                        "cannot index a record with empty data",
                        {"field": field.value}
                    )
                entries.append((field, value))
        return entries

    def search(
        self,
        join_method: Union[JoinMethod, str],
        terms: Iterable,
        timeout: Optional[float] = None
    ) -> Set[Record]:
        """
        Find the records matching the terms under the join method.

        Args:
            join_method: JoinMethod or its value ("and" / "or").
            terms: SearchTerm instances, (field, query) pairs or
                {"field", "query"} mappings.
            timeout: Seconds to wait for term searches. Defaults to
                store.search_timeout_seconds.

        Returns:
            Set of matching records; empty when nothing matches.

        Raises:
            QueryShapeError: If the request is malformed.
            SearchTimeoutError: If the deadline passes.
        """
        records, _ = self.search_with_stats(join_method, terms, timeout)
        return records

    def search_with_stats(
        self,
        join_method: Union[JoinMethod, str],
        terms: Iterable,
        timeout: Optional[float] = None
    ) -> Tuple[Set[Record], SearchStats]:
        """
        Same as search(), also returning execution statistics.

        Returns:
            Tuple of (matching records, SearchStats).
        """
        method = JoinMethod.parse(join_method)
        parsed_terms = parse_terms(terms)

        if timeout is None:
            timeout = self.default_timeout

        with self._lock.read_locked():
            records, stats = self.engine.run(method, parsed_terms, timeout=timeout)

        logger.debug(
            f"Search ({method.value}, {len(parsed_terms)} terms): "
            f"{stats.total_results} results in {stats.execution_time_ms:.1f}ms"
        )

        return records, stats

    def replay(self, raw_records: Iterable[RawRecord]) -> AppendReport:
        """
        Append many raw records in order.

        Validation failures are collected instead of stopping the
        replay; index failures still propagate.

        Args:
            raw_records: Raw records, e.g. read back from a log.

        Returns:
            AppendReport with counts and rejected entries.
        """
        report = AppendReport()
        for position, raw in enumerate(raw_records):
            self._replay_one(report, f"#{position}", raw)
        return report

    def load_directory(self, directory: Union[str, Path]) -> AppendReport:
        """
        Replay every YAML record file under a directory.

        Args:
            directory: Directory to scan recursively.

        Returns:
            AppendReport where rejected entries are labelled by path.
        """
        report = AppendReport()
        for filepath, raw in RecordFileScanner(directory).read_all():
            self._replay_one(report, str(filepath), raw)

        logger.info(
            f"Loaded {report.appended} record(s) from {directory}, "
            f"{len(report.rejected)} rejected"
        )
        return report

    def _replay_one(self, report: AppendReport, label: str, raw: RawRecord) -> None:
        try:
            self.append(raw)
        except RecordValidationError as e:
            logger.warning(f"Rejected record {label}: {e.message}")
            report.rejected.append((label, e.message))
        else:
            report.appended += 1

    def __len__(self) -> int:
        with self._lock.read_locked():
            return self._record_count

    def close(self) -> None:
        """Release the indexes."""
        with self._lock.write_locked():
            self.registry.close()

    def __enter__(self) -> "CatalogStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
