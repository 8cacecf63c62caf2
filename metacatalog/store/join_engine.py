"""
Query join engine combining per-term search results.

Runs each term's index lookup in its own worker thread and merges the
hit sets under AND or OR semantics once every worker has reported.
"""

import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError, as_completed
from typing import Dict, List, Optional, Set, Tuple

from ..core import get_logger, SearchTimeoutError
from ..index import IndexRegistry
from ..records import JoinMethod, Record, SearchTerm
from .models import SearchStats

logger = get_logger(__name__)


class JoinEngine:
    """
    Fans search terms out to their field indexes and joins the hits.

    A term whose lookup raises contributes no matches; the remaining
    terms still produce results.
    """

    def __init__(
        self,
        registry: IndexRegistry,
        max_workers: Optional[int] = None,
        strict_and: bool = True
    ):
        """
        Initialize the join engine.

        Args:
            registry: Registry providing the index for each field.
            max_workers: Upper bound on concurrent term searches, or
                None for one worker per term.
            strict_and: If True, an AND search requires a match on
                every submitted term, so a failed term empties the
                result. If False, failed terms are left out of the
                required match count.
        """
        self.registry = registry
        self.max_workers = max_workers
        self.strict_and = strict_and

    def run(
        self,
        join_method: JoinMethod,
        terms: List[SearchTerm],
        timeout: Optional[float] = None
    ) -> Tuple[Set[Record], SearchStats]:
        """
        Execute every term search and join the results.

        Args:
            join_method: AND or OR.
            terms: Shape-validated, non-empty list of terms.
            timeout: Seconds to wait for all term searches, or None
                to wait indefinitely.

        Returns:
            Tuple of (matching records, SearchStats).

        Raises:
            SearchTimeoutError: If the deadline passes before every
                term search has reported.
        """
        start_time = time.time()

        stats = SearchStats(
            join_method=join_method.value,
            term_count=len(terms),
            term_hits=[None] * len(terms)
        )

        matched: Set[Record] = set()
        match_counts: Dict[Record, int] = {}
        succeeded = 0

        executor = ThreadPoolExecutor(
            max_workers=self._worker_count(len(terms)),
            thread_name_prefix="term-search"
        )
        try:
            futures = {
                executor.submit(self._search_term, term): position
                for position, term in enumerate(terms)
            }

            for future in as_completed(futures, timeout=timeout):
                position = futures[future]
                term = terms[position]

                try:
                    hits = future.result()
                except Exception as e:
                    logger.warning(
                        f"Search on '{term.field.value}' for '{term.query}' failed: {e}"
                    )
                    stats.errors.append(f"{term.field.value}: {e}")
                    continue

                succeeded += 1
                stats.term_hits[position] = len(hits)

                if join_method is JoinMethod.OR:
                    matched.update(hits)
                else:
                    for record in hits:
                        match_counts[record] = match_counts.get(record, 0) + 1

        except FuturesTimeoutError:
            logger.warning(
                f"Search timed out after {timeout}s with "
                f"{sum(1 for f in futures if not f.done())} term(s) outstanding"
            )
            raise SearchTimeoutError(
                f"search did not complete within {timeout} seconds",
                details={"timeout": timeout, "terms": len(terms)}
            )
        finally:
            # Abandon stragglers after a timeout; a no-op once all are done
            executor.shutdown(wait=False, cancel_futures=True)

        if join_method is JoinMethod.AND:
            required = len(terms) if self.strict_and else succeeded
            if required > 0:
                matched = {
                    record for record, count in match_counts.items()
                    if count >= required
                }

        stats.total_results = len(matched)
        stats.execution_time_ms = round((time.time() - start_time) * 1000, 2)

        return matched, stats

    def _search_term(self, term: SearchTerm) -> Set[Record]:
        """Run one term against its field index."""
        return set(self.registry.get(term.field).search(term.query))

    def _worker_count(self, term_count: int) -> int:
        if self.max_workers is None:
            return max(1, term_count)
        return max(1, min(term_count, self.max_workers))
