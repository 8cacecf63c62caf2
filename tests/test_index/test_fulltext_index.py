"""
Tests for the SQLite FTS5 full-text field index.
"""

import threading

import pytest

from metacatalog.core import IndexingError, QueryShapeError
from metacatalog.index.fulltext_index import FullTextIndex
from metacatalog.records import Maintainer, Record


def _record(description: str) -> Record:
    return Record(
        title="App",
        version="1.0.0",
        maintainers=(Maintainer(name="first maintainer", email="man1@mail.com"),),
        company="Random Inc.",
        website="https://website1.io",
        source="https://github.com/random/repo",
        license="MIT",
        description=description,
    )


@pytest.fixture
def populated():
    """
    Index holding a handful of descriptions.

    Yields:
        Tuple of (index, dict of description -> record).
    """
    index = FullTextIndex(name="description")
    values = [
        "App 1",
        "App 2",
        "this is a description of an app",
        "hello@email.com",
        "this is a long string: hello world, with the Indexer inside",
        "nothing related",
    ]
    records = {}
    for value in values:
        record = _record(value)
        index.index(record, value)
        records[value] = record
    yield index, records
    index.close()


class TestFullTextSearch:
    """Tests for token matching."""

    @pytest.mark.parametrize("query", ["app", "App", "APP"])
    def test_case_insensitive(self, populated, query: str):
        """Test that a token matches regardless of case."""
        index, records = populated

        assert index.search(query) == {
            records["App 1"],
            records["App 2"],
            records["this is a description of an app"],
        }

    def test_token_inside_punctuation(self, populated):
        """Test that tokens split on punctuation."""
        index, records = populated

        assert index.search("hello") == {
            records["hello@email.com"],
            records["this is a long string: hello world, with the Indexer inside"],
        }

    @pytest.mark.parametrize("query", ["Indexer", "indexer"])
    def test_single_match(self, populated, query: str):
        """Test a token that only one value holds."""
        index, records = populated

        assert index.search(query) == {
            records["this is a long string: hello world, with the Indexer inside"]
        }

    def test_any_token_matches(self, populated):
        """Test that a multi-word query matches any of its tokens."""
        index, records = populated

        assert index.search("related world") == {
            records["nothing related"],
            records["this is a long string: hello world, with the Indexer inside"],
        }

    def test_no_partial_tokens(self, populated):
        """Test that a word prefix is not a match."""
        index, _ = populated

        assert index.search("Index") == set()

    def test_operator_words_are_literal(self, populated):
        """Test that FTS5 syntax in the query is not interpreted."""
        index, _ = populated

        assert index.search('NOT "app') != set()

    def test_punctuation_only_query(self, populated):
        """Test that a query without searchable tokens matches nothing."""
        index, _ = populated

        assert index.search("*** ---") == set()

    def test_empty_query(self, populated):
        """Test that an empty query is rejected."""
        index, _ = populated

        with pytest.raises(QueryShapeError):
            index.search("")


class TestFullTextIndexing:
    """Tests for adding values."""

    def test_index_missing_record(self):
        """Test that a None record is rejected."""
        index = FullTextIndex()

        with pytest.raises(IndexingError):
            index.index(None, "value")

    def test_index_empty_value(self):
        """Test that an empty value is rejected and nothing is stored."""
        index = FullTextIndex()

        with pytest.raises(IndexingError) as exc_info:
            index.index(_record("x"), "")

        assert exc_info.value.message == "cannot index a record with empty data"
        assert len(index) == 0

    def test_same_record_many_values(self):
        """Test that one record indexed twice is returned once."""
        index = FullTextIndex()
        record = _record("alpha")
        index.index(record, "alpha")
        index.index(record, "alpha beta")

        assert index.search("alpha") == {record}
        assert len(index) == 2

    def test_unknown_tokenizer(self):
        """Test that an invalid tokenizer fails construction."""
        with pytest.raises(IndexingError) as exc_info:
            FullTextIndex(name="description", tokenizer="no_such_tokenizer")

        assert exc_info.value.details["tokenizer"] == "no_such_tokenizer"


class TestPunctuatedQueries:
    """Tests for queries whose words are joined by punctuation."""

    @pytest.mark.parametrize("query", ["apps store", "apps,store", "store;apps", "(apps)"])
    def test_any_token_despite_punctuation(self, query: str):
        """Test that punctuation never turns a query into a phrase."""
        index = FullTextIndex(name="description")
        record = _record("store for apps")
        index.index(record, "store for apps")

        assert index.search(query) == {record}

        index.close()

    def test_email_query_matches_each_part(self, populated):
        """Test that an address-like query matches any of its parts."""
        index, records = populated

        assert index.search("hello@nowhere.org") == {
            records["hello@email.com"],
            records["this is a long string: hello world, with the Indexer inside"],
        }


class TestConcurrentUse:
    """Tests for use from several threads with no outer lock."""

    def test_parallel_index_and_search(self):
        """Test that concurrent inserts get distinct ids that all resolve."""
        index = FullTextIndex(name="description")
        workers, per_worker = 8, 25
        errors = []
        start = threading.Barrier(workers * 2)

        def writer(worker: int):
            try:
                start.wait()
                for i in range(per_worker):
                    index.index(_record(f"shared w{worker}n{i}"), f"shared w{worker}n{i}")
            except Exception as e:
                errors.append(e)

        def reader():
            try:
                start.wait()
                for _ in range(per_worker):
                    index.search("shared")
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(workers)]
        threads += [threading.Thread(target=reader) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert errors == []
        assert len(index) == workers * per_worker

        rows = index._conn.execute("SELECT rowid FROM entries").fetchall()
        rowids = [row[0] for row in rows]
        assert len(set(rowids)) == workers * per_worker
        assert set(rowids) == set(index._records)

        matched = index.search("shared")
        assert len(matched) == workers * per_worker
        assert {r.description for r in matched} == {
            f"shared w{w}n{i}" for w in range(workers) for i in range(per_worker)
        }

        index.close()
