"""Tests for search-log analytics."""

from catalog.analytics import load_search_logs, summarize_search_logs
from catalog.db import append_search_log


class TestSummarizeSearchLogs:

    def test_empty_log(self, empty_db):
        summary = summarize_search_logs(empty_db)
        assert summary["total_searches"] == 0
        assert summary["zero_result_rate"] == 0.0
        assert summary["top_queries"] == []
        assert summary["top_zero_result_queries"] == []

    def test_queries_grouped_case_insensitively(self, empty_db):
        append_search_log(empty_db, "Dell", 2)
        append_search_log(empty_db, " dell", 2)
        append_search_log(empty_db, "dell", 2)
        append_search_log(empty_db, "macbook", 0)

        summary = summarize_search_logs(empty_db)
        assert summary["total_searches"] == 4
        assert summary["zero_result_searches"] == 1
        assert summary["zero_result_rate"] == 0.25
        assert summary["top_queries"][0] == {"query": "dell", "count": 3}
        assert summary["top_zero_result_queries"] == [{"query": "macbook", "count": 1}]

    def test_top_n_limit(self, empty_db):
        for i in range(5):
            append_search_log(empty_db, f"query {i}", 1)

        summary = summarize_search_logs(empty_db, top_n=2)
        assert len(summary["top_queries"]) == 2

    def test_load_search_logs_parses_dates(self, empty_db):
        append_search_log(empty_db, "hp", 1)
        df = load_search_logs(empty_db)
        assert list(df["search_query"]) == ["hp"]
        assert str(df["created_at"].dtype).startswith("datetime64")
