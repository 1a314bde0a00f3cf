"""Tests for QueryLog using in-memory SQLite."""

from __future__ import annotations

from sportsbot.services.db import Database
from sportsbot.services.query_log import QueryLog


def test_log_then_recent_returns_entry(query_log, clock):
    query_log.log(7, "STANDINGS", "SA")
    entries = query_log.recent(7, 1)
    assert len(entries) == 1
    assert entries[0].query_type == "STANDINGS"
    assert entries[0].parameter == "SA"
    assert entries[0].timestamp == clock.now


def test_recent_is_newest_first_and_capped(query_log, clock):
    for code in ["SA", "PL", "PD", "BL1"]:
        query_log.log(7, "STANDINGS", code)
        clock.advance(minutes=1)

    entries = query_log.recent(7, 3)
    assert [e.parameter for e in entries] == ["BL1", "PD", "PL"]


def test_recent_same_timestamp_keeps_insert_order(query_log):
    query_log.log(7, "MATCHES", "SA")
    query_log.log(7, "TOPSCORERS", "SA")
    assert query_log.recent(7, 1)[0].query_type == "TOPSCORERS"


def test_recent_scoped_to_user(query_log):
    query_log.log(1, "STANDINGS", "SA")
    query_log.log(2, "STANDINGS", "PL")
    entries = query_log.recent(1, 10)
    assert len(entries) == 1
    assert entries[0].user_id == 1


def test_recent_with_zero_limit(query_log):
    query_log.log(1, "STANDINGS", "SA")
    assert query_log.recent(1, 0) == []


def test_log_without_parameter(query_log):
    query_log.log(7, "TODAY_MATCHES", None)
    entry = query_log.recent(7, 1)[0]
    assert entry.parameter is None
    assert entry.describe().startswith("TODAY_MATCHES (")


def test_log_does_not_require_registered_user(query_log, users):
    query_log.log(999, "PLAYER_SEARCH", "Lautaro")
    assert users.get_user(999) is None
    assert query_log.count_for_user(999) == 1


def test_most_frequent_category(query_log):
    query_log.log(7, "STANDINGS", "SA")
    query_log.log(7, "MATCHES", "PL")
    query_log.log(7, "TOPSCORERS", "PL")
    query_log.log(7, "TODAY_MATCHES", None)
    query_log.log(7, "TODAY_MATCHES", None)
    query_log.log(7, "TODAY_MATCHES", None)
    assert query_log.most_frequent_category(7) == "PL"


def test_most_frequent_category_without_history(query_log):
    query_log.log(7, "TODAY_MATCHES", None)
    assert query_log.most_frequent_category(7) is None
    assert query_log.most_frequent_category(8) is None


def test_counts_and_top_parameters(query_log):
    query_log.log(1, "STANDINGS", "SA")
    query_log.log(2, "STANDINGS", "SA")
    query_log.log(2, "MATCHES", "PL")
    query_log.log(3, "TODAY_MATCHES", None)

    assert query_log.total_queries() == 4
    assert query_log.count_for_user(2) == 2
    assert query_log.top_parameters(1) == [("SA", 2)]


def test_errors_are_swallowed(clock):
    log = QueryLog(Database(":memory:"), clock=clock)  # never opened
    log.log(1, "STANDINGS", "SA")  # Should not raise
    assert log.recent(1, 5) == []
    assert log.most_frequent_category(1) is None
    assert log.total_queries() == 0
    assert log.top_parameters() == []


def test_log_without_query_type_is_swallowed(query_log):
    query_log.log(1, None, "SA")  # Should not raise
    assert query_log.recent(1) == []
    assert query_log.total_queries() == 0
