"""Shared pytest fixtures for the loadspec test suite."""

import pytest

QUERY = "index.search.slowlog.query"
FETCH = "index.search.slowlog.fetch"


def slowlog_line(
    timestamp: str = "2020-01-01 10:00:00,000",
    log_type: str = QUERY,
    host: str = "host1",
    index: str = "myindex",
    types: str = "mytype",
    search_type: str = "QUERY_THEN_FETCH",
    source: str = '{"query":{"match_all":{}}}',
) -> str:
    """Return one slowlog line in the format the search engine writes."""
    return (
        f"[{timestamp}][INFO ][{log_type}] [{host}] [{index}] [] "
        f"took[1ms], took_millis[1], types[{types}], stats[], "
        f"search_type[{search_type}], total_shards[1], "
        f"source[{source}], extra_source[]\n"
    )


def numbered(lines: list[str]) -> list[tuple[int, str]]:
    """Pair lines with 1-based line numbers, the way read_lines yields them."""
    return list(enumerate(lines, start=1))


@pytest.fixture()
def make_line():
    return slowlog_line


@pytest.fixture()
def two_queries() -> list[str]:
    """Two query lines one second apart."""
    return [
        slowlog_line("2020-01-01 10:00:00,000"),
        slowlog_line("2020-01-01 10:00:01,000"),
    ]
