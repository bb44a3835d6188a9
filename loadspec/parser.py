"""Slowlog line matcher: frozen dataclass + compiled regex."""

import re
from dataclasses import dataclass

from loadspec.models import LoadspecError

# [ts][ignored][log_type] [host] [index] [ignored] ... types[..] ... search_type[..] ... source[..], extra_source
SLOWLOG_PATTERN = re.compile(
    r"\[(?P<timestamp>[^\]]+)\].?\[.*\]"
    r".?\[(?P<log_type>[^\]]+)\]"
    r".?\[(?P<host>[^\]]+)\]"
    r".?\[(?P<index>[^\]]+)\]"
    r".?\[.*\]"
    r".*types\[(?P<types>[^\]]+)\]"
    r".*search_type\[(?P<search_type>[^\]]+)\]"
    r".*source\[(?P<source>.*)\], extra_source"
)


class MalformedLineError(LoadspecError):
    """Raised when a line does not match the slowlog pattern."""

    def __init__(self, line: str, line_number: int | None = None):
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"{where} does not match the slowlog pattern: {line[:200]!r}")


@dataclass(frozen=True)
class SlowlogFields:
    timestamp: str
    log_type: str
    host: str
    index: str
    types: str
    search_type: str
    source: str


def match_line(line: str) -> SlowlogFields:
    """Extract the slowlog fields from one line.

    Raises MalformedLineError if the line does not match; there is no partial match.
    """
    stripped = line.rstrip("\r\n")
    match = SLOWLOG_PATTERN.search(stripped)
    if not match:
        raise MalformedLineError(stripped)
    return SlowlogFields(**match.groupdict())
