"""Entry builder: query filter, host/index resolution and URL construction."""

import logging
from datetime import datetime, timezone
from typing import Sequence

from loadspec.models import Entry, LoadspecError
from loadspec.parser import SlowlogFields

logger = logging.getLogger(__name__)

QUERY_LOG_TYPE = "index.search.slowlog.query"

# Slowlog timestamps use a comma before the milliseconds: 2020-01-01 10:00:00,000
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SCHEMES = ("http://", "https://")


class TimestampParseError(LoadspecError):
    """Raised when a slowlog timestamp is not in the expected layout."""

    def __init__(self, value: str, line_number: int | None = None):
        self.value = value
        self.line_number = line_number
        where = f" on line {line_number}" if line_number is not None else ""
        super().__init__(f"cannot parse timestamp {value!r}{where}")


def parse_timestamp(value: str) -> int:
    """Return the slowlog timestamp as nanoseconds since the epoch (UTC)."""
    try:
        parsed = datetime.strptime(value.replace(",", ".", 1), TIMESTAMP_FORMAT)
    except ValueError as e:
        raise TimestampParseError(value) from e
    delta = parsed.replace(tzinfo=timezone.utc) - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1000


def normalize_target_url(url: str) -> str:
    """Reduce a target URL to scheme://host[:port].

    A URL without a scheme keeps only the part before the first path separator.
    """
    prefix = ""
    for scheme in _SCHEMES:
        if url.startswith(scheme):
            prefix = scheme
            url = url[len(scheme):]
            break
    slash = url.find("/")
    if slash > 0:
        url = url[:slash]
    return prefix + url


def build_url(host: str, index: str, types: str, search_type: str) -> str:
    url = "/".join([host, index, types, "_search"])
    if search_type:
        url += f"?search_type={search_type.lower()}"
    return url


class EntryBuilder:
    """Turns matched slowlog fields into entries holding absolute timestamps.

    Keeps the count of accepted query entries, which drives the round-robin
    choice among index overrides.
    """

    def __init__(self, target_url: str = "", index_overrides: Sequence[str] = ()):
        self._host_override = normalize_target_url(target_url) if target_url else ""
        self._index_overrides = tuple(index_overrides)
        self._accepted = 0

    @property
    def accepted(self) -> int:
        return self._accepted

    @property
    def host_override(self) -> str:
        return self._host_override

    def build(self, fields: SlowlogFields) -> Entry | None:
        """Build an Entry, or return None for non-query log categories."""
        if fields.log_type != QUERY_LOG_TYPE:
            logger.debug("Skipping %s line", fields.log_type)
            return None

        timestamp_nanos = parse_timestamp(fields.timestamp)

        host = self._host_override or fields.host
        if self._index_overrides:
            index = self._index_overrides[self._accepted % len(self._index_overrides)]
        else:
            index = fields.index

        entry = Entry(
            url=build_url(host, index, fields.types, fields.search_type),
            source=fields.source,
            timestamp_nanos=timestamp_nanos,
        )
        self._accepted += 1
        return entry
