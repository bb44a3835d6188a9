"""Loadspec entry dataclass and its JSON view."""

from dataclasses import dataclass
from typing import Any


class LoadspecError(Exception):
    """Base class for every error that aborts a loadspec run."""


@dataclass
class Entry:
    url: str
    source: str
    timestamp_nanos: int  # absolute, ns since epoch (UTC); never serialized
    delay_since_last_nanos: int = 0
    id: int = -1


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    """Convert an Entry to the dict written on the loadspec stream."""
    return {
        "id": entry.id,
        "url": entry.url,
        "source": entry.source,
        "delaySinceLastNanos": entry.delay_since_last_nanos,
    }
