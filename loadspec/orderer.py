"""Chronological ordering of built entries."""

from typing import Iterable

from loadspec.models import Entry


def order_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Return entries sorted by absolute timestamp.

    Slowlog lines are not guaranteed to be written in time order. The sort is
    stable, so entries sharing a timestamp keep their input order.
    """
    return sorted(entries, key=lambda e: e.timestamp_nanos)
