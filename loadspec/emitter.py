"""Delay encoding and NDJSON emission of ordered entries."""

import json
import logging
from typing import Iterable, TextIO

from loadspec.durations import format_duration
from loadspec.models import Entry, LoadspecError, entry_to_dict

logger = logging.getLogger(__name__)


class SerializationError(LoadspecError):
    """Raised when an entry cannot be encoded or written."""


def encode_entry(entry: Entry) -> str:
    """Return one JSON object for the entry, without the trailing newline."""
    try:
        return json.dumps(entry_to_dict(entry), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"JSON encoding failed for entry {entry.id}: {e}") from e


def emit_entries(
    entries: Iterable[Entry], out: TextIO, max_duration_nanos: int = 0
) -> tuple[int, int]:
    """Write ordered entries to *out* as NDJSON. Returns (entries written, elapsed nanoseconds).

    Each entry's absolute timestamp becomes the delay since the previous entry
    and its id becomes its position. Once the summed delays reach a positive
    *max_duration_nanos*, the entry that reached it is the last one written.
    """
    elapsed = 0
    written = 0
    previous = None
    for position, entry in enumerate(entries):
        current = entry.timestamp_nanos
        entry.delay_since_last_nanos = 0 if previous is None else current - previous
        entry.id = position
        previous = current

        line = encode_entry(entry)
        try:
            out.write(line + "\n")
        except UnicodeEncodeError as e:
            raise SerializationError(f"cannot write entry {entry.id}: {e}") from e
        written += 1

        elapsed += entry.delay_since_last_nanos
        if max_duration_nanos > 0 and elapsed >= max_duration_nanos:
            logger.info("Max duration %s reached after entry %d",
                        format_duration(max_duration_nanos), entry.id)
            break
    return written, elapsed


def report_duration(elapsed_nanos: int, stream: TextIO) -> None:
    """Write the single "Test duration" summary line to the diagnostic stream."""
    stream.write(f"Test duration: {format_duration(elapsed_nanos)}\n")
    stream.flush()
