"""Slowlog-to-loadspec pipeline: match -> build -> order -> emit."""

import logging
from dataclasses import dataclass
from typing import Iterable, TextIO

from loadspec.builder import EntryBuilder, TimestampParseError
from loadspec.config import Config
from loadspec.durations import format_duration
from loadspec.emitter import emit_entries
from loadspec.models import Entry
from loadspec.orderer import order_entries
from loadspec.parser import MalformedLineError, match_line

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    lines_read: int = 0
    entries_built: int = 0
    entries_emitted: int = 0
    elapsed_nanos: int = 0


def build_entries(lines: Iterable[tuple[int, str]], builder: EntryBuilder) -> tuple[list[Entry], int]:
    """Match and build every line. Returns (entries, lines_read).

    Stops at the first malformed line or bad timestamp; the error carries the
    line number.
    """
    entries = []
    lines_read = 0
    for line_number, line in lines:
        lines_read += 1
        try:
            fields = match_line(line)
            entry = builder.build(fields)
        except MalformedLineError as e:
            raise MalformedLineError(e.line, line_number) from None
        except TimestampParseError as e:
            raise TimestampParseError(e.value, line_number) from e.__cause__
        if entry is not None:
            entries.append(entry)
    return entries, lines_read


def run(lines: Iterable[tuple[int, str]], config: Config, out: TextIO) -> PipelineResult:
    """Read all lines, then write the ordered loadspec to *out*."""
    builder = EntryBuilder(config.target_url, config.index_overrides)
    if builder.host_override:
        logger.info("Overriding host with %s", builder.host_override)
    if config.index_overrides:
        logger.info("Overriding index with %s", ", ".join(config.index_overrides))

    entries, lines_read = build_entries(lines, builder)
    logger.info("Read %d lines, built %d query entries", lines_read, len(entries))

    ordered = order_entries(entries)
    emitted, elapsed = emit_entries(ordered, out, config.max_duration_nanos)
    logger.info("Emitted %d entries spanning %s", emitted, format_duration(elapsed))

    return PipelineResult(
        lines_read=lines_read,
        entries_built=len(entries),
        entries_emitted=emitted,
        elapsed_nanos=elapsed,
    )
