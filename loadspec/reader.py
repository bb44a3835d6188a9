"""Line-at-a-time reading of the slowlog input stream."""

import io
from typing import BinaryIO, Generator, TextIO

from loadspec.models import LoadspecError


class InputStreamError(LoadspecError):
    """Raised when the input stream cannot be read."""


def open_text_input(buffer: BinaryIO) -> TextIO:
    """Wrap a binary stream for line reading.

    Bytes that are not valid UTF-8 become U+FFFD instead of failing the run.
    """
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="replace", newline="\n")


def read_lines(stream: TextIO) -> Generator[tuple[int, str], None, None]:
    """Yield (line_number, line) for each line of *stream*, numbering from 1."""
    line_number = 0
    try:
        for line in stream:
            line_number += 1
            yield line_number, line
    except OSError as e:
        raise InputStreamError(f"failed reading input: {e}") from e
