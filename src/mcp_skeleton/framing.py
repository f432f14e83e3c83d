"""Line framing for the stdio transport.

Messages normally arrive one JSON value per line, but pretty-printed JSON
spanning several lines is accepted too: lines are buffered until the
buffer as a whole parses as JSON.
"""

import json
import logging
from typing import Iterable, Iterator, Optional


def is_complete_json(text: str) -> bool:
    """Check whether ``text`` holds one syntactically complete JSON value.

    Surrounding whitespace is ignored. Empty or whitespace-only text is
    never complete.
    """
    trimmed = text.strip()
    if not trimmed:
        return False
    # NaN and Infinity count as complete; decode rejects them
    try:
        json.loads(trimmed)
    except ValueError:
        return False
    return True


class LineFramer:
    """Accumulates input lines and emits complete JSON text units."""

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Input received so far that has not formed a complete message."""
        return self._buffer

    def feed(self, line: str) -> Optional[str]:
        """Add one line to the buffer.

        Args:
            line: Raw input line, with or without its trailing newline

        Returns:
            The trimmed buffer if it now holds complete JSON, otherwise None.
        """
        self._buffer += line
        if not is_complete_json(self._buffer):
            return None
        message = self._buffer.strip()
        self._buffer = ""
        return message


def iter_messages(stream: Iterable[str]) -> Iterator[str]:
    """Yield complete JSON text units read line by line from ``stream``.

    An incomplete buffer left over at end of input is dropped.
    """
    framer = LineFramer()
    for line in stream:
        message = framer.feed(line)
        if message is not None:
            yield message

    if framer.pending.strip():
        # TODO: decide whether a truncated final message should get a -32700 reply
        logging.debug(f"Dropping incomplete input at end of stream: {framer.pending!r}")
