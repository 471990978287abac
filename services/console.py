"""Sources of operator command lines."""

from __future__ import annotations

import logging
import os
import select
import sys
from collections import deque
from typing import Iterable, List, Optional, Protocol, TextIO

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    def drain(self) -> List[str]:
        """Return every line that is ready without blocking."""
        ...


class StreamLineSource:
    """Non-blocking reader over a file-backed stream such as ``sys.stdin``.

    Readiness is checked with :func:`select.select` on the raw descriptor, so
    this works on POSIX terminals and pipes. A trailing partial line is kept
    until its newline arrives, or returned once the stream closes.
    """

    def __init__(self, stream: Optional[TextIO] = None, encoding: str = "utf-8") -> None:
        stream = stream if stream is not None else sys.stdin
        self._fd = stream.fileno()
        self._encoding = encoding
        self._buffer = b""
        self.closed = False

    def drain(self) -> List[str]:
        while not self.closed:
            ready, _, _ = select.select([self._fd], [], [], 0)
            if not ready:
                break
            chunk = os.read(self._fd, 4096)
            if not chunk:
                logger.info("Command input closed")
                self.closed = True
                break
            self._buffer += chunk

        lines: List[str] = []
        while b"\n" in self._buffer:
            raw, self._buffer = self._buffer.split(b"\n", 1)
            lines.append(raw.decode(self._encoding, errors="replace"))
        if self.closed and self._buffer:
            lines.append(self._buffer.decode(self._encoding, errors="replace"))
            self._buffer = b""
        return lines


class QueuedLineSource:
    """In-memory source fed programmatically."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._pending = deque(lines)

    def push(self, line: str) -> None:
        self._pending.append(line)

    def drain(self) -> List[str]:
        lines = list(self._pending)
        self._pending.clear()
        return lines
