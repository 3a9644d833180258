"""Key codes, terminal geometry and the standard streams used by prompts."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Any

KEY_ARROW_LEFT = "\x02"
KEY_ARROW_RIGHT = "\x06"
KEY_ARROW_UP = "\x10"
KEY_ARROW_DOWN = "\x0e"
KEY_SPACE = " "
KEY_ENTER = "\r"
KEY_BACKSPACE = "\b"
KEY_DELETE = "\x7f"
KEY_INTERRUPT = "\x03"
KEY_END_TRANSMISSION = "\x04"
KEY_ESCAPE = "\x1b"
KEY_DELETE_WORD = "\x17"  # Ctrl+W
KEY_DELETE_LINE = "\x18"  # Ctrl+X
SPECIAL_KEY_HOME = "\x01"
SPECIAL_KEY_END = "\x11"
SPECIAL_KEY_DELETE = "\x12"
IGNORE_KEY = "\x00"
KEY_TAB = "\t"

# Terminal coordinates reported by the device start at 1.
COORDINATE_SYSTEM_BEGIN = 1


class InterruptError(Exception):
    """Raised when the user interrupts a prompt (Ctrl+C)."""

    def __init__(self, message: str = "interrupt") -> None:
        super().__init__(message)


class EraseLineMode(enum.IntEnum):
    """Which part of the current line to erase."""

    END = 0
    START = 1
    ALL = 2


@dataclass
class Coord:
    """A position (or size) on the terminal grid."""

    x: int = 0
    y: int = 0

    def cursor_is_at_line_end(self, size: Coord) -> bool:
        return self.x == size.x

    def cursor_is_at_line_begin(self) -> bool:
        return self.x == COORDINATE_SYSTEM_BEGIN


@dataclass
class Stdio:
    """The input, output and error streams a prompt talks to."""

    stdin: Any = field(default_factory=lambda: sys.stdin)
    stdout: Any = field(default_factory=lambda: sys.stdout)
    stderr: Any = field(default_factory=lambda: sys.stderr)


def _binary_stream(stream: Any) -> Any:
    return getattr(stream, "buffer", stream)


class BufferedReader:
    """Reads pending bytes from ``buffer`` before falling back to ``stream``."""

    def __init__(self, stream: Any, buffer: bytearray | None = None) -> None:
        self.stream = stream
        self.buffer = bytearray() if buffer is None else buffer

    def read(self, size: int = -1) -> bytes:
        if self.buffer:
            if size < 0 or size >= len(self.buffer):
                chunk = bytes(self.buffer)
                self.buffer.clear()
            else:
                chunk = bytes(self.buffer[:size])
                del self.buffer[:size]
            return chunk
        source = _binary_stream(self.stream)
        reader = getattr(source, "read1", None) or source.read
        data = reader(size)
        return data or b""