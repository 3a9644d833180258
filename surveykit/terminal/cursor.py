"""ANSI cursor movement and line erasing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from surveykit.terminal.keys import Coord, EraseLineMode

_DSR_PATTERN = re.compile(rb"\x1b\[(\d+);(\d+)R$")


def _write(out: Any, text: str) -> None:
    out.write(text)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


def erase_line(out: Any, mode: EraseLineMode) -> None:
    """Erase part of the current line according to ``mode``."""
    _write(out, f"\x1b[{int(mode)}K")


def sound_bell(out: Any) -> None:
    """Ring the terminal bell."""
    _write(out, "\a")


@dataclass
class Cursor:
    """Moves the terminal cursor by writing escape sequences to ``stdout``."""

    stdin: Any = None
    stdout: Any = None

    def _emit(self, text: str) -> None:
        _write(self.stdout, text)

    def up(self, n: int) -> None:
        self._emit(f"\x1b[{n}A")

    def down(self, n: int) -> None:
        self._emit(f"\x1b[{n}B")

    def forward(self, n: int) -> None:
        self._emit(f"\x1b[{n}C")

    def back(self, n: int) -> None:
        self._emit(f"\x1b[{n}D")

    def next_line(self, n: int) -> None:
        """Move to the start of the line below."""
        self.down(1)
        self.horizontal_absolute(0)

    def previous_line(self, n: int) -> None:
        """Move to the start of the line above."""
        self.up(1)
        self.horizontal_absolute(0)

    def horizontal_absolute(self, x: int) -> None:
        self._emit(f"\x1b[{x}G")

    def show(self) -> None:
        self._emit("\x1b[?25h")

    def hide(self) -> None:
        self._emit("\x1b[?25l")

    def _move(self, x: int, y: int) -> None:
        self._emit(f"\x1b[{x};{y}f")

    def save(self) -> None:
        self._emit("\x1b7")

    def restore(self) -> None:
        self._emit("\x1b8")

    def move_next_line(self, cur: Coord, terminal_size: Coord) -> None:
        """Go to the next line, scrolling first when on the bottom row."""
        if cur.y == terminal_size.y:
            self._emit("\n")
        self.next_line(1)

    def location(self, buf: bytearray) -> Coord:
        """Query the cursor position; unrelated input is kept in ``buf``."""
        self._emit("\x1b[6n")
        source = getattr(self.stdin, "buffer", self.stdin)
        while True:
            text = bytearray()
            while not text.endswith(b"R"):
                byte = source.read(1)
                if not byte:
                    raise EOFError("input closed while reading cursor position")
                text += byte
            match = _DSR_PATTERN.search(bytes(text))
            if match is None:
                buf += text
                continue
            buf += text[: match.start()]
            row, col = int(match.group(1)), int(match.group(2))
            return Coord(col, row)

    def size(self, buf: bytearray) -> Coord:
        """Return the terminal size by probing the bottom-right corner."""
        self.hide()
        self.save()
        try:
            self._move(999, 999)
            return self.location(buf)
        finally:
            self.restore()
            self.show()