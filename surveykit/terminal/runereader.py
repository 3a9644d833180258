"""Reading keys and editing a line of input on a raw terminal."""

from __future__ import annotations

import shutil
import unicodedata
from typing import Any, Callable, Optional, Tuple

try:
    import termios
except ImportError:  # pragma: no cover - non-posix platforms
    termios = None  # type: ignore[assignment]

from surveykit.terminal.cursor import Cursor, erase_line, sound_bell
from surveykit.terminal.keys import (
    COORDINATE_SYSTEM_BEGIN,
    IGNORE_KEY,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_END_TRANSMISSION,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    SPECIAL_KEY_DELETE,
    SPECIAL_KEY_END,
    SPECIAL_KEY_HOME,
    BufferedReader,
    Coord,
    EraseLineMode,
    InterruptError,
    Stdio,
)

_NORMAL_KEYPAD = "["
_APPLICATION_KEYPAD = "O"
_READ_CHUNK = 4096

OnRune = Callable[[str, str], Tuple[str, bool]]

_ESCAPE_KEYS = {
    "A": KEY_ARROW_UP,
    "B": KEY_ARROW_DOWN,
    "C": KEY_ARROW_RIGHT,
    "D": KEY_ARROW_LEFT,
    "F": SPECIAL_KEY_END,
    "H": SPECIAL_KEY_HOME,
}


def rune_width(char: str) -> int:
    """Number of terminal cells ``char`` occupies (2 for wide East Asian)."""
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def string_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies."""
    return sum(rune_width(char) for char in text)


def _utf8_length(first: int) -> int:
    if first < 0x80:
        return 1
    if 0xC0 <= first <= 0xDF:
        return 2
    if 0xE0 <= first <= 0xEF:
        return 3
    if 0xF0 <= first <= 0xF7:
        return 4
    return 1


def _emit(out: Any, text: str) -> None:
    out.write(text)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


class RuneReader:
    """Reads single key presses and whole edited lines from a terminal."""

    def __init__(self, stdio: Stdio) -> None:
        self.stdio = stdio
        self._buffer = bytearray()
        self._reader = BufferedReader(stdio.stdin, self._buffer)
        self._pending = bytearray()
        self._saved_mode: Optional[list] = None

    def buffer(self) -> bytearray:
        """Input that arrived while querying the terminal, read before new input."""
        return self._buffer

    # -- terminal mode -------------------------------------------------

    def _fileno(self) -> int:
        if termios is None:
            raise OSError("terminal modes are not supported on this platform")
        return self.stdio.stdin.fileno()

    def set_term_mode(self) -> None:
        """Turn off echo, canonical mode and signal keys for raw key reading."""
        fd = self._fileno()
        try:
            current = termios.tcgetattr(fd)
            self._saved_mode = [list(item) if isinstance(item, list) else item for item in current]
            new_state = [list(item) if isinstance(item, list) else item for item in current]
            new_state[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG)
            new_state[6][termios.VMIN] = 1
            new_state[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSANOW, new_state)
        except termios.error as exc:
            raise OSError(*exc.args) from exc

    def restore_term_mode(self) -> None:
        """Put back the terminal mode saved by :meth:`set_term_mode`."""
        if self._saved_mode is None:
            return
        fd = self._fileno()
        try:
            termios.tcsetattr(fd, termios.TCSANOW, self._saved_mode)
        except termios.error as exc:
            raise OSError(*exc.args) from exc

    # -- key reading -----------------------------------------------------

    def _fill(self) -> bool:
        data = self._reader.read(_READ_CHUNK)
        if not data:
            return False
        self._pending += data
        return True

    def _next_char(self) -> str:
        if not self._pending and not self._fill():
            raise EOFError("end of input")
        need = _utf8_length(self._pending[0])
        while len(self._pending) < need and self._fill():
            pass
        try:
            char = bytes(self._pending[:need]).decode("utf-8")
        except UnicodeDecodeError:
            del self._pending[:1]
            return "\ufffd"
        del self._pending[:need]
        return char

    def _discard(self, count: int) -> None:
        for _ in range(count):
            if not self._pending and not self._fill():
                return
            del self._pending[:1]

    def read_rune(self) -> str:
        """Read one key, turning escape sequences into the key constants."""
        char = self._next_char()
        if char != KEY_ESCAPE:
            return char
        if not self._pending:
            # nothing follows, so this was the Esc key itself
            return KEY_ESCAPE
        char = self._next_char()
        if char not in (_NORMAL_KEYPAD, _APPLICATION_KEYPAD):
            raise ValueError(
                f"unexpected escape sequence from terminal: {[KEY_ESCAPE, char]!r}"
            )
        keypad = char
        char = self._next_char()
        if char in _ESCAPE_KEYS:
            return _ESCAPE_KEYS[char]
        if char == "3" and keypad == _NORMAL_KEYPAD:
            self._discard(1)  # the trailing '~'
            return SPECIAL_KEY_DELETE
        self._discard(1)
        return IGNORE_KEY

    # -- line editing ----------------------------------------------------

    def _print_char(self, char: str, mask: Optional[str]) -> None:
        _emit(self.stdio.stdout, mask if mask else char)

    def read_line(self, mask: Optional[str] = None, on_rune: Optional[OnRune] = None) -> str:
        """Read an edited line of input; ``mask`` replaces echoed characters."""
        return self.read_line_with_default(mask, "", on_rune)

    def read_line_with_default(
        self,
        mask: Optional[str] = None,
        default: str = "",
        on_rune: Optional[OnRune] = None,
    ) -> str:
        """Read an edited line of input that starts out holding ``default``."""
        if mask == IGNORE_KEY:
            mask = None
        out = self.stdio.stdout
        line: list[str] = []
        index = 0
        cursor = Cursor(self.stdio.stdin, out)

        try:
            terminal_size = cursor.size(self._buffer)
        except (OSError, EOFError, ValueError):
            cols, rows = shutil.get_terminal_size()
            terminal_size = Coord(cols, rows)
        try:
            current = cursor.location(self._buffer)
        except (OSError, EOFError, ValueError):
            current = Coord(COORDINATE_SYSTEM_BEGIN, COORDINATE_SYSTEM_BEGIN)

        def increment() -> None:
            if current.cursor_is_at_line_end(terminal_size):
                current.x = COORDINATE_SYSTEM_BEGIN
                current.y += 1
            else:
                current.x += 1

        def decrement() -> None:
            if current.cursor_is_at_line_begin():
                current.x = terminal_size.x
                current.y -= 1
            else:
                current.x -= 1

        def back_to_previous_line_end() -> None:
            cursor.previous_line(1)
            cursor.forward(terminal_size.x)

        if default:
            index = len(default)
            _emit(out, default)
            line = list(default)
            for _ in default:
                increment()

        while True:
            r = self.read_rune()

            if on_rune is not None:
                result, stop = on_rune(r, "".join(line))
                if stop:
                    return result

            if r in ("\r", "\n", KEY_END_TRANSMISSION):
                while index > 0:
                    if current.cursor_is_at_line_begin():
                        erase_line(out, EraseLineMode.END)
                        back_to_previous_line_end()
                    else:
                        cursor.back(1)
                    decrement()
                    index -= 1
                cursor.move_next_line(current, terminal_size)
                return "".join(line)

            if r == KEY_INTERRUPT:
                _emit(out, "\r\n")
                raise InterruptError()

            if r in (KEY_BACKSPACE, KEY_DELETE):
                if index > 0 and line:
                    if index == len(line):
                        cells = rune_width(line.pop())
                        if current.x == 1:
                            back_to_previous_line_end()
                        else:
                            cursor.back(cells)
                        erase_line(out, EraseLineMode.END)
                    else:
                        cells = rune_width(line[index - 1])
                        del line[index - 1]
                        cursor.save()
                        cursor.back(cells)
                        for char in line[index - 1:]:
                            erase_line(out, EraseLineMode.END)
                            self._print_char(char, mask)
                        if current.y < terminal_size.y:
                            cursor.next_line(1)
                            erase_line(out, EraseLineMode.END)
                        cursor.restore()
                        if current.cursor_is_at_line_begin():
                            back_to_previous_line_end()
                        else:
                            cursor.back(cells)
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if r == KEY_ARROW_LEFT:
                if index > 0:
                    if current.cursor_is_at_line_begin():
                        back_to_previous_line_end()
                    else:
                        cursor.back(rune_width(line[index - 1]))
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if r == KEY_ARROW_RIGHT:
                if index < len(line):
                    if current.cursor_is_at_line_end(terminal_size):
                        cursor.next_line(1)
                    else:
                        cursor.forward(rune_width(line[index]))
                    index += 1
                    increment()
                else:
                    sound_bell(out)
                continue

            if r == SPECIAL_KEY_HOME:
                while index > 0:
                    if current.cursor_is_at_line_begin():
                        back_to_previous_line_end()
                        current.y -= 1
                        current.x = terminal_size.x
                    else:
                        width = rune_width(line[index - 1])
                        cursor.back(width)
                        current.x -= width
                    index -= 1
                continue

            if r == SPECIAL_KEY_END:
                while index != len(line):
                    if current.cursor_is_at_line_end(terminal_size):
                        cursor.next_line(1)
                        current.y += 1
                        current.x = COORDINATE_SYSTEM_BEGIN
                    else:
                        width = rune_width(line[index])
                        cursor.forward(width)
                        current.x += width
                    index += 1
                continue

            if r == SPECIAL_KEY_DELETE:
                if index != len(line):
                    cursor.save()
                    del line[index]
                    for char in line[index:]:
                        erase_line(out, EraseLineMode.END)
                        self._print_char(char, mask)
                    if current.y < terminal_size.y:
                        cursor.next_line(1)
                        erase_line(out, EraseLineMode.END)
                    cursor.restore()
                    if not line or index == len(line):
                        erase_line(out, EraseLineMode.END)
                continue

            if unicodedata.category(r) == "Cc" or r == IGNORE_KEY:
                continue

            if index == len(line):
                line.append(r)
                index += 1
                increment()
                self._print_char(r, mask)
                continue

            # insert in the middle of the line and redraw what follows
            line.insert(index, r)
            before = Coord(current.x, current.y)
            cursor.save()
            erase_line(out, EraseLineMode.END)
            for char in line[index:]:
                erase_line(out, EraseLineMode.END)
                self._print_char(char, mask)
                increment()
            if current.cursor_is_at_line_end(terminal_size) and current.y == terminal_size.y:
                _emit(out, "\n")
                cursor.restore()
                cursor.previous_line(1)
            else:
                cursor.restore()
            try:
                located = cursor.location(self._buffer)
            except (OSError, EOFError, ValueError):
                located = before
            current.x, current.y = located.x, located.y
            if current.cursor_is_at_line_end(terminal_size):
                cursor.next_line(1)
            else:
                cursor.forward(rune_width(r))
            index += 1
            increment()