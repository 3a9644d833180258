"""Drawing prompts on the terminal and erasing what was drawn before."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from surveykit.config import Icon, OptionAnswer, PromptConfig, compute_cursor_offset
from surveykit.terminal.cursor import Cursor, erase_line
from surveykit.terminal.keys import EraseLineMode, Stdio
from surveykit.terminal.runereader import RuneReader, string_width

ColorFn = Callable[[str], str]
Template = Callable[[Any, ColorFn], str]

_FALLBACK_WIDTH = 10000

_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "default": 9,
}

_STYLE_FLAGS = (("b", "1"), ("B", "5"), ("u", "4"), ("i", "7"), ("s", "9"))

_SGR_SEQUENCE = re.compile(r"\x1b\[[0-9;]*m")


def _color_number(key: str, base: int, extended: str) -> str:
    if key.isdigit():
        return f"{extended};5;{int(key)}"
    return str(base + _COLORS.get(key, 0))


def color_code(spec: str) -> str:
    """Return the ANSI sequence for a colour spec such as ``"green+hb"``.

    A spec is ``foreground+styles:background+styles``; ``"reset"`` resets
    all attributes and an empty spec or ``"off"`` gives no sequence.
    """
    if not spec or spec == "off":
        return ""
    if spec == "reset":
        return "\x1b[0m"
    fg_part, _, bg_part = spec.partition(":")
    fg_key, _, fg_style = fg_part.partition("+")
    parts = [code for flag, code in _STYLE_FLAGS if flag in fg_style]
    base = 90 if "h" in fg_style else 30
    parts.append(_color_number(fg_key, base, "38"))
    if bg_part:
        bg_key, _, bg_style = bg_part.partition("+")
        if bg_key:
            base = 100 if "h" in bg_style else 40
            parts.append(_color_number(bg_key, base, "48"))
    return "\x1b[" + ";".join(parts) + "m"


def _strip_color(text: str) -> str:
    """Remove colour escape sequences, leaving the text as laid out."""
    return _SGR_SEQUENCE.sub("", text)


def error_template(error: BaseException, icon: Icon, color: ColorFn) -> str:
    """Render the message shown when an answer was rejected."""
    return (
        f"{color(icon.format)}{icon.text} Sorry, your reply was invalid: "
        f"{error}{color('reset')}\n"
    )


def _emit(out: Any, text: str) -> None:
    out.write(text)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


@dataclass
class Renderer:
    """Keeps track of what a prompt printed so it can be redrawn in place.

    Templates are callables ``template(data, color)`` returning text; ``color``
    maps a colour spec to its escape sequence. A template whose options can be
    rendered one at a time carries that part as its ``option`` attribute.
    """

    stdio: Stdio = field(default_factory=Stdio, kw_only=True)
    disable_color: bool = field(default=False, kw_only=True)
    terminal_width: Optional[int] = field(default=None, kw_only=True)
    _rendered_errors: str = field(default="", init=False, repr=False, compare=False)
    _rendered_text: str = field(default="", init=False, repr=False, compare=False)

    def with_stdio(self, stdio: Stdio) -> None:
        self.stdio = stdio

    def new_rune_reader(self) -> RuneReader:
        return RuneReader(self.stdio)

    def new_cursor(self) -> Cursor:
        return Cursor(self.stdio.stdin, self.stdio.stdout)

    def _run(self, template: Callable[[ColorFn], str]) -> tuple[str, str]:
        """Return the text for the user and the same text without colour."""
        colored = template(color_code)
        layout = _strip_color(colored)
        return (layout if self.disable_color else colored), layout

    def error(self, config: PromptConfig, invalid: BaseException) -> None:
        """Replace the prompt with the message for a rejected answer."""
        self._reset_prompt(self.count_lines(self._rendered_errors))
        self._rendered_errors = ""
        self._reset_prompt(self.count_lines(self._rendered_text))
        self._rendered_text = ""

        icon = config.icons.error
        user_out, layout_out = self._run(
            lambda color: error_template(invalid, icon, color)
        )
        _emit(self.stdio.stdout, user_out)
        self._rendered_errors += layout_out

    def offset_cursor(self, offset: int) -> None:
        """Move the cursor ``offset`` lines up."""
        cursor = self.new_cursor()
        for _ in range(offset):
            cursor.previous_line(1)

    def render(self, template: Template, data: Any) -> None:
        """Erase what was rendered before and draw ``template`` with ``data``."""
        self._reset_prompt(self.count_lines(self._rendered_text))
        self._rendered_text = ""
        user_out, layout_out = self._run(lambda color: template(data, color))
        _emit(self.stdio.stdout, user_out)
        self.append_rendered_text(layout_out)

    def render_with_cursor_offset(
        self,
        template: Template,
        data: Any,
        opts: Sequence[OptionAnswer],
        idx: int,
    ) -> None:
        """Render, then park the cursor on the selected option's line.

        ``data.iterate_option(ix, opt)`` gives the data for one option.
        """
        cursor = self.new_cursor()
        cursor.restore()
        self.render(template, data)
        cursor.save()

        option_template = getattr(template, "option", None)

        def render_option(ix: int, opt: OptionAnswer) -> str:
            if option_template is None:
                return opt.value
            return _strip_color(
                option_template(data.iterate_option(ix, opt), color_code)
            )

        offset = compute_cursor_offset(render_option, opts, idx, self.term_width())
        self.offset_cursor(offset)

    def append_rendered_text(self, text: str) -> None:
        """Record printed text so it can be erased before the next render."""
        self._rendered_text += text

    def _reset_prompt(self, lines: int) -> None:
        out = self.stdio.stdout
        cursor = self.new_cursor()
        cursor.horizontal_absolute(0)
        erase_line(out, EraseLineMode.ALL)
        for _ in range(lines):
            cursor.previous_line(1)
            erase_line(out, EraseLineMode.ALL)

    def term_width(self) -> int:
        """Width of the output terminal, or a very wide one if unknown."""
        if self.terminal_width:
            return self.terminal_width
        try:
            width = os.get_terminal_size(self.stdio.stdout.fileno()).columns
        except (AttributeError, OSError, ValueError):
            width = 0
        return width or _FALLBACK_WIDTH

    def count_lines(self, text: str) -> int:
        """Count the newlines in ``text`` plus lines wrapped by the terminal."""
        width = self.term_width()
        segments = text.split("\n")
        count = len(segments) - 1
        for segment in segments:
            line_width = string_width(segment)
            if line_width > width:
                count += line_width // width
                if line_width % width == 0:
                    count -= 1
        return count