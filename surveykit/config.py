"""Answers, icons, prompt configuration and option paging."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence


@dataclass(frozen=True)
class OptionAnswer:
    """A chosen option and its position in the full option list."""

    value: str
    index: int


def option_answer_list(values: Sequence[str]) -> list[OptionAnswer]:
    """Pair every value with its index."""
    return [OptionAnswer(value, index) for index, value in enumerate(values)]


@dataclass
class Icon:
    """The text and colour format shown for an icon."""

    text: str = ""
    format: str = ""


@dataclass
class IconSet:
    """The icons used by prompts."""

    help_input: Icon = field(default_factory=Icon)
    error: Icon = field(default_factory=lambda: Icon("X", "red"))
    help: Icon = field(default_factory=lambda: Icon("?", "cyan"))
    question: Icon = field(default_factory=lambda: Icon("?", "green+hb"))
    marked_option: Icon = field(default_factory=lambda: Icon("[x]", "green"))
    unmarked_option: Icon = field(default_factory=lambda: Icon("[ ]", "default+hb"))
    select_focus: Icon = field(default_factory=lambda: Icon(">", "cyan+b"))


def default_filter(filter_text: str, value: str, index: int) -> bool:
    """Keep an option whose value contains the filter, ignoring case."""
    return filter_text.lower() in value.lower()


FilterFn = Callable[[str, str, int], bool]


@dataclass
class PromptConfig:
    """Settings shared by every prompt of one ask."""

    page_size: int = 7
    icons: IconSet = field(default_factory=IconSet)
    help_input: str = "?"
    suggest_input: str = "tab"
    filter: FilterFn = field(default=default_filter)
    keep_filter: bool = False
    show_cursor: bool = False


def default_prompt_config() -> PromptConfig:
    """A fresh configuration holding the default settings."""
    return PromptConfig()


def default_icons() -> IconSet:
    """A fresh set of the default icons."""
    return IconSet()


def paginate(
    page_size: int, choices: Sequence[OptionAnswer], sel: int
) -> tuple[list[OptionAnswer], int]:
    """Return the page of ``choices`` around ``sel`` and the cursor within it."""
    total = len(choices)
    if total < page_size:
        start, end, cursor = 0, total, sel
    elif sel < page_size // 2:
        start, end, cursor = 0, page_size, sel
    elif total - sel - 1 < page_size // 2:
        start, end = total - page_size, total
        cursor = sel - start
    else:
        above = page_size // 2
        below = page_size - above
        cursor = page_size // 2
        start, end = sel - above, sel + below
    return list(choices[start:end]), cursor


def compute_cursor_offset(
    render_option: Callable[[int, OptionAnswer], str],
    opts: Sequence[OptionAnswer],
    idx: int,
    term_width: int,
) -> int:
    """Count the screen lines from the selected option to the end of the list.

    ``render_option`` gives the rendered text of one option; options wider
    than the terminal add the lines they wrap onto.
    """
    offset = len(opts) - idx
    for position, opt in enumerate(opts):
        if position < idx:
            continue
        width = len(render_option(position, opt))
        if width > term_width:
            split_count = width // term_width
            if width % term_width == 0:
                split_count -= 1
            offset += split_count
    return offset