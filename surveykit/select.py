"""A prompt that lets the user pick one option from a filterable list."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from surveykit.config import (
    OptionAnswer,
    PromptConfig,
    default_prompt_config,
    option_answer_list,
    paginate,
)
from surveykit.renderer import Renderer
from surveykit.terminal.keys import (
    KEY_ARROW_DOWN,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DELETE_LINE,
    KEY_DELETE_WORD,
    KEY_END_TRANSMISSION,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    KEY_SPACE,
    KEY_TAB,
    InterruptError,
)

ColorFn = Callable[[str], str]
FilterFn = Callable[[str, str, int], bool]
DescriptionFn = Callable[[str, int], str]


@dataclass
class Select(Renderer):
    """Presents a list of options to choose from with the arrow keys and enter.

    The answer is an :class:`OptionAnswer`. ``default`` is either one of the
    options or the index of one.
    """

    message: str = ""
    options: list = field(default_factory=list)
    default: Any = None
    help: str = ""
    page_size: int = 0
    vim_mode: bool = False
    filter_message: str = ""
    filter: Optional[FilterFn] = None
    description: Optional[DescriptionFn] = None
    _filter_text: str = field(default="", init=False, repr=False, compare=False)
    _selected_index: int = field(default=0, init=False, repr=False, compare=False)
    _use_default: bool = field(default=False, init=False, repr=False, compare=False)
    _showing_help: bool = field(default=False, init=False, repr=False, compare=False)

    def _page_size(self, config: PromptConfig) -> int:
        return self.page_size or config.page_size

    def filter_options(self, config: PromptConfig) -> list[OptionAnswer]:
        """The options that pass the current filter text."""
        if not self._filter_text:
            return option_answer_list(self.options)
        keep = self.filter or config.filter
        return [
            OptionAnswer(option, index)
            for index, option in enumerate(self.options)
            if keep(self._filter_text, option, index)
        ]

    def on_change(self, key: str, config: PromptConfig) -> bool:
        """Handle one key press; return True once an option is chosen."""
        options = self.filter_options(config)
        old_filter = self._filter_text

        if key in (KEY_ENTER, "\n"):
            return bool(options) and self._selected_index < len(options)

        if (key == KEY_ARROW_UP or (self.vim_mode and key == "k")) and options:
            self._use_default = False
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
        elif (
            key in (KEY_TAB, KEY_ARROW_DOWN) or (self.vim_mode and key == "j")
        ) and options:
            self._use_default = False
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
        elif key == config.help_input and self.help:
            self._showing_help = True
        elif key == KEY_ESCAPE:
            self.vim_mode = not self.vim_mode
        elif key in (KEY_DELETE_WORD, KEY_DELETE_LINE):
            self._filter_text = ""
        elif key in (KEY_DELETE, KEY_BACKSPACE):
            self._filter_text = self._filter_text[:-1]
        elif key >= KEY_SPACE:
            self._filter_text += key
            self.vim_mode = False
            self._use_default = False

        self.filter_message = f" {self._filter_text}" if self._filter_text else ""
        if old_filter != self._filter_text:
            options = self.filter_options(config)
            if options and len(options) <= self._selected_index:
                self._selected_index = len(options) - 1

        opts, idx = paginate(self._page_size(config), options, self._selected_index)
        data = SelectTemplateData(
            select=self,
            selected_index=idx,
            show_help=self._showing_help,
            description=self.description,
            page_entries=opts,
            config=config,
        )
        self.render_with_cursor_offset(select_question_template, data, opts, idx)
        return False

    def _default_value(self, options: list[OptionAnswer]) -> str:
        if self.default is not None:
            if isinstance(self.default, str):
                return self.default
            if isinstance(self.default, int) and not isinstance(self.default, bool):
                return self.options[self.default]
            raise ValueError("default value of select must be an int or string")
        if options:
            return options[0].value
        return ""

    def prompt(self, config: PromptConfig) -> OptionAnswer:
        """Ask the user to pick an option and return it."""
        if not self.options:
            raise ValueError("please provide options to select from")

        sel = 0
        if self.default != "" and self.default in self.options:
            sel = self.options.index(self.default)
        self._selected_index = sel

        opts, idx = paginate(
            self._page_size(config), option_answer_list(self.options), sel
        )

        cursor = self.new_cursor()
        cursor.save()
        cursor.hide()
        try:
            data = SelectTemplateData(
                select=self,
                selected_index=idx,
                description=self.description,
                show_help=self._showing_help,
                page_entries=opts,
                config=config,
            )
            self.render_with_cursor_offset(select_question_template, data, opts, idx)
            self._use_default = True

            reader = self.new_rune_reader()
            try:
                reader.set_term_mode()
            except (OSError, AttributeError, ValueError):
                pass
            try:
                while True:
                    key = reader.read_rune()
                    if key == KEY_INTERRUPT:
                        raise InterruptError()
                    if key == KEY_END_TRANSMISSION:
                        break
                    if self.on_change(key, config):
                        break
            finally:
                try:
                    reader.restore_term_mode()
                except (OSError, AttributeError, ValueError):
                    pass

            options = self.filter_options(config)
            self._filter_text = ""
            self.filter_message = ""

            if self._use_default or self._selected_index >= len(options):
                value = self._default_value(options)
            else:
                value = options[self._selected_index].value
        finally:
            cursor.restore()
            cursor.show()

        index = -1
        for position, option in enumerate(self.options):
            if option == value:
                index = position
        return OptionAnswer(value, index)

    def cleanup(self, config: PromptConfig, val: OptionAnswer) -> None:
        """Redraw the question with the chosen answer."""
        self.new_cursor().restore()
        self.render(
            select_question_template,
            SelectTemplateData(
                select=self,
                answer=val.value,
                show_answer=True,
                description=self.description,
                config=config,
            ),
        )


@dataclass
class SelectTemplateData:
    """What the select templates draw from."""

    select: Select
    page_entries: list = field(default_factory=list)
    selected_index: int = 0
    answer: str = ""
    show_answer: bool = False
    show_help: bool = False
    description: Optional[DescriptionFn] = None
    config: PromptConfig = field(default_factory=default_prompt_config)
    current_opt: OptionAnswer = OptionAnswer("", 0)
    current_index: int = 0

    def iterate_option(self, ix: int, opt: OptionAnswer) -> SelectTemplateData:
        """A copy set up to render the option ``opt`` at page position ``ix``."""
        return dataclasses.replace(self, current_index=ix, current_opt=opt)

    def get_description(self, opt: OptionAnswer) -> str:
        if self.description is None:
            return ""
        return self.description(opt.value, opt.index)


def render_select_option(data: SelectTemplateData, color: ColorFn) -> str:
    """Render the line for ``data.current_opt``."""
    focus = data.config.icons.select_focus
    if data.selected_index == data.current_index:
        prefix = f"{color(focus.format)}{focus.text} "
    else:
        prefix = f"{color('default')}  "
    description = data.get_description(data.current_opt)
    suffix = f" - {color('cyan')}{description}" if description else ""
    return f"{prefix}{data.current_opt.value}{suffix}{color('reset')}\n"


def select_question_template(data: SelectTemplateData, color: ColorFn) -> str:
    """Render the whole select question, or its answer once chosen."""
    select = data.select
    icons = data.config.icons
    parts = []
    if data.show_help:
        parts.append(
            f"{color(icons.help.format)}{icons.help.text} {select.help}{color('reset')}\n"
        )
    parts.append(f"{color(icons.question.format)}{icons.question.text} {color('reset')}")
    parts.append(
        f"{color('default+hb')}{select.message}{select.filter_message}{color('reset')}"
    )
    if data.show_answer:
        parts.append(f"{color('cyan')} {data.answer}{color('reset')}\n")
    else:
        hint = "[Use arrows to move, type to filter"
        if select.help and not data.show_help:
            hint += f", {data.config.help_input} for more help"
        parts.append(f"  {color('cyan')}{hint}]{color('reset')}\n")
        parts.extend(
            render_select_option(data.iterate_option(ix, opt), color)
            for ix, opt in enumerate(data.page_entries)
        )
    return "".join(parts)


select_question_template.option = render_select_option  # type: ignore[attr-defined]