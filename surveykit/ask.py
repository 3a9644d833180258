"""Asking a series of questions and collecting validated answers."""

from __future__ import annotations

import abc
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from surveykit.config import IconSet, PromptConfig, default_prompt_config
from surveykit.terminal.keys import Stdio

Validator = Callable[[Any], None]
Transformer = Callable[[Any], Any]
AskOpt = Callable[["AskOptions"], None]


class Prompt(abc.ABC):
    """Something that asks the user for an answer.

    A prompt may also define ``prompt_again(config, invalid, err)`` to ask
    again after a rejected answer, and ``with_stdio(stdio)`` to accept the
    streams configured for the ask.
    """

    @abc.abstractmethod
    def prompt(self, config: PromptConfig) -> Any:
        """Ask the user and return the answer."""

    @abc.abstractmethod
    def cleanup(self, config: PromptConfig, val: Any) -> None:
        """Redraw the prompt with the final answer."""

    @abc.abstractmethod
    def error(self, config: PromptConfig, invalid: BaseException) -> None:
        """Show why the last answer was rejected."""


@dataclass
class Question:
    """One question: where its answer goes, how it is asked and checked."""

    name: str
    prompt: Prompt
    validate: Optional[Validator] = None
    transform: Optional[Transformer] = None


@dataclass
class AskOptions:
    """Settings for one call to :func:`ask`."""

    stdio: Stdio = field(default_factory=Stdio)
    validators: list = field(default_factory=list)
    prompt_config: PromptConfig = field(default_factory=default_prompt_config)


def with_stdio(stdin: Any, stdout: Any, stderr: Any) -> AskOpt:
    """Use the given streams instead of the process's standard streams."""

    def apply(options: AskOptions) -> None:
        options.stdio = Stdio(stdin, stdout, stderr)

    return apply


def with_filter(filter_fn: Callable[[str, str, int], bool]) -> AskOpt:
    """Use ``filter_fn`` as the default option filter."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.filter = filter_fn

    return apply


def with_keep_filter(keep_filter: bool) -> AskOpt:
    """Keep the filter text after a selection."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.keep_filter = keep_filter

    return apply


def with_validator(validator: Validator) -> AskOpt:
    """Check every answer with ``validator`` as well."""

    def apply(options: AskOptions) -> None:
        options.validators.append(validator)

    return apply


def with_page_size(page_size: int) -> AskOpt:
    """Set the default number of options shown at once."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.page_size = page_size

    return apply


def with_help_input(char: str) -> AskOpt:
    """Set the key that shows a prompt's help text."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.help_input = str(char)

    return apply


def with_icons(set_icons: Callable[[IconSet], None]) -> AskOpt:
    """Let ``set_icons`` change the icons in place."""

    def apply(options: AskOptions) -> None:
        set_icons(options.prompt_config.icons)

    return apply


def with_show_cursor(show_cursor: bool) -> AskOpt:
    """Choose whether the cursor stays visible while prompting."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.show_cursor = show_cursor

    return apply


def _write_answer(response: Any, name: str, value: Any) -> None:
    if isinstance(response, MutableMapping):
        response[name] = value
        return
    if name and hasattr(response, name):
        setattr(response, name, value)
        return
    attributes = getattr(response, "__dict__", {})
    for attribute in attributes:
        if name and attribute.lower() == name.lower():
            setattr(response, attribute, value)
            return
    raise ValueError(f"could not find field matching {name!r}")


def _check(question: Question, value: Any, validators: Iterable[Validator]) -> None:
    if question.validate is not None:
        question.validate(value)
    for validator in validators:
        validator(value)


def ask(questions: Iterable[Question], response: Any, *opts: Optional[AskOpt]) -> None:
    """Ask every question and write each answer into ``response``.

    ``response`` is a mapping, which gets a key per question name, or an
    object whose attribute matching the name (ignoring case) is set.
    Validators signal a rejected answer by raising ``ValueError``; the
    question is then asked again.
    """
    options = AskOptions()
    for opt in opts:
        if opt is not None:
            opt(options)

    if response is None:
        raise ValueError("cannot call ask() with a nil reference to record the answers")

    config = options.prompt_config
    for question in questions:
        prompt = question.prompt
        set_stdio = getattr(prompt, "with_stdio", None)
        if callable(set_stdio):
            set_stdio(options.stdio)

        answer: Any = None
        validation_error: Optional[ValueError] = None
        while True:
            prompt_again = getattr(prompt, "prompt_again", None)
            if validation_error is not None:
                prompt.error(config, validation_error)
            if validation_error is not None and callable(prompt_again):
                answer = prompt_again(config, answer, validation_error)
            else:
                answer = prompt.prompt(config)
            try:
                _check(question, answer, options.validators)
            except ValueError as exc:
                validation_error = exc
                continue
            break

        if question.transform is not None:
            transformed = question.transform(answer)
            if transformed is not None:
                answer = transformed

        prompt.cleanup(config, answer)
        _write_answer(response, question.name, answer)


def ask_one(prompt: Prompt, *opts: Optional[AskOpt]) -> Any:
    """Ask a single prompt and return its validated answer."""
    answers: dict = {}
    ask([Question("", prompt)], answers, *opts)
    return answers[""]