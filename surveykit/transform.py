"""Transformers that turn an accepted answer into another representation."""

from __future__ import annotations

import unicodedata
from typing import Any, Callable

from surveykit.validate import is_zero

Transformer = Callable[[Any], Any]


def transform_string(f: Callable[[str], str]) -> Transformer:
    """Wrap a string function as a transformer.

    Empty or non-string answers give ``""`` so the answer is left alone.
    """

    def transform(ans: Any) -> Any:
        if is_zero(ans) or not isinstance(ans, str):
            return ""
        return f(ans)

    return transform


def _is_separator(char: str) -> bool:
    if ord(char) <= 0x7F:
        return not (char.isalnum() or char == "_")
    if char.isalpha() or unicodedata.category(char) == "Nd":
        return False
    return char.isspace()


def _title_case(text: str) -> str:
    result = []
    previous = " "
    for char in text:
        if _is_separator(previous):
            titled = char.title()
            result.append(titled if len(titled) == 1 else char)
        else:
            result.append(char)
        previous = char
    return "".join(result)


_lower = transform_string(str.lower)
_title = transform_string(_title_case)


def to_lower(ans: Any) -> Any:
    """Lower-case a string answer."""
    return _lower(ans)


def title(ans: Any) -> Any:
    """Title-case the first letter of every word; other letters are kept."""
    return _title(ans)


def compose_transformers(*transformers: Transformer) -> Transformer:
    """Combine transformers, applying them in order."""

    def transform(ans: Any) -> Any:
        for transformer in transformers:
            ans = transformer(ans)
        return ans

    return transform