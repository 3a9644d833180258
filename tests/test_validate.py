import pytest

from surveykit.config import OptionAnswer, option_answer_list
from surveykit.validate import (
    ValidationError,
    compose_validators,
    is_zero,
    max_items,
    max_length,
    min_items,
    min_length,
    required,
)

LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
EMOJI_TEXT = "I😍coffee"


def letters(n):
    return (LETTERS * (n // len(LETTERS) + 1))[:n]


def six_answers():
    return option_answer_list(["a", "b", "c", "d", "e", "f"])


def test_required_succeeds_on_string():
    assert required("hello") is None


def test_required_fails_on_empty_string():
    with pytest.raises(ValidationError, match="Value is required"):
        required("")


def test_required_succeeds_on_map():
    assert required({"hello": 1}) is None


def test_required_passes_on_false():
    assert required(False) is None


def test_required_fails_on_empty_map():
    with pytest.raises(ValidationError):
        required({})


def test_required_succeeds_on_list():
    assert required(["hello"]) is None


def test_required_fails_on_empty_list():
    with pytest.raises(ValidationError):
        required([])


def test_required_fails_on_none():
    with pytest.raises(ValidationError):
        required(None)


def test_max_items_rejects_long_list():
    with pytest.raises(ValidationError, match="Max items is 4"):
        max_items(4)(six_answers())


def test_max_items_accepts_short_list():
    assert max_items(6)(six_answers()) is None


def test_min_items_rejects_short_list():
    with pytest.raises(ValidationError, match="Min items is 10"):
        min_items(10)(six_answers())


def test_min_items_accepts_long_enough_list():
    assert min_items(6)(six_answers()) is None


def test_items_validators_reject_non_lists():
    with pytest.raises(ValidationError, match="list of answers"):
        max_items(3)("abc")
    with pytest.raises(ValidationError, match="list of answers"):
        min_items(3)(["a", "b", "c"])


def test_max_length():
    with pytest.raises(ValidationError) as info:
        max_length(140)(letters(150))
    assert str(info.value) == "value is too long. Max length is 140"
    # eight characters, one of them an emoji
    assert max_length(10)(EMOJI_TEXT) is None


def test_min_length():
    with pytest.raises(ValidationError) as info:
        min_length(12)(letters(10))
    assert str(info.value) == "value is too short. Min length is 12"
    with pytest.raises(ValidationError):
        min_length(10)(EMOJI_TEXT)


def test_min_length_on_int():
    with pytest.raises(ValidationError, match="cannot enforce length on response of type int"):
        min_length(12)(1)


def test_max_length_on_int():
    with pytest.raises(ValidationError, match="cannot enforce length on response of type int"):
        max_length(12)(1)


def test_compose_validators_rejects_long_string():
    valid = compose_validators(required, max_length(10))
    with pytest.raises(ValidationError, match="too long"):
        valid(letters(12))


def test_compose_validators_fails_on_first_error():
    valid = compose_validators(required, max_length(10))
    with pytest.raises(ValidationError, match="Value is required"):
        valid("")


def test_compose_validators_accepts_valid_value():
    valid = compose_validators(required, max_length(10))
    assert valid("short") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        ("", True),
        ("x", False),
        (0, True),
        (3, False),
        (0.0, True),
        (False, True),
        (True, False),
        ([], True),
        ([1], False),
        ({}, True),
        (OptionAnswer("", 0), True),
        (OptionAnswer("red", 0), False),
    ],
)
def test_is_zero(value, expected):
    assert is_zero(value) is expected