import pytest

from surveykit.config import (
    Icon,
    OptionAnswer,
    PromptConfig,
    compute_cursor_offset,
    default_filter,
    default_icons,
    default_prompt_config,
    option_answer_list,
    paginate,
)


def test_option_answer_list_pairs_indices():
    assert option_answer_list(["a", "b"]) == [OptionAnswer("a", 0), OptionAnswer("b", 1)]
    assert option_answer_list([]) == []


def test_pagination_too_few():
    choices = option_answer_list(["choice1", "choice2", "choice3"])
    page, idx = paginate(4, choices, 3)
    assert page == choices
    assert idx == 3


def test_pagination_first_half():
    choices = option_answer_list([f"choice{i}" for i in range(1, 7)])
    page, idx = paginate(4, choices, 2)
    assert page == choices[0:4]
    assert idx == 2


def test_pagination_middle():
    choices = option_answer_list([f"choice{i}" for i in range(6)])
    page, idx = paginate(2, choices, 3)
    assert page == choices[2:4]
    assert idx == 1


def test_pagination_last_half():
    choices = option_answer_list([f"choice{i}" for i in range(6)])
    page, idx = paginate(3, choices, 5)
    assert page == choices[3:6]
    assert idx == 2


def _select_renderer(selected):
    def render(ix, opt):
        prefix = "> " if ix == selected else "  "
        return prefix + opt.value + "\n"

    return render


FIVE = ["one", "two", "three", "four", "five"]


@pytest.mark.parametrize(
    "values, ix, term_width, want",
    [
        ([], 0, 100, 0),
        (["one"], 0, 100, 1),
        (["one", "two"], 0, 100, 2),
        (FIVE, 0, 100, 5),
        (FIVE, 2, 100, 3),
        (FIVE, 4, 100, 1),
        (
            ["wide one wide one wide one", "two", "three",
             "wide four wide four wide four", "five", "six"],
            0, 20, 8,
        ),
        (
            ["wide one wide one wide one", "two", "three",
             "01234567890123456", "five", "six"],
            0, 20, 7,
        ),
        (
            ["wide one wide one wide one", "wide two wide two wide two",
             "three", "four", "five", "six"],
            2, 20, 4,
        ),
    ],
)
def test_compute_cursor_offset_select(values, ix, term_width, want):
    opts = option_answer_list(values)
    assert compute_cursor_offset(_select_renderer(ix), opts, ix, term_width) == want


def test_default_prompt_config_values():
    config = default_prompt_config()
    assert config.page_size == 7
    assert config.help_input == "?"
    assert config.suggest_input == "tab"
    assert config.keep_filter is False
    assert config.show_cursor is False
    assert config.icons.question == Icon("?", "green+hb")
    assert config.icons.select_focus == Icon(">", "cyan+b")
    assert config.icons.error == Icon("X", "red")


def test_default_configs_are_independent():
    first = default_prompt_config()
    first.icons.question.text = "Q"
    first.page_size = 3
    second = default_prompt_config()
    assert second.icons.question.text == "?"
    assert second.page_size == 7
    assert default_icons().question.text == "?"


def test_default_filter_is_case_insensitive():
    assert default_filter("RE", "green", 2) is True
    assert default_filter("re", "Red", 0) is True
    assert default_filter("re", "blue", 1) is False


def test_prompt_config_uses_default_filter():
    config = PromptConfig()
    kept = [opt for opt in ["red", "blue", "green"] if config.filter("re", opt, 0)]
    assert kept == ["red", "green"]