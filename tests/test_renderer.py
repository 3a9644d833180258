import io

import pytest

from surveykit.config import default_icons, default_prompt_config, option_answer_list
from surveykit.renderer import Renderer, color_code, error_template
from surveykit.terminal.cursor import Cursor
from surveykit.terminal.keys import Stdio

TERM_WIDTH = 72
ERASE = "\x1b[0G\x1b[2K"
LINE_UP = "\x1b[1A\x1b[0G"


def no_color(spec):
    return ""


def make_renderer(**kwargs):
    out = io.StringIO()
    renderer = Renderer(stdio=Stdio(io.StringIO(), out, io.StringIO()), **kwargs)
    return renderer, out


def test_validation_error():
    actual = error_template(
        ValueError("Football is not a valid month"), default_icons().error, no_color
    )
    expected = (
        f"{default_icons().error.text} Sorry, your reply was invalid: "
        "Football is not a valid month\n"
    )
    assert actual == expected


def test_error_template_with_colors():
    actual = error_template(ValueError("bad"), default_icons().error, color_code)
    assert actual == "\x1b[31mX Sorry, your reply was invalid: bad\x1b[0m\n"


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("", ""),
        ("off", ""),
        ("reset", "\x1b[0m"),
        ("red", "\x1b[31m"),
        ("cyan+b", "\x1b[1;36m"),
        ("green+hb", "\x1b[1;92m"),
        ("default+hb", "\x1b[1;99m"),
        ("default", "\x1b[39m"),
        ("red:blue", "\x1b[31;44m"),
        ("196", "\x1b[38;5;196m"),
    ],
)
def test_color_code(spec, expected):
    assert color_code(spec) == expected


@pytest.mark.parametrize(
    "text, wants",
    [
        ("", 0),
        ("hello", 0),
        ("hello\n", 1),
        ("hello\nbeautiful\nworld\n", 3),
        ("A" * TERM_WIDTH + "\n", 1),
        ("A" * (TERM_WIDTH + 1) + "\n", 2),
        ("A" * (TERM_WIDTH * 2) + "\n", 2),
        ("A" * (TERM_WIDTH * 2 + 1) + "\n", 3),
    ],
)
def test_count_lines(text, wants):
    renderer, _ = make_renderer(terminal_width=TERM_WIDTH)
    assert renderer.count_lines(text) == wants


def test_count_lines_counts_wide_characters_twice():
    renderer, _ = make_renderer(terminal_width=10)
    assert renderer.count_lines("一" * 6 + "\n") == 2


def test_term_width_falls_back_when_output_is_not_a_terminal():
    renderer, _ = make_renderer()
    assert renderer.term_width() == 10000
    assert renderer.count_lines("A" * 200 + "\n") == 1


def test_render_writes_colored_output_and_erases_previous():
    renderer, out = make_renderer()

    def template(data, color):
        return f"{color('cyan')}hi {data}{color('reset')}\n"

    renderer.render(template, "bob")
    assert out.getvalue() == ERASE + "\x1b[36mhi bob\x1b[0m\n"

    out.seek(0)
    out.truncate()
    renderer.render(template, "ann")
    assert out.getvalue() == ERASE + LINE_UP + "\x1b[2K" + "\x1b[36mhi ann\x1b[0m\n"


def test_render_without_color():
    renderer, out = make_renderer(disable_color=True)
    renderer.render(lambda data, color: f"{color('red')}{data}{color('reset')}\n", "x")
    assert out.getvalue() == ERASE + "x\n"


def test_error_clears_prompt_and_prints_message():
    renderer, out = make_renderer(disable_color=True)
    renderer.render(lambda data, color: "one\ntwo\n", None)
    out.seek(0)
    out.truncate()

    renderer.error(default_prompt_config(), ValueError("Value is required"))
    expected = (
        ERASE
        + ERASE
        + (LINE_UP + "\x1b[2K") * 2
        + "X Sorry, your reply was invalid: Value is required\n"
    )
    assert out.getvalue() == expected


def test_second_error_erases_first_error():
    renderer, out = make_renderer(disable_color=True)
    config = default_prompt_config()
    renderer.error(config, ValueError("first"))
    out.seek(0)
    out.truncate()
    renderer.error(config, ValueError("second"))
    assert out.getvalue().startswith(ERASE + LINE_UP + "\x1b[2K" + ERASE)
    assert out.getvalue().endswith("second\n")


def test_offset_cursor_moves_up():
    renderer, out = make_renderer()
    renderer.offset_cursor(2)
    assert out.getvalue() == LINE_UP * 2


class OptionData:
    def iterate_option(self, ix, opt):
        return opt


def question_template(data, color):
    return "Q\n"


question_template.option = lambda opt, color: f"  {opt.value}\n"


def test_render_with_cursor_offset_counts_wrapped_options():
    renderer, out = make_renderer(terminal_width=10, disable_color=True)
    opts = option_answer_list(["ab", "cdefghijklmnop"])
    renderer.render_with_cursor_offset(question_template, OptionData(), opts, 0)
    value = out.getvalue()
    assert value.startswith("\x1b8")
    assert value.endswith("Q\n\x1b7" + LINE_UP * 3)


def test_render_with_cursor_offset_from_selected_option():
    renderer, out = make_renderer(disable_color=True)
    opts = option_answer_list(["one", "two", "three", "four", "five"])
    renderer.render_with_cursor_offset(question_template, OptionData(), opts, 2)
    assert out.getvalue().endswith("\x1b7" + LINE_UP * 3)


def test_new_cursor_and_rune_reader_share_stdio():
    renderer, out = make_renderer()
    cursor = renderer.new_cursor()
    assert cursor == Cursor(renderer.stdio.stdin, out)
    assert renderer.new_rune_reader().stdio is renderer.stdio


def test_with_stdio_replaces_streams():
    renderer, _ = make_renderer()
    other = io.StringIO()
    renderer.with_stdio(Stdio(io.StringIO(), other, io.StringIO()))
    renderer.offset_cursor(1)
    assert other.getvalue() == LINE_UP