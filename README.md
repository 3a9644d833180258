# surveykit

Interactive prompts for terminal programs. Present a list of options the user
picks from with the arrow keys (or by typing to filter), validate and transform
the answers, and collect them into a dictionary or an object.

## Installation

```
pip install surveykit
```

The tests use pytest, which the `test` extra installs.

## Asking a question

```python
from surveykit.ask import ask_one
from surveykit.select import Select

prompt = Select(message="Choose a color:", options=["red", "blue", "green"])
answer = ask_one(prompt)
print(answer.value, answer.index)
```

A `Select` answer is an `OptionAnswer` (from `surveykit.config`), which holds
the chosen `value` and its `index` in the full list of options.

### Select options

- `default`: an option string or an index to start on; pressing Enter without
  moving picks it. Any other type raises `ValueError`.
- `page_size`: how many options to show at once; when left at 0 the
  configured page size (7 by default) is used.
- `vim_mode`: move with `j` and `k` as well as the arrow keys; Escape toggles it,
  and typing a filter character turns it off.
- `help`: a help text shown when the user types the help key (`?` by default).
- `filter`: a custom `(filter_text, value, index) -> bool` function; the default
  is a case-insensitive substring match.
- `description`: a `(value, index) -> str` function to show a note next to each
  option.

Up and Down move the selection (wrapping around at either end), Tab moves
down, typing narrows the list, Backspace removes the last filter character,
and Ctrl+W or Ctrl+X clears the filter. Enter accepts the highlighted option;
Ctrl+D accepts the current state. Ctrl+C raises `InterruptError` (from
`surveykit.terminal.keys`). A `Select` with no options raises `ValueError`.

`Select` is a `Renderer` (from `surveykit.renderer`), so it also accepts the
keyword arguments `stdio`, `disable_color` (print without colour sequences) and
`terminal_width` (use a fixed width instead of asking the terminal).

## Asking several questions

```python
from surveykit.ask import Question, ask, with_validator
from surveykit.select import Select
from surveykit.validate import required

questions = [
    Question(
        name="color",
        prompt=Select(message="Choose a color:", options=["red", "blue", "green"]),
        validate=required,
    ),
]

answers = {}
ask(questions, answers)
```

`response` may be a mapping, into which each answer is stored under its
question's name, or an object whose attribute matching the name (ignoring
case) is set. Passing `None` raises `ValueError`.

A validator rejects an answer by raising `ValueError`; the error is shown
beneath the prompt and the question is asked again. A question's `transform`
runs on the validated answer before it is stored; a `None` result leaves the
answer unchanged.

Custom prompts subclass `surveykit.ask.Prompt` and implement `prompt`,
`cleanup` and `error`. They may also define `with_stdio(stdio)` to receive the
configured streams and `prompt_again(config, invalid, err)` to be used after a
rejected answer.

### Ask options

Options are passed as extra arguments to `ask` and `ask_one`:

- `with_stdio(stdin, stdout, stderr)`: the streams to talk to.
- `with_validator(validator)`: a validator applied to every question.
- `with_filter(filter_fn)`, `with_keep_filter(keep_filter)`
- `with_page_size(page_size)`
- `with_help_input(char)`: the key that reveals help.
- `with_icons(set_icons)`: a function that edits the `IconSet` in place.
- `with_show_cursor(show_cursor)`

## Validators and transformers

`surveykit.validate` provides `required`, `max_length`, `min_length`,
`max_items`, `min_items`, `compose_validators` and `is_zero`. A validator
raises `ValidationError`, a subclass of `ValueError`, when the answer is not
acceptable. `required` accepts `False` as an answer.

`surveykit.transform` provides `to_lower`, `title`, `transform_string` (to lift
any `str -> str` function) and `compose_transformers`. String transformers give
`""` for empty or non-string answers.

## Terminal helpers

`surveykit.terminal` holds the lower layers: key constants, `Coord`, `Stdio`
and `BufferedReader` in `keys`; `Cursor`, `erase_line` and `sound_bell` in
`cursor`; and `RuneReader`, `rune_width` and `string_width` in `runereader`.
`RuneReader.read_line` reads an edited line with cursor movement, Home, End,
Delete and an optional mask character.

## What it does not do

The only ready-made prompt is `Select`. There are no text input, password,
confirmation, multi-select or editor prompts, and no command-line program.
Prompts use ANSI escape sequences and put the terminal into raw mode through
`termios`, so they need a POSIX terminal.