# minish

Pieces of a small Unix-style shell as a plain Python library: an ordered
environment, the usual builtins, quote helpers, string helpers and
printf-style formatting. It has no third-party dependencies.

## Modules

### `minish.environment`

`Environment` holds `NAME=value` entries in the order they were given.
You can build one with `Environment.from_entries(entries)` or
`Environment(entries)`.

- `get(name)` returns the value, or `""` if the name is not set.
- `replace(entry)` overwrites the entry that has the same name and returns
  whether it found one.
- `add(entry)` appends an entry.
- `remove(name)` deletes the first entry with that name and returns whether
  it deleted one. Anything after a `=` in `name` is ignored.
- `entries()` returns a copy of the list.
- `declarations()` returns the non-empty entries, sorted, each prefixed
  with `declare -x `.
- `bump_shell_level()` adds one to `SHLVL` if it is set and not empty.
  A value that is not an integer counts as 0.
- `len()`, iteration and `name in env` also work.

These helpers work on single entries:

- `entry_name(entry)` returns the part before the first `=`.
- `entry_value(entry)` returns the part after it.
- `shell_level_from(text)` parses a `SHLVL` value.
- `classify_identifier(entry)` returns an `IdentifierKind`:
  `STARTS_WITH_DIGIT`, `INVALID_CHAR`, `NAME_ONLY` or `ASSIGNMENT`.

### `minish.builtins`

`ShellState` is a dataclass with four fields:

- `env`: the working `Environment`.
- `exported`: the export list, also an `Environment`.
- `status`: the last exit status.
- `exiting`: whether the shell should exit.

`ShellState.from_environ(environ)` takes a mapping or a list of
`NAME=value` strings. It raises `SHLVL` by one in `env` and leaves the
export list unchanged.

The builtins are plain functions. Each one writes to the text streams you
pass in and returns an exit status (0 for success, 1 for failure). Error
messages go to `stderr`. The functions do not raise.

- `echo(args, stdout)`: any leading `-n` arguments suppress the trailing
  newline.
- `pwd(stdout)`
- `cd(args, state, stderr)`:
  - with no argument it goes to `$HOME`;
  - with `-` it goes to `$OLDPWD`;
  - it records the previous directory in `OLDPWD` before changing.
- `export(args, state, stdout, stderr)`:
  - with no argument it prints the `declare -x` lines;
  - otherwise it exports each `NAME` or `NAME=value`;
  - it reports names that are not valid identifiers.
- `unset(args, state)`: removes each name from both environments.
- `print_env(state, stdout)`: prints every entry.
- `exit_shell(args, state, stderr)`: sets `state.exiting` and prints
  `exit`. With more than one argument it also sets the status to 1 and
  prints a "too many args" message.

`BuiltinError` is the exception the builtins use internally. It carries a
`status`.

### `minish.parser`

- `quote_state(line, limit=None)` returns the `QuoteState` that is left
  open after the first `limit` characters: `NONE`, `DOUBLE` or `SINGLE`.
  A quote character right after a backslash does not change the state.
- `has_open_quote(line)` tells whether a line ends inside a quote.
- `strip_single_quotes(text)` removes single-quote pairs and keeps their
  contents.

### `minish.textutils`

- `split_fields(text, sep)` splits on one character and drops empty
  fields.
- `trim(text, chars)` strips the given characters from both ends.
- `parse_leading_int(text, limit=None)` reads an optionally signed number
  after leading blanks. It returns 0 if there are no digits.
- `compare(left, right)` and `compare_prefix(left, right, n)` return the
  character-code difference at the first mismatch, or 0.
- `signed_digits(n, min_digits=0, keep_sign_width=True)` renders a
  decimal number with zero padding.
- `unsigned_digits(n, min_digits=0, base=10)` renders a non-negative
  number in bases 2 to 16, lower case, with zero padding.

### `minish.cformat`

printf-style formatting for `%c %s %p %d %i %u %x %X %%`. It supports:

- the flags `-`, `0` and space;
- a width and a precision, given as a number or as `*`.

Integer arguments wrap like a 32-bit C `int` or `unsigned int`. A `None`
string prints `(null)`. Unknown conversions print nothing. A lone `%` at
the end is dropped.

- `cformat(template, *args)` returns the formatted text.
- `cprintf(template, *args, stream=None)` writes it to `stream` (standard
  output by default) and returns its length.
- `parse_spec(text)` parses one conversion specification into a
  `FormatSpec`.

## Example

```python
import io
import os

from minish.builtins import ShellState, echo, export
from minish.cformat import cformat

state = ShellState.from_environ(os.environ)
out, err = io.StringIO(), io.StringIO()

export(["export", "GREETING=hello"], state, out, err)
echo(["echo", "hello", "world"], out)
print(out.getvalue(), end="")          # hello world

print(cformat("%-6s|%05d|%x", "ab", 42, 255))   # ab    |00042|ff
```

## What it does not do

This is a library, not a shell you can run. It has no command to start
and no interactive prompt or line reading. It does not tokenise command
lines beyond the quote helpers above, and it has no pipes, no
redirections and no execution of external programs. Signals are not
handled either. You call the builtins yourself with an argument list.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```