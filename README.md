# minish

A small interactive shell for POSIX systems. It reads a command line and
splits it into arguments. It expands variables and applies redirections.
Then it runs either a builtin or a program found on `PATH`.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
minish
```

You can also start it with `python -m minish.shell`.

The shell shows a `$ ` prompt and reads one command per line. End the
session with `exit` or with end of input (Ctrl-D).

### Quoting and expansion

- `'single quotes'` keep everything literally.
- `"double quotes"` expand `$NAME`.
  - Inside double quotes a backslash escapes `$`, `` ` ``, `"`, `\` and a newline.
  - A backtick inside double quotes is dropped.
- A backslash outside quotes makes the next character literal.
- `$NAME` is replaced by the value of the environment variable. Names are made of ASCII letters, digits and `_`.
  - Outside quotes, an unset variable gives no text. The character right after the name is dropped as well.
  - A `$` followed by a space stays a literal `$`.
- `~` is replaced by `$HOME`, or by nothing if `HOME` is unset.
- A command carries on to the next line if a line ends in either of these ways:
  - inside an open quote;
  - after a backslash.
- A line that still has an unterminated quote at end of input is ignored. The shell then prompts again.

### Redirection

| Form         | Meaning                                      |
|--------------|----------------------------------------------|
| `> file`     | write stdout to `file`, truncating it        |
| `>> file`    | append stdout to `file`                      |
| `< file`     | read stdin from `file`                       |
| `<> file`    | open `file` read-write on stdin              |
| `N> file`    | redirect descriptor `N` instead              |
| `N>&M`       | make descriptor `N` a copy of descriptor `M` |

- Files that the shell creates get mode `0754`, less the umask.
- After each command the shell restores the descriptors it redirected.
- A redirection with no target is a syntax error, and so is a `>&` target that is not a number. In either case the shell prints the error and exits with status 30.
- A redirection that fails to open or duplicate a descriptor ends the shell with status 1.

### Builtins

- `cd [dir]`: change directory. With no argument it does nothing.
- `echo [args...]`: print the arguments. Each argument is followed by a space.
- `exit [code]`: leave the shell with an optional status.
  - The status is taken modulo 256.
  - A code that is not a number leaves the shell running and prints an error.
  - A code outside the 32-bit range also leaves the shell running and prints an error.
- `pwd`: print the working directory.
- `type name...`: say for each name whether it is a builtin, which executable it resolves to, or that it is not found.

Any other command is looked up on `PATH`. A name that begins with `/`
or `./` is used as a path. An unknown command prints
`<name>: command not found`.

## Use from Python

```python
from minish.parser import parse_command_line
from minish.redirection import Redirector
from minish.shell import run_line

cmd = parse_command_line("echo hello > out.txt")
print(cmd.argv)          # ['echo', 'hello']
print(cmd.redirections)  # [Redirection(target='out.txt', dest=1, kind=...)]

with Redirector() as redirector:
    status = run_line("echo hello", redirector)
```

Each module covers one stage of running a command:

| Module                | Contents |
|-----------------------|----------|
| `minish.tokens`       | `Cursor`, `read_token`, `read_double_quoted` and `expand_variable` read pieces of a line. |
| `minish.redirparse`   | `parse_redirection` parses a redirection operator and its target. It raises `ShellSyntaxError` for a malformed one. |
| `minish.parser`       | `parse_command_line` returns a `ParsedCommand` with `argv` and `redirections`. |
| `minish.redirection`  | `Redirector` applies `Redirection` values and restores the original descriptors. It raises `RedirectionError` on failure. |
| `minish.builtins`     | `find_builtin`, `find_executable` and the `cmd_*` builtins. `cmd_exit` raises `ShellExit`. |
| `minish.external`     | `run_external` runs a program and returns its exit status, or 128 plus the signal number if it was killed. |
| `minish.shell`        | `read_command`, `run_line` and `main`. |

`run_line` returns 127 for a command that is not found.

## What it does not do

This is a deliberately small shell. It has none of the following:

- pipes;
- command separators such as `;`, `&&` or `||`;
- background jobs or job control;
- command substitution;
- here-documents;
- filename globbing;
- shell variables or assignments;
- `$?`.

A script file is read only as standard input, one command per line.

## Running the tests

```
pip install .[test]
pytest
```