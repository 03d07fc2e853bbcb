# tinysh

tinysh is a small interactive command shell for POSIX systems. It runs external programs and pipelines. It keeps aliases, a command history and a startup file. When Python's `readline` module is available, command names and file names complete with the Tab key.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Usage

```
tinysh [-H FILE] [-p CMD] [-f FILE] [-V]
```

- `-H`, `--history FILE`: the file that stores command history. The default is `~/history.txt`. The file is read at startup. If it cannot be read, the shell prints `Info: No previous history.`. The history is written back when the shell exits.
- `-p`, `--prompt CMD`: a command that `sh -c` runs before each prompt. Its output becomes the prompt. If the output is not valid UTF-8, the default prompt is used.
- `-f`, `--file FILE`: a file of commands to run at startup. The default is `~/.shellrc`. If the file does not exist, an error is printed and the shell starts anyway.
- `-V`, `--version`: prints the version and exits.

The default prompt shows the current directory followed by `>`. The home directory is shown as `~`, and directories below it as `~/sub/dir/`.

Ctrl-C at the prompt starts a fresh prompt. Ctrl-D or `exit` leaves the shell. If the environment variable `NO_COLOR` is set, messages and the default prompt are printed without colour.

## Input

- A semicolon separates commands on one line: `cd /tmp; ls`
- `|` joins commands into a pipeline: `ls | grep txt`. Aliases are expanded at the start of each stage.
- Single and double quotes group words into one argument. Empty words are dropped.
- `$VAR` and `${VAR}` are replaced with the value of the environment variable. Unset variables become empty.
- A leading `~` or `~/` in a word is replaced with the home directory.

If a program exits with a non-zero status, the shell prints a warning that gives the status.

## Built-in commands

| Command | Effect |
|---|---|
| `cd [dir]` | Changes directory. With no argument it goes to the home directory. `cd -` goes back to the previous directory and prints it. |
| `set` | With no arguments, lists the environment variables. `set VAR=value` and `set VAR value` set one. |
| `alias` | With no arguments, lists the aliases. `alias name=value` defines one. Double quotes around the value are removed. |
| `path [dir]` | With no argument, prints `PATH`. With an existing directory, adds it to the front of `PATH`. |
| `edit [cmd]` | Writes the previous command line, or `cmd`, to a file named `last_command` in the temporary directory. It opens that file in `$EDITOR` (default `vim`) and then runs the edited command. |
| `exit` | Leaves the shell. |

## Startup file

The startup file is read line by line before the first prompt. Blank lines are skipped, and a line that holds `exit` stops the reading. The file can use `alias`, `path`, `set` and `cd`. Any other line runs as an external program. Pipelines are not available in the startup file.

```
alias ll="ls -l"
path ~/bin
```

## Library use

- `tinysh.parser`: `parse_arguments`, `expand_variables`, `expand_tilde`.
- `tinysh.completion`: `complete(line, pos)` returns the start of the word and a list of `Candidate` objects. Also available are `builtin_commands`, `path_commands`, `filename_completions`, `ReadlineCompleter` and `install_completer`.
- `tinysh.commands`: the `Shell` class, which holds the aliases, the history and the previous directory, plus `execute_command` and `execute_piped_commands`.
- `tinysh.cli`: `main`, `run_shell`, `handle_line`, `build_prompt`, `display_dir`, `parse_args`.

## What it does not do

tinysh has none of the following:

- input or output redirection (`<`, `>`)
- background jobs and job control
- `&&` and `||`
- wildcard expansion
- quoting of `|` and `;`: both always split the line, even inside quotes