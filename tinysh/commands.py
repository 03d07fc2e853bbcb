"""Built-in commands, alias expansion and running external programs."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

from tinysh.parser import parse_arguments

__all__ = ["Shell", "execute_command", "execute_piped_commands"]

_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_BLUE = "34"


def _paint(text: str, colour: str) -> str:
    if os.environ.get("NO_COLOR"):
        return text
    return f"\x1b[1;{colour}m{text}\x1b[0m"


def _error(label: str, colour: str, message: str) -> None:
    print(f"{_paint(label, colour)}: {message}", file=sys.stderr)


def _home_dir() -> str:
    home = os.path.expanduser("~")
    return "/" if home == "~" else home


def _describe_status(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status: {returncode}"


def _describe_os_error(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _report_status(returncode: int) -> None:
    if returncode != 0:
        _error("Warning", _YELLOW, f"Command exited with status: {_describe_status(returncode)}")


def execute_command(command: str, args: Sequence[str]) -> int | None:
    """Run ``command`` with ``args`` and wait for it.

    Returns the exit code, or ``None`` when the program could not be started.
    """
    try:
        process = subprocess.Popen([command, *args])
    except OSError as exc:
        _error("Error", _RED, f"{command}: {_describe_os_error(exc)}")
        return None
    returncode = process.wait()
    _report_status(returncode)
    return returncode


def execute_piped_commands(commands: Iterable[Sequence[str]]) -> list[int]:
    """Run a pipeline, feeding each command's output into the next.

    Returns the exit codes of the commands that were started. If one of
    them cannot be started the pipeline stops there and nothing is waited for.
    """
    stages = [list(stage) for stage in commands]
    if not stages:
        return []
    if len(stages) == 1:
        if not stages[0]:
            return []
        code = execute_command(stages[0][0], stages[0][1:])
        return [] if code is None else [code]

    last = len(stages) - 1
    children: list[subprocess.Popen] = []
    previous_stdout = None
    for index, stage in enumerate(stages):
        if not stage:
            continue
        stdout = None if index == last else subprocess.PIPE
        try:
            child = subprocess.Popen(stage, stdin=previous_stdout, stdout=stdout)
        except OSError as exc:
            if previous_stdout is not None:
                previous_stdout.close()
            _error("Error", _RED, f"{stage[0]}: {_describe_os_error(exc)}")
            return []
        if previous_stdout is not None:
            previous_stdout.close()
        previous_stdout = child.stdout
        children.append(child)

    codes = []
    for child in children:
        returncode = child.wait()
        _report_status(returncode)
        codes.append(returncode)
    return codes


class Shell:
    """Interpreter state: aliases, command history and the previous directory."""

    def __init__(self, history: list[str] | None = None):
        self.history: list[str] = history if history is not None else []
        self.aliases: dict[str, str] = {}
        self.previous_dir: str | None = None

    # -- aliases and PATH -------------------------------------------------

    def add_alias(self, definition: str) -> tuple[str, str]:
        """Store an alias given as ``name=value``; surrounding quotes are dropped."""
        if "=" not in definition:
            raise ValueError(f"alias definition needs '=': {definition!r}")
        name, value = definition.split("=", 1)
        value = value.strip('"')
        self.aliases[name] = value
        return name, value

    def add_path(self, directory: str) -> str:
        """Put ``directory`` in front of ``PATH`` and return its expanded form."""
        if directory.startswith("~"):
            expanded = os.path.join(_home_dir(), directory[2:])
        else:
            expanded = directory
        target = Path(expanded)
        if not target.exists():
            raise FileNotFoundError(f"Directory does not exist: {expanded}")
        if not target.is_dir():
            raise NotADirectoryError(f"Not a directory: {expanded}")
        current = os.environ.get("PATH", "")
        os.environ["PATH"] = f"{expanded}:{current}" if current else expanded
        return expanded

    def _print_aliases(self) -> None:
        for name, value in self.aliases.items():
            print(f'alias {name}="{value}"')

    def _alias_builtin(self, args: Sequence[str]) -> None:
        if not args:
            self._print_aliases()
        elif len(args) == 1 and "=" in args[0]:
            self.add_alias(args[0])
        else:
            _error("alias", _RED, "Usage: alias [name=value]")

    def _path_builtin(self, args: Sequence[str]) -> None:
        if not args:
            print(os.environ.get("PATH", ""))
        elif len(args) == 1:
            try:
                expanded = self.add_path(args[0])
            except OSError as exc:
                _error("path", _RED, str(exc))
            else:
                print(f"{_paint('path', _GREEN)}: Added {expanded} to PATH")
        else:
            _error("path", _RED, "Usage: path [directory]")

    # -- commands handled in any context ----------------------------------

    def _set(self, args: Sequence[str]) -> None:
        if not args:
            for key, value in os.environ.items():
                print(f"{key}={value}")
        elif len(args) == 1 and "=" in args[0]:
            name, value = args[0].split("=", 1)
            os.environ[name] = value
        elif len(args) == 2:
            os.environ[args[0]] = args[1]
        else:
            _error("set", _RED, "Usage: set [VAR=value] or set [VAR] [value]")

    def _cd(self, args: Sequence[str]) -> None:
        try:
            current = os.getcwd()
        except OSError:
            current = "."

        if not args:
            target = _home_dir()
        elif args[0] == "-":
            if self.previous_dir is None:
                _error("cd", _RED, "-: No previous directory")
                return
            target = self.previous_dir
        elif args[0].startswith("~"):
            target = _home_dir() if args[0] == "~" else os.path.join(_home_dir(), args[0][2:])
        else:
            target = args[0]

        try:
            os.chdir(target)
        except OSError as exc:
            _error("cd", _RED, f"{target}: {_describe_os_error(exc)}")
            return
        self.previous_dir = current
        if args and args[0] == "-":
            print(target)

    def execute_single(
        self,
        command: str,
        args: Sequence[str],
        allow_pipes: bool = True,
        full_input: str = "",
    ) -> None:
        """Run one command: ``set``, ``alias``, ``cd``, or an external program."""
        if command == "set":
            self._set(args)
        elif command == "alias":
            if not args:
                self._print_aliases()
            elif len(args) == 1 and "=" in args[0]:
                _error("alias", _YELLOW, "Cannot modify aliases in this context")
            else:
                _error("alias", _RED, "Usage: alias [name=value]")
        elif command == "cd":
            self._cd(args)
        else:
            self._run_external(command, args, allow_pipes, full_input)

    def _run_external(
        self, command: str, args: Sequence[str], allow_pipes: bool, full_input: str
    ) -> None:
        expanded = self.aliases.get(command, command)

        if allow_pipes and "|" in full_input:
            stages = []
            for part in full_input.split("|"):
                parsed = parse_arguments(part.strip())
                if parsed and parsed[0] in self.aliases:
                    parsed[:1] = parse_arguments(self.aliases[parsed[0]])
                stages.append(parsed)
            execute_piped_commands(stages)
        elif expanded != command:
            final = [*parse_arguments(expanded), *args]
            if final:
                execute_command(final[0], final[1:])
        else:
            execute_command(command, args)

    # -- interactive built-ins --------------------------------------------

    def handle_builtin(self, command: str, args: Sequence[str]) -> bool | None:
        """Run an interactive built-in.

        Returns ``False`` to leave the shell, ``True`` to go on, and ``None``
        when ``command`` is not one of these built-ins.
        """
        if command == "exit":
            return False
        if command == "alias":
            self._alias_builtin(args)
            return True
        if command == "path":
            self._path_builtin(args)
            return True
        if command == "edit":
            self._edit(args)
            return True
        return None

    def _edit(self, args: Sequence[str]) -> None:
        editor = os.environ.get("EDITOR", "vim")
        if args:
            last_command: str | None = " ".join(args)
        elif len(self.history) >= 2:
            last_command = self.history[-2]
        else:
            last_command = None

        if last_command is None:
            _error("Info", _BLUE, "No previous command to edit.")
            return

        temp_file = Path(tempfile.gettempdir()) / "last_command"
        temp_file.write_text(last_command)
        returncode = subprocess.run([editor, str(temp_file)]).returncode
        if returncode != 0:
            _error("Warning", _YELLOW, f"Editor exited with status: {_describe_status(returncode)}")
            return

        edited = temp_file.read_text().strip()
        parts = parse_arguments(edited)
        if parts:
            self.execute_single(parts[0], parts[1:], True, edited)

    # -- start-up files ---------------------------------------------------

    def execute_file(self, path: str | os.PathLike[str] | None) -> None:
        """Run each non-blank line of a command file; ``exit`` stops early."""
        if path is None:
            return
        file_path = Path(path)
        if not file_path.exists():
            _error("Error", _RED, f"File not found: {file_path}")
            return

        for line in file_path.read_text().splitlines():
            text = line.strip()
            if not text:
                continue
            parts = parse_arguments(text)
            if not parts:
                continue
            command, args = parts[0], parts[1:]
            if command == "exit":
                break
            if command == "alias":
                self._alias_builtin(args)
            elif command == "path":
                self._path_builtin(args)
            else:
                self.execute_single(command, args, False, text)