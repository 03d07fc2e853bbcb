"""Interactive front end: prompt, line handling and the command-line entry point."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path, PurePath

from tinysh.commands import Shell
from tinysh.completion import install_completer
from tinysh.parser import parse_arguments

__all__ = [
    "display_dir",
    "build_prompt",
    "handle_line",
    "parse_args",
    "run_shell",
    "main",
]

_VERSION = "0.1.0"


def _paint(text: str, codes: str) -> str:
    if os.environ.get("NO_COLOR"):
        return text
    return f"\x1b[{codes}m{text}\x1b[0m"


def _info(message: str) -> None:
    print(f"{_paint('Info', '1;34')}: {message}")


def _home_dir() -> str | None:
    home = os.path.expanduser("~")
    return None if home == "~" else home


def display_dir(current_dir: str | os.PathLike[str], home_dir: str | os.PathLike[str]) -> str:
    """Show ``current_dir`` the way the prompt does, with the home directory as ``~``."""
    current = PurePath(current_dir)
    home = PurePath(home_dir)
    if current == home:
        return "~"
    try:
        relative = current.relative_to(home)
    except ValueError:
        return f"{current}/"
    return f"~/{relative}/"


def _default_prompt() -> str:
    current = os.getcwd()
    home = _home_dir() or "/"
    shown = display_dir(current, home)
    return f"{_paint(shown, '1;94')}{_paint('>', '1')} "


def build_prompt(prompt_command: str | None) -> str:
    """Return the prompt text.

    With ``prompt_command`` the prompt is that shell command's output; if
    the output is not valid UTF-8 the default prompt is used instead.
    """
    default = _default_prompt()
    if prompt_command is None:
        return default
    output = subprocess.run(["sh", "-c", prompt_command], stdout=subprocess.PIPE).stdout
    try:
        return output.decode("utf-8")
    except UnicodeDecodeError:
        return default


def _remember(history: list[str], line: str) -> None:
    if line and (not history or history[-1] != line):
        history.append(line)


def handle_line(shell: Shell, line: str) -> bool:
    """Run every ``;``-separated command of ``line``.

    Returns ``False`` when the shell should stop, ``True`` otherwise.
    """
    _remember(shell.history, line)
    text = line.strip()
    if not text:
        return True

    for part in (piece.strip() for piece in text.split(";")):
        if not part:
            continue
        words = parse_arguments(part)
        if not words:
            continue
        command, args = words[0], words[1:]
        outcome = shell.handle_builtin(command, args)
        if outcome is None:
            shell.execute_single(command, args, True, part)
        elif not outcome:
            return False
    return True


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the command line, filling in the default history and start-up files."""
    parser = argparse.ArgumentParser(prog="tinysh")
    parser.add_argument(
        "-H", "--history", metavar="FILE", type=Path, help="File to store command history"
    )
    parser.add_argument("-p", "--prompt", metavar="CMD", help="Command to execute for prompt")
    parser.add_argument("-f", "--file", metavar="FILE", type=Path, help="File to read commands from")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_VERSION}")
    args = parser.parse_args(argv)

    home = _home_dir()
    if args.history is None:
        args.history = Path(home or "/") / "history.txt"
    if args.file is None and home is not None:
        args.file = Path(home) / ".shellrc"
    return args


def _load_history(history_file: Path) -> list[str]:
    try:
        return history_file.read_text().splitlines()
    except (OSError, UnicodeDecodeError):
        _info("No previous history.")
        return []


def _prepare_readline(history: list[str]) -> None:
    try:
        import readline
    except ImportError:
        return
    install_completer()
    readline.clear_history()
    for entry in history:
        readline.add_history(entry)


def run_shell(
    history_file: str | os.PathLike[str],
    prompt: str | None = None,
    file: str | os.PathLike[str] | None = None,
) -> None:
    """Run the start-up file, then read and execute lines until ``exit`` or end of input."""
    history_path = Path(history_file)
    shell = Shell(_load_history(history_path))
    _prepare_readline(shell.history)

    shell.execute_file(file)

    while True:
        prompt_text = build_prompt(prompt)
        try:
            line = input(prompt_text)
        except KeyboardInterrupt:
            print()
            continue
        except EOFError:
            break
        try:
            if not handle_line(shell, line):
                break
        except KeyboardInterrupt:
            print()

    history_path.write_text("".join(f"{entry}\n" for entry in shell.history))


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``tinysh`` command."""
    args = parse_args(argv)
    try:
        run_shell(args.history, args.prompt, args.file)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0