"""Tab completion of command names and file paths."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePosixPath

__all__ = [
    "Candidate",
    "ReadlineCompleter",
    "builtin_commands",
    "path_commands",
    "filename_completions",
    "complete",
    "install_completer",
]

_BRIGHT_BLACK = "\x1b[90m"
_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Candidate:
    """A completion: what is shown in a listing and what replaces the word."""

    display: str
    replacement: str


def builtin_commands() -> list[str]:
    """Names of the commands the shell handles itself."""
    return ["cd", "edit", "exit", "alias", "set"]


def _valid_name(name: str) -> bool:
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def path_commands() -> list[str]:
    """Sorted, de-duplicated names of executable files found on ``PATH``."""
    found: set[str] = set()
    path_var = os.environ.get("PATH")
    if path_var is None:
        return []
    for directory in path_var.split(":"):
        try:
            entries = list(os.scandir(directory))
        except OSError:
            continue
        for entry in entries:
            try:
                info = entry.stat(follow_symlinks=False)
            except OSError:
                continue
            if stat.S_ISREG(info.st_mode) and info.st_mode & 0o111 and _valid_name(entry.name):
                found.add(entry.name)
    return sorted(found)


def _home_dir() -> str | None:
    home = os.path.expanduser("~")
    return None if home == "~" else home


def _expand_partial(partial_path: str) -> str:
    if partial_path.startswith("~/"):
        home = _home_dir()
        return os.path.join(home, partial_path[2:]) if home is not None else partial_path
    if partial_path == "~":
        home = _home_dir()
        return home if home is not None else partial_path
    return partial_path


def _split_dir(expanded: str) -> tuple[str, str]:
    if expanded.endswith("/"):
        return expanded, ""
    if "/" in expanded:
        return os.path.dirname(expanded), os.path.basename(expanded)
    return ".", expanded


def _home_replacement(dir_path: str, name: str) -> str:
    home = _home_dir() or ""
    dir_pure = PurePosixPath(dir_path)
    if dir_pure == PurePosixPath(home):
        return f"~/{name}"
    try:
        relative = str(dir_pure.relative_to(home))
    except ValueError:
        relative = dir_path
    if relative in ("", "."):
        return f"~/{name}"
    return f"~/{relative}/{name}"


def filename_completions(partial_path: str) -> list[Candidate]:
    """Entries of the directory named by ``partial_path`` that match its last part.

    Directories get a trailing slash. A leading ``~/`` is kept in the
    replacements. Candidates are sorted by their display text.
    """
    expanded = _expand_partial(partial_path)
    dir_path, prefix = _split_dir(expanded)

    try:
        entries = list(os.scandir(dir_path))
    except OSError:
        return []

    is_current = PurePosixPath(dir_path) == PurePosixPath(".")
    candidates: list[Candidate] = []
    for entry in entries:
        name = entry.name
        if not _valid_name(name) or not name.startswith(prefix):
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False

        if partial_path.startswith("~/"):
            base = _home_replacement(dir_path, name)
        elif is_current:
            base = name
        elif expanded.endswith("/"):
            base = expanded + name
        elif "/" in expanded:
            base = f"/{name}" if PurePosixPath(dir_path) == PurePosixPath("/") else f"{dir_path}/{name}"
        else:
            base = name

        suffix = "/" if is_dir else ""
        candidates.append(Candidate(display=name + suffix, replacement=base + suffix))

    candidates.sort(key=lambda candidate: candidate.display)
    return candidates


def complete(line: str, pos: int) -> tuple[int, list[Candidate]]:
    """Complete the word ending at ``pos`` in ``line``.

    The first word completes to built-in and ``PATH`` commands; later
    words complete to file names. Returns the start of the word being
    replaced and the candidates.
    """
    head = line[:pos]
    words = head.split()

    if not words or (len(words) == 1 and not head.endswith(" ")):
        word = words[0] if words else ""
        candidates = [
            Candidate(display=f"{cmd} {_BRIGHT_BLACK}(builtin){_RESET}", replacement=cmd)
            for cmd in builtin_commands()
            if cmd.startswith(word)
        ]
        candidates.extend(
            Candidate(display=cmd, replacement=cmd)
            for cmd in path_commands()
            if cmd.startswith(word)
        )
        return pos - len(word), candidates

    start = head.rfind(" ") + 1
    return start, filename_completions(line[start:pos])


class ReadlineCompleter:
    """Adapter giving :func:`complete` the interface ``readline`` expects."""

    def __init__(self, line_source: Callable[[], tuple[str, int]] | None = None):
        self._line_source = line_source
        self._matches: list[str] = []

    def _current_line(self) -> tuple[str, int]:
        if self._line_source is not None:
            return self._line_source()
        import readline

        return readline.get_line_buffer(), readline.get_endidx()

    def complete(self, text: str, state: int) -> str | None:
        """Return the ``state``-th replacement for the word being completed."""
        if state == 0:
            line, pos = self._current_line()
            _, candidates = complete(line, pos)
            self._matches = [candidate.replacement for candidate in candidates]
        if state < len(self._matches):
            return self._matches[state]
        return None


def install_completer() -> ReadlineCompleter:
    """Register a :class:`ReadlineCompleter` with ``readline`` and return it."""
    import readline

    completer = ReadlineCompleter()
    readline.set_completer_delims(" \t\n")
    readline.set_completer(completer.complete)
    if "libedit" in (readline.__doc__ or ""):
        readline.parse_and_bind("bind ^I rl_complete")
    else:
        readline.parse_and_bind("tab: complete")
    return completer