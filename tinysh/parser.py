"""Argument splitting with quote handling, variable and tilde expansion."""

from __future__ import annotations

import os

__all__ = ["expand_tilde", "expand_variables", "parse_arguments"]

_BLANKS = " \t"
_QUOTES = "\"'"


def _home_dir() -> str | None:
    home = os.path.expanduser("~")
    return None if home == "~" else home


def expand_tilde(path: str) -> str:
    """Replace a leading ``~`` or ``~/`` with the user's home directory."""
    if path == "~":
        home = _home_dir()
        return home if home is not None else path
    if path.startswith("~/"):
        home = _home_dir()
        return os.path.join(home, path[2:]) if home is not None else path
    return path


def _is_name_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def expand_variables(text: str) -> str:
    """Substitute ``$NAME`` and ``${NAME}`` with environment values.

    Unset variables expand to nothing. An unterminated ``${`` is kept
    literally, and a ``$`` not followed by a name is left as is.
    """
    result: list[str] = []
    length = len(text)
    pos = 0
    while pos < length:
        char = text[pos]
        pos += 1
        if char != "$" or pos >= length:
            result.append(char)
            continue

        following = text[pos]
        if following == "{":
            close = text.find("}", pos + 1)
            if close == -1:
                result.append("${")
                result.append(text[pos + 1 :])
                pos = length
            else:
                result.append(os.environ.get(text[pos + 1 : close], ""))
                pos = close + 1
        elif _is_name_start(following):
            end = pos
            while end < length and _is_name_char(text[end]):
                end += 1
            result.append(os.environ.get(text[pos:end], ""))
            pos = end
        else:
            result.append(char)
    return "".join(result)


def _finish(word: list[str]) -> str:
    return expand_tilde(expand_variables("".join(word)))


def parse_arguments(text: str) -> list[str]:
    """Split a command line into words.

    Single and double quotes group words; blanks outside quotes separate
    them. Every word then has variables and a leading tilde expanded.
    Empty words, including empty quoted strings, are dropped.
    """
    args: list[str] = []
    word: list[str] = []
    quote: str | None = None

    for char in text:
        if quote is None and char in _QUOTES:
            quote = char
        elif quote is not None and char == quote:
            quote = None
        elif quote is None and char in _BLANKS:
            if word:
                args.append(_finish(word))
                word = []
        else:
            word.append(char)

    if word:
        args.append(_finish(word))
    return args