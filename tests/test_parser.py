import os

import pytest

from tinysh.parser import expand_tilde, expand_variables, parse_arguments


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return str(tmp_path)


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("FOO", "bar")
    monkeypatch.setenv("FOO_bar", "joined")
    monkeypatch.delenv("TINYSH_UNSET_VAR", raising=False)


def test_expand_tilde_alone(home):
    assert expand_tilde("~") == home


def test_expand_tilde_with_path(home):
    assert expand_tilde("~/docs/a.txt") == os.path.join(home, "docs/a.txt")


@pytest.mark.parametrize("path", ["~user", "plain", "/abs/~/x", ""])
def test_expand_tilde_leaves_other_paths(home, path):
    assert expand_tilde(path) == path


def test_expand_plain_variable(env):
    assert expand_variables("$FOO") == "bar"


def test_expand_braced_variable(env):
    assert expand_variables("x${FOO}y") == "xbary"


def test_variable_name_includes_underscore_and_letters(env):
    assert expand_variables("$FOO_bar") == "joined"


def test_variable_name_stops_at_punctuation(env):
    assert expand_variables("$FOO.txt") == "bar.txt"


def test_unset_variable_expands_to_nothing(env):
    assert expand_variables("a$TINYSH_UNSET_VAR-b") == "a-b"
    assert expand_variables("${TINYSH_UNSET_VAR}") == ""


def test_unterminated_brace_kept_literally(env):
    assert expand_variables("${FOO") == "${FOO"


@pytest.mark.parametrize("text", ["$", "a$", "$1", "$ x", "cost: $-"])
def test_dollar_without_name_kept(env, text):
    assert expand_variables(text) == text


def test_parse_simple_words():
    assert parse_arguments("ls -l /tmp") == ["ls", "-l", "/tmp"]


def test_parse_collapses_blanks():
    assert parse_arguments("  a \t  b\t\tc  ") == ["a", "b", "c"]


def test_parse_double_quotes_group_words():
    assert parse_arguments('echo "hello world"') == ["echo", "hello world"]


def test_parse_other_quote_inside_quotes_is_literal():
    assert parse_arguments("\"a'b\" 'c\"d'") == ["a'b", 'c"d']


def test_parse_empty_quotes_are_dropped():
    assert parse_arguments("echo '' \"\"") == ["echo"]


def test_parse_unclosed_quote_runs_to_end():
    assert parse_arguments("echo 'a b") == ["echo", "a b"]


def test_parse_empty_input():
    assert parse_arguments("") == []
    assert parse_arguments("   ") == []


def test_parse_expands_variables_even_in_single_quotes(env):
    assert parse_arguments("echo '$FOO' \"${FOO}\"") == ["echo", "bar", "bar"]


def test_parse_expands_tilde(home):
    assert parse_arguments("cd ~/work") == ["cd", os.path.join(home, "work")]


@pytest.mark.parametrize(
    "line, expected",
    [
        ("a  b", ["a", "b"]),
        ("'x y' z", ["x y", "z"]),
        ("\t$FOO\t", ["bar"]),
    ],
)
def test_parse_result_has_no_blank_words(env, line, expected):
    words = parse_arguments(line)
    assert words == expected
    assert "" not in words