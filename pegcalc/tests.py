from __future__ import annotations
import pytest

from .command import (
    INDETERMINATE_REPLY, MAX_EXPRESSION_LENGTH, MAX_NESTING_DEPTH,
    extract_expression, format_number, handle_message, nesting_depth, split_words,
)
from .pegcalcc import main

# ------------------------------
# Chat command
# ------------------------------

@pytest.mark.parametrize("content, expected", [
    ("fox! calc (2 + 3) * 4", "(2+3)*4"),
    ("FOX! CALC 1 +   2", "1+2"),
    ("fox!\tcalc 7", "7"),
    ("fox! calc", None),
    ("fox! ping", None),
    ("calc fox! 1+2", None),
    ("hello there fox", None),
    ("", None),
])
def test_extract_expression(content, expected):
    assert extract_expression(content) == expected


def test_split_words_lowercases():
    assert split_words("  Fox!  CALC\n1 ") == ["fox!", "calc", "1"]


@pytest.mark.parametrize("content, reply", [
    ("fox! calc (2 + 3) * 4", "20"),
    ("fox! calc 2 + 3 * 4", "14"),
    ("fox! calc 1 + 0.5", "1.5"),
    ("fox! calc 10 - 3 + 2", "5"),
    ("fox! calc 1 / 4", "0.25"),
    ("fox! calc 5 / 0", INDETERMINATE_REPLY),
    ("fox! calc abc", INDETERMINATE_REPLY),
    ("fox! calc 2 + abc", "2"),
])
def test_handle_message(content, reply):
    assert handle_message(content) == reply


def test_handle_message_ignores_other_messages():
    assert handle_message("fox!") is None
    assert handle_message("raposa") is None


def test_handle_message_length_limit():
    near = "1+" * 99 + "1"
    assert len(near) <= MAX_EXPRESSION_LENGTH
    assert handle_message("fox! calc " + near) == "100"
    too_long = "1+" * MAX_EXPRESSION_LENGTH + "1"
    assert handle_message("fox! calc " + too_long) == INDETERMINATE_REPLY
    assert handle_message("fox! calc 12345", max_length=3) == INDETERMINATE_REPLY


@pytest.mark.parametrize("text, depth", [
    ("", 0),
    ("1+2", 0),
    ("(1)+(2)", 1),
    ("(()(", 2),
    ("))((", 2),
    ("(" * 200, 200),
])
def test_nesting_depth(text, depth):
    assert nesting_depth(text) == depth


def test_handle_message_unclosed_parentheses_at_length_limit():
    assert handle_message("fox! calc " + "(" * MAX_EXPRESSION_LENGTH) == INDETERMINATE_REPLY


def test_handle_message_deepest_nesting_allowed():
    d = MAX_NESTING_DEPTH
    assert handle_message("fox! calc " + "(" * d + "1" + ")" * d) == "1"
    assert handle_message("fox! calc " + "(" * (d + 1) + "1" + ")" * (d + 1)) == INDETERMINATE_REPLY


def test_handle_message_deep_and_long():
    # every level is "(1+", then a flat tail up to the length limit
    d = MAX_NESTING_DEPTH
    nested = "(1+" * d + "1" + ")" * d
    tail_terms = (MAX_EXPRESSION_LENGTH - len(nested)) // 2
    text = nested + "+1" * tail_terms
    assert len(text) <= MAX_EXPRESSION_LENGTH
    assert handle_message("fox! calc " + text) == str(d + 1 + tail_terms)


@pytest.mark.parametrize("value, text", [
    (20.0, "20"),
    (0.5, "0.5"),
    (-2.5, "-2.5"),
    (0.0, "0"),
    (-0.0, "-0"),
    (1e20, "100000000000000000000"),
    (1e21, "1e+21"),
    (0.0001, "0.0001"),
    (1.5e-7, "1.5e-07"),
    (-1e-5, "-1e-05"),
    (1 / 3, "0.3333333333333333"),
    (float("inf"), "+Inf"),
    (float("-inf"), "-Inf"),
    (float("nan"), "NaN"),
])
def test_format_number(value, text):
    assert format_number(value) == text

# ------------------------------
# CLI
# ------------------------------

def test_cli_eval(capsys):
    assert main(["eval", "(2+3)*4"]) == 0
    assert capsys.readouterr().out == "20\n"


def test_cli_eval_joins_words(capsys):
    assert main(["eval", "10", "-", "3", "+", "2"]) == 0
    assert capsys.readouterr().out == "5\n"


def test_cli_eval_indeterminate(capsys):
    assert main(["eval", "5/0"]) == 1
    assert capsys.readouterr().out == "[INDETERMINATE]\n"


def test_cli_eval_max_length(capsys):
    assert main(["eval", "--max-length", "2", "1+2"]) == 1
    captured = capsys.readouterr()
    assert captured.out == "[INDETERMINATE]\n"
    assert "[WARN]" in captured.err


def test_cli_eval_debug(capsys):
    assert main(["eval", "-D", "2*3+4xyz"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "10\n"
    assert "[DEBUG] chain (2 *) (3 +) (4)" in captured.err
    assert "unparsed tail @5: 'xyz'" in captured.err


def test_cli_tree(capsys):
    assert main(["tree", "1+2"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Start [0:3]"
    assert "Expression" in out and "Number" in out


def test_cli_tree_no_match(capsys):
    assert main(["tree", "+"]) == 2
    captured = capsys.readouterr()
    assert "<no match>" in captured.out
    assert "[SYNTAX ERROR]" in captured.err


def test_cli_reply(capsys):
    assert main(["reply", "fox! calc 2 * 3"]) == 0
    assert capsys.readouterr().out == "6\n"
    assert main(["reply", "good morning"]) == 1


def test_cli_tree_limits(capsys):
    assert main(["tree", "(" * 300]) == 2
    captured = capsys.readouterr()
    assert "[WARN]" in captured.err
    assert captured.out == ""
    assert main(["tree", "--max-depth", "1", "((1))"]) == 2
    assert main(["tree", "--max-depth", "2", "((1))"]) == 0


def test_cli_eval_depth_limit(capsys):
    assert main(["eval", "(" * 150]) == 1
    assert capsys.readouterr().out == "[INDETERMINATE]\n"
