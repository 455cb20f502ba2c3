from __future__ import annotations
import pytest

from .rules import Terminal, Range, Seq, Choice, Repeat, NonTerminal, RuleBuilder
from .engine import Grammar, match

b = RuleBuilder()
DIGIT = b.range("0", "9")


def _values(node):
    return [c.value for c in node.children]

# ------------------------------
# Terminals
# ------------------------------

def test_terminal_consumes_one_char():
    ok, node, end = match(Terminal("a"), "abc")
    assert ok and end == 1
    assert node.is_leaf and node.value == "a"
    assert (node.start, node.end) == (0, 1)


@pytest.mark.parametrize("text", ["x", ""])
def test_range_failure_keeps_position(text):
    assert match(DIGIT, text) == (False, None, 0)


def test_range_is_inclusive():
    for ch in "09":
        ok, node, end = match(DIGIT, ch)
        assert ok and node.value == ch and end == 1


def test_match_at_offset():
    ok, node, end = match(Terminal("b"), "abc", 1)
    assert ok and node.start == 1 and end == 2

# ------------------------------
# Combinators
# ------------------------------

def test_sequence_backtracks_fully():
    rule = b.sequence(b.terminal("a"), b.terminal("b"))
    assert match(rule, "ac") == (False, None, 0)
    ok, node, end = match(rule, "abz")
    assert ok and end == 2
    assert node.name == "" and _values(node) == ["a", "b"]


def test_choice_takes_first_success():
    a, bb = b.terminal("a"), b.terminal("b")
    ok, _, end = match(b.ordered_choice(b.sequence(a, bb), a), "ac")
    assert ok and end == 1
    # committed to the shorter alternative even though the longer one would match
    ok, _, end = match(b.ordered_choice(a, b.sequence(a, bb)), "ab")
    assert ok and end == 1
    assert match(b.ordered_choice(a, bb), "c") == (False, None, 0)


def test_one_or_more_is_greedy():
    ok, node, end = match(b.one_or_more(DIGIT), "123x")
    assert ok and end == 3
    assert _values(node) == ["1", "2", "3"]
    assert match(b.one_or_more(DIGIT), "x") == (False, None, 0)


def test_zero_or_more_and_optional_always_succeed():
    ok, node, end = match(b.zero_or_more(DIGIT), "x")
    assert ok and end == 0 and node.children == ()
    ok, node, end = match(b.optional(DIGIT), "x")
    assert ok and end == 0 and node.children == ()
    ok, node, end = match(b.optional(DIGIT), "7")
    assert ok and end == 1 and _values(node) == ["7"]


def test_repeat_of_empty_match_terminates():
    ok, _, end = match(b.zero_or_more(b.optional(DIGIT)), "x")
    assert ok and end == 0

# ------------------------------
# Non-terminals
# ------------------------------

def test_non_terminal_names_node_and_splices_children():
    num = b.non_terminal("Number")
    num.bind(b.sequence(b.one_or_more(DIGIT), b.optional(b.terminal(".")), b.zero_or_more(DIGIT)))
    ok, node, end = match(num, "12.5+")
    assert ok and end == 4
    assert node.name == "Number"
    assert _values(node) == ["1", "2", ".", "5"]
    assert node.text() == "12.5"


def test_nested_non_terminals_stay_nodes():
    inner = b.non_terminal("Inner")
    inner.bind(b.terminal("x"))
    outer = b.non_terminal("Outer")
    outer.bind(b.sequence(b.terminal("("), inner, b.terminal(")")))
    ok, node, _ = match(outer, "(x)")
    assert ok
    assert [c.name for c in node.children] == ["", "Inner", ""]
    assert node.children[1].children[0].value == "x"


def test_recursive_rule():
    # Nest <- '(' Nest ')' / 'x'
    nest = b.non_terminal("Nest")
    nest.bind(b.ordered_choice(b.sequence(b.terminal("("), nest, b.terminal(")")), b.terminal("x")))
    ok, node, end = match(nest, "((x))")
    assert ok and end == 5
    assert node.text() == "((x))"


def test_left_recursion_fails_instead_of_looping():
    # A <- A 'a' / 'b'
    a = b.non_terminal("A")
    a.bind(b.ordered_choice(b.sequence(a, b.terminal("a")), b.terminal("b")))
    ok, _, end = match(a, "baa")
    assert ok and end == 1


def test_bind_twice_is_an_error():
    nt = NonTerminal("R")
    nt.bind(Terminal("a"))
    with pytest.raises(SyntaxError):
        nt.bind(Terminal("b"))


def test_unbound_rule_is_an_error():
    nt = NonTerminal("R")
    with pytest.raises(SyntaxError, match="unbound"):
        nt.body
    with pytest.raises(SyntaxError, match="unbound"):
        match(nt, "a")


def test_grammar_rejects_unbound_reachable_rule():
    start = b.non_terminal("Start")
    missing = b.non_terminal("Missing")
    start.bind(b.sequence(b.terminal("a"), missing))
    with pytest.raises(SyntaxError, match="'Missing'"):
        Grammar(start)


@pytest.mark.parametrize("build", [
    lambda: Terminal("ab"),
    lambda: Terminal(""),
    lambda: Range("9", "0"),
    lambda: Seq(()),
    lambda: Choice(()),
    lambda: Repeat(Terminal("a"), "!"),
])
def test_invalid_rules(build):
    with pytest.raises(ValueError):
        build()

# ------------------------------
# Grammar.parse
# ------------------------------

def _ab_grammar() -> Grammar:
    start = b.non_terminal("Start")
    start.bind(b.one_or_more(b.ordered_choice(b.terminal("a"), b.terminal("b"))))
    return b.grammar(start)


def test_parse_returns_consumed_prefix():
    tree = _ab_grammar().parse("abbaXab")
    assert tree.matched
    assert tree.name == "Start"
    assert tree.end == 4 and tree.text() == "abba"


@pytest.mark.parametrize("text", ["", "X", "Xab"])
def test_parse_complete_non_match_is_degenerate(text):
    tree = _ab_grammar().parse(text)
    assert not tree.matched
    assert tree.name == "Start"
    assert tree.children == ()
    assert "<no match>" in tree.pretty()


def test_parse_is_repeatable():
    g = _ab_grammar()
    assert g.parse("abab") == g.parse("abab")


def test_parse_too_deep_for_the_stack_is_degenerate():
    # Nest <- '(' Nest ')' / 'x'
    nest = b.non_terminal("Nest")
    nest.bind(b.ordered_choice(b.sequence(b.terminal("("), nest, b.terminal(")")), b.terminal("x")))
    tree = b.grammar(nest).parse("(" * 5000)
    assert not tree.matched
    assert tree.children == ()
