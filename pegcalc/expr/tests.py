from __future__ import annotations
import pytest

from .grammar import Symbol, parse
from .operators import Operator
from .reducer import Link, build_chain, fold, format_chain, reduce, evaluate

# ------------------------------
# Grammar shape
# ------------------------------

def test_tree_shape():
    tree = parse("1+(2)")
    assert tree.name is Symbol.START
    (expr,) = tree.children
    assert expr.name is Symbol.EXPRESSION
    operand, op, rest = expr.children
    assert operand.name is Symbol.NUMBER and operand.text() == "1"
    assert op.is_leaf and op.value == "+"
    assert rest.name is Symbol.EXPRESSION
    (paren,) = rest.children
    assert paren.name is Symbol.PARENTHESES
    assert [c.value for c in (paren.children[0], paren.children[2])] == ["(", ")"]


@pytest.mark.parametrize("text, consumed", [
    ("123", 3),
    ("123.", 4),
    ("123.456", 7),
    ("2+3abc", 3),
    ("2+", 1),
    ("2+*3", 1),
    ("3)", 1),
    ("1 + 2", 1),
])
def test_parse_consumes_prefix(text, consumed):
    tree = parse(text)
    assert tree.matched
    assert tree.end == consumed


@pytest.mark.parametrize("text", ["", "+", ".5", "(2+3", "x", " 1"])
def test_parse_no_match(text):
    tree = parse(text)
    assert not tree.matched
    assert tree.children == ()

# ------------------------------
# Numbers
# ------------------------------

@pytest.mark.parametrize("text", ["0", "7", "007", "123", "123.", "123.456", "0.5", "3.14159", "98765432109876543210"])
def test_number_reduces_to_its_decimal_value(text):
    assert reduce(parse(text)) == (True, float(text))

# ------------------------------
# Precedence and folding
# ------------------------------

@pytest.mark.parametrize("text, expected", [
    ("(2+3)*4", 20.0),
    ("2+3*4", 14.0),
    ("2*3+4", 10.0),
    ("10-2*3", 4.0),
    ("((7))", 7.0),
    ("(1+2)*(3+4)", 21.0),
    ("2*(3+4)*5", 70.0),
    ("0/5", 0.0),
    ("1+2+3+4", 10.0),
    ("2-3-4", -5.0),
])
def test_evaluate(text, expected):
    assert evaluate(text) == (True, expected)


@pytest.mark.parametrize("text", ["2*3*4", "8/2*2", "12/3/2", "2*3/4", "100/10/5*3", "1.5*4/3"])
def test_multiplicative_chain_folds_left_to_right(text):
    tokens = text.replace("*", " * ").replace("/", " / ").split()
    expected = float(tokens[0])
    for op, num in zip(tokens[1::2], tokens[2::2]):
        expected = expected * float(num) if op == "*" else expected / float(num)
    ok, value = evaluate(text)
    assert ok
    assert value == pytest.approx(expected)


@pytest.mark.parametrize("text, expected", [
    # additions are folded across the whole chain before any subtraction
    ("10-3+2", 5.0),       # 10 - (3 + 2)
    ("1-2+3-4", -8.0),     # 1 - (2 + 3) - 4
    ("10+3-2", 11.0),
    ("5-1-1+1", 2.0),      # 5 - 1 - (1 + 1)
])
def test_addition_folds_before_subtraction(text, expected):
    assert evaluate(text) == (True, expected)


def test_decimal_arithmetic():
    ok, value = evaluate("(0.5*3.14+15)/2")
    assert ok
    assert value == pytest.approx(8.285)

# ------------------------------
# Failures
# ------------------------------

@pytest.mark.parametrize("text", ["5/0", "(1+2)/0*3", "1+4/0.", "(1/0)+2", "2*((3/(1-1)))", "0/0"])
def test_division_by_zero_is_indeterminate(text):
    assert evaluate(text) == (False, 0.0)


@pytest.mark.parametrize("text", ["", "+", "(2+3", ".5"])
def test_unparsable_input_is_indeterminate(text):
    assert evaluate(text) == (False, 0.0)


@pytest.mark.parametrize("text, expected", [
    ("2+", 2.0),
    ("2+*3", 2.0),
    ("2*3abc", 6.0),
    ("(1+1))", 2.0),
])
def test_partial_input_reduces_parsed_prefix(text, expected):
    assert evaluate(text) == (True, expected)


def test_evaluation_is_repeatable():
    text = "(2+3)*4-6/3"
    assert parse(text) == parse(text)
    assert evaluate(text) == evaluate(text) == (True, 18.0)

# ------------------------------
# Chain internals
# ------------------------------

def test_build_chain_flattens_spine():
    chain = build_chain(parse("2*3+4"))
    assert chain == [
        Link(2.0, Operator.MULTIPLY),
        Link(3.0, Operator.ADD),
        Link(4.0, None),
    ]
    assert format_chain(chain) == "(2 *) (3 +) (4) "


def test_build_chain_reduces_parentheses_to_one_link():
    assert build_chain(parse("(1+2)*3")) == [Link(3.0, Operator.MULTIPLY), Link(3.0, None)]


def test_fold():
    assert fold([Link(7.0, None)]) == 7.0
    assert fold([Link(1.0, Operator.ADD), Link(2.0, Operator.MULTIPLY), Link(3.0, None)]) == 7.0
    with pytest.raises(ZeroDivisionError):
        fold([Link(1.0, Operator.DIVIDE), Link(0.0, None)])
    with pytest.raises(ValueError):
        fold([])


def test_operators():
    assert Operator.from_char("*") is Operator.MULTIPLY
    assert Operator.SUBTRACT.apply(1.0, 3.0) == -2.0
    assert Operator.DIVIDE.apply(1.0, 4.0) == 0.25
    with pytest.raises(ZeroDivisionError):
        Operator.DIVIDE.apply(1.0, 0.0)
    with pytest.raises(ValueError):
        Operator.from_char("%")


def test_format_chain_keeps_every_digit():
    chain = build_chain(parse("1234567*0.125"))
    assert format_chain(chain) == "(1234567 *) (0.125) "


def test_deep_unclosed_parentheses_do_not_raise():
    tree = parse("(" * 200)
    assert not tree.matched
    assert evaluate("(" * 5000) == (False, 0.0)
