# pegcalc/pegcalcc.py
"""pegcalcc – pegcalc CLI

Examples)
    $ pegcalc eval "(2+3)*4"
    $ pegcalc eval 10 - 3 + 2 -D
    $ pegcalc tree "1+2*3"
    $ pegcalc reply "fox! calc 5 / 0"

Commands
--------
- eval  : join the words, parse and reduce; print the result
- tree  : print the parse tree of an expression
- reply : run a chat message through the `fox! calc` command

Debug mode (-D/--debug) prints the tree, the operator chain and any input
the grammar did not consume to stderr.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

from .command import (
    MAX_EXPRESSION_LENGTH, MAX_NESTING_DEPTH, INDETERMINATE_REPLY,
    accepts, format_number, handle_message,
)
from .expr import parse, reduce, build_chain, format_chain

# ------------------------------
# Helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _rejected(text: str, args) -> bool:
    if accepts(text, args.max_length, args.max_depth):
        return False
    _eprint(f"[WARN] expression exceeds --max-length {args.max_length} or --max-depth {args.max_depth}")
    return True


def _add_limits(p: argparse.ArgumentParser) -> None:
    p.add_argument("--max-length", type=int, default=MAX_EXPRESSION_LENGTH, help="longest accepted expression")
    p.add_argument("--max-depth", type=int, default=MAX_NESTING_DEPTH, help="deepest accepted '(' nesting")


def _debug_dump(text: str, tree) -> None:
    _eprint("[DEBUG] tree")
    _eprint(tree.pretty())
    if tree.matched and tree.end < len(text):
        _eprint(f"[DEBUG] unparsed tail @{tree.end}: {text[tree.end:]!r}")
    if tree.matched:
        try:
            _eprint("[DEBUG] chain " + format_chain(build_chain(tree)))
        except ZeroDivisionError:
            _eprint("[DEBUG] chain <division by zero>")

# ------------------------------
# Commands
# ------------------------------

def cmd_eval(args) -> int:
    text = "".join(args.words)
    if _rejected(text, args):
        print("[INDETERMINATE]")
        return 1
    try:
        tree = parse(text)
        if args.debug:
            _debug_dump(text, tree)
        ok, value = reduce(tree)
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if not ok:
        print("[INDETERMINATE]")
        return 1
    print(format_number(value))
    return 0


def cmd_tree(args) -> int:
    text = args.expression
    if _rejected(text, args):
        return 2
    try:
        tree = parse(text)
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    print(tree.pretty())
    if not tree.matched:
        _eprint(f"[SYNTAX ERROR] nothing matched in {text!r}")
        return 2
    if tree.end < len(text):
        _eprint(f"[WARN] input ignored from offset {tree.end}: {text[tree.end:]!r}")
    return 0


def cmd_reply(args) -> int:
    try:
        reply = handle_message(args.message, args.max_length, args.max_depth)
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if reply is None:
        _eprint("[WARN] not a calc command")
        return 1
    if args.debug and reply == INDETERMINATE_REPLY:
        _eprint("[DEBUG] reduction was indeterminate")
    print(reply)
    return 0

# ------------------------------
# Entrypoint
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="pegcalc", description="PEG arithmetic evaluator CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_eval = sub.add_parser("eval", help="Evaluate an expression (words are joined)")
    p_eval.add_argument("words", nargs="+", help="expression text")
    _add_limits(p_eval)
    p_eval.add_argument("-D", "--debug", action="store_true", help="print tree and operator chain")
    p_eval.set_defaults(func=cmd_eval)

    p_tree = sub.add_parser("tree", help="Print the parse tree of an expression")
    p_tree.add_argument("expression", help="expression text (no spaces)")
    _add_limits(p_tree)
    p_tree.set_defaults(func=cmd_tree)

    p_reply = sub.add_parser("reply", help="Answer a chat message like the bot would")
    p_reply.add_argument("message", help="full message content, e.g. 'fox! calc 1 + 2'")
    _add_limits(p_reply)
    p_reply.add_argument("-D", "--debug", action="store_true", help="print diagnostics")
    p_reply.set_defaults(func=cmd_reply)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
