"""Core evaluator for the yial interpreter.

A recursive tree walker: atoms evaluate to themselves, symbols are looked up
in the environment stack, collection literals evaluate their children, and
call forms dispatch either to a special form (which receives its operands
unevaluated) or to ordinary function application.

Every call to `evaluate` counts one level against the environment's depth
limit, so runaway recursion surfaces as YialRecursionError rather than
exhausting the Python stack.
"""

from __future__ import annotations

from yial import Node, Value
from yial.errors import YialEvalError, YialSyntaxError
from yial.types.environment import Environment
from yial.types.nil import NilType
from yial.types.nodes import Expr, ListLiteral, MapLiteral
from yial.types.symbol import Symbol
from yial.types.values import make_list, make_map
from yial.evaluation.apply import apply
from yial.evaluation.special_forms import dispatch, special_form


def evaluate(node: Node, env: Environment) -> Value:
    """Evaluate one form in `env`."""
    with env.nested():
        match node:
            case Symbol():
                return env.lookup(node.id)
            case Expr():
                return evaluate_expr(node, env)
            case ListLiteral(items=items):
                return make_list([evaluate(item, env) for item in items])
            case MapLiteral(entries=entries):
                return make_map([(key, evaluate(value, env)) for key, value in entries])
            case str() | int() | float() | NilType():
                # --- Atoms return as-is ---
                return node
        raise YialEvalError(f"cannot evaluate {node!r}")


def evaluate_expr(expr: Expr, env: Environment) -> Value:
    if not expr.items:
        raise YialSyntaxError("cannot evaluate empty expression")

    head, operands = expr.head, expr.operands
    form = special_form(head)
    if form is not None:
        return dispatch(form, operands, env, evaluate)

    fn = evaluate(head, env)
    return apply(fn, operands, env, evaluate)
