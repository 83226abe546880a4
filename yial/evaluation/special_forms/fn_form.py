from yial import Node, Value
from yial.errors import YialSyntaxError
from yial.types.environment import Environment
from yial.types.nodes import Expr, ListLiteral
from yial.types.symbol import Symbol
from yial.types.values import Func


def fn_form(tail: tuple[Node, ...], env: Environment, evaluate_fn) -> Value:
    """
    (fn (a b) body...)
    The parameter list may also be written with braces: (fn {a b} body...).
    Only names and body forms are kept; nothing from `env` is captured.
    """
    if not tail or not isinstance(tail[0], (Expr, ListLiteral)):
        raise YialSyntaxError("illegal fn syntax: expected a parameter list")

    params: list[str] = []
    for param in tail[0].items:
        if not isinstance(param, Symbol):
            raise YialSyntaxError(f"illegal fn syntax: parameter {param!r} is not a symbol")
        if param.id in params:
            raise YialSyntaxError(f"illegal fn syntax: duplicate parameter '{param.id}'")
        params.append(param.id)

    return Func(params, tail[1:])
