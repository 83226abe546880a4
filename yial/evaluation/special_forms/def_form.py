from yial import Node, Value
from yial.errors import YialSyntaxError
from yial.types.environment import Environment
from yial.types.symbol import Symbol


def def_form(tail: tuple[Node, ...], env: Environment, evaluate_fn) -> Value:
    """
    (def name value)
    Always binds in the global scope, whatever the current call depth,
    and returns the bound value.
    """
    if len(tail) != 2 or not isinstance(tail[0], Symbol):
        raise YialSyntaxError("illegal def syntax: expected (def name form)")

    name, val_expr = tail
    value = evaluate_fn(val_expr, env)
    env.define_global(name.id, value)
    return value
