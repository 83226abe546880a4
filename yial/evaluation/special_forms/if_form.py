from yial import Node, Value
from yial.errors import YialSyntaxError
from yial.types.environment import Environment
from yial.types.nil import Nil
from yial.types.values import is_truthy


def if_form(tail: tuple[Node, ...], env: Environment, evaluate_fn) -> Value:
    if len(tail) < 2:
        raise YialSyntaxError("illegal if syntax: expected a condition and a then-form")
    if len(tail) > 3:
        raise YialSyntaxError("illegal if syntax: too many forms")

    cond = evaluate_fn(tail[0], env)
    if is_truthy(cond):
        return evaluate_fn(tail[1], env)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env)
    else:
        return Nil
