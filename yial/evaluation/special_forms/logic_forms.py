from yial import Node
from yial.types.environment import Environment
from yial.types.values import is_truthy


def and_form(tail: tuple[Node, ...], env: Environment, evaluate_fn) -> bool:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right and returns false at
    the first falsy value. Otherwise, including with zero operands, returns
    true. The result is always a boolean, never an operand's value.
    """
    for expr in tail:
        if not is_truthy(evaluate_fn(expr, env)):
            return False
    return True


def or_form(tail: tuple[Node, ...], env: Environment, evaluate_fn) -> bool:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns true at
    the first truthy value. If none is truthy, including with zero operands,
    returns false.
    """
    for expr in tail:
        if is_truthy(evaluate_fn(expr, env)):
            return True
    return False
