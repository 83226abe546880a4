"""Application engine for yial.

Operands arrive unevaluated; how and where they are evaluated depends on the
kind of function being called:

- ExternalFn: operands are evaluated left-to-right in the caller's scope and
  the resulting list is handed to the native callable. The result is checked
  and its containers are copied before yial code sees it. No scope is entered.
- Func: the argument count is checked against the parameter list, then a new
  scope is entered and each operand is evaluated and bound in turn before the
  body forms run. The scope is exited on every path, including errors.
"""

from __future__ import annotations

from yial import Node, Value
from yial.errors import YialError, YialArityError, YialNativeError, YialNotCallable
from yial.types.environment import Environment
from yial.types.nil import Nil
from yial.types.values import ExternalFn, Func, from_native, type_name


def apply_external(fn: ExternalFn, operands: tuple[Node, ...], env: Environment, evaluate_fn) -> Value:
    args = [evaluate_fn(operand, env) for operand in operands]
    try:
        return from_native(fn(args))
    except YialError:
        raise
    except Exception as exc:
        raise YialNativeError(f"native function '{fn.name}' failed: {exc}") from exc


def apply_func(fn: Func, operands: tuple[Node, ...], env: Environment, evaluate_fn) -> Value:
    if len(operands) != fn.arity:
        raise YialArityError(
            f"function expects {fn.arity} argument(s), got {len(operands)}"
        )

    result: Value = Nil
    with env.frame():
        # Operands are evaluated inside the new scope, so earlier parameters
        # are already visible to later operands.
        for name, operand in zip(fn.params, operands):
            env.define(name, evaluate_fn(operand, env))
        for form in fn.body:
            result = evaluate_fn(form, env)
    return result


def apply(fn: Value, operands: tuple[Node, ...], env: Environment, evaluate_fn) -> Value:
    """Apply a Func or ExternalFn to unevaluated operands; anything else is not callable."""
    match fn:
        case ExternalFn():
            return apply_external(fn, operands, env, evaluate_fn)
        case Func():
            return apply_func(fn, operands, env, evaluate_fn)
        case _:
            raise YialNotCallable(f"cannot call a value of type {type_name(fn)}")
