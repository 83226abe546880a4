"""Built-in functions for the yial runtime environment.

Each builtin receives the list of already-evaluated arguments and returns a
value or raises a YialEvalError. `register` installs them into an
Environment's global scope.
"""
from __future__ import annotations

import sys
from functools import partial
from typing import TextIO

from yial import Value
from yial.errors import YialArityError, YialTypeError
from yial.printer import to_string
from yial.types.environment import Environment
from yial.types.nil import Nil
from yial.types.values import ExternalFn, Kind, check_int, is_equal, is_number, kind_of

U64_MASK = 2 ** 64 - 1


def _check_numbers(name: str, args: list[Value]) -> None:
    for arg in args:
        if not is_number(arg):
            raise YialTypeError(f"`{name}` takes arguments of type int or real, got {kind_of(arg).value}")


def _fold(name: str, op, initial: Value, args: list[Value]) -> Value:
    """Left-fold `op` over numeric args, promoting to real once a real is seen."""
    _check_numbers(name, args)
    result = initial
    for x in args:
        result = op(result, x)
        if kind_of(result) is Kind.INT:
            check_int(result)
    return result


def _as_real_if_mixed(op):
    def wrapped(a, b):
        if isinstance(a, float) or isinstance(b, float):
            return op(float(a), float(b))
        return op(a, b)
    return wrapped


_add = _as_real_if_mixed(lambda a, b: a + b)
_mul = _as_real_if_mixed(lambda a, b: a * b)
_sub = _as_real_if_mixed(lambda a, b: a - b)


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[Value]) -> Value:
    """Return the sum of all arguments; (+) is 0."""
    return _fold("+", _add, 0, args)


def mul(args: list[Value]) -> Value:
    """Return the product of all arguments; (*) is 1."""
    return _fold("*", _mul, 1, args)


def sub(args: list[Value]) -> Value:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not args:
        raise YialArityError("`-` takes min. one argument of type int or real")
    _check_numbers("-", args)
    if len(args) == 1:
        x = args[0]
        return check_int(-x) if kind_of(x) is Kind.INT else -x
    return _fold("-", _sub, args[0], args[1:])


# -------------------------------
# Comparison
# -------------------------------
def equals(args: list[Value]) -> bool:
    """Return true if every argument is structurally equal to the first."""
    if not args:
        raise YialArityError("`=` takes min. one argument")
    first = args[0]
    return all(is_equal(first, other) for other in args[1:])


# -------------------------------
# Conversion and output
# -------------------------------
def hex_builtin(args: list[Value]) -> str:
    """(hex n) => uppercase hexadecimal text of n's 64-bit pattern."""
    if len(args) != 1:
        raise YialArityError("hex takes only one argument")
    n = args[0]
    if kind_of(n) is not Kind.INT:
        raise YialTypeError(f"hex only takes int as argument, got {kind_of(n).value}")
    return format(n & U64_MASK, "X")


def echo(args: list[Value], out: TextIO | None = None) -> Value:
    """Print every argument back to back, then a newline. Returns Nil."""
    stream = out if out is not None else sys.stdout
    for arg in args:
        stream.write(to_string(arg))
    stream.write("\n")
    stream.flush()
    return Nil


def builtins(out: TextIO | None = None) -> dict[str, ExternalFn]:
    """Build the builtin table, with `echo` writing to `out`."""
    return {
        "+": ExternalFn("+", add),
        "-": ExternalFn("-", sub),
        "*": ExternalFn("*", mul),
        "=": ExternalFn("=", equals),
        "hex": ExternalFn("hex", hex_builtin),
        "echo": ExternalFn("echo", partial(echo, out=out)),
    }


def register(env: Environment, out: TextIO | None = None) -> None:
    """Register all builtin functions into the global scope of `env`."""
    for name, fn in builtins(out).items():
        env.define_global(name, fn)
