"""Runtime values for yial.

Values reuse plain Python types where one fits:

    - Str  -> str
    - Int  -> int (kept within 64-bit signed range)
    - Real -> float
    - Bool -> bool
    - Nil  -> the Nil singleton
    - List -> tuple
    - Map  -> read-only mapping (MappingProxyType) in insertion order

Functions get their own classes. ``Func`` is a user-defined function holding
parameter names and body forms only; there is no captured environment, so a
body resolves free names against whatever scopes are live at call time.
``ExternalFn`` wraps a native Python callable.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from yial import Node, Value, NativeFn
from yial.errors import YialOverflowError
from yial.types.nil import Nil, NilType

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class Kind(Enum):
    STR = "str"
    INT = "int"
    REAL = "real"
    BOOL = "bool"
    NIL = "nil"
    LIST = "list"
    MAP = "map"
    FUNC = "fn"
    EXTERNAL_FN = "external-fn"


class Func:
    """A first-class function with parameter names and body forms."""

    __slots__ = ("params", "body")

    def __init__(self, params: Iterable[str], body: Iterable[Node]):
        self.params: tuple[str, ...] = tuple(params)
        self.body: tuple[Node, ...] = tuple(body)

    @property
    def arity(self) -> int:
        return len(self.params)

    def __eq__(self, other: object) -> bool:
        # Same parameter names and the very same body forms.
        if not isinstance(other, Func):
            return NotImplemented
        return (
            self.params == other.params
            and len(self.body) == len(other.body)
            and all(a is b for a, b in zip(self.body, other.body))
        )

    def __hash__(self) -> int:
        return hash((self.params, tuple(id(form) for form in self.body)))

    def __repr__(self) -> str:
        return f"Func(params={list(self.params)!r})"


class ExternalFn:
    """A native procedure callable from yial code."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: NativeFn):
        self.name = name
        self.fn = fn

    def __call__(self, args: list[Value]) -> Value:
        result = self.fn(args)
        return Nil if result is None else result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExternalFn):
            return NotImplemented
        return self.fn is other.fn

    def __hash__(self) -> int:
        return hash(id(self.fn))

    def __repr__(self) -> str:
        return f"ExternalFn({self.name!r})"


# --- Constructors ---

def make_list(items: Iterable[Value]) -> tuple:
    return tuple(items)


def make_map(entries: Iterable[tuple[str, Value]] | Mapping[str, Value]) -> Mapping[str, Value]:
    return MappingProxyType(dict(entries))


def check_int(value: int) -> int:
    """Return `value` unchanged if it fits a 64-bit signed integer."""
    if not INT_MIN <= value <= INT_MAX:
        raise YialOverflowError(f"integer overflow: {value} does not fit in 64 bits")
    return value


# --- Classification ---

def kind_of(value: Value) -> Kind:
    # bool is tested before int: True/False are ints to Python.
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, int):
        return Kind.INT
    if isinstance(value, float):
        return Kind.REAL
    if isinstance(value, str):
        return Kind.STR
    if isinstance(value, NilType):
        return Kind.NIL
    if isinstance(value, tuple):
        return Kind.LIST
    if isinstance(value, MappingProxyType):
        return Kind.MAP
    if isinstance(value, Func):
        return Kind.FUNC
    if isinstance(value, ExternalFn):
        return Kind.EXTERNAL_FN
    raise TypeError(f"not a yial value: {value!r}")


def type_name(value: Value) -> str:
    return kind_of(value).value


def is_number(value: Value) -> bool:
    return kind_of(value) in (Kind.INT, Kind.REAL)


def is_truthy(value: Value) -> bool:
    """Bool by value, Nil false, numbers when non-zero; every other kind is false."""
    match kind_of(value):
        case Kind.BOOL:
            return value
        case Kind.NIL:
            return False
        case Kind.INT | Kind.REAL:
            return value != 0
        case _:
            return False


def is_equal(a: Value, b: Value) -> bool:
    """Deep equality: identical kinds and identical content, recursively."""
    if a is b:
        return True
    kind = kind_of(a)
    if kind is not kind_of(b):
        return False
    if kind is Kind.LIST:
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if kind is Kind.MAP:
        if a.keys() != b.keys():
            return False
        return all(is_equal(a[k], b[k]) for k in a)
    return a == b


def from_native(value: Value) -> Value:
    """Admit a value produced by native code.

    Ints are range-checked and containers are rebuilt, so the native side
    keeps no handle on a map that yial code can see.
    """
    match kind_of(value):
        case Kind.INT:
            return check_int(value)
        case Kind.LIST:
            return make_list(from_native(item) for item in value)
        case Kind.MAP:
            for key in value:
                if not isinstance(key, str):
                    raise TypeError(f"map keys must be names, got {key!r}")
            return make_map((key, from_native(item)) for key, item in value.items())
        case _:
            return value
