# Core type aliases for yial's data model.
# Literal nodes and literal values share plain Python types (str, int, float,
# bool) plus the Nil singleton. Symbols, call forms and collection literals
# are dedicated node classes; lists and maps evaluate to tuples and read-only
# mappings.
#
# Naming guidance:
# - Node:     a parsed form (reader/parser and special-form code).
# - Value:    an evaluated runtime value (evaluator and builtins).
# - NativeFn: the calling convention of builtin procedures.

from typing import Any, Callable

Node = Any
Value = Any

# Builtins receive the fully evaluated operand list.
NativeFn = Callable[[list], Value]

__version__ = "0.3.0"
