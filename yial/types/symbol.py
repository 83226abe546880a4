"""Name nodes for yial.

The parser turns every identifier that is not a literal or a reserved word
into a Symbol. Evaluating one looks its name up in the environment; as the
head of a call form it may also name a special form. Map keys and `fn`
parameters are plain strings taken from `Symbol.id`.
"""

from __future__ import annotations
import sys


class Symbol:
    """An identifier in source code, compared by name."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        # interned: names repeat across a program and are hashed on every lookup
        self.id = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.id is other.id or self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Symbol({self.id!r})"

    def __str__(self) -> str:
        return self.id
