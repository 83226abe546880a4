"""AST nodes produced by the parser.

Atoms need no wrapper: string, integer, real and boolean literals are the
Python objects themselves, ``nil`` is the ``Nil`` singleton and names are
``Symbol`` instances. The three compound forms below are frozen so a parsed
program can be shared by every function value whose body refers to it.
"""

from __future__ import annotations

from dataclasses import dataclass

from yial import Node


@dataclass(frozen=True)
class Expr:
    """A call form ``( head operand* )``."""

    items: tuple[Node, ...]

    @property
    def head(self) -> Node:
        return self.items[0]

    @property
    def operands(self) -> tuple[Node, ...]:
        return self.items[1:]

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class ListLiteral:
    """A list literal ``{ form* }``."""

    items: tuple[Node, ...]


@dataclass(frozen=True)
class MapLiteral:
    """A map literal ``{ name: form ... }``; keys are raw names in source order."""

    entries: tuple[tuple[str, Node], ...]

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]
