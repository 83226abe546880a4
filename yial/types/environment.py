"""Runtime environment for yial.

The Environment is a stack of scopes, each a mapping from names to evaluated
values. Scope 0 is the global scope and is created with the environment; a
function call pushes a scope for its parameters and pops it on return.
Lookup walks the stack innermost-first, so resolution is dynamic: a function
body sees the scopes of whoever called it.

The environment also carries the evaluation-depth counter that bounds how
deeply the tree walker may recurse.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterator

from yial import Value
from yial.errors import YialUnboundSymbol, YialRecursionError


class Environment:
    """Stack of name -> value scopes with a bounded evaluation depth."""

    __slots__ = ("scopes", "max_depth", "eval_depth")

    def __init__(self, max_depth: int | None = None):
        self.scopes: list[dict[str, Value]] = [{}]
        self.max_depth: int | None = max_depth
        self.eval_depth: int = 0

    @property
    def depth(self) -> int:
        """Number of live scopes; 1 when only the global scope exists."""
        return len(self.scopes)

    def enter(self) -> None:
        """Push an empty scope."""
        self.scopes.append({})

    def exit(self) -> None:
        """Pop the innermost scope. The global scope is never popped."""
        if len(self.scopes) == 1:
            raise RuntimeError("cannot exit the global scope")
        self.scopes.pop()

    @contextmanager
    def frame(self) -> Iterator[dict[str, Value]]:
        """Enter a scope for the duration of the block, exiting on every path."""
        self.enter()
        try:
            yield self.scopes[-1]
        finally:
            self.exit()

    @contextmanager
    def nested(self) -> Iterator[int]:
        """Count one level of evaluation, failing past `max_depth`."""
        if self.max_depth is not None and self.eval_depth >= self.max_depth:
            raise YialRecursionError(
                f"maximum evaluation depth exceeded ({self.max_depth})"
            )
        self.eval_depth += 1
        try:
            yield self.eval_depth
        finally:
            self.eval_depth -= 1

    def define(self, name: str, value: Value) -> None:
        """Bind `name` in the innermost scope, overwriting any binding there."""
        self.scopes[-1][name] = value

    def define_global(self, name: str, value: Value) -> None:
        """Bind `name` in the global scope regardless of the current depth."""
        self.scopes[0][name] = value

    def lookup(self, name: str) -> Value:
        """Return the innermost binding of `name`.

        Raises YialUnboundSymbol if no scope binds it.
        """
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise YialUnboundSymbol(f"unknown symbol '{name}'")

    def __contains__(self, name: str) -> bool:
        return any(name in scope for scope in self.scopes)

    @staticmethod
    def _write_vars(buffer: StringIO, scope: dict[str, Value]) -> None:
        """Write one scope's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in scope.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Innermost scope only, with an indicator for the scopes below it."""
        with StringIO() as buffer:
            self._write_vars(buffer, self.scopes[-1])
            if len(self.scopes) > 1:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Full stack, innermost first, for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment stack: ")
            chain = []
            for scope in reversed(self.scopes):
                with StringIO() as scope_buf:
                    self._write_vars(scope_buf, scope)
                    chain.append(scope_buf.getvalue())
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
