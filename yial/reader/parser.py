"""
  yial Parser

- Streaming, lazy parsing over a token iterator
- Emits Python primitives for atoms and frozen nodes for compound forms:

    - strings, integers, reals, booleans -> str / int / float / bool
    - nil            -> Nil
    - names          -> Symbol
    - ( f a b )      -> Expr
    - { a b c }      -> ListLiteral
    - { k: v ... }   -> MapLiteral
    - {} / {:}       -> empty ListLiteral / empty MapLiteral

The first form inside braces fixes the shape of the literal: if it is
followed by ':' the literal is a map, otherwise a list.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from yial import Node
from yial.errors import YialParseError
from yial.reader import tokenizer as tk
from yial.reader.tokenizer import Token, lex
from yial.types.nil import Nil
from yial.types.nodes import Expr, ListLiteral, MapLiteral
from yial.types.symbol import Symbol

UNEXPECTED_EOF = "unexpected end of input"
MAX_NESTING = 200

_ATOMS = {
    tk.STRING: lambda tok: tok.value,
    tk.INT: lambda tok: tok.value,
    tk.REAL: lambda tok: tok.value,
    tk.BOOL: lambda tok: tok.value,
    tk.NIL: lambda tok: Nil,
    tk.SYMBOL: lambda tok: Symbol(tok.value),
}


def _describe(tok: Token) -> str:
    if tok.kind in tk.STRUCTURAL.values():
        return f"unexpected token '{tok.value}'"
    return f"unexpected token {tok.value!r}"


class TokenStream:
    def __init__(self, token_iter: Iterable[Token], max_nesting: int = MAX_NESTING):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.max_nesting = max_nesting
        self.nesting = 0

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def expect_more(self) -> Token:
        tok = self.advance()
        if tok is None:
            raise YialParseError(UNEXPECTED_EOF)
        return tok

    @contextmanager
    def nested(self) -> Iterator[int]:
        """Count one open bracket, failing past `max_nesting`."""
        if self.nesting >= self.max_nesting:
            raise YialParseError(f"nesting too deep (more than {self.max_nesting} levels)")
        self.nesting += 1
        try:
            yield self.nesting
        finally:
            self.nesting -= 1

    def peek_kind(self) -> Optional[str]:
        tok = self.peek()
        return None if tok is None else tok.kind

    def parse_form(self) -> Node:
        """Parse one form; end of input is an error here."""
        tok = self.expect_more()

        if tok.kind in _ATOMS:
            return _ATOMS[tok.kind](tok)

        if tok.kind == tk.LPAREN:
            with self.nested():
                items = []
                while self.peek_kind() != tk.RPAREN:
                    if self.peek() is None:
                        raise YialParseError(UNEXPECTED_EOF)
                    items.append(self.parse_form())
            self.advance()
            return Expr(tuple(items))

        if tok.kind == tk.LBRACE:
            with self.nested():
                return self.parse_collection()

        raise YialParseError(_describe(tok))

    def parse_collection(self) -> Node:
        # '{' has been consumed
        kind = self.peek_kind()
        if kind is None:
            raise YialParseError(UNEXPECTED_EOF)
        if kind == tk.COLON:
            self.advance()
            if self.expect_more().kind != tk.RBRACE:
                raise YialParseError("illegal collection literal: expected '}' after '{:'")
            return MapLiteral(())
        if kind == tk.RBRACE:
            self.advance()
            return ListLiteral(())

        first = self.parse_form()
        if self.peek_kind() == tk.COLON:
            if not isinstance(first, Symbol):
                raise YialParseError("illegal collection literal: map keys must be symbols")
            self.advance()
            return self._parse_map_rest(first.id)
        return self._parse_list_rest(first)

    def _parse_list_rest(self, first: Node) -> ListLiteral:
        items = [first]
        while True:
            kind = self.peek_kind()
            if kind is None:
                raise YialParseError(UNEXPECTED_EOF)
            if kind == tk.RBRACE:
                self.advance()
                return ListLiteral(tuple(items))
            if kind == tk.COLON:
                raise YialParseError("illegal list literal: unexpected ':' in a list")
            items.append(self.parse_form())

    def _parse_map_rest(self, first_key: str) -> MapLiteral:
        # ':' after the first key has been consumed
        entries: dict[str, Node] = {first_key: self.parse_form()}
        while True:
            tok = self.expect_more()
            if tok.kind == tk.RBRACE:
                return MapLiteral(tuple(entries.items()))
            if tok.kind != tk.SYMBOL:
                raise YialParseError("illegal map literal: expected a symbol key")
            if self.expect_more().kind != tk.COLON:
                raise YialParseError(f"illegal map literal: expected ':' after key '{tok.value}'")
            # a repeated key keeps the last value, in its first position
            entries[tok.value] = self.parse_form()

    def parse_all(self) -> Iterator[Node]:
        while self.peek() is not None:
            yield self.parse_form()


def parse(tokens: Iterable[Token]) -> Iterator[Node]:
    """Lazily parse top-level forms from `tokens`; raises YialParseError on the first bad form."""
    return TokenStream(tokens).parse_all()


def read(source: str) -> Iterator[Node]:
    """Tokenize and parse `source` lazily."""
    return parse(lex(source))
