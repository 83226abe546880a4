"""
  yial Tokenizer

- Streaming: `lex` is a generator, tokens are produced on demand
- `;` starts a comment running to the end of the line
- newlines only advance the line counter, they are never emitted
- structural tokens:  (  )  {  }  :
- literals:
    - strings   "..." with escapes \\n \\t \\\\ \\"
    - integers  123, 0x1F, 0o17, 0b101
    - reals     1.5, 0.5 (digits on both sides of a single '.')
    - booleans  true, false
    - nil       nil
- anything else made of printable, non-structural characters is a symbol
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator

from yial.errors import YialLexError
from yial.types.values import INT_MIN, INT_MAX

LPAREN = "lparen"
RPAREN = "rparen"
LBRACE = "lbrace"
RBRACE = "rbrace"
COLON = "colon"
STRING = "string"
INT = "int"
REAL = "real"
BOOL = "bool"
NIL = "nil"
SYMBOL = "symbol"

STRUCTURAL = {
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    ":": COLON,
}

RESERVED: dict[str, tuple[str, Any]] = {
    "true": (BOOL, True),
    "false": (BOOL, False),
    "nil": (NIL, None),
}

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}

TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[^\S\n]+)"  # whitespace other than newline
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<structural>[(){}:])"
    r'|(?P<string>")'  # string start; the body is read by hand
    r'|(?P<number>[0-9][^\s(){}:;"]*)'  # digit-leading run
    r'|(?P<symbol>[^\s(){}:;"]+)'
)

RADIX_PREFIXES: dict[str, tuple[int, re.Pattern]] = {
    "0x": (16, re.compile(r"[0-9A-Fa-f]+")),
    "0o": (8, re.compile(r"[0-7]+")),
    "0b": (2, re.compile(r"[01]+")),
}

DECIMAL_RE = re.compile(r"[0-9]+")
REAL_RE = re.compile(r"[0-9]+\.[0-9]+")


@dataclass(frozen=True)
class Token:
    kind: str
    value: Any = None
    line: int = field(default=0, compare=False)


def _check_printable(text: str, line: int) -> None:
    for ch in text:
        if not ch.isprintable():
            raise YialLexError(f"illegal character {ch!r}", line)


def read_number(text: str, line: int = 0) -> Token:
    """Classify a digit-leading run as an Int or Real token."""
    prefix = text[:2]
    if prefix in RADIX_PREFIXES:
        base, digits_re = RADIX_PREFIXES[prefix]
        digits = text[2:]
        if not digits:
            raise YialLexError(f"illegal number literal '{text}': no digits after {prefix}", line)
        if not digits_re.fullmatch(digits):
            raise YialLexError(f"illegal number literal '{text}'", line)
        value = int(digits, base)
    elif DECIMAL_RE.fullmatch(text):
        value = int(text)
    elif REAL_RE.fullmatch(text):
        return Token(REAL, float(text), line)
    else:
        raise YialLexError(f"illegal number literal '{text}'", line)
    if not INT_MIN <= value <= INT_MAX:
        raise YialLexError(f"integer literal '{text}' out of range", line)
    return Token(INT, value, line)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token objects, raising YialLexError on bad input."""
    pos = 0
    n = len(source)
    line = 1

    def read_string() -> Token:
        nonlocal pos, line
        start_line = line
        buf: list[str] = []
        while pos < n:
            ch = source[pos]
            pos += 1
            if ch == '"':
                return Token(STRING, "".join(buf), start_line)
            if ch == "\\":
                if pos >= n:
                    break
                escaped = source[pos]
                pos += 1
                if escaped not in ESCAPES:
                    raise YialLexError(f"unescapable character '\\{escaped}' in string", line)
                buf.append(ESCAPES[escaped])
                continue
            if ch == "\n":
                line += 1
            buf.append(ch)
        raise YialLexError("unterminated string", start_line)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise YialLexError(f"illegal character {source[pos]!r}", line)
        kind = m.lastgroup
        text = m.group()
        pos = m.end()

        if kind == "newline":
            line += 1
        elif kind in ("space", "comment"):
            continue
        elif kind == "structural":
            yield Token(STRUCTURAL[text], text, line)
        elif kind == "string":
            yield read_string()
        elif kind == "number":
            _check_printable(text, line)
            yield read_number(text, line)
        else:
            _check_printable(text, line)
            if text in RESERVED:
                tok_kind, value = RESERVED[text]
                yield Token(tok_kind, value, line)
            else:
                yield Token(SYMBOL, text, line)


def tokenize(source: str) -> list[Token]:
    """Eagerly tokenize `source`; the first error aborts with YialLexError."""
    return list(lex(source))
