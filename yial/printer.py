"""Value -> text formatting for `echo` and the REPL."""

from __future__ import annotations

from io import StringIO

from yial import Value
from yial.types.values import Kind, kind_of

_SOURCE_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}


def _write(buffer: StringIO, value: Value, quote_strings: bool) -> None:
    match kind_of(value):
        case Kind.STR:
            if quote_strings:
                buffer.write('"')
                buffer.write("".join(_SOURCE_ESCAPES.get(ch, ch) for ch in value))
                buffer.write('"')
            else:
                buffer.write(value)
        case Kind.BOOL:
            buffer.write("true" if value else "false")
        case Kind.INT:
            buffer.write(str(value))
        case Kind.REAL:
            buffer.write(repr(value))
        case Kind.NIL:
            buffer.write("<Nil>")
        case Kind.LIST:
            buffer.write("{ ")
            for item in value:
                _write(buffer, item, quote_strings)
                buffer.write(" ")
            buffer.write("}")
        case Kind.MAP:
            if not value:
                buffer.write("{:}")
                return
            buffer.write("{ ")
            for key, item in value.items():
                buffer.write(f"{key}: ")
                _write(buffer, item, quote_strings)
                buffer.write(" ")
            buffer.write("}")
        case Kind.FUNC:
            buffer.write("<Fn::Internal>")
        case Kind.EXTERNAL_FN:
            buffer.write("<Fn::External>")


def to_string(value: Value) -> str:
    """Display form: strings are written raw, as `echo` prints them."""
    with StringIO() as buffer:
        _write(buffer, value, quote_strings=False)
        return buffer.getvalue()


def to_source(value: Value) -> str:
    """Like `to_string`, but strings are quoted and escaped as literals."""
    with StringIO() as buffer:
        _write(buffer, value, quote_strings=True)
        return buffer.getvalue()
