"""Reader: source text -> tokens -> forms."""

from yial.reader.tokenizer import Token, lex, tokenize
from yial.reader.parser import TokenStream, parse, read

__all__ = ["Token", "lex", "tokenize", "TokenStream", "parse", "read"]
