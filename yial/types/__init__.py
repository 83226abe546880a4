from yial.types.symbol import Symbol
from yial.types.nil import Nil
from yial.types.nodes import Expr, ListLiteral, MapLiteral
from yial.types.values import Func, ExternalFn
from yial.types.environment import Environment

__all__ = [
    "Symbol",
    "Nil",
    "Expr",
    "ListLiteral",
    "MapLiteral",
    "Func",
    "ExternalFn",
    "Environment",
]
