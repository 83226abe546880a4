"""Special forms for the yial evaluator.

The set of special forms is closed: `SpecialForm` names every one of them and
`dispatch` matches exhaustively over it. The evaluator consults
`special_form` before ordinary function application, so these names cannot
be shadowed by bindings.
"""

from __future__ import annotations

from enum import Enum
from typing import assert_never

from yial import Node, Value
from yial.types.environment import Environment
from yial.types.symbol import Symbol
from yial.evaluation.special_forms.fn_form import fn_form
from yial.evaluation.special_forms.def_form import def_form
from yial.evaluation.special_forms.if_form import if_form
from yial.evaluation.special_forms.logic_forms import and_form, or_form


class SpecialForm(Enum):
    FN = "fn"
    DEF = "def"
    IF = "if"
    AND = "and"
    OR = "or"


def special_form(head: Node) -> SpecialForm | None:
    """Return the special form named by `head`, if any."""
    if not isinstance(head, Symbol):
        return None
    try:
        return SpecialForm(head.id)
    except ValueError:
        return None


def dispatch(form: SpecialForm, tail: tuple[Node, ...], env: Environment, evaluate_fn) -> Value:
    """Run the handler for `form` on its unevaluated operands."""
    match form:
        case SpecialForm.FN:
            return fn_form(tail, env, evaluate_fn)
        case SpecialForm.DEF:
            return def_form(tail, env, evaluate_fn)
        case SpecialForm.IF:
            return if_form(tail, env, evaluate_fn)
        case SpecialForm.AND:
            return and_form(tail, env, evaluate_fn)
        case SpecialForm.OR:
            return or_form(tail, env, evaluate_fn)
        case _:
            assert_never(form)
