from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from yial import Node, Value, NativeFn
from yial import config
from yial.errors import YialRecursionError
from yial.reader.parser import read
from yial.types.environment import Environment
from yial.types.values import ExternalFn
from yial.evaluation.evaluator import evaluate
from yial.builtin.env_builtin import register

logger = logging.getLogger(__name__)

# Python frames one evaluation level may hold (evaluate, evaluate_expr,
# apply, apply_external and the operand comprehension).
FRAMES_PER_LEVEL = 5
FRAME_HEADROOM = 1000
MAX_RECURSION_LIMIT = 1_000_000


def ensure_recursion_limit(max_depth: int) -> None:
    """Raise Python's recursion limit so `max_depth` levels fit on the stack."""
    needed = min(max_depth * FRAMES_PER_LEVEL + FRAME_HEADROOM, MAX_RECURSION_LIMIT)
    if sys.getrecursionlimit() < needed:
        logger.debug("raising recursion limit to %d", needed)
        sys.setrecursionlimit(needed)


class Interpreter:
    """
    Orchestrates reading and evaluating yial code.
    Owns one Environment whose global scope persists across calls, so
    top-level `def` bindings stay visible to later evaluations.
    """

    def __init__(self, stdout: TextIO | None = None, max_depth: int | None = None):
        if max_depth is None:
            max_depth = config.get_max_eval_depth()
        ensure_recursion_limit(max_depth)
        self.env: Environment = Environment(max_depth=max_depth)
        register(self.env, out=stdout)

    def register_native(self, name: str, function: NativeFn) -> ExternalFn:
        """Bind a Python callable as a global native procedure named `name`."""
        fn = function if isinstance(function, ExternalFn) else ExternalFn(name, function)
        self.env.define_global(name, fn)
        logger.debug("registered native %r", name)
        return fn

    def eval(self, form: Node) -> Value:
        """Evaluate a single parsed form."""
        try:
            return evaluate(form, self.env)
        except RecursionError as exc:
            # The Python stack ran out before the configured depth limit did.
            raise YialRecursionError("maximum evaluation depth exceeded") from exc

    def eval_source(self, code: str) -> list[Value]:
        """Read and evaluate every top-level form in `code`; the first error aborts."""
        return [self.eval(form) for form in read(code)]

    def eval_file(self, path: str | Path) -> list[Value]:
        path = Path(path)
        logger.debug("evaluating %s", path)
        return self.eval_source(path.read_text(encoding="utf-8"))
