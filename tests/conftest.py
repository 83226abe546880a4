import io

import pytest

from yial.interpreter import Interpreter
from yial.types.environment import Environment
from yial.builtin.env_builtin import register


@pytest.fixture
def out():
    """Captures everything `echo` writes."""
    return io.StringIO()


@pytest.fixture
def interp(out):
    """Fresh interpreter with builtins loaded, echo writing to `out`."""
    return Interpreter(stdout=out)


@pytest.fixture
def run(interp):
    """Evaluate source text and return the value of its last form."""
    def _run(source):
        values = interp.eval_source(source)
        return values[-1] if values else None
    return _run


@pytest.fixture
def env(out):
    """Bare environment with builtins, for driving the evaluator directly."""
    e = Environment(max_depth=200)
    register(e, out=out)
    return e
