import sys

import pytest

from yial import config
from yial.errors import (
    YialArityError,
    YialEvalError,
    YialNativeError,
    YialNotCallable,
    YialRecursionError,
    YialSyntaxError,
    YialTypeError,
    YialUnboundSymbol,
)
from yial.evaluation.evaluator import evaluate
from yial.interpreter import FRAME_HEADROOM, FRAMES_PER_LEVEL, MAX_RECURSION_LIMIT, Interpreter
from yial.builtin.env_builtin import register
from yial.reader.parser import read
from yial.types.environment import Environment
from yial.types.nil import Nil
from yial.types.nodes import Expr, ListLiteral, MapLiteral
from yial.types.symbol import Symbol
from yial.types.values import ExternalFn, Func


# -----------------------------------------------------
# Atoms, symbols and literals
# -----------------------------------------------------

def test_self_evaluating_literals(env):
    assert evaluate(1, env) == 1
    assert evaluate(3.14, env) == 3.14
    assert evaluate("hello", env) == "hello"
    assert evaluate(True, env) is True
    assert evaluate(Nil, env) is Nil


def test_symbol_lookup(env):
    env.define("x", 42)
    assert evaluate(Symbol("x"), env) == 42
    with pytest.raises(YialUnboundSymbol):
        evaluate(Symbol("z"), env)


def test_list_literal_evaluates_children_in_order(env):
    node = ListLiteral((1, Expr((Symbol("+"), 1, 2)), "s"))
    assert evaluate(node, env) == (1, 3, "s")


def test_map_literal_evaluates_values_not_keys(env):
    env.define("a", "not a key")
    value = evaluate(MapLiteral((("a", 1), ("b", Expr((Symbol("*"), 2, 3))))), env)
    assert dict(value) == {"a": 1, "b": 6}
    assert list(value) == ["a", "b"]


def test_collection_values_are_immutable(run):
    assert isinstance(run("{1 2}"), tuple)
    m = run("{a: 1}")
    with pytest.raises(TypeError):
        m["a"] = 2


def test_first_error_in_collection_aborts(run):
    with pytest.raises(YialUnboundSymbol):
        run("{1 missing 3}")
    with pytest.raises(YialUnboundSymbol):
        run("{a: 1 b: missing}")


def test_unevaluable_node_is_rejected(env):
    with pytest.raises(YialEvalError):
        evaluate(object(), env)


# -----------------------------------------------------
# Calls
# -----------------------------------------------------

def test_empty_expression(run):
    with pytest.raises(YialSyntaxError, match="cannot evaluate empty expression"):
        run("()")


@pytest.mark.parametrize("source", ["(1 2)", '("f")', "({1 2})", "({:})", "(nil)", "(true 1)"])
def test_not_callable(run, source):
    with pytest.raises(YialNotCallable):
        run(source)


def test_not_callable_is_a_type_error(run):
    with pytest.raises(YialTypeError):
        run("(2.5)")


def test_head_can_be_any_expression(run):
    assert run("((fn (a b) (+ a b)) 3 4)") == 7


def test_unknown_head_symbol(run):
    with pytest.raises(YialUnboundSymbol, match="unknown symbol 'nope'"):
        run("(nope 1)")


def test_fn_returns_func(run):
    f = run("(fn (a b) a)")
    assert isinstance(f, Func)
    assert f.params == ("a", "b")


def test_fn_accepts_brace_parameter_list(run):
    assert run("((fn {a b} (- a b)) 10 4)") == 6


def test_fn_with_no_parameters(run):
    assert run("((fn () 5))") == 5


def test_fn_with_empty_body_returns_nil(run):
    assert run("((fn (a)) 1)") is Nil


def test_fn_body_returns_last_form(run, out):
    assert run('((fn () (echo "first") 2 3))') == 3
    assert out.getvalue() == "first\n"


@pytest.mark.parametrize("source", ["(fn)", "(fn x 1)", "(fn (1) 1)", '(fn ("a") a)', "(fn (a a) a)", "(fn {a: 1} a)"])
def test_fn_syntax_errors(run, source):
    with pytest.raises(YialSyntaxError, match="illegal fn syntax"):
        run(source)


@pytest.mark.parametrize("source", ["((fn (a b) a) 1)", "((fn (a) a))", "((fn (a) a) 1 2)", "((fn () 1) 1)"])
def test_arity_is_enforced(interp, run, source):
    with pytest.raises(YialArityError):
        run(source)
    assert interp.env.depth == 1


def test_arity_checked_before_operands_are_evaluated(run, out):
    with pytest.raises(YialArityError):
        run('((fn (a) a) (echo "x") (echo "y"))')
    assert out.getvalue() == ""


def test_operands_evaluated_left_to_right(run, out):
    run('((fn (a b c) nil) (echo "1") (echo "2") (echo "3"))')
    assert out.getvalue() == "1\n2\n3\n"


def test_earlier_parameters_visible_to_later_operands(run):
    # operands are evaluated inside the callee's new scope
    assert run("((fn (a b) b) 1 a)") == 1


def test_parameters_shadow_globals(run):
    run("(def x 1)")
    assert run("((fn (x) x) 2)") == 2
    assert run("x") == 1


# -----------------------------------------------------
# Scoping
# -----------------------------------------------------

def test_globals_persist_across_evaluations(run):
    run("(def x 10)")
    assert run("x") == 10
    run("(def get-x (fn () x))")
    assert run("(get-x)") == 10


def test_def_inside_function_binds_globally(interp, run):
    assert run("((fn (a) (def z a)) 4)") == 4
    assert run("z") == 4
    assert interp.env.depth == 1


def test_dynamic_scope_callee_sees_caller_bindings(run):
    run("(def show (fn () y))")
    run("(def caller (fn (y) (show)))")
    assert run("(caller 5)") == 5
    with pytest.raises(YialUnboundSymbol):
        run("(show)")


def test_functions_do_not_capture_defining_scope(run):
    run("(def make (fn (n) (fn () n)))")
    run("(def f (make 1))")
    with pytest.raises(YialUnboundSymbol):
        run("(f)")
    assert run("((fn (n) (f)) 7)") == 7


def test_recursion_through_global_binding(run):
    run("(def count (fn (n) (if n (+ 1 (count (- n 1))) 0)))")
    assert run("(count 10)") == 10


# -----------------------------------------------------
# Scope balance and fault injection
# -----------------------------------------------------

class CountingEnvironment(Environment):
    __slots__ = ("entered", "exited")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.entered = 0
        self.exited = 0

    def enter(self):
        self.entered += 1
        super().enter()

    def exit(self):
        self.exited += 1
        super().exit()


def _boom(args):
    if args and args[0]:
        raise ValueError("injected failure")
    return Nil


@pytest.mark.parametrize(
    "program",
    [
        "((fn (a) a) 1)",
        "(def f (fn (x) (boom x) x)) (f 0)",
        "(def f (fn (x) (boom x) x)) (f 1)",
        "(def f (fn (x) (boom x) x)) (def g (fn (x) (f x) x)) (g 1)",
        "(def g (fn (x) ((fn (y) (missing y)) x))) (g 1)",
        "((fn (a b) a) 1 (boom 1))",
        "((fn (a) a) 1 2)",
        "(def loop (fn (n) (loop n))) (loop 1)",
    ]
)
def test_enter_and_exit_always_balance(program):
    env = CountingEnvironment(max_depth=60)
    register(env)
    env.define_global("boom", ExternalFn("boom", _boom))
    try:
        for form in read(program):
            evaluate(form, env)
    except YialEvalError:
        pass
    assert env.entered == env.exited
    assert env.depth == 1
    assert env.eval_depth == 0


def test_native_failure_is_wrapped(interp, run):
    interp.register_native("boom", _boom)
    with pytest.raises(YialNativeError) as excinfo:
        run("((fn (x) (boom x)) 1)")
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert interp.env.depth == 1


# -----------------------------------------------------
# Recursion limit
# -----------------------------------------------------

def test_runaway_recursion_raises_recursion_error():
    interp = Interpreter(max_depth=50)
    interp.eval_source("(def loop (fn (n) (loop n)))")
    with pytest.raises(YialRecursionError):
        interp.eval_source("(loop 1)")
    assert interp.env.depth == 1
    assert interp.env.eval_depth == 0
    assert interp.eval_source("(+ 1 2)") == [3]


def test_deeply_nested_expression_hits_limit():
    source = "(+ 1 " * 30 + "0" + ")" * 30
    with pytest.raises(YialRecursionError):
        Interpreter(max_depth=20).eval_source(source)
    assert Interpreter(max_depth=200).eval_source(source) == [30]


def test_default_limit_comes_from_config(monkeypatch):
    monkeypatch.setenv("YIAL_MAX_EVAL_DEPTH", "7")
    assert Interpreter().env.max_depth == 7
    assert Interpreter(max_depth=9).env.max_depth == 9


def test_recursion_error_is_an_eval_error():
    assert issubclass(YialRecursionError, YialEvalError)


def test_default_limit_allows_deep_recursion(monkeypatch):
    monkeypatch.delenv("YIAL_MAX_EVAL_DEPTH", raising=False)
    interp = Interpreter()
    assert interp.env.max_depth == config.DEFAULT_MAX_EVAL_DEPTH
    interp.eval_source("(def count (fn (n) (if n (+ 1 (count (- n 1))) 0)))")
    assert interp.eval_source("(count 1000)") == [1000]
    assert interp.env.depth == 1


def test_interpreter_raises_python_recursion_limit(monkeypatch):
    raised = []
    monkeypatch.setattr(sys, "getrecursionlimit", lambda: 5000)
    monkeypatch.setattr(sys, "setrecursionlimit", raised.append)
    Interpreter(max_depth=2000)
    Interpreter(max_depth=10)
    Interpreter(max_depth=10 ** 9)
    assert raised == [2000 * FRAMES_PER_LEVEL + FRAME_HEADROOM, MAX_RECURSION_LIMIT]
