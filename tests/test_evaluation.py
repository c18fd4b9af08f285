from fractions import Fraction

import pytest

from synquote.errors import SynquoteNameError, SynquoteSyntaxError, SynquoteThrow
from synquote.types.keyword import Keyword
from synquote.types.symbol import Symbol


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(+ 1 2 3)", 6),
        ("(- 10 4 1)", 5),
        ("(- 3)", -3),
        ("(* 2 3 4)", 24),
        ("(/ 1 4)", Fraction(1, 4)),
        ("(/ 8 4)", 2),
        ("(/ 1.0 4)", 0.25),
        ("(= 1 1 1)", True),
        ("(< 1 2 3)", True),
        ("(max 3 9 2)", 9),
        ("(count (list 1 2 3))", 3),
        ("(first (list 1 2))", 1),
        ("(rest (list 1 2))", [2]),
        ("(concat (list 1) (list 2 3))", [1, 2, 3]),
        ("(range 3)", [0, 1, 2]),
        ("(str \"a\" 1 :k nil)", "a1:k"),
        ("(if nil 1 2)", 2),
        ("(if false 1)", None),
        ("(if 0 1 2)", 1),
        ("(do 1 2 3)", 3),
        ("(let [a 1 b (+ a 1)] (+ a b))", 3),
        ("'(a b)", [Symbol("a"), Symbol("b")]),
        (":k", Keyword("k")),
        ("\"s\"", "s"),
    ]
)
def test_evaluate_expressions(interp, source, expected):
    assert interp.eval(source) == expected


def test_eval_returns_last_form(interp):
    assert interp.eval("1 2 3") == 3


def test_def_binds_in_current_namespace(interp):
    assert interp.eval("(def x 41)") == Symbol("x", "user")
    assert interp.eval("(+ x 1)") == 42
    assert interp.eval("(+ user/x 1)") == 42


def test_def_shadows_referred_name(interp):
    interp.eval("(def count 7)")
    assert interp.eval("count") == 7
    assert interp.eval("(synquote.core/count (list 1))") == 1


def test_unbound_symbol(interp):
    with pytest.raises(SynquoteNameError):
        interp.eval("nope")


def test_let_rejects_qualified_names(interp):
    with pytest.raises(SynquoteSyntaxError):
        interp.eval("(let [user/a 1] 1)")


def test_try_catch_binds_exception(interp):
    result = interp.eval("(try (/ 1 0) (catch e e))")
    assert isinstance(result, ZeroDivisionError)


def test_try_without_error_returns_body_value(interp):
    assert interp.eval("(try 1 (+ 1 1) (catch e 0))") == 2


def test_try_finally_always_runs(interp, out):
    assert interp.eval("(try 1 (finally (println \"cleanup\")))") == 1
    with pytest.raises(ZeroDivisionError):
        interp.eval("(try (/ 1 0) (finally (println \"cleanup\")))")
    assert out.getvalue() == "cleanup\ncleanup\n"


def test_throw_and_catch_value(interp):
    assert interp.eval("(try (throw :oops) (catch e e))") == Keyword("oops")
    with pytest.raises(SynquoteThrow) as err:
        interp.eval("(throw 42)")
    assert err.value.value == 42


def test_println_writes_to_output(interp, out):
    assert interp.eval("(println \"hello\" 1 :k)") is None
    assert out.getvalue() == "hello 1 :k\n"


def test_host_functions(interp):
    interp.define("twice", lambda env, args: args[0] * 2)
    assert interp.eval("(twice 21)") == 42


def test_log_namespace_alias(interp, caplog):
    with caplog.at_level("DEBUG", logger="synquote.log"):
        interp.eval("(log/debug \"value:\" 3)")
    assert "value: 3" in caplog.text


def test_in_ns_and_alias(interp):
    interp.eval("(in-ns 'other)")
    assert interp.namespace == "other"
    interp.eval("(def y 5)")
    interp.eval("(in-ns 'user)")
    interp.eval("(alias 'o 'other)")
    assert interp.eval("o/y") == 5
    assert interp.eval("other/y") == 5
