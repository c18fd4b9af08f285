import pytest

from synquote.debug_utils.pprint import pformat, to_source
from synquote.reader.parser import read_one
from synquote.types.keyword import Keyword
from synquote.types.symbol import Symbol


@pytest.mark.parametrize(
    "node, text",
    [
        (None, "nil"),
        (True, "true"),
        (3, "3"),
        ("a\"b\n", '"a\\"b\\n"'),
        (Keyword("k"), ":k"),
        (Symbol("debug", "synquote.log"), "synquote.log/debug"),
        ([Symbol("f"), [1, 2], []], "(f (1 2) ())"),
        ([Symbol("quote"), Symbol("x")], "'x"),
        ([Symbol("syntax-quote"), [Symbol("a"), [Symbol("unquote-splicing"), Symbol("b")]]], "`(a ~@b)"),
    ],
)
def test_to_source(node, text):
    assert to_source(node) == text


def test_pformat_short_forms_stay_on_one_line():
    assert pformat(read_one("(f 1 2)")) == "(f 1 2)"


def test_pformat_breaks_long_forms():
    form = read_one(
        "(try (compute-something-rather-long 1 2 3) "
        "(catch e (handle-the-error-with-a-long-name e \"a long message string\")))"
    )
    text = pformat(form, {"max_line_length": 40, "indent": 2})
    lines = text.splitlines()
    assert lines[0] == "(try"
    assert lines[1] == "  (compute-something-rather-long 1 2 3)"
    assert lines[2].startswith("  (catch")
    assert read_one(text) == form
