import pytest

from minish.parser import QuoteState, has_open_quote, quote_state, strip_single_quotes


@pytest.mark.parametrize(
    "line, expected",
    [
        ("plain text", QuoteState.NONE),
        ("'abc", QuoteState.SINGLE),
        ('"abc', QuoteState.DOUBLE),
        ("'abc'", QuoteState.NONE),
        ('"it\'s"', QuoteState.NONE),
        ("'say \"hi'", QuoteState.NONE),
        ('a\\"b', QuoteState.NONE),
    ],
)
def test_quote_state(line, expected):
    assert quote_state(line) is expected


def test_quote_state_respects_limit():
    assert quote_state('"abc"', 2) is QuoteState.DOUBLE
    assert quote_state('"abc"', 5) is QuoteState.NONE
    assert quote_state('"abc"', 0) is QuoteState.NONE


def test_quote_state_rejects_negative_limit():
    with pytest.raises(ValueError):
        quote_state("abc", -1)


def test_has_open_quote():
    assert has_open_quote("echo 'x") is True
    assert has_open_quote("echo 'x'") is False


def test_strip_single_quotes_example():
    assert strip_single_quotes("comma'n'daaa000000comann'dad'cx") == (
        "commandaaa000000comanndadcx"
    )


@pytest.mark.parametrize("text", ["", "no quotes", 'keep "double" ones'])
def test_strip_single_quotes_without_single_quotes_is_identity(text):
    assert strip_single_quotes(text) == text


def test_strip_single_quotes_unterminated_keeps_rest():
    assert strip_single_quotes("ab'cd") == "abcd"


def test_strip_single_quotes_removes_every_quote():
    text = "x'a b'y''z"
    result = strip_single_quotes(text)
    assert "'" not in result
    assert len(result) == len(text) - text.count("'")