import pytest

from commandment.parser.tokenizer import TokenKind, is_negative_number, tokenize


def shape(tokens):
    return [(token.value, token.kind) for token in tokens]


def test_plain_values():
    tokens = tokenize(["build", "src"])
    assert shape(tokens) == [("build", TokenKind.VALUE), ("src", TokenKind.VALUE)]
    assert [token.position for token in tokens] == [0, 1]


def test_long_option():
    assert shape(tokenize(["--verbose"])) == [("--verbose", TokenKind.OPTION)]


def test_long_option_with_attached_value():
    tokens = tokenize(["--name=value"])
    assert shape(tokens) == [("--name", TokenKind.OPTION), ("value", TokenKind.VALUE)]
    assert tokens[1].attached
    assert tokens[0].position == tokens[1].position == 0


def test_attached_value_keeps_later_equals_signs():
    tokens = tokenize(["--env=KEY=VALUE"])
    assert tokens[1].value == "KEY=VALUE"


def test_empty_attached_value():
    tokens = tokenize(["--name="])
    assert shape(tokens) == [("--name", TokenKind.OPTION), ("", TokenKind.VALUE)]
    assert tokens[1].attached


def test_short_option_with_attached_value():
    tokens = tokenize(["-n=5"])
    assert shape(tokens) == [("-n", TokenKind.OPTION), ("5", TokenKind.VALUE)]
    assert tokens[1].attached


def test_short_group():
    assert shape(tokenize(["-abc"])) == [("-abc", TokenKind.SHORT_GROUP)]


def test_single_short_option():
    assert shape(tokenize(["-v"])) == [("-v", TokenKind.OPTION)]


@pytest.mark.parametrize("text", ["-5", "-1.5", "-0", "-.5", "-1e5", "-2E-3"])
def test_negative_numbers_are_values(text):
    assert is_negative_number(text)
    assert shape(tokenize([text])) == [(text, TokenKind.VALUE)]


def test_lone_dash_is_value():
    assert shape(tokenize(["-"])) == [("-", TokenKind.VALUE)]


def test_separator_escapes_everything_after_it():
    tokens = tokenize(["a", "--", "--flag", "-x", "--"])
    assert shape(tokens) == [
        ("a", TokenKind.VALUE),
        ("--", TokenKind.SEPARATOR),
        ("--flag", TokenKind.VALUE),
        ("-x", TokenKind.VALUE),
        ("--", TokenKind.VALUE),
    ]
    assert [token.escaped for token in tokens] == [False, False, True, True, True]
    assert [token.position for token in tokens] == [0, 1, 2, 3, 4]


def test_empty_input():
    assert tokenize([]) == []
