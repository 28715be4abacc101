import pytest

from commandment import RootCommand
from commandment.parser import Argument, ErrorKind, Option


def parse(symbol, argv):
    root = RootCommand("app")
    if isinstance(symbol, Option):
        root.add_option(symbol)
    else:
        root.add_argument(symbol)
    return root.parse(argv)


def test_required_option_missing_reports_once():
    result = parse(Option("--name").required().greater_than(0), [])
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.kind is ErrorKind.REQUIRED_MISSING
    assert error.message == "Option '--name' is required."
    assert error.symbol_name == "--name"


def test_default_satisfies_required():
    result = parse(Option("--name").required().with_default_value("x"), [])
    assert result.succeeded
    assert result["name"] == "x"


def test_default_factory_is_lazy_and_called_once():
    calls = []

    def factory(symbol_result):
        calls.append(symbol_result.symbol.name)
        return "computed"

    option = Option("--name").with_default_factory(factory)
    assert parse(option, ["--name", "given"])["name"] == "given"
    assert calls == []

    option = Option("--name").with_default_factory(factory)
    assert parse(option, [])["name"] == "computed"
    assert calls == ["--name"]


def test_default_factory_error_is_a_parse_error():
    def factory(symbol_result):
        symbol_result.add_error("no default available")

    result = parse(Option("--name").with_default_factory(factory), [])
    assert [error.kind for error in result.errors] == [ErrorKind.PARSE]
    assert "name" not in result


def test_custom_parser():
    def parse_pair(symbol_result):
        left, right = symbol_result.values[0].split(":")
        return int(left), int(right)

    option = Option("--pair").with_parser(parse_pair)
    assert parse(option, ["--pair", "1:2"])["pair"] == (1, 2)


def test_custom_parser_value_error_becomes_parse_error():
    def parse_pair(symbol_result):
        raise ValueError("expected LEFT:RIGHT")

    result = parse(Option("--pair").with_parser(parse_pair), ["--pair", "12"])
    assert [(error.kind, error.message) for error in result.errors] == [
        (ErrorKind.PARSE, "expected LEFT:RIGHT")
    ]
    assert result.errors[0].position == 1


def test_custom_parser_add_error_halts_validators():
    validated = []

    def parse_size(symbol_result):
        symbol_result.add_error("size must end in K or M")

    option = (
        Option("--size")
        .with_parser(parse_size)
        .with_validator(lambda symbol_result: validated.append(True))
    )
    result = parse(option, ["--size", "12"])
    assert [error.kind for error in result.errors] == [ErrorKind.PARSE]
    assert validated == []


def test_custom_parser_sees_all_tokens():
    option = Option("--nums").one_or_more_args().with_parser(
        lambda symbol_result: sum(int(value) for value in symbol_result.values)
    )
    assert parse(option, ["--nums", "1", "2", "3"])["nums"] == 6


def test_all_validators_run_and_accumulate():
    option = (
        Option("--name")
        .with_validator(lambda symbol_result: "first problem")
        .with_validator(lambda symbol_result: ["second problem", "third problem"])
        .with_validator(lambda symbol_result: None)
    )
    result = parse(option, ["--name", "x"])
    assert [error.message for error in result.errors] == [
        "first problem",
        "second problem",
        "third problem",
    ]
    assert all(error.kind is ErrorKind.VALIDATION for error in result.errors)
    assert "name" not in result


def test_validator_may_raise_value_error():
    def reject(symbol_result):
        raise ValueError("not allowed")

    result = parse(Option("--name").with_validator(reject), ["--name", "x"])
    assert [error.message for error in result.errors] == ["not allowed"]


def test_validator_sees_resolved_value():
    seen = []
    option = Option("--count", type=int).with_validator(
        lambda symbol_result: seen.append(symbol_result.get_value())
    )
    parse(option, ["--count", "4"])
    assert seen == [4]


def test_validators_skip_unset_symbols():
    called = []
    option = Option("--name").with_validator(lambda symbol_result: called.append(1))
    assert parse(option, []).succeeded
    assert called == []


def test_validators_run_on_default_values():
    option = (
        Option("--mode")
        .with_default_value("fast")
        .accept_only_from_among("safe", "slow")
    )
    result = parse(option, [])
    assert [error.kind for error in result.errors] == [ErrorKind.VALIDATION]


def test_accept_only_from_among():
    argument = Argument("level", type=int).accept_only_from_among(1, 2, 3)
    assert parse(argument, ["2"])["level"] == 2

    argument = Argument("level", type=int).accept_only_from_among(1, 2, 3)
    result = parse(argument, ["5"])
    assert result.errors[0].message == (
        "Argument '5' not recognized for level. Must be one of:\n\t'1'\n\t'2'\n\t'3'"
    )


def test_accept_only_from_among_checks_each_value():
    option = Option("--tag").one_or_more_args().accept_only_from_among("a", "b")
    result = parse(option, ["--tag", "a", "z", "y"])
    assert len(result.errors) == 2


def test_arity_error_halts_before_parsing():
    parser_calls = []
    option = Option("--pair").with_arity(2).with_parser(
        lambda symbol_result: parser_calls.append(1)
    )
    result = parse(option, ["--pair", "1"])
    assert [error.kind for error in result.errors] == [ErrorKind.ARITY]
    assert parser_calls == []


@pytest.mark.parametrize("argv", [["--n", "abc"], ["--n", "1", "--n", "x"]])
def test_every_bad_token_is_reported(argv):
    option = Option("--n", type=int).zero_or_more_args()
    result = parse(option, argv)
    assert [error.kind for error in result.errors] == [ErrorKind.PARSE]
