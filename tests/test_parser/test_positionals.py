import pytest

from commandment import RootCommand
from commandment.parser import Argument, ErrorKind, Option
from commandment.parser.parser import distribute


@pytest.mark.parametrize(
    "arguments, count, expected",
    [
        ([Argument("a"), Argument("b")], 2, [1, 1]),
        ([Argument("a"), Argument("b")], 1, [1, 0]),
        ([Argument("a").one_or_more_args(), Argument("b")], 3, [2, 1]),
        ([Argument("a").zero_or_one_arg(), Argument("b")], 1, [0, 1]),
        ([Argument("a").zero_or_one_arg(), Argument("b")], 2, [1, 1]),
        ([Argument("a").zero_or_more_args(), Argument("b").with_arity(2)], 5, [3, 2]),
        ([Argument("a"), Argument("b")], 3, [1, 1]),
        ([], 2, []),
    ],
)
def test_distribute(arguments, count, expected):
    assert distribute(arguments, count) == expected


def test_variadic_argument_leaves_room_for_later_arguments():
    root = RootCommand("app").add_argument(
        Argument("files").one_or_more_args(), Argument("dest")
    )
    result = root.parse(["a", "b", "c"])
    assert result.succeeded
    assert result["files"] == ["a", "b"]
    assert result["dest"] == "c"


def test_optional_trailing_argument():
    root = RootCommand("app").add_argument(Argument("src"), Argument("dst").zero_or_one_arg())
    result = root.parse(["x"])
    assert result.succeeded
    assert result["src"] == "x"
    assert "dst" not in result


def test_too_few_values_for_fixed_arity():
    root = RootCommand("app").add_argument(Argument("pair").with_arity(2))
    result = root.parse(["one"])
    assert [error.kind for error in result.errors] == [ErrorKind.ARITY]
    assert result.errors[0].message == "Argument 'pair' expects 2 value(s), got 1"


def test_too_many_values():
    root = RootCommand("app").add_argument(Argument("a"), Argument("b"))
    result = root.parse(["1", "2", "3"])
    assert [error.message for error in result.errors] == [
        "Unrecognized command or argument '3'"
    ]
    assert result.errors[0].position == 2


def test_options_may_interleave_with_positionals():
    root = (
        RootCommand("app")
        .add_argument(Argument("a"), Argument("b"))
        .add_option(Option("--flag", type=bool))
    )
    result = root.parse(["x", "--flag", "y"])
    assert result.succeeded
    assert (result["a"], result["flag"], result["b"]) == ("x", True, "y")


def test_required_argument_missing_names_the_command():
    result = RootCommand("app").add_argument(Argument("path")).parse([])
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.kind is ErrorKind.REQUIRED_MISSING
    assert error.symbol_name == "path"
    assert error.message == "Required argument 'path' missing for command 'app'."
