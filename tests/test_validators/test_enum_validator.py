from enum import Enum

import pytest

from commandment import RootCommand
from commandment.parser import Argument, ErrorKind, Option


class Color(Enum):
    red = "r"
    green = "g"
    blue = "b"


def color_option(**kwargs):
    return Option("--color").valid_enum_variant(Color, **kwargs)


def parse_option(option, argv):
    return RootCommand("app").add_option(option).parse(argv)


def test_exact_name_passes():
    assert parse_option(color_option(), ["--color", "green"])["color"] == "green"


def test_case_matters_by_default():
    result = parse_option(color_option(), ["--color", "GREEN"])
    assert [error.kind for error in result.errors] == [ErrorKind.VALIDATION]
    assert result.errors[0].message == "'GREEN' is not a valid value for option '--color'"


@pytest.mark.parametrize("value", ["GREEN", "Green", "green"])
def test_ignore_case(value):
    assert parse_option(color_option(ignore_case=True), ["--color", value]).succeeded


def test_variants_listed_on_error():
    result = parse_option(color_option(show_variants_on_error=True), ["--color", "purple"])
    assert result.errors[0].message == (
        "'purple' is not a valid value for option '--color'\n"
        "\tValid options are: [red, green, blue]"
    )


def test_variants_listed_for_arguments():
    root = RootCommand("app").add_argument(
        Argument("level").valid_enum_variant(
            ["Debug", "Info"], ignore_case=True, show_variants_on_error=True
        )
    )
    assert root.parse(["INFO"]).succeeded
    result = root.parse(["trace"])
    assert result.errors[0].message == (
        "'trace' is not a valid value for argument 'level'\n"
        "\tValid arguments are: [debug, info]"
    )


def test_enum_typed_values():
    option = Option("--color", type=Color).valid_enum_variant(Color)
    result = parse_option(option, ["--color", "blue"])
    assert result.succeeded
    assert result["color"] is Color.blue


def test_every_value_is_checked():
    option = Option("--colors").one_or_more_args().valid_enum_variant(Color)
    result = parse_option(option, ["--colors", "red", "cyan", "blue", "pink"])
    assert len(result.errors) == 2
