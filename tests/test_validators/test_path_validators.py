from commandment import RootCommand
from commandment.parser import Argument, ErrorKind, Option


def test_valid_file_path(tmp_path):
    existing = tmp_path / "config.yaml"
    existing.write_text("name: app\n")
    root = RootCommand("app").add_argument(Argument("path").valid_file_path())

    assert root.parse([str(existing)]).succeeded

    result = root.parse([str(tmp_path / "missing.yaml")])
    assert [error.kind for error in result.errors] == [ErrorKind.VALIDATION]
    assert result.errors[0].message == f"Path '{tmp_path / 'missing.yaml'}' doesn't exist"


def test_directory_is_not_a_file(tmp_path):
    root = RootCommand("app").add_argument(Argument("path").valid_file_path())
    assert not root.parse([str(tmp_path)]).succeeded


def test_valid_directory_path(tmp_path):
    root = RootCommand("app").add_option(Option("--out").valid_directory_path())
    assert root.parse(["--out", str(tmp_path)]).succeeded

    file = tmp_path / "file.txt"
    file.write_text("x")
    result = root.parse(["--out", str(file)])
    assert result.errors[0].symbol_name == "--out"


def test_path_validators_check_every_value(tmp_path):
    first = tmp_path / "a.txt"
    first.write_text("a")
    root = RootCommand("app").add_argument(
        Argument("files").one_or_more_args().valid_file_path()
    )
    result = root.parse([str(first), "nope-1", "nope-2"])
    assert [error.message for error in result.errors] == [
        "Path 'nope-1' doesn't exist",
        "Path 'nope-2' doesn't exist",
    ]


def test_unset_optional_path_is_not_checked():
    root = RootCommand("app").add_option(Option("--out").valid_directory_path())
    assert root.parse([]).succeeded
