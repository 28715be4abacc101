from io import StringIO

from rich.console import Console

from commandment import Command, Reporter, RootCommand
from commandment.parser import Argument, Option
from commandment.themes import get_theme


def make_reporter():
    def console():
        return Console(file=StringIO(), width=200, theme=get_theme(), color_system=None)

    return Reporter(console(), console())


def build_tree():
    root = RootCommand("app", "Project tool", help_epilog="See the docs for more.")
    root.add_option(Option("--verbose", "-v", type=bool, description="Chatty output").as_global())
    build = (
        Command("build", "Compile sources", aliases=["b"])
        .add_argument(Argument("path", description="Source directory"))
        .add_argument(Argument("extra").zero_or_more_args())
        .add_option(Option("--jobs", "-j", type=int, description="Parallel jobs"))
    )
    root.add_subcommand(build, Command("secret", hidden=True))
    return root, build


def test_usage():
    root, build = build_tree()
    reporter = make_reporter()
    assert reporter.get_usage(root) == "usage: app [options] [command]"
    assert reporter.get_usage(build) == "usage: app build [options] <path> [<extra>...]"


def test_usage_hides_command_slot_when_every_subcommand_is_hidden():
    root = RootCommand("app")
    root.add_subcommand(Command("internal", hidden=True))
    assert make_reporter().get_usage(root) == "usage: app [options]"


def test_help_sections():
    root, build = build_tree()
    lines = make_reporter().format_help(build)
    assert lines[0] == "usage: app build [options] <path> [<extra>...]"
    assert lines[2] == "Compile sources"
    assert "Arguments:" in lines
    assert "Options:" in lines
    assert "Commands:" not in lines
    text = "\n".join(lines)
    assert "<path>" in text and "Source directory" in text
    assert "-j, --jobs <JOBS>" in text
    assert "-v, --verbose" in text
    assert "-h, --help" in text


def test_root_help_lists_visible_commands():
    root, _ = build_tree()
    lines = make_reporter().format_help(root)
    text = "\n".join(lines)
    assert "Commands:" in lines
    assert "build, b" in text
    assert "secret" not in text
    assert lines[-1] == "See the docs for more."


def test_help_columns_are_aligned():
    root, build = build_tree()
    lines = make_reporter().format_help(build)
    start = lines.index("Options:") + 1
    option_lines = [line for line in lines[start:] if line.startswith("  ")]
    columns = {line.index(description) for line, description in zip(
        option_lines, ["Show this help message and exit.", "Parallel jobs", "Chatty output"]
    )}
    assert len(columns) == 1


def test_render_help_escapes_markup():
    reporter = make_reporter()
    command = RootCommand("app", "Use [bold] literally")
    reporter.render_help(command)
    assert "Use [bold] literally" in reporter.console.file.getvalue()


def test_report_errors():
    reporter = make_reporter()
    root = RootCommand("app").add_argument(Argument("path"))
    reporter.report_errors(root.parse(["a", "b"]))
    text = reporter.error_console.file.getvalue()
    assert "❌ Unrecognized command or argument 'b'" in text
    assert text.rstrip().endswith("usage: app [options] <path>")
    assert reporter.console.file.getvalue() == ""


def test_print_version():
    reporter = make_reporter()
    reporter.print_version(None)
    assert reporter.console.file.getvalue().strip() == "unknown"
