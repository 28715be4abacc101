# Commandment Command-Line Toolkit - MIT Licensed
"""
Formats parse errors, usage synopses and help text.

Normal output (help, version) goes to `console`; errors and usage after a
failure go to `error_console`. Both default to the shared instances in
`commandment.console`, and tests can pass consoles that write to a buffer:

    buffer = StringIO()
    reporter = Reporter(error_console=Console(file=buffer, width=120))
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from commandment.console import console as default_console
from commandment.console import error_console as default_error_console

if TYPE_CHECKING:
    from commandment.command import Command
    from commandment.parser.parse_result import ParseResult


def _columns(rows: list[tuple[str, str]], indent: int = 2, gap: int = 2) -> list[str]:
    if not rows:
        return []
    width = max(len(left) for left, _ in rows)
    lines = []
    for left, right in rows:
        if right:
            lines.append(f"{' ' * indent}{left.ljust(width + gap)}{right}")
        else:
            lines.append(f"{' ' * indent}{left}")
    return lines


class Reporter:
    """Writes diagnostics and help for a command tree."""

    def __init__(
        self,
        console: Console | None = None,
        error_console: Console | None = None,
    ) -> None:
        self.console = console or default_console
        self.error_console = error_console or default_error_console

    def get_usage(self, command: Command) -> str:
        """Return the plain synopsis, e.g. `usage: app build [options] <path> [command]`."""
        parts = ["usage:", *(node.name for node in command.path)]
        if command.visible_options():
            parts.append("[options]")
        parts.extend(argument.get_usage_text() for argument in command.arguments)
        if any(not sub.hidden for sub in command.subcommands):
            parts.append("[command]")
        return " ".join(parts)

    def report_errors(self, result: ParseResult) -> None:
        """Print every error of a failed parse, then the usage of the matched command."""
        for error in result.errors:
            self.error_console.print(f"[error]❌ {escape(error.message)}[/]", highlight=False)
        self.error_console.print(
            escape(self.get_usage(result.command)), style="usage", highlight=False
        )

    def report_no_action(self, command: Command) -> None:
        if command.subcommands:
            message = f"'{command.full_name}' requires a command."
        else:
            message = f"No action is bound to '{command.full_name}'."
        self.error_console.print(f"[hint]{escape(message)}[/]", highlight=False)
        self.error_console.print(
            escape(self.get_usage(command)), style="usage", highlight=False
        )

    def print_version(self, version: str | None) -> None:
        self.console.print(escape(version or "unknown"), highlight=False)

    def format_help(self, command: Command) -> list[str]:
        lines = [self.get_usage(command)]
        if command.description:
            lines.extend(["", command.description])

        arguments = [
            (argument.get_usage_text(), argument.description)
            for argument in command.arguments
        ]
        if arguments:
            lines.extend(["", "Arguments:", *_columns(arguments)])

        options = [
            (option.get_help_text(), option.description)
            for option in command.visible_options()
        ]
        if options:
            lines.extend(["", "Options:", *_columns(options)])

        subcommands = [
            (", ".join(sub.names), sub.description)
            for sub in command.subcommands
            if not sub.hidden
        ]
        if subcommands:
            lines.extend(["", "Commands:", *_columns(subcommands)])

        if command.help_epilog:
            lines.extend(["", command.help_epilog])
        return lines

    def render_help(self, command: Command) -> None:
        """Print usage, description, arguments, options and subcommands."""
        headings = {"Arguments:", "Options:", "Commands:"}
        for index, line in enumerate(self.format_help(command)):
            if index == 0:
                self.console.print(escape(line), style="usage", highlight=False)
            elif line in headings:
                self.console.print(line, style="heading", highlight=False)
            else:
                self.console.print(escape(line), highlight=False)
