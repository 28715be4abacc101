# Commandment Command-Line Toolkit - MIT Licensed
"""
Defines `RootCommand`, the top of a command tree and the process entry point.

    root = RootCommand(description="Project tool", version="1.2.0")
    root.add_subcommand(build)
    root.run()  # parses sys.argv[1:], dispatches, and exits

The root is named after the running program unless a name is given.
"""
from __future__ import annotations

import asyncio
import signal
import sys
from typing import Any, NoReturn, Sequence

from pydantic import Field, PrivateAttr

from commandment.cancellation import CancellationToken
from commandment.command import Command
from commandment.dispatcher import Dispatcher, ExitCode
from commandment.logger import logger
from commandment.parser.parse_result import ParseResult
from commandment.parser.parser import Parser
from commandment.parser.symbol import Option
from commandment.reporter import Reporter
from commandment.utils import get_program_name


class RootCommand(Command):
    """
    The root of a command tree.

    Attributes:
        version (str | None): When set, adds a `--version` option.
        reporter (Reporter): Writes help, version, usage and errors.
    """

    version: str | None = None
    reporter: Reporter = Field(default_factory=Reporter)

    _version_option: Option | None = PrivateAttr(default=None)

    def __init__(self, name: str | None = None, description: str = "", **kwargs: Any) -> None:
        super().__init__(name or get_program_name(), description, **kwargs)

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.version is not None:
            self._version_option = Option(
                "--version", type=bool, description="Show version information and exit."
            )
            self.add_option(self._version_option)

    @property
    def version_option(self) -> Option | None:
        return self._version_option

    def parse(self, argv: Sequence[str] | None = None) -> ParseResult:
        return Parser(self).parse(argv)

    def invoke(self, argv: Sequence[str] | None = None) -> int:
        """Parse `argv` and run the matched action to completion."""
        return Dispatcher(self.reporter).invoke(self.parse(argv))

    async def invoke_async(
        self,
        argv: Sequence[str] | None = None,
        cancellation_token: CancellationToken | None = None,
        handle_signals: bool = False,
    ) -> int:
        """
        Parse `argv` and run the matched action with cooperative cancellation.

        With `handle_signals`, SIGINT and SIGTERM cancel the token while the
        action runs, where the event loop supports signal handlers.
        """
        result = self.parse(argv)
        token = cancellation_token or CancellationToken()
        if not handle_signals:
            return await Dispatcher(self.reporter).invoke_async(result, token)
        return await self._invoke_with_signals(result, token)

    async def _invoke_with_signals(self, result: ParseResult, token: CancellationToken) -> int:
        loop = asyncio.get_running_loop()
        installed: list[signal.Signals] = []
        for signum in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(signum, token.cancel)
                installed.append(signum)
            except (NotImplementedError, RuntimeError, ValueError):
                logger.debug("Signal handler for %s is not supported here", signum.name)
        try:
            return await Dispatcher(self.reporter).invoke_async(result, token)
        finally:
            for signum in installed:
                loop.remove_signal_handler(signum)

    def run(self, argv: Sequence[str] | None = None) -> NoReturn:
        """
        Parse, dispatch, and exit the process with the resulting code.

        An async action runs with SIGINT and SIGTERM wired to its token. A sync
        action runs on this thread with the default SIGINT behaviour, so Ctrl-C
        interrupts it and exits with `ExitCode.CANCELLED`.
        """
        result = self.parse(argv)
        target = Dispatcher.resolve(result)
        try:
            if target is not None and target[1].is_async:
                code = asyncio.run(self._invoke_with_signals(result, CancellationToken()))
            else:
                code = Dispatcher(self.reporter).invoke(result)
        except KeyboardInterrupt:
            logger.info("[%s] Interrupted.", self.name)
            code = ExitCode.CANCELLED
        sys.exit(int(code))
