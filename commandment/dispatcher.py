# Commandment Command-Line Toolkit - MIT Licensed
"""
Invokes the action bound to a parsed command.

Resolution:
- Help requested: help for the matched command is printed, exit code 0.
- Version requested: the root's version is printed, exit code 0.
- Parse failed: errors and usage go to the error console, exit code 2.
- Otherwise the matched path is walked from the deepest command up to the
  root and the first bound action runs. If no command on the path has an
  action, the usage is printed to the error console and the exit code is 1.

Each invocation runs inside an `ExecutionContext` with the invoked command's
lifecycle hooks. The blocking `invoke` calls a sync action directly, with no
event loop around it. Cancellation is cooperative: an async action receives the
`CancellationToken` and must observe it. A token that is already cancelled
prevents the invocation, and a `CancelSignal` raised by the action maps to
exit code 130.
"""
from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from commandment.action import CommandAction, SyncAction
from commandment.cancellation import CancellationToken
from commandment.context import ExecutionContext
from commandment.hook_manager import HookType
from commandment.logger import logger
from commandment.reporter import Reporter
from commandment.signals import CancelSignal
from commandment.utils import run_coroutine

if TYPE_CHECKING:
    from commandment.command import Command
    from commandment.parser.parse_result import ParseResult


class ExitCode(IntEnum):
    """Process exit codes produced by the dispatcher."""

    SUCCESS = 0
    NO_ACTION = 1
    PARSE_ERROR = 2
    CANCELLED = 130


class Dispatcher:
    """Turns a `ParseResult` into an exit code."""

    def __init__(self, reporter: Reporter | None = None) -> None:
        self.reporter = reporter

    def _reporter_for(self, result: ParseResult) -> Reporter:
        if self.reporter is not None:
            return self.reporter
        reporter = getattr(result.root, "reporter", None)
        return reporter if isinstance(reporter, Reporter) else Reporter()

    @staticmethod
    def resolve(result: ParseResult) -> tuple[Command, CommandAction] | None:
        """Return the deepest command on the path with an action, and that action."""
        for command in reversed(result.command_path):
            if command.action is not None:
                return command, command.action
        return None

    def _preflight(self, result: ParseResult) -> int | None:
        reporter = self._reporter_for(result)
        if result.help_requested:
            reporter.render_help(result.command)
            return ExitCode.SUCCESS
        if result.version_requested:
            reporter.print_version(getattr(result.root, "version", None))
            return ExitCode.SUCCESS
        if not result.succeeded:
            logger.debug("[Dispatcher] Parse failed with %d error(s)", len(result.errors))
            reporter.report_errors(result)
            return ExitCode.PARSE_ERROR
        return None

    def _no_action(self, result: ParseResult) -> int:
        logger.debug("[Dispatcher] No action on '%s'", result.command.full_name)
        self._reporter_for(result).report_no_action(result.command)
        return int(ExitCode.NO_ACTION)

    def invoke(self, result: ParseResult) -> int:
        """
        Run the action to completion and return its exit code.

        A sync action is called on this thread, outside any event loop. An
        async action gets a fresh loop and token through `run_coroutine`.
        """
        code = self._preflight(result)
        if code is not None:
            return int(code)

        target = self.resolve(result)
        if target is None:
            return self._no_action(result)

        command, action = target
        if isinstance(action, SyncAction):
            return self._run_sync(command, action, result)
        return run_coroutine(self._run(command, action, result, CancellationToken()))

    async def invoke_async(
        self,
        result: ParseResult,
        cancellation_token: CancellationToken | None = None,
    ) -> int:
        """Run the action with cooperative cancellation and return its exit code."""
        token = cancellation_token or CancellationToken()
        code = self._preflight(result)
        if code is not None:
            return int(code)

        target = self.resolve(result)
        if target is None:
            return self._no_action(result)

        command, action = target
        if token.is_cancelled:
            logger.info("[%s] Cancelled before invocation.", command.full_name)
            return int(ExitCode.CANCELLED)
        return await self._run(command, action, result, token)

    @staticmethod
    def _context(
        command: Command, action: CommandAction, result: ParseResult
    ) -> ExecutionContext:
        context = ExecutionContext(
            name=command.full_name,
            action=action,
            parse_result=result,
            is_async=action.is_async,
        )
        context.start_timer()
        return context

    def _run_sync(self, command: Command, action: SyncAction, result: ParseResult) -> int:
        context = self._context(command, action, result)
        try:
            command.hooks.trigger_sync(HookType.BEFORE, context)
            context.result = action.call(result)
            command.hooks.trigger_sync(HookType.ON_SUCCESS, context)
            return context.result
        except CancelSignal as signal:
            logger.info("[%s] %s", command.full_name, signal)
            context.extra["cancelled"] = True
            context.result = int(ExitCode.CANCELLED)
            return context.result
        except Exception as error:
            context.exception = error
            command.hooks.trigger_sync(HookType.ON_ERROR, context)
            raise error
        finally:
            context.stop_timer()
            command.hooks.trigger_sync(HookType.AFTER, context)
            command.hooks.trigger_sync(HookType.ON_TEARDOWN, context)
            logger.debug("[Dispatcher] %s", context.to_log_line())

    async def _run(
        self,
        command: Command,
        action: CommandAction,
        result: ParseResult,
        token: CancellationToken,
    ) -> int:
        context = self._context(command, action, result)
        try:
            await command.hooks.trigger(HookType.BEFORE, context)
            context.result = await action(result, token)
            await command.hooks.trigger(HookType.ON_SUCCESS, context)
            return context.result
        except CancelSignal as signal:
            logger.info("[%s] %s", command.full_name, signal)
            context.extra["cancelled"] = True
            context.result = int(ExitCode.CANCELLED)
            return context.result
        except Exception as error:
            context.exception = error
            await command.hooks.trigger(HookType.ON_ERROR, context)
            raise error
        finally:
            context.stop_timer()
            await command.hooks.trigger(HookType.AFTER, context)
            await command.hooks.trigger(HookType.ON_TEARDOWN, context)
            logger.debug("[Dispatcher] %s", context.to_log_line())
