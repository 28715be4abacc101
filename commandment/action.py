# Commandment Command-Line Toolkit - MIT Licensed
"""
Wrappers for the functions bound to commands.

- `SyncAction`: `function(parse_result) -> int | None`
- `AsyncAction`: `async function(parse_result, cancellation_token) -> int | None`

The blocking dispatch path calls a `SyncAction` directly, outside any event
loop. Otherwise both are awaited the same way. A `None` return means
success (exit code 0); any other non-integer return is an `InvalidActionError`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable

from commandment.exceptions import InvalidActionError
from commandment.utils import is_coroutine

if TYPE_CHECKING:
    from commandment.cancellation import CancellationToken
    from commandment.parser.parse_result import ParseResult


def to_exit_code(value: Any, name: str) -> int:
    """Normalize an action's return value to a process exit code."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidActionError(
            f"Action '{name}' must return an int exit code or None, "
            f"got {type(value).__name__}: {value!r}"
        )
    return int(value)


class CommandAction:
    """Base wrapper around the function bound to a command."""

    is_async: bool = False

    def __init__(self, function: Callable[..., Any]) -> None:
        if not callable(function):
            raise InvalidActionError(f"Action must be callable, got {function!r}")
        self.function = function

    @property
    def name(self) -> str:
        return getattr(self.function, "__name__", repr(self.function))

    async def __call__(
        self, parse_result: ParseResult, cancellation_token: CancellationToken
    ) -> int:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.name})"

    def __repr__(self) -> str:
        return str(self)


class SyncAction(CommandAction):
    """Runs a plain function with the parse result."""

    def __init__(self, function: Callable[[ParseResult], int | None]) -> None:
        if is_coroutine(function):
            raise InvalidActionError(
                f"'{getattr(function, '__name__', function)}' is a coroutine function; "
                "bind it with with_async_action()"
            )
        super().__init__(function)

    def call(self, parse_result: ParseResult) -> int:
        """Call the function on the current thread and return its exit code."""
        return to_exit_code(self.function(parse_result), self.name)

    async def __call__(
        self, parse_result: ParseResult, cancellation_token: CancellationToken
    ) -> int:
        return self.call(parse_result)


class AsyncAction(CommandAction):
    """Awaits a coroutine function with the parse result and a cancellation token."""

    is_async = True

    def __init__(
        self,
        function: Callable[[ParseResult, CancellationToken], Awaitable[int | None]],
    ) -> None:
        super().__init__(function)

    async def __call__(
        self, parse_result: ParseResult, cancellation_token: CancellationToken
    ) -> int:
        outcome = self.function(parse_result, cancellation_token)
        if not hasattr(outcome, "__await__"):
            raise InvalidActionError(
                f"Async action '{self.name}' must return an awaitable, "
                f"got {type(outcome).__name__}"
            )
        return to_exit_code(await outcome, self.name)
