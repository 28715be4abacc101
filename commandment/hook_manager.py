# Commandment Command-Line Toolkit - MIT Licensed
"""
Lifecycle hooks run around every dispatched command action.

Key Components:
- HookType: The lifecycle stages (`before`, `on_success`, `on_error`, `after`,
  `on_teardown`).
- HookManager: Registers hooks per stage and triggers them with an
  `ExecutionContext`.
- Hook: A sync or async callable taking the `ExecutionContext`.

Usage:
    hooks = HookManager()
    hooks.register(HookType.BEFORE, log_before)
    hooks.register("error", notify_on_failure)
"""
from __future__ import annotations

import inspect
from enum import Enum
from typing import Awaitable, Callable, Union

from commandment.context import ExecutionContext
from commandment.logger import logger
from commandment.utils import run_coroutine

Hook = Union[
    Callable[[ExecutionContext], None], Callable[[ExecutionContext], Awaitable[None]]
]


class HookType(Enum):
    """
    Lifecycle stages a hook can be registered for.

    Members:
        BEFORE: Before the action is invoked.
        ON_SUCCESS: After the action returned an exit code.
        ON_ERROR: When the action raised an exception.
        AFTER: After success or failure.
        ON_TEARDOWN: At the very end, for resource cleanup.

    The short forms "success", "error" and "teardown" are accepted as values.
    """

    BEFORE = "before"
    ON_SUCCESS = "on_success"
    ON_ERROR = "on_error"
    AFTER = "after"
    ON_TEARDOWN = "on_teardown"

    @classmethod
    def _missing_(cls, value: object) -> HookType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        if normalized in {"success", "error", "teardown"}:
            normalized = f"on_{normalized}"
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


class HookManager:
    """
    Holds the hooks registered on a command.

    Hooks run in registration order. A failing hook is logged and skipped,
    except during ON_ERROR, where the original exception is re-raised chained
    to the hook's failure.
    """

    def __init__(self) -> None:
        self._hooks: dict[HookType, list[Hook]] = {
            hook_type: [] for hook_type in HookType
        }

    def register(self, hook_type: HookType | str, hook: Hook):
        """
        Register `hook` for a lifecycle stage.

        Raises:
            ValueError: If the hook type is invalid.
            TypeError: If the hook is not callable.
        """
        hook_type = HookType(hook_type)
        if not callable(hook):
            raise TypeError(f"Hook for '{hook_type}' must be callable, got {hook!r}")
        self._hooks[hook_type].append(hook)

    def clear(self, hook_type: HookType | None = None):
        """Remove the hooks of one stage, or of every stage when `hook_type` is None."""
        if hook_type:
            self._hooks[hook_type] = []
        else:
            for stage in self._hooks:
                self._hooks[stage] = []

    def get(self, hook_type: HookType | str) -> list[Hook]:
        return list(self._hooks[HookType(hook_type)])

    async def trigger(self, hook_type: HookType, context: ExecutionContext):
        """Run every hook registered for `hook_type` with `context`."""
        if hook_type not in self._hooks:
            raise ValueError(f"Unsupported hook type: {hook_type}")
        for hook in self._hooks[hook_type]:
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(context)
                else:
                    hook(context)
            except Exception as hook_error:
                self._hook_failed(hook, hook_type, context, hook_error)

    def trigger_sync(self, hook_type: HookType, context: ExecutionContext):
        """Blocking `trigger`; each async hook runs to completion through `run_coroutine`."""
        if hook_type not in self._hooks:
            raise ValueError(f"Unsupported hook type: {hook_type}")
        for hook in self._hooks[hook_type]:
            try:
                if inspect.iscoroutinefunction(hook):
                    run_coroutine(hook(context))
                else:
                    hook(context)
            except Exception as hook_error:
                self._hook_failed(hook, hook_type, context, hook_error)

    @staticmethod
    def _hook_failed(
        hook: Hook,
        hook_type: HookType,
        context: ExecutionContext,
        hook_error: Exception,
    ):
        logger.warning(
            "[Hook:%s] raised an exception during '%s' for '%s': %s",
            getattr(hook, "__name__", repr(hook)),
            hook_type,
            context.name,
            hook_error,
        )
        if hook_type == HookType.ON_ERROR and isinstance(context.exception, Exception):
            raise context.exception from hook_error

    def __str__(self) -> str:
        def format_hook_list(hooks: list[Hook]) -> str:
            return ", ".join(getattr(h, "__name__", repr(h)) for h in hooks) or "-"

        lines = ["<HookManager>"]
        for hook_type in HookType:
            lines.append(f"  {hook_type.value}: {format_hook_list(self._hooks[hook_type])}")
        return "\n".join(lines)
