# Commandment Command-Line Toolkit - MIT Licensed
"""debug.py"""
from commandment.context import ExecutionContext
from commandment.hook_manager import HookManager, HookType
from commandment.logger import logger


def log_before(context: ExecutionContext):
    """Log the start of an action."""
    values = context.parse_result.as_dict() if context.parse_result is not None else {}
    logger.info("[%s] Starting -> %s(%s)", context.name, context.action, values)


def log_success(context: ExecutionContext):
    """Log the exit code an action returned."""
    logger.debug("[%s] Success -> Exit code: %s", context.name, context.result)


def log_after(context: ExecutionContext):
    """Log the completion of an action, regardless of success or failure."""
    logger.debug("[%s] Finished in %.3fs (%s)", context.name, context.duration, context.status)


def log_error(context: ExecutionContext):
    """Log an error that occurred during the action."""
    logger.error(
        "[%s] Error (%s): %s",
        context.name,
        type(context.exception).__name__,
        context.exception,
        exc_info=True,
    )


def register_debug_hooks(hooks: HookManager):
    hooks.register(HookType.BEFORE, log_before)
    hooks.register(HookType.AFTER, log_after)
    hooks.register(HookType.ON_SUCCESS, log_success)
    hooks.register(HookType.ON_ERROR, log_error)
