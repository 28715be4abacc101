# Commandment Command-Line Toolkit - MIT Licensed
"""
Defines flow control signals used by Commandment.

Signals interrupt an invoked action without being treated as ordinary errors.
They inherit from `BaseException` so they pass through `except Exception`
blocks inside user actions.

Signals:
- CancelSignal: The running action observed a cancellation request.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Commandment."""


class CancelSignal(FlowSignal):
    """Raised to cancel the currently running action."""

    def __init__(self, message: str = "Cancel signal received."):
        super().__init__(message)
