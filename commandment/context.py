# Commandment Command-Line Toolkit - MIT Licensed
"""
Execution context for a dispatched command action.

`ExecutionContext` records one invocation of a command's action: the parse
result handed to it, the exit code it returned or the exception it raised, and
wall-clock and high-resolution timing. Lifecycle hooks receive it at every
stage, so it is the single place to look for diagnostics about a run.
"""
from __future__ import annotations

import time
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExecutionContext(BaseModel):
    """
    Runtime metadata and state for a single action invocation.

    Attributes:
        name (str): Space separated command path, e.g. `app build`.
        action (Any): The action wrapper being invoked.
        parse_result (Any): The `ParseResult` passed to the action.
        is_async (bool): Whether the action runs as a coroutine.
        result (int | None): Exit code returned by the action.
        exception (BaseException | None): Exception raised, if any.
        start_time (float | None): `perf_counter()` at start.
        end_time (float | None): `perf_counter()` at end.
        start_wall (datetime | None): Wall-clock start.
        end_wall (datetime | None): Wall-clock end.
        extra (dict): Free-form data for hooks.

    Properties:
        duration (float | None): Execution duration in seconds.
        success (bool): True if no exception was recorded.
        status (str): "OK", "CANCELLED" or "ERROR".
    """

    name: str
    action: Any
    parse_result: Any = None
    is_async: bool = False
    result: int | None = None
    exception: BaseException | None = None

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    extra: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def start_timer(self):
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self):
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def cancelled(self) -> bool:
        return bool(self.extra.get("cancelled"))

    @property
    def status(self) -> str:
        if self.cancelled:
            return "CANCELLED"
        return "OK" if self.success else "ERROR"

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status,
            "result": self.result,
            "exception": repr(self.exception) if self.exception else None,
            "duration": self.duration,
            "extra": self.extra,
        }

    def to_log_line(self) -> str:
        """Structured flat-line format for logging and metrics."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        return (
            f"[{self.name}] status={self.status} duration={duration_str} "
            f"exit_code={self.result!r} exception={exception_str}"
        )

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        outcome = (
            f"Exit code: {self.result!r}"
            if self.success
            else f"Exception: {self.exception}"
        )
        return (
            f"<ExecutionContext '{self.name}' | {self.status} | "
            f"Duration: {duration_str} | {outcome}>"
        )

    def __repr__(self) -> str:
        return (
            f"ExecutionContext("
            f"name={self.name!r}, "
            f"status={self.status!r}, "
            f"result={self.result!r}, "
            f"exception={self.exception!r})"
        )
