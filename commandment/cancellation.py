# Commandment Command-Line Toolkit - MIT Licensed
"""
Cooperative cancellation for long-running command actions.

A `CancellationToken` is handed to every async action. The action is expected
to observe it, either by polling `is_cancelled`, by calling
`raise_if_cancelled()` at safe points, or by awaiting `wait()` alongside its
own work. The dispatcher never interrupts an action on its own.

`cancel()` may be called from any thread, including a signal handler.

Example:
    async def sync_files(result, token):
        for path in result["paths"]:
            token.raise_if_cancelled()
            await upload(path)
        return 0
"""
from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable

from commandment.logger import logger
from commandment.signals import CancelSignal


class CancellationToken:
    """Thread-safe, one-shot cancellation flag with callbacks and awaitable waiters."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], Any]] = []
        self._waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Future]] = []

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Only the first call has any effect."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
            waiters, self._waiters = self._waiters, []
        logger.debug("Cancellation requested (%d callback(s))", len(callbacks))
        for callback in callbacks:
            self._run_callback(callback)
        for loop, future in waiters:
            try:
                loop.call_soon_threadsafe(_resolve, future)
            except RuntimeError:
                logger.debug("Event loop closed before a cancellation waiter was woken")

    def raise_if_cancelled(self) -> None:
        """Raise `CancelSignal` if cancellation was requested."""
        if self._event.is_set():
            raise CancelSignal("Operation was cancelled.")

    def register(self, callback: Callable[[], Any]) -> Callable[[], None]:
        """
        Call `callback()` once cancellation is requested.

        The callback runs immediately if the token is already cancelled.
        Returns a function that unregisters the callback.
        """
        if not callable(callback):
            raise TypeError(f"Cancellation callback must be callable, got {callback!r}")
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)
        self._run_callback(callback)
        return lambda: None

    def _unregister(self, callback: Callable[[], Any]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def _run_callback(self, callback: Callable[[], Any]) -> None:
        try:
            callback()
        except Exception as error:
            logger.warning(
                "Cancellation callback %s raised: %s",
                getattr(callback, "__name__", repr(callback)),
                error,
            )

    async def wait(self) -> None:
        """Return once cancellation has been requested."""
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        with self._lock:
            if self._event.is_set():
                return
            entry = (loop, future)
            self._waiters.append(entry)
        try:
            await future
        finally:
            with self._lock:
                if entry in self._waiters:
                    self._waiters.remove(entry)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"


def _resolve(future: asyncio.Future) -> None:
    if not future.done():
        future.set_result(None)
