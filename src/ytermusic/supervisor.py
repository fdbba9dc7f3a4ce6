"""Process-wide shutdown signal and supervised background tasks.

Every unit of background work is spawned through `run_service`, which races it
against a `ShutdownSignal`. Firing the signal wakes every waiter, however many
are alive, from any thread.
"""

import asyncio
import inspect
import threading
from collections.abc import Coroutine
from typing import Any

from loguru import logger


def _resolve(fut: "asyncio.Future[None]") -> None:
    if not fut.done():
        fut.set_result(None)


class ShutdownSignal:
    """One-shot broadcast flag that coroutines can await."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fired = False
        self._waiters: set[asyncio.Future[None]] = set()

    @property
    def is_set(self) -> bool:
        return self._fired

    def fire(self) -> None:
        """Wake all current and future waiters. Safe to call from any thread."""
        with self._lock:
            if self._fired:
                return
            self._fired = True
            waiters = list(self._waiters)
            self._waiters.clear()
        for fut in waiters:
            loop = fut.get_loop()
            if not loop.is_closed():
                loop.call_soon_threadsafe(_resolve, fut)

    async def wait(self) -> None:
        """Return once the signal has fired."""
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        with self._lock:
            if self._fired:
                return
            self._waiters.add(fut)
        try:
            await fut
        finally:
            with self._lock:
                self._waiters.discard(fut)


SHUTDOWN = ShutdownSignal()

# Strong references; the event loop only keeps weak ones.
_services: set[asyncio.Task[None]] = set()


async def _race(coro: Coroutine[Any, Any, Any], signal: ShutdownSignal) -> None:
    if signal.is_set:
        coro.close()
        return
    work = asyncio.ensure_future(coro)
    stop = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({work, stop}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [t for t in (work, stop) if not t.done()]
        for t in pending:
            t.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
    if work.done() and not work.cancelled() and work.exception() is not None:
        logger.opt(exception=work.exception()).error("Background task failed")


def _close_unstarted(coro: Coroutine[Any, Any, Any]) -> None:
    # A task cancelled before its first step never awaits `coro`.
    if inspect.getcoroutinestate(coro) == inspect.CORO_CREATED:
        coro.close()


def run_service(
    coro: Coroutine[Any, Any, Any],
    *,
    signal: ShutdownSignal = SHUTDOWN,
    name: str | None = None,
) -> asyncio.Task[None]:
    """Spawn `coro` on the running loop, preempted by `signal`.

    Cancelling the returned task cancels `coro` at its next await.
    """
    task = asyncio.get_running_loop().create_task(_race(coro, signal), name=name)
    _services.add(task)
    task.add_done_callback(_services.discard)
    task.add_done_callback(lambda _: _close_unstarted(coro))
    return task


async def join_services() -> None:
    """Wait until no supervised task is left, including ones spawned meanwhile."""
    while True:
        current = asyncio.current_task()
        loop = asyncio.get_running_loop()
        pending = [
            t for t in _services if t is not current and not t.done() and t.get_loop() is loop
        ]
        if not pending:
            return
        await asyncio.gather(*pending, return_exceptions=True)


def shutdown(signal: ShutdownSignal = SHUTDOWN) -> None:
    """Ask every supervised task to stop."""
    logger.debug("Shutdown requested")
    signal.fire()
