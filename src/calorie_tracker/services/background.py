"""Detached fire-and-forget tasks."""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

_logger = logging.getLogger(__name__)


@dataclass
class BackgroundTaskRunner:
    """Runs coroutines on the event loop outside any request's lifetime.

    Tasks are referenced until they finish so they are not garbage collected
    mid-flight. Failures are logged and never propagated.
    """

    _tasks: set[asyncio.Task[None]] = field(default_factory=set)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[None]:
        """Schedule a coroutine and return immediately."""
        task = asyncio.get_running_loop().create_task(
            self._guarded(coro, name), name=name
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        """Number of tasks that have not finished yet."""
        return len(self._tasks)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for outstanding tasks, e.g. on shutdown."""
        if not self._tasks:
            return
        _, still_running = await asyncio.wait(set(self._tasks), timeout=timeout)
        for task in still_running:
            _logger.warning("Cancelling background task %s", task.get_name())
            task.cancel()

    @staticmethod
    async def _guarded(coro: Coroutine[Any, Any, Any], name: str) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.exception("Background task %s failed (non-critical)", name)
