"""
ViewScope - Lifetime of one mounted view and the deferred work it started.

A view creates a scope when it is entered and closes it when it is left.
Closing cancels every task spawned in the scope; continuations that still
resume afterwards must check `closed` and drop their result.
"""

import asyncio
import logging
from typing import Any, Coroutine

logger = logging.getLogger(__name__)


class ViewScope:
    """Owns the asyncio tasks of one view instance."""

    def __init__(self, name: str = "view"):
        self.name = name
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return sum(1 for task in self._tasks if not task.done())

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """
        Schedule a coroutine on the running loop, tied to this scope.

        Raises:
            RuntimeError: If the scope is already closed or no loop is running
        """
        if self._closed:
            coro.close()
            raise RuntimeError(f"Scope {self.name} is closed")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def close(self):
        """Cancel outstanding work; later results are discarded by their owners."""
        if self._closed:
            return
        self._closed = True
        cancelled = 0
        for task in list(self._tasks):
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.debug(f"Closed scope {self.name}, cancelled {cancelled} pending task(s)")
