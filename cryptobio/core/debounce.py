import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Run only the most recently scheduled coroutine, after an idle delay.

    Scheduling again cancels the pending task; a task that already started
    and finishes after being superseded has its result dropped.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(
        self,
        func: Callable[[], Awaitable[Any]],
        on_result: Callable[[Any], None],
    ) -> asyncio.Task:
        self.cancel()
        self._generation += 1
        generation = self._generation

        async def run():
            await asyncio.sleep(self.delay)
            result = await func()
            if generation == self._generation:
                on_result(result)
            else:
                logger.debug("Dropping superseded debounced result")

        self._task = asyncio.get_running_loop().create_task(run())
        return self._task

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._generation += 1

    async def wait(self) -> None:
        """Wait for the current task, if any; cancellation is not an error here"""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass
