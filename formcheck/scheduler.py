"""
Live re-check scheduler.

A recurring asyncio task that re-checks only fields that are both dirty
(value differs from the recorded default) and touched (blurred at least
once). Untouched or unchanged fields are never re-validated on a tick.
"""

import asyncio
from typing import List, Optional, TYPE_CHECKING

from formcheck.core.base import Result
from formcheck.core.exceptions import SchedulerError
from formcheck.core.fields import Field
from shared.utils.config import settings
from shared.utils.logger import setup_logger

if TYPE_CHECKING:
    from formcheck.engine import Validator

logger = setup_logger(__name__)


class ValidationScheduler:
    """
    Periodic dirty-and-touched re-checker.

    Each tick is synchronous and runs to completion before the next sleep,
    so ticks never overlap.

    Usage:
        scheduler = ValidationScheduler(validator, interval_ms=500)
        scheduler.start()      # requires a running event loop
        ...
        await scheduler.aclose()
    """

    def __init__(self, validator: "Validator", interval_ms: Optional[int] = None):
        self.validator = validator
        self.interval_ms = interval_ms or settings.SCHEDULER_INTERVAL_MS
        if self.interval_ms <= 0:
            raise SchedulerError(f"Scheduler interval must be positive, got {self.interval_ms}")

        self._task: Optional[asyncio.Task] = None
        self.ticks = 0
        self.last_error: Optional[BaseException] = None

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def due_fields(self) -> List[Field]:
        """Fields whose value changed from the default and that were blurred at least once."""
        return [
            field for field in self.validator.fields
            if field.interaction_count > 0 and field.is_dirty()
        ]

    def tick(self) -> List[Result]:
        """Run one re-check pass and return the Results of the fields checked."""
        self.ticks += 1
        results = [self.validator.check(field) for field in self.due_fields()]

        if results:
            logger.debug(f"Scheduler tick {self.ticks}: re-checked {len(results)} fields")
        return results

    def start(self) -> None:
        """
        Schedule the recurring task on the running event loop.

        Raises:
            SchedulerError: If no event loop is running
        """
        if self.is_running:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulerError("ValidationScheduler.start() requires a running event loop") from e

        self.last_error = None
        self._task = loop.create_task(self._run())
        self._task.add_done_callback(self._on_done)
        logger.debug(f"Scheduler started (every {self.interval_ms} ms)")

    def stop(self) -> None:
        """Cancel the recurring task. Safe to call when not running."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Scheduler stopped")

    cancel = stop

    async def aclose(self) -> None:
        """
        Cancel the recurring task and wait for it to finish.

        A tick failure does not propagate from here; it stays on last_error.
        """
        task = self._task
        self.stop()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception:
                pass
        self._task = None

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        # Retrieving the exception keeps asyncio from reporting it as unhandled
        self.last_error = task.exception()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Scheduler tick failed, stopping: {e}", exc_info=True)
                raise
