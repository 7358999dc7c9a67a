"""Periodic background expiry of trash records."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Union

from folio.logging import get_logger
from folio.models import SweepResult
from folio.services.trash import TrashService

logger = get_logger("services.trash_sweeper")

DEFAULT_INTERVAL_SECONDS = 86400.0

RetentionSource = Union[Optional[int], Callable[[], Optional[int]]]


class TrashSweeper:
    """
    Run ``TrashService.sweep_expired`` once on start and then every interval.

    The loop is a single asyncio task. ``stop``/``pause`` cancel it between
    sweeps; ``start``/``resume`` spawn a fresh one. A missed sweep only means
    expired records linger a little longer.
    """

    def __init__(
        self,
        trash: TrashService,
        retention_days: RetentionSource = 30,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.trash = trash
        self.interval_seconds = interval_seconds
        self._retention = retention_days
        self._task: asyncio.Task | None = None
        self._sweep_lock = asyncio.Lock()
        self.last_result: SweepResult | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def retention_days(self) -> Optional[int]:
        if callable(self._retention):
            return self._retention()
        return self._retention

    async def run_once(self) -> SweepResult:
        async with self._sweep_lock:
            retention = self.retention_days()
            result = await self.trash.sweep_expired(retention)
            self.last_result = result
            if result.purged_ids:
                logger.info(
                    f"Trash sweep purged {len(result.purged_ids)} record(s), "
                    f"{result.retained} retained (retention={retention})"
                )
            return result

    async def _run(self) -> None:
        while True:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Trash sweep failed")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Start the periodic loop; the first sweep runs immediately."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())
        logger.debug(f"Trash sweeper started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to wind down."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Trash sweeper stopped")

    async def pause(self) -> None:
        """Suspend sweeping while the host is in the background."""
        await self.stop()

    def resume(self) -> None:
        """Resume sweeping when the host returns to the foreground."""
        self.start()
