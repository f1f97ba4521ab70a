"""
Periodic sweep of stale waitlist entries.

Every `interval_s` the sweeper deletes entries that are older than the
retention window and still not checked in. It runs as one asyncio task owned
by the app lifespan: started after the DB pool opens, cancelled before it
closes.

Ticks never overlap. Each tick is awaited before the next one is scheduled,
and a tick that overruns the interval skips the missed ticks; the next one
fires on the following interval boundary.
"""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Callable

from .repository import WaitlistRepository

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_S = 60.0
DEFAULT_RETENTION = timedelta(hours=1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def sweep_enabled() -> bool:
    raw = os.environ.get("WAITLIST_SWEEP_ENABLED", "1").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def sweep_interval_s() -> float:
    return _env_float("WAITLIST_SWEEP_INTERVAL_S", DEFAULT_INTERVAL_S)


def retention_window() -> timedelta:
    return timedelta(minutes=_env_float("WAITLIST_RETENTION_MIN", DEFAULT_RETENTION.total_seconds() / 60))


class WaitlistSweeper:
    def __init__(
        self,
        repository: WaitlistRepository,
        *,
        interval_s: float = DEFAULT_INTERVAL_S,
        retention: timedelta = DEFAULT_RETENTION,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive.")
        self.repository = repository
        self.interval_s = interval_s
        self.retention = retention
        self.clock = clock
        self._task: asyncio.Task | None = None

    @classmethod
    def from_env(cls, repository: WaitlistRepository) -> "WaitlistSweeper":
        return cls(
            repository,
            interval_s=sweep_interval_s(),
            retention=retention_window(),
        )

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def cutoff(self) -> datetime:
        return self.clock() - self.retention

    def next_delay(self, elapsed_s: float) -> float:
        """
        Seconds until the next interval boundary after a tick that took `elapsed_s`.
        """
        return self.interval_s - (max(elapsed_s, 0.0) % self.interval_s)

    async def run_once(self) -> int:
        """
        Run a single sweep. Failures are logged and reported as zero deletions.
        """
        cutoff = self.cutoff()
        try:
            deleted = await self.repository.delete_stale(cutoff=cutoff)
        except Exception:
            logger.exception("waitlist_sweep_failed cutoff=%s", cutoff.isoformat())
            return 0

        if deleted > 0:
            logger.info("waitlist_sweep deleted=%s cutoff=%s", deleted, cutoff.isoformat())
        else:
            logger.debug("waitlist_sweep deleted=0 cutoff=%s", cutoff.isoformat())
        return deleted

    async def _loop(self) -> None:
        loop = asyncio.get_running_loop()
        delay = self.interval_s
        while True:
            await asyncio.sleep(delay)
            started = loop.time()
            await self.run_once()
            delay = self.next_delay(loop.time() - started)

    def start(self) -> None:
        if self.running:
            return None
        self._task = asyncio.create_task(self._loop(), name="waitlist-sweeper")
        logger.info(
            "waitlist_sweeper_started interval_s=%s retention_s=%s",
            self.interval_s,
            int(self.retention.total_seconds()),
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("waitlist_sweeper_stopped")
