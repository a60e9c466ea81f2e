# divesight/services/scheduler.py
"""
Repeating background jobs for sighting rotation.

Each job runs on its own asyncio task: wait the interval, run the tick in a
worker thread, wait again. A job's ticks never overlap; a slow tick pushes
the next one back instead of running alongside it.
"""

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable

from divesight.core.config import Settings
from divesight.models.fish import Rarity
from divesight.services.fish_sighting_service import RefreshMode, SightingRotator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RotationJob:
    name: str
    interval_seconds: float
    run: Callable[[], object]


class RotationScheduler:
    def __init__(self, jobs: list[RotationJob]):
        self.jobs = list(jobs)
        self._tasks: dict[str, asyncio.Task] = {}
        self._ticks: dict[str, asyncio.Future] = {}

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks.values())

    def start(self) -> None:
        """Start every job. Must be called from a running event loop."""
        if self.running:
            return
        self._tasks = {
            job.name: asyncio.create_task(self._run_forever(job), name=f"rotation:{job.name}")
            for job in self.jobs
        }
        for job in self.jobs:
            logger.info(
                "Fish sighting updates '%s' started - running every %.1f minutes",
                job.name,
                job.interval_seconds / 60,
            )

    async def stop(self) -> None:
        tasks = list(self._tasks.values())
        self._tasks = {}
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        # a tick already handed to a worker thread cannot be cancelled; wait it out
        ticks = list(self._ticks.values())
        self._ticks = {}
        await asyncio.gather(*ticks, return_exceptions=True)
        if tasks:
            logger.info("Fish sighting updates stopped")

    async def _run_forever(self, job: RotationJob) -> None:
        while True:
            await asyncio.sleep(job.interval_seconds)
            try:
                tick = asyncio.ensure_future(asyncio.to_thread(job.run))
                self._ticks[job.name] = tick
                await asyncio.shield(tick)
            except Exception:
                logger.exception("Sighting rotation '%s' failed", job.name)


def build_rotation_jobs(settings: Settings, rotator: SightingRotator) -> list[RotationJob]:
    """
    Jobs for the configured rotation strategy.

    - all:    refresh every fish each tick
    - random: refresh a random number (1..n) of fish each tick
    - tiered: common fish as in "random"; rare and epic fish on their own,
              slower timer, at most one per tick
    """
    common_interval = settings.sighting_update_minutes * 60
    strategy = settings.rotation_strategy

    if strategy == "all":
        return [RotationJob("all", common_interval, partial(rotator.tick, RefreshMode.ALL))]
    if strategy == "random":
        return [RotationJob("random", common_interval, partial(rotator.tick, RefreshMode.RANDOM))]
    if strategy == "tiered":
        return [
            RotationJob(
                "common",
                common_interval,
                partial(rotator.tick, RefreshMode.RANDOM, [Rarity.COMMON, None]),
            ),
            RotationJob(
                "rare",
                settings.rare_sighting_update_minutes * 60,
                partial(rotator.tick, RefreshMode.COIN_FLIP, [Rarity.RARE, Rarity.EPIC]),
            ),
        ]
    raise ValueError(f"Unknown rotation strategy: {strategy!r}")
