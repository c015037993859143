"""Runtime primitives backing the world simulation HTTP API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from worldsim.config import Settings, get_settings
from worldsim.domain.rules_config import DEFAULT_RULES, RulesConfig
from worldsim.simulation import WorldSimulation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TickManager:
    """Fixed-interval scheduler that calls ``advance`` on one engine.

    Every engine call made through the API goes through :meth:`run`, which
    holds the same lock as the scheduled loop, so the non-reentrant engine
    only ever sees one caller at a time.  Pausing stops the loop between
    turns; an in-flight turn always completes.
    """

    MIN_INTERVAL_SECONDS = 0.05

    def __init__(
        self,
        simulation: WorldSimulation,
        *,
        base_interval_seconds: float,
        debug_multiplier: float = 1.0,
    ) -> None:
        self._simulation = simulation
        self._base_interval = max(base_interval_seconds, self.MIN_INTERVAL_SECONDS)
        self._debug_multiplier = max(debug_multiplier, 0.01)
        self._enabled = False
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._lock = asyncio.Lock()

    @property
    def interval_seconds(self) -> float:
        return max(self.MIN_INTERVAL_SECONDS, self._base_interval * self._debug_multiplier)

    @property
    def base_interval_seconds(self) -> float:
        return self._base_interval

    @property
    def debug_multiplier(self) -> float:
        return self._debug_multiplier

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_base_interval(self, seconds: float) -> None:
        self._base_interval = max(seconds, self.MIN_INTERVAL_SECONDS)

    def set_debug_multiplier(self, multiplier: float) -> None:
        self._debug_multiplier = max(multiplier, 0.01)

    async def run(self, operation: Callable[[WorldSimulation], T]) -> T:
        """Run ``operation`` against the engine while holding the engine lock."""

        async with self._lock:
            return operation(self._simulation)

    async def set_enabled(self, enabled: bool) -> None:
        """Resume (True) or pause (False) automatic turns."""

        self._enabled = enabled
        if enabled:
            self._ensure_running()
        else:
            await self.stop()

    def _ensure_running(self) -> None:
        if self._task is None or self._task.done():
            self._stop_event = asyncio.Event()
            loop = asyncio.get_running_loop()
            self._task = loop.create_task(self._run_loop(), name="worldsim-tick-loop")

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        self._stop_event.set()
        await task
        self._task = None

    async def advance_now(self, turns: int = 1) -> int:
        """Advance ``turns`` turns immediately; returns the resulting turn number."""

        if turns <= 0:
            return await self.run(lambda simulation: simulation.turn)
        async with self._lock:
            for _ in range(turns):
                self._simulation.advance()
            return self._simulation.turn

    async def _run_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
                    break
                except TimeoutError:
                    pass
                turn = await self.advance_now(1)
                logger.debug("scheduled advance reached turn %d", turn)
        finally:
            self._task = None


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        simulation: WorldSimulation | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.simulation = simulation or WorldSimulation.from_settings(self.settings, rules=rules)
        self.simulation.initialize()
        self.ticks = TickManager(
            self.simulation,
            base_interval_seconds=self.settings.tick_interval_seconds,
            debug_multiplier=self.settings.debug_tick_speed_multiplier,
        )

    async def shutdown(self) -> None:
        await self.ticks.stop()
        await self.ticks.run(lambda simulation: simulation.dispose())


def build_state(settings: Settings | None = None) -> ApiState:
    """Create the API state for one session from ``settings``."""

    return ApiState(settings=settings)
