"""ScenarioRunner — paced async driver around a replaceable Scenario.

Holds the editable descriptor and at most one active scenario. While
running, it calls ``forward()`` in a worker thread and then sleeps so that
one step of ``delta_t`` simulated time takes ``delta_t / time_scale`` wall
seconds. Replacing or dropping the scenario is an atomic swap; readers
(``values()``) never observe a step in progress.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
import threading
import time as wall_time
from typing import Any

from advect.config import Descriptor
from advect.core.bases import StepResult
from advect.scenario import Scenario

logger = logging.getLogger(__name__)

# Poll interval while no scenario is active [s]
IDLE_WAIT = 0.001


class RunnerStatus(str, enum.Enum):
    """Lifecycle state of the runner loop."""

    idle = "idle"
    running = "running"
    paused = "paused"
    finished = "finished"
    error = "error"


class ScenarioRunner:
    """Drives one scenario at a wall-clock cadence.

    ``values()``, ``new_scenario()`` and ``drop_scenario()`` share a
    ``threading.Lock`` with the stepping thread and wait for an in-flight
    step to finish. From a coroutine, call them through
    ``await asyncio.to_thread(runner.values)`` so the event loop keeps
    running.

    Attributes:
        desc: Editable descriptor; snapshotted by ``new_scenario()``.
        status: Current lifecycle state.
        last_result: Most recent StepResult.
        max_steps: Optional step limit after which the loop finishes.
    """

    def __init__(
        self,
        desc: Descriptor | None = None,
        *,
        max_steps: int | None = None,
    ) -> None:
        self.desc = desc if desc is not None else Descriptor()
        self.max_steps = max_steps
        self.status = RunnerStatus.idle
        self.last_result: StepResult | None = None
        self.error_message: str | None = None

        self._scenario: Scenario | None = None
        self._lock = threading.Lock()

        # Async plumbing
        self._task: asyncio.Task[None] | None = None
        self._pause_event = asyncio.Event()
        self._pause_event.set()  # Not paused initially
        self._stop_flag = False

        # Subscriber queues
        self._subscribers: list[asyncio.Queue[StepResult]] = []

    # ── Scenario management ──────────────────────────────────────

    @property
    def active(self) -> bool:
        return self._scenario is not None

    def new_scenario(self) -> Scenario:
        """Build a scenario from the current descriptor and swap it in."""
        scenario = Scenario(self.desc)
        with self._lock:
            self._scenario = scenario
        logger.info("New scenario: %s", self.desc.spatial_scheme.value)
        return scenario

    def drop_scenario(self) -> None:
        """Discard the active scenario, if any."""
        with self._lock:
            self._scenario = None
        logger.info("Dropped scenario")

    def step_once(self) -> StepResult | None:
        """Advance the active scenario by one step; None when there is none."""
        with self._lock:
            scenario = self._scenario
            if scenario is None:
                return None
            finished = self.max_steps is not None and scenario.step_count + 1 >= self.max_steps
            return scenario.step(finished=finished)

    def values(self) -> list[tuple[float, float]]:
        """(position, value) snapshot of the active scenario, empty if none.

        Blocks while a step is in progress.
        """
        with self._lock:
            if self._scenario is None:
                return []
            return self._scenario.values()

    def subscribe(self) -> asyncio.Queue[StepResult]:
        """Register a subscriber queue for step-result broadcasts."""
        q: asyncio.Queue[StepResult] = asyncio.Queue(maxsize=64)
        self._subscribers.append(q)
        return q

    def unsubscribe(self, q: asyncio.Queue[StepResult]) -> None:
        """Remove a subscriber queue."""
        with contextlib.suppress(ValueError):
            self._subscribers.remove(q)

    # ── Public lifecycle API ─────────────────────────────────────

    async def start(self) -> None:
        """Begin the stepping loop in a background task."""
        if self.status is RunnerStatus.running:
            return

        self._stop_flag = False
        self._pause_event.set()
        self.status = RunnerStatus.running
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Runner started")

    async def pause(self) -> None:
        """Pause the loop (can be resumed)."""
        if self.status is not RunnerStatus.running:
            return
        self._pause_event.clear()
        self.status = RunnerStatus.paused
        logger.info("Runner paused")

    async def resume(self) -> None:
        """Resume a paused loop."""
        if self.status is not RunnerStatus.paused:
            return
        self._pause_event.set()
        self.status = RunnerStatus.running
        logger.info("Runner resumed")

    async def stop(self) -> None:
        """Stop the loop permanently."""
        self._stop_flag = True
        self._pause_event.set()  # Unblock if paused
        if self._task is not None:
            await self._task
            self._task = None
        if self.status is not RunnerStatus.error:
            self.status = RunnerStatus.finished
        logger.info("Runner stopped")

    def info(self) -> dict[str, Any]:
        """Status snapshot for a presentation layer."""
        r = self.last_result
        return {
            "status": self.status.value,
            "active": self.active,
            "step": r.step if r else 0,
            "time": r.time if r else 0.0,
            "mass": r.mass if r else 0.0,
            "error_message": self.error_message,
        }

    # ── Internal ─────────────────────────────────────────────────

    def _pace(self) -> float:
        scenario = self._scenario
        if scenario is None:
            return 1.0
        return scenario.desc.time_scale

    async def _run_loop(self) -> None:
        """Step, broadcast, then sleep off the rest of the step's wall-clock budget."""
        try:
            while not self._stop_flag:
                await self._pause_event.wait()
                if self._stop_flag:
                    break

                started = wall_time.perf_counter()
                result = await asyncio.to_thread(self.step_once)
                if result is None:
                    await asyncio.sleep(IDLE_WAIT)
                    continue
                self.last_result = result

                for q in list(self._subscribers):
                    try:
                        q.put_nowait(result)
                    except asyncio.QueueFull:
                        # Slow consumer — drop oldest
                        with contextlib.suppress(asyncio.QueueEmpty):
                            q.get_nowait()
                        with contextlib.suppress(asyncio.QueueFull):
                            q.put_nowait(result)

                if result.finished:
                    self.status = RunnerStatus.finished
                    break

                elapsed = wall_time.perf_counter() - started
                await asyncio.sleep(max(result.dt - elapsed, 0.0) / self._pace())

        except Exception as exc:
            logger.exception("Runner error: %s", exc)
            self.status = RunnerStatus.error
            self.error_message = str(exc)

        # Wake any blocking consumers
        if self.last_result is not None:
            sentinel = StepResult(
                time=self.last_result.time,
                step=self.last_result.step,
                finished=True,
            )
            for q in list(self._subscribers):
                with contextlib.suppress(asyncio.QueueFull):
                    q.put_nowait(sentinel)
