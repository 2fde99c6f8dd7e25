"""
Request Scheduler.

Serializes calls to a rate-limited analysis service through a single
FIFO lane:
- Exactly one operation runs at a time
- Operations start in submission order
- After every operation the lane waits a fixed interval before looking
  at the queue again, including once more after the queue has emptied

A failing operation's exception goes to its own future only; the lane
keeps draining. An operation that raises CancelledError cancels its own
future and the lane moves on; cancelling the drain task cancels the
running operation's future and stops the lane. There is no retry,
timeout or cancellation of queued work. Submission and draining run on one asyncio event loop, so the
queue needs no lock.
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from signaldeck.core.config import DEFAULT_SCHEDULER_CONFIG

logger = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[Any]]


class TaskState(Enum):
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    RESOLVED = "RESOLVED"
    FAILED = "FAILED"


@dataclass
class ScheduledTask:
    """A submitted operation and the future its outcome is delivered to."""

    task_id: int
    operation: Operation
    future: asyncio.Future
    state: TaskState = TaskState.QUEUED
    started_at: float | None = None
    finished_at: float | None = None

    @property
    def duration(self) -> float | None:
        if self.started_at is None or self.finished_at is None:
            return None
        return self.finished_at - self.started_at


@dataclass
class SchedulerStats:
    """Counters for the lifetime of a scheduler."""

    submitted: int = 0
    resolved: int = 0
    failed: int = 0
    # Most recent state transitions as (task_id, state)
    state_log: deque[tuple[int, TaskState]] = field(default_factory=lambda: deque(maxlen=200))

    @property
    def completed(self) -> int:
        return self.resolved + self.failed


class RequestScheduler:
    """
    Single-lane, interval-paced queue of async operations.

    Usage:
        scheduler = RequestScheduler(min_interval=8.1)
        result = await scheduler.submit(lambda: client.post(...))
    """

    def __init__(
        self,
        min_interval: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the scheduler.

        Args:
            min_interval: Seconds to wait after each operation before the next
                one may start (defaults to the configured scheduler interval)
            sleep: Awaitable sleep function, injectable for tests
            clock: Monotonic clock used to time operations
        """
        if min_interval is None:
            min_interval = DEFAULT_SCHEDULER_CONFIG.min_interval_seconds
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got: {min_interval}")

        self.min_interval = min_interval
        self._sleep = sleep
        self._clock = clock

        self._queue: deque[ScheduledTask] = deque()
        self._is_running = False
        self._drain_task: asyncio.Task | None = None
        self._next_id = 0
        self.stats = SchedulerStats()

    @property
    def is_running(self) -> bool:
        """True while a drain loop is active."""
        return self._is_running

    @property
    def pending(self) -> int:
        """Number of queued operations not yet started."""
        return len(self._queue)

    def submit(self, operation: Callable[[], Awaitable[T]]) -> "asyncio.Future[T]":
        """
        Queue an operation and return a future for its outcome.

        Must be called from a running event loop. Never blocks; starts the
        drain loop if it is not already active.

        Args:
            operation: Zero-argument callable returning an awaitable

        Returns:
            Future resolved with the operation's result or its exception
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()

        self._next_id += 1
        task = ScheduledTask(task_id=self._next_id, operation=operation, future=future)
        self._queue.append(task)
        self.stats.submitted += 1
        self._record(task)

        logger.debug(f"Queued request #{task.task_id} ({len(self._queue)} pending)")

        if not self._is_running:
            self._is_running = True
            self._drain_task = loop.create_task(self._drain())

        return future

    async def wait_idle(self) -> None:
        """Wait until the current drain loop (if any) has finished."""
        while self._drain_task is not None:
            await asyncio.shield(self._drain_task)

    async def _drain(self) -> None:
        try:
            while self._queue:
                task = self._queue.popleft()
                await self._run(task)
                # Pace start-to-start, even when the queue is now empty
                await self._sleep(self.min_interval)
        finally:
            self._is_running = False
            self._drain_task = None
            logger.debug("Request lane idle")

    async def _run(self, task: ScheduledTask) -> None:
        task.state = TaskState.RUNNING
        task.started_at = self._clock()
        self._record(task)

        try:
            result = await task.operation()
        except asyncio.CancelledError:
            self._finish(task, TaskState.FAILED)
            task.future.cancel()
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                # The lane itself is shutting down
                logger.debug(f"Request lane cancelled during request #{task.task_id}")
                raise
            logger.debug(f"Request #{task.task_id} was cancelled by its operation")
        except Exception as e:
            self._finish(task, TaskState.FAILED)
            logger.debug(f"Request #{task.task_id} failed after {task.duration:.2f}s: {e}")
            if not task.future.done():
                task.future.set_exception(e)
        else:
            self._finish(task, TaskState.RESOLVED)
            logger.debug(f"Request #{task.task_id} resolved in {task.duration:.2f}s")
            if not task.future.done():
                task.future.set_result(result)

    def _finish(self, task: ScheduledTask, state: TaskState) -> None:
        task.finished_at = self._clock()
        task.state = state
        if state is TaskState.RESOLVED:
            self.stats.resolved += 1
        else:
            self.stats.failed += 1
        self._record(task)

    def _record(self, task: ScheduledTask) -> None:
        self.stats.state_log.append((task.task_id, task.state))


_default_scheduler: RequestScheduler | None = None


def default_scheduler() -> RequestScheduler:
    """Process-wide scheduler for callers that share one request lane."""
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = RequestScheduler(DEFAULT_SCHEDULER_CONFIG.min_interval_seconds)
    return _default_scheduler


def schedule_api_call(operation: Callable[[], Awaitable[T]]) -> "asyncio.Future[T]":
    """Submit an operation to the process-wide request lane."""
    return default_scheduler().submit(operation)
