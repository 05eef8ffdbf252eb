"""
Background task queues for CareerCoach

Update-triggered side effects run on two bounded queues, each drained by
its own worker tasks:
- general: call-completed and interview-completed events
- ai: profile-updated events, which regenerate AI content

Keeping AI work on its own queue means a slow model call cannot starve
the general queue. When a queue is full the event is rejected: the
overflow is logged and QueueOverflowError is raised to the publisher.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from pydantic import BaseModel, Field

from careercoach.core.errors import QueueOverflowError
from careercoach.models.profile import Profile

logger = logging.getLogger(__name__)


Job = Callable[[], Awaitable[None]]


# ============================================================================
# EVENTS
# ============================================================================

class ProfileUpdated(BaseModel):
    """A candidate profile was edited in the profile store."""
    profile: Profile
    previous_fingerprint: str | None = Field(
        default=None,
        description="Fingerprint of the profile before the edit",
    )


class CallCompleted(BaseModel):
    """An external model call finished (reported from outside the core)."""
    service: str
    duration_ms: int = Field(..., ge=0)
    success: bool
    error: str | None = None


class InterviewCompleted(BaseModel):
    """A mock interview finished."""
    profile_id: int | None = None
    average_score: float = Field(..., ge=0.0, le=10.0)
    question_count: int = Field(..., ge=0)


# ============================================================================
# QUEUE
# ============================================================================

class BoundedTaskQueue:
    """
    A fixed-capacity job queue served by a fixed number of workers.

    Jobs are zero-argument coroutine functions. A failing job is logged
    and does not stop its worker.
    """

    def __init__(self, name: str, workers: int, capacity: int, drain_timeout: float):
        self.name = name
        self.worker_count = workers
        self.capacity = capacity
        self.drain_timeout = drain_timeout
        self._queue: asyncio.Queue | None = None
        self._workers: list[asyncio.Task] = []
        self.completed = 0
        self.failed = 0
        self.rejected = 0

    @property
    def running(self) -> bool:
        return self._queue is not None

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue else 0

    def start(self) -> None:
        if self.running:
            return
        self._queue = asyncio.Queue(maxsize=self.capacity)
        self._workers = [
            asyncio.create_task(self._work(i), name=f"{self.name}-worker-{i}")
            for i in range(self.worker_count)
        ]
        logger.info(
            f"Started '{self.name}' queue: {self.worker_count} workers, capacity {self.capacity}"
        )

    def submit(self, job: Job) -> None:
        """
        Enqueue a job without waiting.

        Raises:
            QueueOverflowError: If the queue is full or not started
        """
        if self._queue is None:
            raise QueueOverflowError(f"Queue '{self.name}' is not running")
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            self.rejected += 1
            logger.warning(
                f"Queue '{self.name}' is full ({self.capacity} pending); rejecting job"
            )
            raise QueueOverflowError(f"Queue '{self.name}' is full") from None

    async def _work(self, index: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await job()
                self.completed += 1
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.failed += 1
                logger.error(f"Job failed on '{self.name}' worker {index}: {e}")
            finally:
                self._queue.task_done()

    async def join(self) -> None:
        """Wait until every submitted job has finished."""
        if self._queue is not None:
            await self._queue.join()

    async def shutdown(self) -> None:
        """Drain pending jobs (bounded by drain_timeout), then stop the workers."""
        if not self.running:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=self.drain_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Queue '{self.name}' did not drain within {self.drain_timeout}s; "
                f"{self.pending} job(s) abandoned"
            )

        for task in self._workers:
            task.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        self._queue = None
        logger.info(f"Stopped '{self.name}' queue")


# ============================================================================
# DISPATCHER
# ============================================================================

class EventDispatcher:
    """
    Routes events to handlers through the two bounded queues.

    ProfileUpdated goes to the ai queue; every other event goes to the
    general queue. Handlers are registered per event type.
    """

    AI_EVENTS = (ProfileUpdated,)

    def __init__(self, general: BoundedTaskQueue, ai: BoundedTaskQueue):
        self.general = general
        self.ai = ai
        self._handlers: dict[type, list[Callable[[BaseModel], Awaitable[None]]]] = {}

    def subscribe(self, event_type: type, handler: Callable[[BaseModel], Awaitable[None]]) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def start(self) -> None:
        self.general.start()
        self.ai.start()

    async def shutdown(self) -> None:
        await self.general.shutdown()
        await self.ai.shutdown()

    async def join(self) -> None:
        await self.general.join()
        await self.ai.join()

    def publish(self, event: BaseModel) -> None:
        """
        Enqueue one job per registered handler.

        Raises:
            QueueOverflowError: If the target queue rejects the event
        """
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            logger.debug(f"No handlers registered for {type(event).__name__}")
            return

        queue = self.ai if isinstance(event, self.AI_EVENTS) else self.general
        for handler in handlers:
            queue.submit(lambda handler=handler: handler(event))
