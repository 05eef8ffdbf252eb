import asyncio
import logging

import pytest

from careercoach.core.errors import QueueOverflowError
from careercoach.core.task_queues import (
    BoundedTaskQueue,
    CallCompleted,
    EventDispatcher,
    InterviewCompleted,
    ProfileUpdated,
)


def make_queue(name="general", workers=2, capacity=5, drain_timeout=1.0):
    return BoundedTaskQueue(name=name, workers=workers, capacity=capacity, drain_timeout=drain_timeout)


@pytest.mark.asyncio
async def test_jobs_run_on_workers():
    queue = make_queue()
    queue.start()
    done = []

    async def job():
        done.append(1)

    for _ in range(4):
        queue.submit(job)
    await queue.join()
    await queue.shutdown()

    assert len(done) == 4
    assert queue.completed == 4


@pytest.mark.asyncio
async def test_full_queue_rejects_and_logs(caplog):
    queue = make_queue(workers=0, capacity=2, drain_timeout=0.01)
    queue.start()

    async def job():
        pass

    queue.submit(job)
    queue.submit(job)
    with caplog.at_level(logging.WARNING):
        with pytest.raises(QueueOverflowError):
            queue.submit(job)

    assert queue.rejected == 1
    assert any("is full" in r.message for r in caplog.records)
    await queue.shutdown()


def test_submit_before_start_is_rejected():
    async def job():
        pass

    with pytest.raises(QueueOverflowError):
        make_queue().submit(job)


@pytest.mark.asyncio
async def test_failing_job_does_not_stop_worker():
    queue = make_queue(workers=1)
    queue.start()
    done = []

    async def broken():
        raise RuntimeError("boom")

    async def ok():
        done.append(1)

    queue.submit(broken)
    queue.submit(ok)
    await queue.join()
    await queue.shutdown()

    assert queue.failed == 1
    assert done == [1]


@pytest.mark.asyncio
async def test_shutdown_drains_pending_jobs():
    queue = make_queue(workers=1)
    queue.start()
    done = []

    async def slow():
        await asyncio.sleep(0.01)
        done.append(1)

    for _ in range(3):
        queue.submit(slow)
    await queue.shutdown()

    assert len(done) == 3
    assert not queue.running


@pytest.mark.asyncio
async def test_dispatcher_routes_profile_updates_to_ai_queue(profile):
    general = make_queue("general")
    ai = make_queue("ai", workers=0, capacity=1, drain_timeout=0.01)
    dispatcher = EventDispatcher(general, ai)
    seen = []

    async def handler(event):
        seen.append(event)

    dispatcher.subscribe(ProfileUpdated, handler)
    dispatcher.subscribe(CallCompleted, handler)
    dispatcher.subscribe(InterviewCompleted, handler)
    dispatcher.start()

    dispatcher.publish(ProfileUpdated(profile=profile))
    assert ai.pending == 1

    # A full ai queue does not block general work
    with pytest.raises(QueueOverflowError):
        dispatcher.publish(ProfileUpdated(profile=profile))

    dispatcher.publish(CallCompleted(service="OpenAI", duration_ms=100, success=True))
    dispatcher.publish(InterviewCompleted(average_score=8.5, question_count=5))
    await general.join()

    assert {type(e) for e in seen} == {CallCompleted, InterviewCompleted}
    await dispatcher.shutdown()


@pytest.mark.asyncio
async def test_event_without_handlers_is_ignored():
    dispatcher = EventDispatcher(make_queue("general"), make_queue("ai"))
    dispatcher.start()

    dispatcher.publish(InterviewCompleted(average_score=5, question_count=3))

    assert dispatcher.general.pending == 0
    await dispatcher.shutdown()
