from __future__ import annotations

import asyncio

import pytest

from ideascout.models.job import JobInput, JobStatus
from ideascout.models.schemas import AnalysisReport
from ideascout.services.job_manager import JobManager
from ideascout.services.job_store import InMemoryJobStore


class FakePipeline:
    def __init__(self, *, report: AnalysisReport | None = None, error: Exception | None = None, steps=(5, 25, 60)):
        self.report = report or AnalysisReport(problem="p")
        self.error = error
        self.steps = steps
        self.calls = 0
        self.release = asyncio.Event()
        self.release.set()

    async def run(self, job_id, job_input, on_progress):
        self.calls += 1
        for step in self.steps:
            on_progress(step)
            await asyncio.sleep(0)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.report


def _input() -> JobInput:
    return JobInput(keyword="coffee", location="Baku", budget="$100")


@pytest.mark.asyncio
async def test_submit_runs_job_to_completion():
    manager = JobManager(pipeline=FakePipeline(report=AnalysisReport(problem="done")))

    job_id = manager.submit("  coffee  ")
    status = await manager.wait_for(job_id)

    assert status.status == "completed"
    assert status.progress == 100
    assert status.result.problem == "done"
    assert status.error is None
    assert status.data.keyword == "coffee"
    assert status.data.location == "Azerbaijan"
    assert status.data.budget == "<$100"


@pytest.mark.asyncio
async def test_submit_rejects_blank_keyword():
    manager = JobManager(pipeline=FakePipeline())

    with pytest.raises(ValueError):
        manager.submit("   ")
    with pytest.raises(ValueError):
        manager.submit(None)


@pytest.mark.asyncio
async def test_new_job_starts_waiting_at_zero():
    manager = JobManager(pipeline=FakePipeline())

    job_id = manager.create_job(_input())
    status = manager.get_status(job_id)

    assert status.status == "waiting"
    assert status.progress == 0
    assert status.result is None
    assert status.error is None


@pytest.mark.asyncio
async def test_double_dispatch_runs_pipeline_once():
    pipeline = FakePipeline()
    manager = JobManager(pipeline=pipeline)
    job_id = manager.create_job(_input())

    first = manager.dispatch(job_id)
    second = manager.dispatch(job_id)
    await manager.wait_for(job_id)
    third = manager.dispatch(job_id)

    assert (first, second, third) == (True, False, False)
    assert pipeline.calls == 1


@pytest.mark.asyncio
async def test_dispatch_unknown_job_is_noop():
    manager = JobManager(pipeline=FakePipeline())

    assert manager.dispatch("job-missing") is False


@pytest.mark.asyncio
async def test_run_job_after_dispatch_is_ignored():
    pipeline = FakePipeline()
    pipeline.release.clear()
    manager = JobManager(pipeline=pipeline)
    job_id = manager.create_job(_input())

    assert manager.dispatch(job_id) is True
    assert await manager.run_job(job_id) is False

    pipeline.release.set()
    await manager.wait_for(job_id)
    assert pipeline.calls == 1


@pytest.mark.asyncio
async def test_pipeline_failure_marks_job_failed_with_message():
    manager = JobManager(pipeline=FakePipeline(error=RuntimeError("search backend exploded")))

    job_id = manager.submit("coffee")
    status = await manager.wait_for(job_id)

    assert status.status == "failed"
    assert status.error == "search backend exploded"
    assert status.result is None
    assert status.progress < 100


@pytest.mark.asyncio
async def test_failure_without_message_uses_generic_error():
    manager = JobManager(pipeline=FakePipeline(error=RuntimeError()))

    job_id = manager.submit("coffee")
    status = await manager.wait_for(job_id)

    assert status.status == "failed"
    assert status.error == "Unknown error occurred"


@pytest.mark.asyncio
async def test_progress_is_monotonic_and_never_100_before_completion():
    pipeline = FakePipeline(steps=(5, 40, 30, 150, -10))
    pipeline.release.clear()
    manager = JobManager(pipeline=pipeline)
    job_id = manager.submit("coffee")

    seen: list[int] = []
    for _ in range(10):
        await asyncio.sleep(0)
        seen.append(manager.get_status(job_id).progress)

    assert seen == sorted(seen)
    assert manager.get_status(job_id).status == "processing"
    assert manager.get_status(job_id).progress == 99

    pipeline.release.set()
    status = await manager.wait_for(job_id)
    assert status.progress == 100


@pytest.mark.asyncio
async def test_late_updates_after_terminal_state_are_ignored():
    manager = JobManager(pipeline=FakePipeline())
    job_id = manager.submit("coffee")
    await manager.wait_for(job_id)

    manager.update_progress(job_id, 10)
    manager.fail(job_id, RuntimeError("late"))

    status = manager.get_status(job_id)
    assert status.status == "completed"
    assert status.progress == 100
    assert status.error is None


def test_dispatch_outside_event_loop_leaves_job_waiting():
    manager = JobManager(pipeline=FakePipeline())
    job_id = manager.create_job(_input())

    with pytest.raises(RuntimeError):
        manager.dispatch(job_id)

    assert manager.get_status(job_id).status == "waiting"
    assert job_id not in manager._in_flight


def test_get_status_unknown_job_returns_none():
    manager = JobManager(pipeline=FakePipeline())

    assert manager.get_status("job-does-not-exist") is None


def test_get_status_returns_snapshot_not_live_reference():
    store = InMemoryJobStore()
    manager = JobManager(store=store, pipeline=FakePipeline())
    job_id = manager.create_job(_input())
    manager.complete(job_id, AnalysisReport(first_3_steps=["a"]))

    snapshot = manager.get_status(job_id)
    snapshot.result.first_3_steps.append("mutated")

    assert manager.get_status(job_id).result.first_3_steps == ["a"]
    assert store.get(job_id).status is JobStatus.COMPLETED


def test_store_get_returns_copies():
    store = InMemoryJobStore()
    manager = JobManager(store=store, pipeline=FakePipeline())
    job_id = manager.create_job(_input())

    record = store.get(job_id)
    record.progress = 77

    assert store.get(job_id).progress == 0
