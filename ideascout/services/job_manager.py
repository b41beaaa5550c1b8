from __future__ import annotations

import asyncio

from loguru import logger

from ideascout.config import settings
from ideascout.models.job import JobInput, JobRecord, JobStatus, now_ms
from ideascout.models.schemas import AnalysisReport, JobInputView, JobStatusResponse
from ideascout.research_core.pipeline import ResearchPipeline
from ideascout.services import logger as log_service
from ideascout.services.job_store import InMemoryJobStore, JobStore

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
# 100 is reserved for the completed state
MAX_IN_PROGRESS = 99


class JobManager:
    """Owns job records and drives them through the lifecycle.

    States: waiting -> processing -> completed | failed. The claim from
    waiting to processing is the only way into the pipeline, and it is
    checked and recorded with no await in between, so two dispatches of the
    same job can never both run it.
    """

    def __init__(
        self,
        store: JobStore | None = None,
        pipeline: ResearchPipeline | None = None,
    ):
        self.store = store if store is not None else InMemoryJobStore()
        self._pipeline = pipeline
        self._in_flight: set[str] = set()
        self._tasks: dict[str, asyncio.Task] = {}

    @property
    def pipeline(self) -> ResearchPipeline:
        if self._pipeline is None:
            self._pipeline = ResearchPipeline()
        return self._pipeline

    # --- Creation ---

    def create_job(self, job_input: JobInput) -> str:
        record = self.store.create(JobRecord(input=job_input))
        log_service.log_event(
            event_type="job_enqueued",
            message="Job enqueued",
            job_id=record.id,
            keyword=job_input.keyword[:100],
        )
        return record.id

    def submit(
        self,
        keyword: str | None,
        location: str | None = None,
        budget: str | None = None,
    ) -> str:
        """Create a job and dispatch it. Must be called from a running event loop."""
        cleaned = (keyword or "").strip()
        if not cleaned:
            raise ValueError("Missing keyword parameter")
        job_id = self.create_job(
            JobInput(
                keyword=cleaned,
                location=location or settings.default_location,
                budget=budget or settings.default_budget,
            )
        )
        self.dispatch(job_id)
        return job_id

    # --- Dispatch ---

    def _claim(self, job_id: str) -> JobRecord | None:
        if job_id in self._in_flight:
            return None
        record = self.store.get(job_id)
        if record is None or record.status is not JobStatus.WAITING:
            return None
        self._in_flight.add(job_id)

        def mark_processing(job: JobRecord) -> None:
            job.status = JobStatus.PROCESSING
            job.started_at = now_ms()

        return self.store.update(job_id, mark_processing)

    def dispatch(self, job_id: str) -> bool:
        """Start the job in the background. Repeated calls are no-ops."""
        loop = asyncio.get_running_loop()
        record = self._claim(job_id)
        if record is None:
            logger.debug(f"Dispatch ignored for job {job_id}")
            return False
        task = loop.create_task(self._execute(record), name=f"research-{job_id}")
        self._tasks[job_id] = task
        task.add_done_callback(lambda _t: self._tasks.pop(job_id, None))
        return True

    async def run_job(self, job_id: str) -> bool:
        """Run the job in the current task. Returns False if it could not be claimed."""
        record = self._claim(job_id)
        if record is None:
            return False
        await self._execute(record)
        return True

    async def wait_for(self, job_id: str) -> JobStatusResponse | None:
        task = self._tasks.get(job_id)
        if task is not None:
            await task
        return self.get_status(job_id)

    async def _execute(self, record: JobRecord) -> None:
        job_id = record.id
        log_service.log_event(event_type="job_started", message="Job started", job_id=job_id)
        try:
            report = await self.pipeline.run(
                job_id,
                record.input,
                lambda progress: self.update_progress(job_id, progress),
            )
            self.complete(job_id, report)
        except Exception as exc:
            logger.exception(f"Error processing job {job_id}")
            self.fail(job_id, exc)
        finally:
            self._in_flight.discard(job_id)

    # --- Transitions ---

    def update_progress(self, job_id: str, progress: float) -> None:
        value = min(MAX_IN_PROGRESS, max(0, int(progress)))

        def apply(job: JobRecord) -> None:
            if job.status.is_terminal:
                return
            if value > job.progress:
                job.progress = value

        self.store.update(job_id, apply)

    def complete(self, job_id: str, report: AnalysisReport) -> None:
        def apply(job: JobRecord) -> None:
            if job.status.is_terminal:
                return
            job.result = report
            job.error = None
            job.status = JobStatus.COMPLETED
            job.progress = 100
            job.completed_at = now_ms()

        if self.store.update(job_id, apply) is not None:
            log_service.log_event(event_type="job_completed", message="Job completed", job_id=job_id)

    def fail(self, job_id: str, error: BaseException | str | None) -> None:
        message = str(error) if error is not None else ""
        if not message.strip():
            message = UNKNOWN_ERROR_MESSAGE

        def apply(job: JobRecord) -> None:
            if job.status.is_terminal:
                return
            job.error = message
            job.result = None
            job.status = JobStatus.FAILED
            job.completed_at = now_ms()

        if self.store.update(job_id, apply) is not None:
            log_service.log_event(
                event_type="job_failed",
                message="Job failed",
                job_id=job_id,
                error=message,
            )

    # --- Lookup ---

    def get_status(self, job_id: str) -> JobStatusResponse | None:
        record = self.store.get(job_id)
        if record is None:
            return None
        return JobStatusResponse(
            job_id=record.id,
            status=record.status.value,
            progress=record.progress,
            data=JobInputView(
                keyword=record.input.keyword,
                location=record.input.location,
                budget=record.input.budget,
            ),
            result=record.result,
            error=record.error,
        )


_manager: JobManager | None = None


def get_job_manager() -> JobManager:
    global _manager
    if _manager is None:
        _manager = JobManager()
    return _manager
