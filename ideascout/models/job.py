from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

from ideascout.models.schemas import AnalysisReport


class JobStatus(str, Enum):
    WAITING = "waiting"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


@dataclass(slots=True)
class JobInput:
    keyword: str
    location: str
    budget: str


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_job_id() -> str:
    return f"job-{uuid4().hex}"


@dataclass(slots=True)
class JobRecord:
    input: JobInput
    id: str = field(default_factory=generate_job_id)
    status: JobStatus = JobStatus.WAITING
    progress: int = 0
    result: AnalysisReport | None = None
    error: str | None = None
    created_at: int = field(default_factory=now_ms)
    started_at: int | None = None
    completed_at: int | None = None
