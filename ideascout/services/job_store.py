from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Protocol

from ideascout.models.job import JobRecord

JobMutator = Callable[[JobRecord], None]


class JobStore(Protocol):
    """Storage seam for job records.

    Implementations hand out copies; the only way to change a stored record is
    `update`, which applies the mutator to the stored record in one step.
    """

    def create(self, record: JobRecord) -> JobRecord: ...
    def get(self, job_id: str) -> JobRecord | None: ...
    def update(self, job_id: str, mutate: JobMutator) -> JobRecord | None: ...


class InMemoryJobStore:
    """Process-lifetime job table. Nothing survives a restart."""

    def __init__(self) -> None:
        self._jobs: dict[str, JobRecord] = {}

    def __len__(self) -> int:
        return len(self._jobs)

    def create(self, record: JobRecord) -> JobRecord:
        if record.id in self._jobs:
            raise ValueError(f"Job already exists: {record.id}")
        self._jobs[record.id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    def get(self, job_id: str) -> JobRecord | None:
        record = self._jobs.get(job_id)
        return copy.deepcopy(record) if record is not None else None

    def update(self, job_id: str, mutate: JobMutator) -> JobRecord | None:
        record = self._jobs.get(job_id)
        if record is None:
            return None
        mutate(record)
        return copy.deepcopy(record)
