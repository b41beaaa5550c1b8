from __future__ import annotations

from ideascout.services.job_manager import JobManager, get_job_manager


def job_manager() -> JobManager:
    """FastAPI dependency returning the process-wide job manager."""
    return get_job_manager()
