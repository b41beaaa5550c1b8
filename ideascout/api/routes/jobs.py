from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ideascout.api.deps import job_manager
from ideascout.models.schemas import JobStatusResponse, StartJobRequest, StartJobResponse
from ideascout.services.job_manager import JobManager

router = APIRouter(prefix="/api", tags=["jobs"])


@router.post("/start-job", status_code=202, response_model=StartJobResponse)
async def start_job(request: StartJobRequest, manager: JobManager = Depends(job_manager)):
    """Create a research job and start it in the background."""
    if not request.keyword or not request.keyword.strip():
        return JSONResponse(status_code=400, content={"error": "Missing keyword parameter"})

    job_id = manager.submit(request.keyword, request.location, request.budget)
    return StartJobResponse(job_id=job_id)


@router.get("/job-status", response_model=JobStatusResponse)
async def job_status(
    job_id: str | None = Query(default=None, alias="jobId"),
    manager: JobManager = Depends(job_manager),
):
    """Poll a job's progress and result."""
    if not job_id:
        return JSONResponse(status_code=400, content={"error": "Missing jobId parameter"})

    status = manager.get_status(job_id)
    if status is None:
        return JSONResponse(status_code=404, content={"error": "Job not found"})
    return status
