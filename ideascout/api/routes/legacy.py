from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api/analyze", tags=["legacy"])


def _gone(message: str) -> JSONResponse:
    return JSONResponse(status_code=410, content={"error": message})


@router.post("")
async def analyze():
    return _gone(
        "This endpoint is deprecated. Use POST /api/start-job and GET /api/job-status instead."
    )


@router.post("/start")
async def analyze_start():
    return _gone("Deprecated. Use POST /api/start-job")


@router.get("/status")
async def analyze_status():
    return _gone("Deprecated. Use GET /api/job-status")
