from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# --- Domain ---


class AnalysisReport(BaseModel):
    problem: str = ""
    target_users: str = ""
    why_it_matters: str = ""
    existing_bad_solutions: str = ""
    mvp_idea: str = ""
    why_it_can_work_in_location: str = ""
    estimated_budget_range: str = ""
    revenue_model: str = ""
    first_3_steps: list[str] = Field(default_factory=list)


# --- Requests ---


class StartJobRequest(BaseModel):
    keyword: str | None = None
    location: str | None = None
    budget: str | None = None


# --- Responses ---


class StartJobResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")


class JobInputView(BaseModel):
    keyword: str
    location: str
    budget: str


class JobStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")
    status: str
    progress: int
    data: JobInputView
    result: AnalysisReport | None = None
    error: str | None = None
