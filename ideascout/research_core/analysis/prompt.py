from __future__ import annotations

from collections.abc import Sequence

from ideascout.models.job import JobInput
from ideascout.services.prompt_store import render_prompt


def build_analysis_prompt(job_input: JobInput, chunks: Sequence[str]) -> str:
    return render_prompt(
        "analysis.business_idea",
        keyword=job_input.keyword,
        location=job_input.location,
        budget=job_input.budget,
        evidence="\n\n".join(chunks),
    )
