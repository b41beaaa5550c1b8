from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import replace

from ideascout.config import settings
from ideascout import llm_client
from ideascout.llm_client import OllamaClient
from ideascout.models.job import JobInput
from ideascout.models.schemas import AnalysisReport
from ideascout.research_core.analysis.parser import parse_analysis
from ideascout.research_core.analysis.prompt import build_analysis_prompt
from ideascout.research_core.extract.service import build_evidence_chunks
from ideascout.research_core.models.interfaces import SearchResult
from ideascout.research_core.scrape.service import ContentFetcher
from ideascout.services import logger as log_service
from ideascout.services.search_executor import collect_candidates

ProgressCallback = Callable[[int], None]
CandidateSearch = Callable[[str], Awaitable[list[SearchResult]]]

# Progress checkpoints reported to the job manager
PROGRESS_STARTED = 5
PROGRESS_SEARCHED = 25
PROGRESS_AGGREGATED = 35
PROGRESS_SCRAPED = 60
PROGRESS_CHUNKED = 70
PROGRESS_ANALYZED = 85


class ResearchPipeline:
    """Keyword to business-idea report.

    Flow:
      1. Query all evidence sources concurrently
      2. Merge and dedupe the hits, capped
      3. Scrape each surviving page, one at a time
      4. Chunk the combined text
      5. Ask the LLM for a JSON report
      6. Repair-parse the answer into an AnalysisReport

    Sub-step failures degrade to empty data. Anything else propagates so the
    job manager can mark the job failed.
    """

    def __init__(
        self,
        *,
        search: CandidateSearch | None = None,
        fetcher: ContentFetcher | None = None,
        llm: OllamaClient | None = None,
    ):
        self._search = search or collect_candidates
        self.fetcher = fetcher or ContentFetcher(
            timeout=settings.fetch_timeout_seconds,
            max_chars=settings.scrape_max_chars,
            min_chars=settings.scrape_min_chars,
        )
        self._llm = llm

    @property
    def llm(self) -> OllamaClient:
        if self._llm is None:
            self._llm = llm_client.client()
        return self._llm

    async def run(
        self,
        job_id: str,
        job_input: JobInput,
        on_progress: ProgressCallback,
    ) -> AnalysisReport:
        if not job_input.location:
            job_input = replace(job_input, location=settings.default_location)

        on_progress(PROGRESS_STARTED)

        candidates = await self._search(job_input.keyword)
        on_progress(PROGRESS_SEARCHED)
        log_service.log_research_step(job_id, "search", "completed", {"candidates": len(candidates)})
        on_progress(PROGRESS_AGGREGATED)

        span = PROGRESS_SCRAPED - PROGRESS_AGGREGATED
        scraped = await self.fetcher.scrape_results(
            candidates,
            on_progress=lambda fraction: on_progress(int(PROGRESS_AGGREGATED + fraction * span)),
        )
        on_progress(PROGRESS_SCRAPED)
        log_service.log_research_step(
            job_id,
            "scrape",
            "completed",
            {"attempted": len(candidates), "kept": len(scraped)},
        )

        chunks = build_evidence_chunks(
            (result.content or "" for result in scraped),
            chunk_size=settings.chunk_size,
            max_chunks=settings.max_chunks,
        )
        on_progress(PROGRESS_CHUNKED)

        prompt = build_analysis_prompt(job_input, chunks)
        analysis = await self.llm.generate(prompt)
        on_progress(PROGRESS_ANALYZED)
        log_service.log_research_step(
            job_id,
            "analysis",
            "completed" if analysis else "empty",
            {"chunks": len(chunks), "response_chars": len(analysis)},
        )

        return parse_analysis(analysis)
