"""Structured extraction of the business-idea report from free-text model output.

Local models wrap JSON in code fences, add commentary, leave trailing commas,
use single quotes or forget to quote keys. Recovery is an ordered chain of
pure strategies, each `str -> dict | None`; the first dict wins. When every
strategy fails the report falls back to empty fields, so callers never see an
exception from here.
"""
from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Any

import json5
from loguru import logger

from ideascout.models.schemas import AnalysisReport

ParseStrategy = Callable[[str], "dict[str, Any] | None"]

FENCED_OBJECT_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```")
BARE_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
LEADING_FENCE_RE = re.compile(r"^```json\s*", re.IGNORECASE)
TRAILING_FENCE_RE = re.compile(r"```\s*$")
TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
BARE_KEY_RE = re.compile(r"([{,]\s*)([a-zA-Z_][a-zA-Z0-9_]*)\s*:")

REPORT_STRING_FIELDS = (
    "problem",
    "target_users",
    "why_it_matters",
    "existing_bad_solutions",
    "mvp_idea",
    "why_it_can_work_in_location",
    "estimated_budget_range",
    "revenue_model",
)
REPORT_STEPS_FIELD = "first_3_steps"
RAW_PREVIEW_CHARS = 500


def extract_json_candidate(raw_text: str) -> str | None:
    """Prefer a fenced object; otherwise take the widest `{...}` span."""
    fenced = FENCED_OBJECT_RE.search(raw_text)
    if fenced:
        return fenced.group(1)
    bare = BARE_OBJECT_RE.search(raw_text)
    if bare:
        return bare.group(0)
    return None


def strip_trailing_commas(text: str) -> str:
    return TRAILING_COMMA_RE.sub(r"\1", text)


def clean_candidate(candidate: str) -> str:
    cleaned = candidate.strip()
    cleaned = LEADING_FENCE_RE.sub("", cleaned)
    cleaned = TRAILING_FENCE_RE.sub("", cleaned).strip()
    return strip_trailing_commas(cleaned)


def _as_object(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def parse_tolerant(text: str) -> dict[str, Any] | None:
    """JSON5 parse: comments, trailing commas and friends are accepted."""
    try:
        return _as_object(json5.loads(text))
    except Exception:
        return None


def repair_text(text: str) -> str:
    repaired = text.replace("'", '"')
    return BARE_KEY_RE.sub(r'\1"\2":', repaired)


def parse_repaired(text: str) -> dict[str, Any] | None:
    return parse_tolerant(repair_text(text))


def parse_sliced(text: str) -> dict[str, Any] | None:
    """Strict parse of the outermost brace span."""
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last <= first:
        return None
    sliced = strip_trailing_commas(text[first : last + 1])
    try:
        return _as_object(json.loads(sliced))
    except json.JSONDecodeError:
        return None


REPAIR_CASCADE: tuple[ParseStrategy, ...] = (
    parse_tolerant,
    parse_repaired,
    parse_sliced,
)


def parse_json_object(raw_text: str) -> dict[str, Any] | None:
    candidate = extract_json_candidate(raw_text or "")
    if candidate is None:
        return None
    cleaned = clean_candidate(candidate)
    for strategy in REPAIR_CASCADE:
        parsed = strategy(cleaned)
        if parsed is not None:
            return parsed
    return None


def _coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or value is False or value == 0:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False) if value else ""
    return str(value)


def _coerce_steps(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_coerce_text(item) for item in value if item is not None]


def report_from_payload(payload: dict[str, Any] | None) -> AnalysisReport:
    """Build a report where every field is independently defaulted."""
    payload = payload or {}
    fields: dict[str, Any] = {
        name: _coerce_text(payload.get(name)) for name in REPORT_STRING_FIELDS
    }
    fields[REPORT_STEPS_FIELD] = _coerce_steps(payload.get(REPORT_STEPS_FIELD))
    return AnalysisReport(**fields)


def parse_analysis(raw_text: str) -> AnalysisReport:
    parsed = parse_json_object(raw_text)
    if parsed is None:
        preview = (raw_text or "")[:RAW_PREVIEW_CHARS]
        logger.warning(
            f"All JSON parsing attempts failed, returning empty report. Raw response preview: {preview!r}"
        )
    return report_from_payload(parsed)
