from __future__ import annotations

import re
from dataclasses import dataclass

SENIORITY_LADDER: tuple[str, ...] = (
    "entry",
    "mid",
    "senior",
    "lead",
    "principal",
    "staff",
    "director",
)

_YEARS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)"),
    re.compile(r"(?:experience|exp)\s*(?:of\s*)?(\d+)\+?\s*(?:years?|yrs?)"),
    re.compile(r"minimum\s*(?:of\s*)?(\d+)\s*(?:years?|yrs?)"),
)

# Most senior first; the first hit decides.
_JD_LEVEL_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(principal|staff)\b"), "principal"),
    (re.compile(r"\b(director|head of)\b"), "director"),
    (re.compile(r"\b(lead|tech lead|team lead)\b"), "lead"),
    (re.compile(r"\bsenior\b"), "senior"),
    (re.compile(r"\b(mid[\s-]?level|intermediate)\b"), "mid"),
    (re.compile(r"\b(junior|entry[\s-]?level|associate)\b"), "entry"),
)

_PROFILE_LEVEL_TERMS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("principal", "staff"), "principal"),
    (("director",), "director"),
    (("lead",), "lead"),
    (("senior",), "senior"),
    (("mid",), "mid"),
    (("junior", "entry"), "entry"),
)


@dataclass(frozen=True, slots=True)
class SeniorityContext:
    level: str | None
    years_required: int | None


def level_from_years(years: float) -> str:
    if years >= 10:
        return "principal"
    if years >= 7:
        return "lead"
    if years >= 5:
        return "senior"
    if years >= 2:
        return "mid"
    return "entry"


def ladder_position(level: str | None) -> int:
    if not level:
        return -1
    try:
        return SENIORITY_LADDER.index(level)
    except ValueError:
        return -1


def extract_years_required(text: str) -> int | None:
    lowered = (text or "").lower()
    for pattern in _YEARS_PATTERNS:
        match = pattern.search(lowered)
        if match:
            return int(match.group(1))
    return None


def extract_seniority_context(job_description: str) -> SeniorityContext:
    text = (job_description or "").lower()
    years = extract_years_required(text)

    for pattern, level in _JD_LEVEL_PATTERNS:
        if pattern.search(text):
            return SeniorityContext(level=level, years_required=years)

    if years is not None:
        return SeniorityContext(level=level_from_years(years), years_required=years)
    return SeniorityContext(level=None, years_required=None)


def normalize_profile_seniority(level: str | None, years: float | None = None) -> str | None:
    """Map a stored seniority label onto the ladder, or infer it from years.

    Unrecognised non-empty labels are returned unchanged; they do not sit on the
    ladder, so they never trigger a seniority adjustment.
    """
    if level:
        lowered = level.lower()
        for terms, mapped in _PROFILE_LEVEL_TERMS:
            if any(term in lowered for term in terms):
                return mapped
        return level
    if years:
        return level_from_years(years)
    return None


def compare_seniority(profile_level: str | None, job_level: str | None) -> str:
    """Place a profile against a job on the ladder: one rung either way still matches."""
    job_position = ladder_position(job_level)
    profile_position = ladder_position(profile_level)
    if job_position < 0 or profile_position < 0:
        return "unknown"
    if abs(job_position - profile_position) <= 1:
        return "match"
    return "over" if profile_position > job_position else "under"
