from __future__ import annotations

import logging
import re
from typing import Iterable

from atsmatch.core.config.scoring import get_scoring_value
from atsmatch.schemas.ats import WeightedKeyword
from atsmatch.taxonomy import KeywordTaxonomy

logger = logging.getLogger(__name__)

_REQUIREMENTS_SECTION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"requirements?:?\s*([\s\S]*?)(?=responsibilities|about|benefits|what we offer|\Z)",
        r"qualifications?:?\s*([\s\S]*?)(?=responsibilities|about|benefits|what we offer|\Z)",
        r"what you'll need:?\s*([\s\S]*?)(?=responsibilities|about|benefits|what we offer|\Z)",
        r"must have:?\s*([\s\S]*?)(?=nice to have|preferred|responsibilities|\Z)",
        r"required skills?:?\s*([\s\S]*?)(?=preferred|nice to have|\Z)",
    )
)

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "and", "for", "with", "you", "your", "our", "this", "that", "will",
        "are", "have", "has", "been", "being", "their", "them", "they", "what",
        "when", "where", "which", "who", "how", "all", "each", "every", "both",
        "few", "more", "most", "other", "some", "such", "into", "through",
        "during", "before", "after", "above", "below", "between", "under",
        "about", "team", "work", "working", "experience", "years", "required",
        "preferred", "strong", "good", "excellent", "ability", "skills", "knowledge",
        "understanding", "proficiency", "familiar", "familiarity", "minimum",
        "must", "should", "would", "could", "can", "may", "might", "shall",
        "looking", "seeking", "join", "opportunity", "role", "position", "job",
        "company", "organization", "business", "industry", "market", "client",
        "customer", "user", "project", "product", "service", "solution",
        "develop", "development", "developer", "engineer", "engineering",
        "design", "designer", "build", "building", "create", "creating",
        "implement", "implementation", "maintain", "maintenance", "support",
        "manage", "management", "lead", "leading", "senior", "junior", "mid",
        "level", "plus", "bonus", "nice", "equal", "employer",
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
        "january", "february", "march", "april", "june", "july", "august",
        "september", "october", "november", "december", "remote", "onsite", "hybrid",
        "full", "time", "part", "contract", "permanent", "salary", "benefits",
    }
)

SKIP_ACRONYMS: frozenset[str] = frozenset(
    {"USA", "USD", "CEO", "CTO", "CFO", "COO", "HR", "IT", "PM", "QA", "BA", "UI", "UX"}
)

VERSIONED_TECH_NAMES: frozenset[str] = frozenset(
    {"java", "python", "node", "es", "php", "go", "ruby"}
)

_TECH_CONTEXT_WORDS = (
    "experience|knowledge|skills?|proficiency|developer|engineer|framework|library|"
    "platform|tool|system|database|server|integration|api|sdk"
)

_CAPITALIZED_RE = re.compile(r"\b([A-Z][a-z]+(?:[A-Z][a-z]+)*)\b")
_ACRONYM_RE = re.compile(r"\b([A-Z]{2,5})\b")
_VERSIONED_RE = re.compile(r"\b([A-Za-z]+)\s*(\d+(?:\.\d+)?)\b")
_SUFFIX_RE = re.compile(
    r"\b([A-Za-z]+(?:\.js|\.io|\.net|\.py|DB|MQ|SQL|API|SDK|CLI))\b", re.IGNORECASE
)
_COMPOUND_RE = re.compile(r"\b([A-Z][a-z]+(?:[A-Z][a-z]+)+|[a-z]+(?:-[a-z]+)+)\b")


def extract_requirements_section(text: str) -> str | None:
    """Return the first requirements/qualifications span of ``text``, if any."""
    for pattern in _REQUIREMENTS_SECTION_PATTERNS:
        match = pattern.search(text or "")
        if match and match.group(1):
            section = match.group(1).strip()
            if section:
                return section
    return None


def _count_word(text: str, word: str, *, ignore_case: bool = True) -> int:
    flags = re.IGNORECASE if ignore_case else 0
    return len(re.findall(rf"\b{re.escape(word)}\b", text, flags))


def _has_tech_context(text: str, word: str) -> bool:
    pattern = rf"\b{re.escape(word)}\b[\s,]*({_TECH_CONTEXT_WORDS})\b"
    return re.search(pattern, text, re.IGNORECASE) is not None


def _auto_weight(value: int, cap: int) -> int:
    auto_cap = int(get_scoring_value("keywords.auto_detected_max_weight", 3))
    return max(1, min(value, cap, auto_cap))


def auto_detect_keywords(text: str, known: Iterable[str]) -> list[WeightedKeyword]:
    """Heuristically detect technology-like terms that the taxonomy does not list.

    Five passes run in a fixed order over the original-case text: capitalized terms in a
    technical context, repeated acronyms, versioned names, tech suffixes and compound
    tokens. Every pass skips anything already known, case-insensitively, and registers
    what it adds so later passes do not duplicate it.
    """
    detected: list[WeightedKeyword] = []
    existing = {item.lower() for item in known}

    def add(keyword: str, weight: int, frequency: int) -> None:
        detected.append(
            WeightedKeyword(
                keyword=keyword,
                weight=weight,
                frequency=max(frequency, 1),
                in_requirements_section=False,
            )
        )
        existing.add(keyword.lower())

    for match in _CAPITALIZED_RE.finditer(text):
        word = match.group(1)
        lowered = word.lower()
        if lowered in existing or lowered in STOP_WORDS or len(word) < 3:
            continue
        if not _has_tech_context(text, word):
            continue
        frequency = _count_word(text, word)
        if frequency >= 1:
            add(word, _auto_weight(frequency, 3), frequency)

    for match in _ACRONYM_RE.finditer(text):
        acronym = match.group(1)
        if acronym.lower() in existing or acronym in SKIP_ACRONYMS:
            continue
        frequency = _count_word(text, acronym, ignore_case=False)
        if frequency >= 2:
            add(acronym, _auto_weight(frequency, 3), frequency)

    for match in _VERSIONED_RE.finditer(text):
        tech, version = match.group(1), match.group(2)
        combined = f"{tech} {version}"
        tech_lower = tech.lower()
        if combined.lower() in existing or tech_lower in existing or len(tech) < 2:
            continue
        if tech[0].isupper() or tech_lower in VERSIONED_TECH_NAMES:
            add(combined, _auto_weight(2, 2), 1)

    for match in _SUFFIX_RE.finditer(text):
        word = match.group(1)
        if word.lower() in existing or len(word) < 3:
            continue
        frequency = _count_word(text, word)
        add(word, _auto_weight(frequency + 1, 3), frequency)

    for match in _COMPOUND_RE.finditer(text):
        word = match.group(1)
        lowered = word.lower()
        if lowered in existing or lowered in STOP_WORDS or len(word) < 4:
            continue
        frequency = _count_word(text, word)
        if frequency >= 1:
            add(word, _auto_weight(frequency, 2), frequency)

    return detected


def extract_weighted_keywords(job_description: str, index: KeywordTaxonomy) -> list[WeightedKeyword]:
    text = (job_description or "").lower()
    requirements = extract_requirements_section(text)

    max_weight = int(get_scoring_value("keywords.max_weight", 5))
    frequency_cap = int(get_scoring_value("keywords.frequency_bonus_cap", 2))
    requirements_bonus = int(get_scoring_value("keywords.requirements_bonus", 2))

    found: dict[str, WeightedKeyword] = {}
    for pattern, name in index.get_all_patterns():
        if name in found:
            continue
        frequency = len(pattern.findall(text))
        if frequency < 1:
            continue
        in_requirements = bool(requirements and pattern.search(requirements))
        weight = 1 + min(frequency - 1, frequency_cap)
        if in_requirements:
            weight += requirements_bonus
        found[name] = WeightedKeyword(
            keyword=name,
            weight=max(1, min(weight, max_weight)),
            frequency=frequency,
            in_requirements_section=in_requirements,
        )

    keywords = list(found.values())
    taxonomy_count = len(keywords)
    for keyword in auto_detect_keywords(job_description or "", found.keys()):
        if keyword.keyword not in found:
            found[keyword.keyword] = keyword
            keywords.append(keyword)

    keywords.sort(key=lambda item: item.weight, reverse=True)
    logger.debug(
        "keywords_extracted total=%s taxonomy=%s requirements_section=%s",
        len(keywords),
        taxonomy_count,
        requirements is not None,
    )
    return keywords
