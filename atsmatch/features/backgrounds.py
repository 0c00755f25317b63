from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

BackgroundType = Literal[
    "computer-science",
    "data-analytics",
    "mba-business",
    "marketing",
    "design",
    "engineering",
    "healthcare",
    "finance",
    "legal",
    "education",
    "other",
]


@dataclass(frozen=True, slots=True)
class BackgroundConfig:
    id: BackgroundType
    name: str
    indicators: tuple[str, ...] = ()


BACKGROUND_CONFIGS: tuple[BackgroundConfig, ...] = (
    BackgroundConfig(
        "computer-science",
        "Computer Science / Software Engineering",
        (
            "software", "developer", "engineer", "programming", "coding", "frontend",
            "backend", "fullstack", "devops", "data engineer", "machine learning",
            "web development", "mobile development",
        ),
    ),
    BackgroundConfig(
        "data-analytics",
        "Data Analytics / Business Intelligence",
        (
            "data analyst", "data scientist", "business intelligence", "bi analyst",
            "analytics", "insights", "visualization", "tableau", "power bi",
        ),
    ),
    BackgroundConfig(
        "mba-business",
        "MBA / Business",
        (
            "mba", "business", "management", "strategy", "operations", "consulting",
            "project manager", "product manager",
        ),
    ),
    BackgroundConfig(
        "engineering",
        "Engineering (Non-Software)",
        (
            "mechanical", "electrical", "civil", "chemical", "structural", "pe license",
            "cad", "manufacturing", "quality engineer",
        ),
    ),
    BackgroundConfig(
        "design",
        "Design / Creative",
        ("designer", "ux", "ui", "graphic", "product design", "figma", "creative", "visual design"),
    ),
    BackgroundConfig(
        "marketing",
        "Marketing / Communications",
        (
            "marketing", "seo", "content", "social media", "brand", "communications",
            "digital marketing", "growth",
        ),
    ),
    BackgroundConfig(
        "healthcare",
        "Healthcare",
        ("healthcare", "medical", "clinical", "hospital", "patient", "nursing"),
    ),
    BackgroundConfig(
        "finance",
        "Finance / Accounting",
        ("finance", "accounting", "investment", "banking", "financial", "cpa"),
    ),
    BackgroundConfig(
        "legal",
        "Legal",
        ("lawyer", "attorney", "legal", "compliance", "paralegal", "jd degree"),
    ),
    BackgroundConfig(
        "education",
        "Education",
        ("teacher", "instructor", "professor", "education", "training", "curriculum"),
    ),
    BackgroundConfig("other", "Other"),
)

_CONFIGS_BY_ID: dict[str, BackgroundConfig] = {config.id: config for config in BACKGROUND_CONFIGS}

# Directed: only related[profile] is consulted.
RELATED_BACKGROUNDS: dict[str, tuple[str, ...]] = {
    "computer-science": ("data-analytics", "design"),
    "data-analytics": ("computer-science", "mba-business"),
    "mba-business": ("marketing", "finance"),
    "marketing": ("mba-business", "design"),
    "design": ("marketing", "computer-science"),
    "engineering": (),
    "healthcare": (),
    "finance": ("mba-business",),
    "legal": (),
    "education": (),
    "other": (),
}


@dataclass(frozen=True, slots=True)
class BackgroundMismatch:
    mismatch: bool
    message: str | None = None


@dataclass(frozen=True, slots=True)
class BackgroundDetection:
    background: BackgroundType | None
    confidence: float
    indicators: tuple[str, ...] = ()


def get_background_config(background: str) -> BackgroundConfig | None:
    return _CONFIGS_BY_ID.get(background)


def background_display_name(background: str) -> str:
    config = get_background_config(background)
    return config.name if config else background


def detect_background(job_description: str) -> BackgroundDetection:
    """Pick the background whose indicators appear most often in the job text.

    Ties keep the earlier configuration; no indicator at all yields no background.
    Confidence is the winner's share of the top two scores, or 1 when only one
    background had any hit.
    """
    text = (job_description or "").lower()
    hits: list[tuple[BackgroundConfig, tuple[str, ...]]] = []
    for config in BACKGROUND_CONFIGS:
        found = tuple(indicator for indicator in config.indicators if indicator in text)
        if found:
            hits.append((config, found))
    if not hits:
        return BackgroundDetection(None, 0.0)

    ranked = sorted(hits, key=lambda item: -len(item[1]))
    best, indicators = ranked[0]
    if len(ranked) == 1:
        return BackgroundDetection(best.id, 1.0, indicators)
    runner_up = len(ranked[1][1])
    return BackgroundDetection(best.id, len(indicators) / (len(indicators) + runner_up), indicators)


def detect_background_from_jd(job_description: str) -> BackgroundType | None:
    return detect_background(job_description).background


def check_background_mismatch(
    profile_background: str | None,
    job_background: str | None,
) -> BackgroundMismatch:
    if not profile_background or not job_background:
        return BackgroundMismatch(False)
    if profile_background == job_background:
        return BackgroundMismatch(False)
    if job_background in RELATED_BACKGROUNDS.get(profile_background, ()):
        return BackgroundMismatch(False)

    profile_name = background_display_name(profile_background)
    job_name = background_display_name(job_background)
    return BackgroundMismatch(
        True,
        f'Your background is "{profile_name}" but this job is "{job_name}". '
        "Skills may not transfer directly.",
    )
