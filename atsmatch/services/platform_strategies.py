from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

MatchingType = Literal["exact", "semantic", "frequency", "hybrid"]
KeywordFlexibility = Literal["strict", "moderate", "flexible"]


@dataclass(frozen=True, slots=True)
class PlatformStrategy:
    name: str
    matching_type: MatchingType
    keyword_flexibility: KeywordFlexibility
    recommendations: tuple[str, ...]
    priority_keyword_placement: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class KeywordMatchCounts:
    exact: int = 0
    partial: int = 0
    synonym: int = 0


@dataclass(frozen=True, slots=True)
class PlatformKeywordPlan:
    optimized: list[str]
    recommendations: list[str]


PLATFORM_STRATEGIES: dict[str, PlatformStrategy] = {
    "greenhouse": PlatformStrategy(
        "Greenhouse",
        "frequency",
        "moderate",
        (
            "Include keywords 2-3 times naturally throughout resume",
            "Higher keyword frequency = higher search ranking",
            'Use both full terms and acronyms (e.g., "Machine Learning" and "ML")',
            "Focus on human readability - recruiters still read the full resume",
            "Greenhouse understands synonyms (managed = led)",
        ),
        ("Skills", "Professional Summary", "Experience bullets", "Job titles"),
    ),
    "lever": PlatformStrategy(
        "Lever",
        "semantic",
        "flexible",
        (
            "Lever recognizes plurals and tenses automatically",
            "Use natural language - semantic matching understands context",
            "Synonyms are treated as equivalent (managed = led)",
            "Focus on demonstrating skills through achievements",
            "Less need for exact keyword matching",
        ),
        ("Experience achievements", "Skills", "Summary"),
    ),
    "workday": PlatformStrategy(
        "Workday",
        "exact",
        "strict",
        (
            "EXACT keyword matches required - copy from job description",
            "Include multiple variations of each keyword",
            "Workday does NOT recognize tenses, abbreviations, or acronyms automatically",
            'If JD says "project management" - use that exact phrase',
            "Add both singular and plural forms",
        ),
        ("Skills section", "Experience section", "Summary"),
    ),
    "taleo": PlatformStrategy(
        "Taleo (Oracle)",
        "hybrid",
        "moderate",
        (
            "Uses both keyword matching and semantic analysis",
            "Knockout questions are common - answer honestly",
            "Include keywords in context, not just lists",
            "Focus on recent experience (last 10 years)",
        ),
        ("Job titles", "Skills", "Experience descriptions"),
    ),
    "icims": PlatformStrategy(
        "iCIMS",
        "semantic",
        "moderate",
        (
            "Strong skills extraction capabilities",
            "Focus on technical skills with clear proficiency",
            "Certifications are weighted highly",
            "Include years of experience with each skill",
        ),
        ("Skills", "Certifications", "Experience"),
    ),
    "linkedin": PlatformStrategy(
        "LinkedIn",
        "semantic",
        "flexible",
        (
            "LinkedIn uses AI-powered semantic matching",
            "Skills section is heavily weighted",
            "Endorsements and recommendations matter",
            "Use industry-standard job titles",
        ),
        ("Headline", "About", "Skills", "Experience"),
    ),
    "indeed": PlatformStrategy(
        "Indeed",
        "hybrid",
        "moderate",
        (
            "Uses both keyword matching and AI analysis",
            "Job title matching is important",
            "Location and salary expectations matter",
            "Quick apply resumes need strong keywords",
        ),
        ("Job title", "Skills", "Summary"),
    ),
    "generic": PlatformStrategy(
        "Generic ATS",
        "hybrid",
        "moderate",
        (
            "Use keywords from job description 2-3 times",
            "Include both acronyms and full terms",
            "Use standard section headers",
            "Simple formatting - no tables, columns, or graphics",
            "Save as .docx or simple PDF",
        ),
        ("Skills", "Summary", "Experience", "Job titles"),
    ),
}

_PLATFORM_ALIASES: dict[str, str] = {
    "myworkdayjobs": "workday",
    "oracle": "taleo",
}

KEYWORD_VARIATIONS: dict[str, tuple[str, ...]] = {
    "javascript": ("JavaScript", "JS", "ECMAScript", "ES6", "ES2020"),
    "typescript": ("TypeScript", "TS"),
    "python": ("Python", "Python3", "Python 3"),
    "react": ("React", "ReactJS", "React.js", "React JS"),
    "vue": ("Vue", "Vue.js", "VueJS", "Vue 3"),
    "angular": ("Angular", "AngularJS", "Angular 2+"),
    "node": ("Node.js", "NodeJS", "Node"),
    "aws": ("AWS", "Amazon Web Services"),
    "gcp": ("GCP", "Google Cloud", "Google Cloud Platform"),
    "azure": ("Azure", "Microsoft Azure"),
    "docker": ("Docker", "Containerization"),
    "kubernetes": ("Kubernetes", "K8s", "K8"),
    "postgresql": ("PostgreSQL", "Postgres", "PSQL"),
    "mongodb": ("MongoDB", "Mongo"),
    "machine learning": ("Machine Learning", "ML"),
    "deep learning": ("Deep Learning", "DL"),
    "artificial intelligence": ("Artificial Intelligence", "AI"),
    "natural language processing": ("Natural Language Processing", "NLP"),
    "ci/cd": ("CI/CD", "CICD", "Continuous Integration", "Continuous Deployment"),
    "project management": ("Project Management", "PM", "Project Manager"),
    "data science": ("Data Science", "DS"),
    "data analysis": ("Data Analysis", "Data Analytics"),
}


def get_platform_strategy(platform: str | None) -> PlatformStrategy:
    key = (platform or "").strip().lower()
    key = _PLATFORM_ALIASES.get(key, key)
    return PLATFORM_STRATEGIES.get(key, PLATFORM_STRATEGIES["generic"])


def get_keyword_variations(keyword: str) -> tuple[str, ...]:
    return KEYWORD_VARIATIONS.get(keyword.lower(), (keyword,))


def optimize_keywords_for_platform(keywords: Iterable[str], platform: str | None) -> PlatformKeywordPlan:
    """Expand keywords for strict exact-match platforms and attach the platform's top tips."""
    strategy = get_platform_strategy(platform)
    optimized: dict[str, None] = {}
    recommendations: list[str] = []

    for keyword in keywords:
        optimized.setdefault(keyword)
        if strategy.keyword_flexibility != "strict":
            continue
        variations = get_keyword_variations(keyword)
        for variation in variations:
            optimized.setdefault(variation)
        if len(variations) > 1:
            others = '", "'.join(variations[1:])
            recommendations.append(
                f'Include both "{variations[0]}" and "{others}" for {strategy.name}'
            )

    recommendations.extend(strategy.recommendations[:3])
    return PlatformKeywordPlan(list(optimized), recommendations)


def get_platform_score_adjustment(
    base_score: float,
    platform: str | None,
    matches: KeywordMatchCounts,
) -> float:
    """Shift a score by how the platform treats exact, partial and synonym matches, clamped to 0..100."""
    matching = get_platform_strategy(platform).matching_type
    if matching == "exact":
        adjustment = matches.exact * 2 - matches.partial * 0.5
    elif matching == "frequency":
        adjustment = matches.exact * 1.5
    elif matching == "semantic":
        adjustment = matches.exact + matches.synonym
    else:
        adjustment = matches.exact + matches.partial * 0.5 + matches.synonym * 0.75
    return min(100.0, max(0.0, base_score + adjustment))
