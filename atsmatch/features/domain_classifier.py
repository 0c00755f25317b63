from __future__ import annotations

from atsmatch.core.config.scoring import get_scoring_value
from atsmatch.schemas.ats import JobDomain

TECH_INDICATORS: tuple[str, ...] = (
    "software", "engineer", "developer", "programming", "code", "api", "database",
    "frontend", "backend", "full stack", "devops", "cloud", "aws", "azure", "gcp",
    "react", "angular", "vue", "node", "python", "java", "javascript", "typescript",
    "kubernetes", "docker", "microservice", "machine learning", "data science",
    "artificial intelligence", "ml", "ai", "data engineer", "sre", "qa engineer",
    "test automation", "mobile developer", "ios", "android", "security engineer",
)

NON_TECH_INDICATORS: tuple[str, ...] = (
    "retail", "store", "cashier", "sales associate", "customer service", "warehouse",
    "driver", "delivery", "cook", "chef", "restaurant", "server", "bartender",
    "nurse", "nursing", "medical assistant", "pharmacy", "healthcare", "patient",
    "teacher", "instructor", "tutor", "education", "administrative assistant",
    "receptionist", "office manager", "accountant", "bookkeeper", "hr coordinator",
    "marketing coordinator", "sales representative", "account executive",
    "construction", "electrician", "plumber", "mechanic", "technician",
    "security guard", "janitor", "housekeeper", "cleaner", "landscaper",
)


def _indicator_hits(text: str, indicators: tuple[str, ...]) -> int:
    return sum(1 for indicator in indicators if indicator in text)


def detect_job_domain(job_description: str) -> JobDomain:
    """Classify a job description as tech, non-tech or unknown.

    Indicators are counted by presence (plain substring), not by occurrence.
    """
    text = (job_description or "").lower()
    tech = _indicator_hits(text, TECH_INDICATORS)
    non_tech = _indicator_hits(text, NON_TECH_INDICATORS)
    minimum = int(get_scoring_value("domains.min_indicators", 2))

    if tech >= minimum and tech > non_tech:
        return "tech"
    if non_tech >= minimum and non_tech > tech:
        return "non-tech"
    return "unknown"
