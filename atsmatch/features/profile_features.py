from __future__ import annotations

from dataclasses import dataclass

from atsmatch.features.seniority import normalize_profile_seniority
from atsmatch.schemas.profile import Profile, SkillDetail

# Ordered: the first matching rule decides. (required term, any of, background)
_DOMAIN_BACKGROUND_RULES: tuple[tuple[str | None, tuple[str, ...], str], ...] = (
    (None, ("software", "engineer", "developer", "backend", "frontend"), "computer-science"),
    ("data", ("analyst", "analytics", "science"), "data-analytics"),
    (None, ("design", "ux", "ui"), "design"),
    (None, ("marketing", "content", "social"), "marketing"),
    (None, ("business", "operations", "project", "product"), "mba-business"),
    (None, ("mechanical", "electrical", "civil", "manufacturing"), "engineering"),
    (None, ("healthcare", "medical", "nursing", "clinical", "patient"), "healthcare"),
    (None, ("finance", "accounting", "banking", "investment"), "finance"),
    (None, ("legal", "lawyer", "attorney", "law"), "legal"),
    (None, ("education", "teaching", "teacher", "instructor"), "education"),
)


@dataclass(frozen=True, slots=True)
class ProfileFeatures:
    skills: frozenset[str]
    background: str | None
    seniority: str | None
    years_of_experience: float | None


def _add(skills: set[str], value: str | None) -> None:
    if value:
        skills.add(value.lower())


def extract_profile_skills(profile: Profile) -> set[str]:
    skills: set[str] = set()

    profile_skills = getattr(profile, "skills", None)
    if profile_skills is not None:
        for item in getattr(profile_skills, "technical", None) or []:
            if isinstance(item, SkillDetail):
                _add(skills, item.name)
                _add(skills, item.normalized_name)
                for alias in item.aliases:
                    _add(skills, alias)
            else:
                _add(skills, item)
        for item in getattr(profile_skills, "tools", None) or []:
            _add(skills, item.name if isinstance(item, SkillDetail) else item)
        for item in getattr(profile_skills, "frameworks", None) or []:
            _add(skills, item.name if isinstance(item, SkillDetail) else item)

    for item in getattr(profile, "highlighted_skills", None) or []:
        _add(skills, item)
    for item in getattr(profile, "ats_keywords", None) or []:
        _add(skills, item)

    return skills


def background_from_domain(primary_domain: str | None) -> str | None:
    domain = (primary_domain or "").lower()
    if not domain:
        return None
    for required, terms, background in _DOMAIN_BACKGROUND_RULES:
        if required is not None and required not in domain:
            continue
        if any(term in domain for term in terms):
            return background
    return None


def extract_profile_background(profile: Profile) -> str | None:
    background_config = getattr(profile, "background_config", None)
    if background_config is not None and background_config.background:
        return background_config.background
    career = getattr(profile, "career_context", None)
    if career is None:
        return None
    return background_from_domain(career.primary_domain)


def extract_profile_years(profile: Profile) -> float | None:
    career = getattr(profile, "career_context", None)
    if career is None:
        return None
    return career.years_of_experience


def extract_profile_seniority(profile: Profile) -> str | None:
    career = getattr(profile, "career_context", None)
    if career is None:
        return None
    return normalize_profile_seniority(career.seniority_level, career.years_of_experience)


def extract_profile_features(profile: Profile) -> ProfileFeatures:
    return ProfileFeatures(
        skills=frozenset(extract_profile_skills(profile)),
        background=extract_profile_background(profile),
        seniority=extract_profile_seniority(profile),
        years_of_experience=extract_profile_years(profile),
    )
