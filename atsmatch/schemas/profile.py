from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProfileModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(ProfileModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str | dict[str, Any] | None = None
    linked_in_url: str | None = None
    portfolio_url: str | None = None
    github_url: str | None = None


class SkillDetail(ProfileModel):
    name: str
    normalized_name: str = ""
    category: str = ""
    years_of_experience: float | None = None
    proficiency: str | None = None
    aliases: list[str] = Field(default_factory=list)


SkillItem = Union[SkillDetail, str]


class ResumeSkills(ProfileModel):
    technical: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)


class MasterSkills(ProfileModel):
    technical: list[SkillItem] = Field(default_factory=list)
    soft: list[SkillItem] = Field(default_factory=list)
    tools: list[SkillItem] = Field(default_factory=list)
    frameworks: list[SkillItem] = Field(default_factory=list)


class CareerContext(ProfileModel):
    summary: str = ""
    years_of_experience: float | None = None
    seniority_level: str | None = None
    primary_domain: str | None = None
    secondary_domains: list[str] = Field(default_factory=list)
    industry_experience: list[str] = Field(default_factory=list)
    strength_areas: list[str] = Field(default_factory=list)


class UserSkillArea(ProfileModel):
    id: str
    name: str = ""
    strength: int = Field(default=0, ge=0, le=100)


class BackgroundSettings(ProfileModel):
    background: str | None = None
    primary_role: str | None = None
    skill_areas: list[UserSkillArea] = Field(default_factory=list)


class ResumeProfile(ProfileModel):
    id: str | None = None
    name: str = ""
    personal: PersonalInfo | None = None
    summary: str = ""
    skills: ResumeSkills = Field(default_factory=ResumeSkills)
    target_roles: list[str] = Field(default_factory=list)


class MasterProfile(ProfileModel):
    id: str | None = None
    personal: PersonalInfo | None = None
    career_context: CareerContext | None = None
    background_config: BackgroundSettings | None = None
    skills: MasterSkills = Field(default_factory=MasterSkills)


class GeneratedProfile(ProfileModel):
    id: str | None = None
    master_profile_id: str | None = None
    name: str = ""
    target_role: str = ""
    target_industries: list[str] = Field(default_factory=list)
    tailored_summary: str = ""
    highlighted_skills: list[str] = Field(default_factory=list)
    ats_keywords: list[str] = Field(default_factory=list)
    ats_score: float | None = None


Profile = Union[ResumeProfile, MasterProfile, GeneratedProfile]

_MASTER_KEYS = ("career_context", "careerContext", "background_config", "backgroundConfig")
_GENERATED_KEYS = ("highlighted_skills", "highlightedSkills", "ats_keywords", "atsKeywords")


def _has_detailed_skills(skills: Any) -> bool:
    if not isinstance(skills, Mapping):
        return False
    if skills.get("frameworks"):
        return True
    for key in ("technical", "tools", "soft"):
        items = skills.get(key) or []
        if isinstance(items, list) and any(isinstance(item, Mapping) for item in items):
            return True
    return False


def parse_profile(data: Profile | Mapping[str, Any] | None) -> Profile:
    """Build the matching profile model from whichever optional fields are present."""
    if isinstance(data, (ResumeProfile, MasterProfile, GeneratedProfile)):
        return data
    payload = dict(data or {})
    if any(payload.get(key) is not None for key in _MASTER_KEYS):
        return MasterProfile.model_validate(payload)
    if any(payload.get(key) is not None for key in _GENERATED_KEYS):
        return GeneratedProfile.model_validate(payload)
    if _has_detailed_skills(payload.get("skills")):
        return MasterProfile.model_validate(payload)
    return ResumeProfile.model_validate(payload)
