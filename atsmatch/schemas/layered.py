from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .ats import Priority, SeniorityMatch, Tier

Importance = Literal["critical", "important", "nice-to-have"]


class AreaKeywordMatch(BaseModel):
    keyword: str
    skill_area: str
    found: bool = False
    jd_mentions: int = Field(ge=1)
    importance: Importance = "nice-to-have"


class SkillAreaScore(BaseModel):
    area_id: str
    area_name: str
    jd_weight: int = Field(ge=0, le=100)
    user_strength: int = Field(ge=0, le=100)
    match_score: int = Field(ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)


class BackgroundMatch(BaseModel):
    is_match: bool = False
    detected: str | None = None
    confidence: float = Field(default=0.0, ge=0, le=1)


class RoleMatch(BaseModel):
    detected_role: str | None = None
    match_score: float = Field(default=0.0, ge=0, le=100)
    seniority_match: SeniorityMatch = "unknown"
    detected_seniority: str | None = None


class LayeredScoreResult(BaseModel):
    overall_score: int = Field(ge=0, le=95)
    background_match: BackgroundMatch
    role_match: RoleMatch
    skill_area_scores: list[SkillAreaScore] = Field(default_factory=list)
    keyword_matches: list[AreaKeywordMatch] = Field(default_factory=list)
    critical_missing: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    tier: Tier


class AreaEmphasis(BaseModel):
    area_id: str
    area_name: str
    priority: Priority
    jd_weight: int = Field(ge=0, le=100)
    current_match: int = Field(ge=0, le=100)
    keywords_to_add: list[str] = Field(default_factory=list)
    keywords_you_have: list[str] = Field(default_factory=list)
