from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Tier = Literal["excellent", "good", "fair", "poor"]
SeniorityMatch = Literal["match", "over", "under", "unknown"]
JobDomain = Literal["tech", "non-tech", "unknown"]
Priority = Literal["high", "medium", "low"]


class WeightedKeyword(BaseModel):
    keyword: str
    weight: int = Field(ge=1, le=5)
    frequency: int = Field(ge=1)
    in_requirements_section: bool = False


class QuickScoreResult(BaseModel):
    score: int = Field(ge=0, le=95)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    match_percentage: int = Field(ge=0, le=100)
    tier: Tier
    weighted_keywords: list[WeightedKeyword] = Field(default_factory=list)
    seniority_match: SeniorityMatch = "unknown"
    years_required: int | None = None
    critical_missing: list[str] = Field(default_factory=list)
    detected_job_domain: JobDomain = "unknown"
    has_enough_keywords: bool = False
    detected_job_background: str | None = None
    background_mismatch: bool = False
    background_mismatch_message: str | None = None


class PrioritizedAction(BaseModel):
    priority: Priority = "medium"
    action: str
    impact: str = ""


class DeepScoreResult(QuickScoreResult):
    overall_score: int = Field(ge=0, le=100)
    skill_match_score: int = Field(ge=0, le=100)
    experience_match_score: int = Field(ge=0, le=100)
    culture_fit_score: int = Field(ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    prioritized_actions: list[PrioritizedAction] = Field(default_factory=list)
    competitive_position: str = ""
    ai_analysis: str = ""


class AIDeepAnalysis(BaseModel):
    """Shape expected back from the model; keys arrive in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_score: float = Field(ge=0, le=100)
    skill_match_score: float = Field(ge=0, le=100)
    experience_match_score: float = Field(ge=0, le=100)
    culture_fit_score: float = Field(ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    prioritized_actions: list[PrioritizedAction] = Field(default_factory=list)
    competitive_position: str = "Unable to assess"
    ai_analysis: str = "Analysis unavailable"
