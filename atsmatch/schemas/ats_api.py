from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .ats import QuickScoreResult
from .requirements import RequirementGap, RequirementProfile


class QuickScoreRequest(BaseModel):
    profile: dict[str, Any] = Field(default_factory=dict)
    job_description: str = Field(default="", max_length=120000)
    custom_keywords: list[str] = Field(default_factory=list, max_length=200)


class QuickScoreResponse(BaseModel):
    result: QuickScoreResult
    recommendations: list[str] = Field(default_factory=list)
    color: str


class JobPayload(BaseModel):
    title: str = Field(default="", max_length=300)
    company: str | None = Field(default=None, max_length=300)
    description: str = Field(default="", max_length=120000)


class DeepScoreRequest(BaseModel):
    profile: dict[str, Any] = Field(default_factory=dict)
    job: JobPayload


class KeywordAreaStats(BaseModel):
    total: int
    core: int


class TaxonomyStatsResponse(BaseModel):
    areas: dict[str, KeywordAreaStats]
    total_keywords: int
    custom_keywords: int


class LayeredScoreRequest(BaseModel):
    profile: dict[str, Any] = Field(default_factory=dict)
    job_description: str = Field(default="", max_length=120000)
    job_title: str | None = Field(default=None, max_length=300)


class RequirementScanRequest(BaseModel):
    job_description: str = Field(default="", max_length=120000)
    candidate: RequirementProfile = Field(default_factory=RequirementProfile)


class RequirementScanResponse(BaseModel):
    gaps: list[RequirementGap] = Field(default_factory=list)
    messages: list[str] = Field(default_factory=list)


class PlatformKeywordsRequest(BaseModel):
    keywords: list[str] = Field(default_factory=list, max_length=200)
    platform: str = Field(default="generic", max_length=100)


class PlatformKeywordsResponse(BaseModel):
    platform: str
    matching_type: str
    optimized: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    priority_keyword_placement: list[str] = Field(default_factory=list)
