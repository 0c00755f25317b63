from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from atsmatch.ai.factory import get_optional_ai_client
from atsmatch.ai.types import AIClient
from atsmatch.core.rate_limit import rate_limit
from atsmatch.core.security import require_api_key
from atsmatch.schemas.ats import DeepScoreResult
from atsmatch.schemas.ats_api import (
    DeepScoreRequest,
    LayeredScoreRequest,
    PlatformKeywordsRequest,
    PlatformKeywordsResponse,
    QuickScoreRequest,
    QuickScoreResponse,
    RequirementScanRequest,
    RequirementScanResponse,
    TaxonomyStatsResponse,
)
from atsmatch.schemas.layered import LayeredScoreResult
from atsmatch.schemas.profile import Profile, parse_profile
from atsmatch.services.ats_recommendations import get_quick_recommendations
from atsmatch.services.ats_scorer import calculate_quick_ats_score, get_score_color
from atsmatch.services.deep_scorer import JobPosting, calculate_deep_ats_score
from atsmatch.services.layered_scorer import calculate_layered_ats_score
from atsmatch.services.platform_strategies import (
    get_platform_strategy,
    optimize_keywords_for_platform,
)
from atsmatch.services.requirement_scanner import format_gap, scan_requirements
from atsmatch.taxonomy import (
    KeywordIndex,
    SkillAreaCatalog,
    get_default_keyword_index,
    get_default_skill_area_catalog,
)

router = APIRouter(dependencies=[Depends(require_api_key)])


def get_keyword_index() -> KeywordIndex:
    return get_default_keyword_index()


def get_skill_area_catalog() -> SkillAreaCatalog:
    return get_default_skill_area_catalog()


def get_ai_client() -> AIClient | None:
    return get_optional_ai_client()


def _parse_profile_or_422(data: dict) -> Profile:
    try:
        return parse_profile(data)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False),
        ) from exc


@router.post("/ats/quick-score", response_model=QuickScoreResponse)
@rate_limit()
async def quick_score(
    request: Request,
    payload: QuickScoreRequest,
    index: KeywordIndex = Depends(get_keyword_index),
):
    _ = request
    profile = _parse_profile_or_422(payload.profile)
    if payload.custom_keywords:
        index = index.with_custom_keywords(payload.custom_keywords)
    result = calculate_quick_ats_score(profile, payload.job_description, index=index)
    return QuickScoreResponse(
        result=result,
        recommendations=get_quick_recommendations(result),
        color=get_score_color(result.score),
    )


@router.post("/ats/deep-score", response_model=DeepScoreResult)
@rate_limit()
async def deep_score(
    request: Request,
    payload: DeepScoreRequest,
    index: KeywordIndex = Depends(get_keyword_index),
    ai_client: AIClient | None = Depends(get_ai_client),
):
    _ = request
    profile = _parse_profile_or_422(payload.profile)
    job = JobPosting(
        title=payload.job.title,
        company=payload.job.company,
        description=payload.job.description,
    )
    return await calculate_deep_ats_score(profile, job, ai_client, index=index)


@router.get("/ats/taxonomy/stats", response_model=TaxonomyStatsResponse)
async def taxonomy_stats(index: KeywordIndex = Depends(get_keyword_index)):
    return TaxonomyStatsResponse(
        areas=index.stats(),
        total_keywords=len(index.entries),
        custom_keywords=len(index.custom_keywords),
    )


@router.post("/ats/layered-score", response_model=LayeredScoreResult)
@rate_limit()
async def layered_score(
    request: Request,
    payload: LayeredScoreRequest,
    index: KeywordIndex = Depends(get_keyword_index),
    catalog: SkillAreaCatalog = Depends(get_skill_area_catalog),
):
    _ = request
    profile = _parse_profile_or_422(payload.profile)
    return calculate_layered_ats_score(
        profile,
        payload.job_description,
        payload.job_title,
        index=index,
        catalog=catalog,
    )


@router.post("/ats/requirements", response_model=RequirementScanResponse)
@rate_limit()
async def requirements(request: Request, payload: RequirementScanRequest):
    _ = request
    gaps = scan_requirements(payload.job_description, payload.candidate)
    return RequirementScanResponse(gaps=gaps, messages=[format_gap(gap) for gap in gaps])


@router.post("/ats/platform-keywords", response_model=PlatformKeywordsResponse)
async def platform_keywords(payload: PlatformKeywordsRequest):
    strategy = get_platform_strategy(payload.platform)
    plan = optimize_keywords_for_platform(payload.keywords, payload.platform)
    return PlatformKeywordsResponse(
        platform=strategy.name,
        matching_type=strategy.matching_type,
        optimized=plan.optimized,
        recommendations=plan.recommendations,
        priority_keyword_placement=list(strategy.priority_keyword_placement),
    )
