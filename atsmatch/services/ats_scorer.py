from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from atsmatch.core.config.scoring import get_scoring_value
from atsmatch.features.backgrounds import check_background_mismatch, detect_background_from_jd
from atsmatch.features.domain_classifier import detect_job_domain
from atsmatch.features.keyword_extractor import extract_weighted_keywords
from atsmatch.features.profile_features import extract_profile_features
from atsmatch.features.seniority import compare_seniority, extract_seniority_context
from atsmatch.schemas.ats import QuickScoreResult, Tier
from atsmatch.schemas.profile import Profile, parse_profile
from atsmatch.services.ats_matcher import SkillMatcher
from atsmatch.taxonomy import KeywordIndex, get_default_keyword_index

logger = logging.getLogger(__name__)

_SCORE_COLORS = ("#22c55e", "#eab308", "#f97316", "#ef4444")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_tier(score: float) -> Tier:
    if score >= float(get_scoring_value("tiers.excellent", 80)):
        return "excellent"
    if score >= float(get_scoring_value("tiers.good", 60)):
        return "good"
    if score >= float(get_scoring_value("tiers.fair", 40)):
        return "fair"
    return "poor"


def apply_seniority_adjustment(score: int, seniority_match: str) -> int:
    if seniority_match == "over":
        return min(score, int(get_scoring_value("score.overqualified_cap", 85)))
    if seniority_match == "under":
        return max(score - int(get_scoring_value("score.underqualified_penalty", 15)), 0)
    return score


def get_score_color(score: float) -> str:
    tier = get_tier(score)
    return _SCORE_COLORS[("excellent", "good", "fair", "poor").index(tier)]


def calculate_quick_ats_score(
    profile: Profile | Mapping[str, Any],
    job_description: str,
    *,
    index: KeywordIndex | None = None,
    matcher: SkillMatcher | None = None,
) -> QuickScoreResult:
    """Score a candidate profile against a job description without any model calls.

    The base score is the weighted share of job keywords the profile covers. It is then
    adjusted in a fixed order (seniority, years of experience, background mismatch),
    each step flooring at 0, and finally capped.
    """
    index = index or get_default_keyword_index()
    matcher = matcher or SkillMatcher(index)
    profile = parse_profile(profile)
    job_description = job_description or ""

    features = extract_profile_features(profile)
    detected_domain = detect_job_domain(job_description)
    job_background = detect_background_from_jd(job_description)
    mismatch = check_background_mismatch(features.background, job_background)

    weighted_keywords = extract_weighted_keywords(job_description, index)
    min_keywords = int(get_scoring_value("keywords.min_keywords", 3))
    has_enough_keywords = len(weighted_keywords) >= min_keywords

    seniority = extract_seniority_context(job_description)
    critical_weight = int(get_scoring_value("keywords.critical_min_weight", 3))

    matched: list[str] = []
    missing: list[str] = []
    critical_missing: list[str] = []
    weighted_score = 0
    total_weight = 0

    for item in weighted_keywords:
        total_weight += item.weight
        if matcher.matches(item.keyword, features.skills):
            matched.append(item.keyword)
            weighted_score += item.weight
        else:
            missing.append(item.keyword)
            if item.weight >= critical_weight and item.in_requirements_section:
                critical_missing.append(item.keyword)

    score = 0
    if total_weight > 0 and has_enough_keywords:
        score = round_half_up(weighted_score / total_weight * 100)

    seniority_match = compare_seniority(features.seniority, seniority.level)
    score = apply_seniority_adjustment(score, seniority_match)

    profile_years = features.years_of_experience
    if seniority.years_required is not None and profile_years:
        tolerance = int(get_scoring_value("score.years_tolerance", 1))
        if profile_years >= seniority.years_required:
            if has_enough_keywords:
                score = min(
                    score + int(get_scoring_value("score.years_bonus", 5)),
                    int(get_scoring_value("score.years_bonus_cap", 100)),
                )
        elif profile_years >= seniority.years_required - tolerance:
            pass
        else:
            score = max(score - int(get_scoring_value("score.years_penalty", 10)), 0)

    if mismatch.mismatch:
        score = max(score - int(get_scoring_value("score.background_mismatch_penalty", 20)), 0)

    score = min(score, int(get_scoring_value("score.cap", 95)))

    match_percentage = 0
    if weighted_keywords:
        match_percentage = round_half_up(len(matched) / len(weighted_keywords) * 100)

    logger.debug(
        "quick_score_computed keywords=%s matched=%s score=%s",
        len(weighted_keywords),
        len(matched),
        score,
    )

    return QuickScoreResult(
        score=score,
        matched_keywords=matched,
        missing_keywords=missing,
        match_percentage=match_percentage,
        tier=get_tier(score),
        weighted_keywords=weighted_keywords,
        seniority_match=seniority_match,
        years_required=seniority.years_required,
        critical_missing=critical_missing,
        detected_job_domain=detected_domain,
        has_enough_keywords=has_enough_keywords,
        detected_job_background=job_background,
        background_mismatch=mismatch.mismatch,
        background_mismatch_message=mismatch.message,
    )
