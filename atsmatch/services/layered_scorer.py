from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import AbstractSet, Any, Mapping, Sequence

from atsmatch.core.config.scoring import get_scoring_value
from atsmatch.features.backgrounds import detect_background
from atsmatch.features.keyword_extractor import extract_requirements_section
from atsmatch.features.profile_features import extract_profile_features
from atsmatch.features.seniority import compare_seniority, extract_seniority_context
from atsmatch.schemas.ats import Priority
from atsmatch.schemas.layered import (
    AreaEmphasis,
    AreaKeywordMatch,
    BackgroundMatch,
    Importance,
    LayeredScoreResult,
    RoleMatch,
    SkillAreaScore,
)
from atsmatch.schemas.profile import MasterProfile, Profile, parse_profile
from atsmatch.services.ats_matcher import SkillMatcher
from atsmatch.services.ats_scorer import apply_seniority_adjustment, get_tier, round_half_up
from atsmatch.taxonomy import (
    KeywordIndex,
    SkillAreaCatalog,
    get_default_keyword_index,
    get_default_skill_area_catalog,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoleDetection:
    role_id: str | None
    role_name: str | None
    confidence: float


@dataclass(frozen=True, slots=True)
class SkillAreaWeight:
    area_id: str
    area_name: str
    weight: int
    mentions: int = 0
    is_required: bool = False


@dataclass(frozen=True, slots=True)
class AreaMatchResult:
    matched: list[AreaKeywordMatch] = field(default_factory=list)
    missing: list[AreaKeywordMatch] = field(default_factory=list)
    match_score: int = 0


def detect_role(
    background: str | None,
    job_description: str,
    job_title: str | None = None,
    *,
    catalog: SkillAreaCatalog | None = None,
) -> RoleDetection:
    """Pick the role template within a background.

    Each indicator found in the title scores 3 and each found in the description scores 1.
    Without any hit the background's first role is assumed at low confidence.
    """
    catalog = catalog or get_default_skill_area_catalog()
    roles = catalog.roles_for(background)
    if not roles:
        return RoleDetection(None, None, 0.0)

    text = job_description or ""
    title = job_title or ""
    best = None
    best_score = 0
    for role in roles:
        score = 0
        for pattern in role.indicator_patterns:
            if title and pattern.search(title):
                score += 3
            if pattern.search(text):
                score += 1
        if score > best_score:
            best = role
            best_score = score

    if best is None:
        return RoleDetection(
            roles[0].id,
            roles[0].name,
            float(get_scoring_value("layered.default_role_confidence", 0.3)),
        )
    saturation = float(get_scoring_value("layered.role_confidence_hits", 5))
    return RoleDetection(best.id, best.name, min(best_score / saturation, 1.0))


def _normalized(areas: Sequence[SkillAreaWeight]) -> list[SkillAreaWeight]:
    total = sum(area.weight for area in areas)
    if total > 0 and total != 100:
        areas = [replace(area, weight=round_half_up(area.weight / total * 100)) for area in areas]
    return sorted(areas, key=lambda area: -area.weight)


def detect_skill_areas(
    job_description: str,
    *,
    catalog: SkillAreaCatalog | None = None,
) -> list[SkillAreaWeight]:
    """Weight each detectable skill area by its share of indicator mentions.

    Areas with an indicator inside the requirements section are boosted before the
    weights are normalised to sum to roughly 100. Heaviest area first.
    """
    catalog = catalog or get_default_skill_area_catalog()
    text = job_description or ""
    requirements = extract_requirements_section(text)

    found: list[SkillAreaWeight] = []
    for area in catalog.detectable_areas():
        mentions = 0
        required = False
        for pattern in catalog.indicator_patterns(area.id):
            count = len(pattern.findall(text))
            if not count:
                continue
            mentions += count
            if requirements and pattern.search(requirements):
                required = True
        if mentions:
            found.append(SkillAreaWeight(area.id, area.name, 0, mentions, required))
    if not found:
        return []

    total_mentions = sum(area.mentions for area in found)
    boost = float(get_scoring_value("layered.required_area_boost", 1.3))
    weighted: list[SkillAreaWeight] = []
    for area in found:
        weight: float = round_half_up(area.mentions / total_mentions * 100)
        if area.is_required:
            weight = min(weight * boost, 100)
        weighted.append(replace(area, weight=round_half_up(weight)))
    return _normalized(weighted)


def get_skill_areas_for_role(
    background: str | None,
    role_id: str | None,
    job_description: str,
    *,
    catalog: SkillAreaCatalog | None = None,
) -> list[SkillAreaWeight]:
    """Prefer areas read from the text; fall back to the role template when too few show up.

    In the fallback, areas found in the text are averaged into the template weights or
    appended when the template lacks them, then everything is renormalised.
    """
    catalog = catalog or get_default_skill_area_catalog()
    detected = detect_skill_areas(job_description, catalog=catalog)
    if len(detected) >= int(get_scoring_value("layered.min_detected_areas", 2)):
        return detected

    role = catalog.get_role(background, role_id)
    if role is None:
        return detected

    merged = [
        SkillAreaWeight(area_id, catalog.area_name(area_id), weight, 0, catalog.is_required(area_id))
        for area_id, weight in role.area_weights
        if weight > 0
    ]
    positions = {area.area_id: position for position, area in enumerate(merged)}
    for area in detected:
        position = positions.get(area.area_id)
        if position is None:
            positions[area.area_id] = len(merged)
            merged.append(area)
            continue
        existing = merged[position]
        merged[position] = replace(
            existing,
            weight=round_half_up((existing.weight + area.weight) / 2),
            mentions=area.mentions,
            is_required=existing.is_required or area.is_required,
        )
    return _normalized(merged)


def _importance(mentions: int, is_core: bool) -> Importance:
    if is_core or mentions >= int(get_scoring_value("layered.critical_mentions", 3)):
        return "critical"
    if mentions >= int(get_scoring_value("layered.important_mentions", 2)):
        return "important"
    return "nice-to-have"


def match_keywords_in_area(
    area_id: str,
    job_description: str,
    skills: AbstractSet[str],
    *,
    index: KeywordIndex | None = None,
    catalog: SkillAreaCatalog | None = None,
    matcher: SkillMatcher | None = None,
) -> AreaMatchResult:
    index = index or get_default_keyword_index()
    catalog = catalog or get_default_skill_area_catalog()
    matcher = matcher or SkillMatcher(index)
    text = job_description or ""

    matched: list[AreaKeywordMatch] = []
    missing: list[AreaKeywordMatch] = []
    for pattern, entry in catalog.keyword_patterns(area_id, index):
        mentions = len(pattern.findall(text))
        if not mentions:
            continue
        found = matcher.matches(entry.name, skills)
        item = AreaKeywordMatch(
            keyword=entry.name,
            skill_area=area_id,
            found=found,
            jd_mentions=mentions,
            importance=_importance(mentions, entry.is_core),
        )
        (matched if found else missing).append(item)

    total = len(matched) + len(missing)
    # An area with nothing to measure scores 0, not 100.
    score = round_half_up(len(matched) / total * 100) if total else 0
    return AreaMatchResult(matched, missing, score)


def profile_strength_in_area(
    profile: Profile,
    area_id: str,
    skills: AbstractSet[str],
    *,
    index: KeywordIndex,
    catalog: SkillAreaCatalog,
) -> int:
    if isinstance(profile, MasterProfile) and profile.background_config:
        for area in profile.background_config.skill_areas:
            if area.id == area_id:
                return area.strength

    count = sum(
        1 for _, entry in catalog.keyword_patterns(area_id, index) if entry.name.lower() in skills
    )
    return min(round_half_up(count / 10 * 80), 95)


def generate_layered_recommendations(
    area_scores: Sequence[SkillAreaScore],
    critical_missing: Sequence[str],
    seniority_match: str,
    score: int,
) -> list[str]:
    recommendations: list[str] = []

    if critical_missing:
        recommendations.append(
            "Critical: Add these required skills to your resume: "
            + ", ".join(critical_missing[:3])
        )

    weak = sorted(
        (area for area in area_scores if area.match_score < 50 and area.jd_weight >= 15),
        key=lambda area: area.match_score,
    )
    if weak:
        weakest = weak[0]
        recommendations.append(
            f"Improve {weakest.area_name}: You're at {weakest.match_score}% match. "
            f"Missing: {', '.join(weakest.missing_keywords[:3])}"
        )

    if seniority_match == "under":
        recommendations.append(
            "This role may require more experience. Emphasize leadership, mentoring, and impact."
        )
    elif seniority_match == "over":
        recommendations.append(
            "You may be overqualified. Show interest in the specific challenges of this role."
        )

    strong = sorted(
        (area for area in area_scores if area.match_score >= 80 and area.jd_weight >= 20),
        key=lambda area: -area.match_score,
    )
    if strong:
        recommendations.append(
            f"Strength: Emphasize your {strong[0].area_name} experience "
            f"({strong[0].match_score}% match)"
        )

    if score >= 75:
        recommendations.append(
            "Strong match! Focus on quantifying achievements and showing impact at scale."
        )
    elif score < 50:
        recommendations.append(
            "Consider if this role aligns with your experience, or heavily tailor your resume."
        )
    return recommendations


def calculate_layered_ats_score(
    profile: Profile | Mapping[str, Any],
    job_description: str,
    job_title: str | None = None,
    *,
    index: KeywordIndex | None = None,
    catalog: SkillAreaCatalog | None = None,
    matcher: SkillMatcher | None = None,
) -> LayeredScoreResult:
    """Score a profile layer by layer: background, role, skill areas, then keywords per area.

    The overall score is the area match scores averaged by area weight, adjusted for
    seniority and capped. Unlike the quick score it does not use keyword weights, the
    years-of-experience rule or the background mismatch penalty.
    """
    index = index or get_default_keyword_index()
    catalog = catalog or get_default_skill_area_catalog()
    matcher = matcher or SkillMatcher(index)
    profile = parse_profile(profile)
    job_description = job_description or ""
    features = extract_profile_features(profile)

    background = detect_background(job_description)
    if background.background:
        role = detect_role(background.background, job_description, job_title, catalog=catalog)
    else:
        role = RoleDetection(None, None, 0.0)

    if background.background and role.role_id:
        areas = get_skill_areas_for_role(
            background.background, role.role_id, job_description, catalog=catalog
        )
    else:
        areas = detect_skill_areas(job_description, catalog=catalog)

    area_scores: list[SkillAreaScore] = []
    keyword_matches: list[AreaKeywordMatch] = []
    critical_missing: list[str] = []
    weighted_score = 0
    total_weight = 0

    for area in areas:
        result = match_keywords_in_area(
            area.area_id,
            job_description,
            features.skills,
            index=index,
            catalog=catalog,
            matcher=matcher,
        )
        area_scores.append(
            SkillAreaScore(
                area_id=area.area_id,
                area_name=area.area_name,
                jd_weight=area.weight,
                user_strength=profile_strength_in_area(
                    profile, area.area_id, features.skills, index=index, catalog=catalog
                ),
                match_score=result.match_score,
                matched_keywords=[item.keyword for item in result.matched],
                missing_keywords=[item.keyword for item in result.missing],
            )
        )
        keyword_matches.extend(result.matched)
        keyword_matches.extend(result.missing)
        if area.is_required:
            critical_missing.extend(
                item.keyword for item in result.missing if item.importance == "critical"
            )
        weighted_score += result.match_score * area.weight
        total_weight += area.weight

    score = round_half_up(weighted_score / total_weight) if total_weight > 0 else 0

    seniority = extract_seniority_context(job_description)
    seniority_match = compare_seniority(features.seniority, seniority.level)
    score = apply_seniority_adjustment(score, seniority_match)
    overall = min(score, int(get_scoring_value("score.cap", 95)))

    logger.debug(
        "layered_score_computed background=%s role=%s areas=%s score=%s",
        background.background,
        role.role_id,
        len(area_scores),
        overall,
    )

    return LayeredScoreResult(
        overall_score=overall,
        background_match=BackgroundMatch(
            is_match=background.background is not None,
            detected=background.background,
            confidence=background.confidence,
        ),
        role_match=RoleMatch(
            detected_role=role.role_name,
            match_score=role.confidence * 100,
            seniority_match=seniority_match,
            detected_seniority=seniority.level,
        ),
        skill_area_scores=area_scores,
        keyword_matches=keyword_matches,
        critical_missing=critical_missing,
        recommendations=generate_layered_recommendations(
            area_scores, critical_missing, seniority_match, score
        ),
        tier=get_tier(score),
    )


def _emphasis_priority(weight: int) -> Priority:
    if weight >= int(get_scoring_value("layered.emphasis_high_weight", 30)):
        return "high"
    if weight >= int(get_scoring_value("layered.emphasis_medium_weight", 15)):
        return "medium"
    return "low"


def get_areas_to_emphasize(
    job_description: str,
    skills: AbstractSet[str],
    *,
    index: KeywordIndex | None = None,
    catalog: SkillAreaCatalog | None = None,
    matcher: SkillMatcher | None = None,
) -> list[AreaEmphasis]:
    """Areas read from the text, heaviest first, with what to add and what is already covered."""
    index = index or get_default_keyword_index()
    catalog = catalog or get_default_skill_area_catalog()
    matcher = matcher or SkillMatcher(index)
    skills = {skill.lower() for skill in skills}

    emphasis: list[AreaEmphasis] = []
    for area in detect_skill_areas(job_description, catalog=catalog):
        result = match_keywords_in_area(
            area.area_id,
            job_description,
            skills,
            index=index,
            catalog=catalog,
            matcher=matcher,
        )
        emphasis.append(
            AreaEmphasis(
                area_id=area.area_id,
                area_name=area.area_name,
                priority=_emphasis_priority(area.weight),
                jd_weight=area.weight,
                current_match=result.match_score,
                keywords_to_add=[item.keyword for item in result.missing[:5]],
                keywords_you_have=[item.keyword for item in result.matched],
            )
        )
    return sorted(emphasis, key=lambda item: -item.jd_weight)
