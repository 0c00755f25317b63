from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError

from atsmatch.ai.json_utils import extract_json_from_response
from atsmatch.ai.types import AIClient, ChatMessage, ChatOptions
from atsmatch.core.config import settings
from atsmatch.core.config.scoring import get_scoring_value
from atsmatch.schemas.ats import AIDeepAnalysis, DeepScoreResult, PrioritizedAction, QuickScoreResult
from atsmatch.schemas.profile import MasterProfile, Profile, SkillDetail, parse_profile
from atsmatch.services.ats_matcher import SkillMatcher
from atsmatch.services.ats_scorer import calculate_quick_ats_score, get_tier
from atsmatch.taxonomy import KeywordIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobPosting:
    title: str
    description: str
    company: str | None = None


class DeepScoreError(RuntimeError):
    pass


_PROMPT_TEMPLATE = """You are a senior hiring manager at {company} evaluating a candidate for the "{title}" role.

## YOUR MINDSET
Think about what you REALLY need for this role, not just keyword matching:
- What business problem will this person solve?
- What's the #1 thing that would make them successful?
- What gaps are dealbreakers vs. learnable?

## CANDIDATE PROFILE
{profile_context}

## JOB DESCRIPTION
{description}

## INITIAL KEYWORD ANALYSIS
- Matched ({matched_count}): {matched}
- Missing ({missing_count}): {missing}
- Critical Missing: {critical}
- Seniority Match: {seniority}
- Years Required: {years}

## YOUR ANALYSIS TASK
Think step by step:

1. REAL FIT: Beyond keywords, does this person's trajectory match what we need?
2. EXPERIENCE DEPTH: Do they have relevant scale/complexity, not just the technologies?
3. GROWTH POTENTIAL: Can they grow into this role if slightly under-qualified?
4. RED FLAGS: What concerns would make you hesitate?
5. COMPETITIVE POSITION: How do they compare to typical applicants you see?

Return a JSON object:
{{
  "overallScore": 0-100 (be honest - 70+ means you'd interview them),
  "skillMatchScore": 0-100,
  "experienceMatchScore": 0-100 (depth + scale, not just keywords),
  "cultureFitScore": 0-100 (inferred from writing style, career choices),
  "strengths": ["What makes this candidate stand out (be specific)", "...", "..."],
  "gaps": ["Honest gaps that matter for THIS role", "..."],
  "suggestions": [
    "Specific action to improve chances (not generic advice)",
    "How to address the biggest gap",
    "What to emphasize in the interview"
  ],
  "prioritizedActions": [
    {{"priority": "high", "action": "Most impactful thing to do NOW", "impact": "Why this matters"}},
    {{"priority": "medium", "action": "...", "impact": "..."}}
  ],
  "competitivePosition": "One sentence: where they stand vs typical applicant pool",
  "aiAnalysis": "2-3 sentences: honest assessment a recruiter would give their colleague"
}}

Be direct and honest. Inflated scores waste everyone's time."""


def _skill_name(item: SkillDetail | str) -> str:
    return item.name if isinstance(item, SkillDetail) else item


def build_profile_context(profile: Profile) -> str:
    if isinstance(profile, MasterProfile):
        career = profile.career_context
        full_name = profile.personal.full_name if profile.personal else ""
        skills = [_skill_name(item) for item in profile.skills.technical[:15]]
        lines = [
            f"Name: {full_name or 'Unknown'}",
            f"Years of Experience: {(career.years_of_experience if career else None) or 0:g}",
            f"Seniority: {(career.seniority_level if career else None) or 'Unknown'}",
            f"Primary Domain: {(career.primary_domain if career else None) or 'Unknown'}",
            f"Top Skills: {', '.join(skills) or 'N/A'}",
            f"Key Strengths: {', '.join(career.strength_areas if career else []) or 'N/A'}",
        ]
        return "\n".join(lines)

    lines = [
        f"Target Role: {getattr(profile, 'target_role', '') or 'N/A'}",
        f"Profile: {profile.name or 'N/A'}",
        f"Summary: {getattr(profile, 'tailored_summary', '') or getattr(profile, 'summary', '') or 'N/A'}",
    ]
    highlighted = getattr(profile, "highlighted_skills", None)
    if highlighted is None:
        highlighted = [*profile.skills.technical, *profile.skills.tools]
    lines.append(f"Highlighted Skills: {', '.join(highlighted) or 'N/A'}")
    lines.append(f"ATS Keywords: {', '.join(getattr(profile, 'ats_keywords', None) or []) or 'N/A'}")
    return "\n".join(lines)


def build_deep_score_prompt(profile: Profile, job: JobPosting, quick: QuickScoreResult) -> str:
    return _PROMPT_TEMPLATE.format(
        company=job.company or "a tech company",
        title=job.title,
        profile_context=build_profile_context(profile),
        description=job.description,
        matched_count=len(quick.matched_keywords),
        matched=", ".join(quick.matched_keywords[:10]),
        missing_count=len(quick.missing_keywords),
        missing=", ".join(quick.missing_keywords[:10]),
        critical=", ".join(quick.critical_missing[:5]) or "None identified",
        seniority=quick.seniority_match,
        years=quick.years_required if quick.years_required is not None else "Not specified",
    )


def parse_deep_analysis(content: str) -> AIDeepAnalysis:
    payload = extract_json_from_response(content, "object")
    if not isinstance(payload, dict):
        raise DeepScoreError("No JSON object found in model response")
    return AIDeepAnalysis.model_validate(payload)


def merge_deep_analysis(quick: QuickScoreResult, analysis: AIDeepAnalysis) -> DeepScoreResult:
    overall = int(round(analysis.overall_score))
    score = min(overall, int(get_scoring_value("score.cap", 95)))
    return DeepScoreResult(
        **quick.model_dump(exclude={"score", "tier"}),
        score=score,
        tier=get_tier(score),
        overall_score=overall,
        skill_match_score=int(round(analysis.skill_match_score)),
        experience_match_score=int(round(analysis.experience_match_score)),
        culture_fit_score=int(round(analysis.culture_fit_score)),
        strengths=analysis.strengths,
        gaps=analysis.gaps,
        suggestions=analysis.suggestions,
        prioritized_actions=analysis.prioritized_actions,
        competitive_position=analysis.competitive_position,
        ai_analysis=analysis.ai_analysis,
    )


def build_fallback_result(quick: QuickScoreResult) -> DeepScoreResult:
    """Enrich the quick score with advice derived only from keyword counts."""
    return DeepScoreResult(
        **quick.model_dump(),
        overall_score=quick.score,
        skill_match_score=quick.match_percentage,
        experience_match_score=50,
        culture_fit_score=50,
        strengths=["Strong keyword alignment"] if len(quick.matched_keywords) > 5 else [],
        gaps=["Several required skills missing"] if len(quick.missing_keywords) > 5 else [],
        suggestions=[
            f"Consider adding {keyword} to your resume" for keyword in quick.missing_keywords[:3]
        ],
        prioritized_actions=[
            PrioritizedAction(
                priority="high",
                action=f"Add {keyword} to your skills",
                impact="Improved keyword matching",
            )
            for keyword in quick.missing_keywords[:2]
        ],
        competitive_position="Unable to assess without AI analysis",
        ai_analysis="AI analysis unavailable. Based on keyword matching, this is the assessment.",
    )


def _deep_score_timeout() -> float:
    if settings.deep_score_timeout_s:
        return settings.deep_score_timeout_s
    return float(get_scoring_value("deep_score.timeout_s", 30))


async def calculate_deep_ats_score(
    profile: Profile | Mapping[str, Any],
    job: JobPosting,
    ai_client: AIClient | None,
    *,
    index: KeywordIndex | None = None,
    matcher: SkillMatcher | None = None,
    timeout_s: float | None = None,
) -> DeepScoreResult:
    profile = parse_profile(profile)
    quick = calculate_quick_ats_score(profile, job.description, index=index, matcher=matcher)
    if ai_client is None:
        logger.info("deep_score_fallback reason=no_ai_client")
        return build_fallback_result(quick)

    prompt = build_deep_score_prompt(profile, job, quick)
    options = ChatOptions(
        temperature=float(get_scoring_value("deep_score.temperature", 0.3)),
        max_tokens=int(get_scoring_value("deep_score.max_tokens", 1500)),
    )
    timeout = timeout_s if timeout_s is not None else _deep_score_timeout()

    try:
        response = await asyncio.wait_for(
            ai_client.chat([ChatMessage(role="user", content=prompt)], options),
            timeout=timeout,
        )
        analysis = parse_deep_analysis(response.content)
    except asyncio.TimeoutError:
        logger.warning("deep_score_fallback reason=timeout timeout_s=%s", timeout)
        return build_fallback_result(quick)
    except (DeepScoreError, ValidationError) as exc:
        logger.warning("deep_score_fallback reason=invalid_response: %s", exc)
        return build_fallback_result(quick)
    except Exception as exc:  # noqa: BLE001 - provider errors degrade to the quick score
        logger.warning("deep_score_fallback reason=provider_error: %s", exc)
        return build_fallback_result(quick)

    return merge_deep_analysis(quick, analysis)
