from __future__ import annotations

from atsmatch.schemas.ats import QuickScoreResult


def get_quick_recommendations(result: QuickScoreResult) -> list[str]:
    recommendations: list[str] = []

    if result.background_mismatch and result.background_mismatch_message:
        recommendations.append(f"Background Mismatch: {result.background_mismatch_message}")

    if not result.has_enough_keywords:
        recommendations.append(
            "Unable to analyze reliably - not enough recognizable keywords in the job description."
        )
        if result.detected_job_domain == "non-tech":
            recommendations.append(
                "This appears to be a non-tech role. Our analysis works best with tech/IT positions."
            )
        elif result.detected_job_domain == "unknown":
            recommendations.append("Could not determine the job type. Consider reviewing manually.")
        return recommendations

    if result.critical_missing:
        recommendations.append(
            f"Critical: Add these required skills: {', '.join(result.critical_missing[:3])}"
        )

    if result.seniority_match == "under":
        recommendations.append(
            "This role may require more experience. "
            "Highlight leadership and impact in your current role."
        )
    elif result.seniority_match == "over":
        recommendations.append(
            "You may be overqualified. Consider if this aligns with your career goals, "
            "or emphasize your interest in the specific challenges."
        )

    if result.years_required is not None:
        recommendations.append(
            f"This role requires {result.years_required}+ years of experience. "
            "Make sure your timeline is clearly visible."
        )

    if result.missing_keywords and not result.critical_missing:
        recommendations.append(f"Consider adding: {', '.join(result.missing_keywords[:3])}")

    if result.tier == "excellent":
        recommendations.append(
            "Strong match! Focus on quantifying achievements and showing impact at scale."
        )
    elif result.tier == "poor":
        recommendations.append(
            "Low match - consider if this role aligns with your experience, "
            "or heavily tailor your resume."
        )

    return recommendations
