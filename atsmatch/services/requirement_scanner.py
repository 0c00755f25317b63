from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from atsmatch.schemas.requirements import (
    RequirementGap,
    RequirementProfile,
    RequirementStatus,
    RequirementType,
)

logger = logging.getLogger(__name__)

ValueExtractor = Callable[[re.Match[str], str], str]

LANGUAGES: tuple[str, ...] = (
    "spanish", "mandarin", "chinese", "french", "german", "japanese", "korean",
    "portuguese", "arabic", "hindi", "russian", "italian",
)

CLEARANCE_LEVELS: tuple[str, ...] = ("none", "public_trust", "secret", "top_secret", "ts_sci")

_ALL_LANGUAGES = "|".join(LANGUAGES)
_US = r"(us|u\.s\.|united states)"


@dataclass(frozen=True, slots=True)
class RequirementRule:
    type: RequirementType
    label: str
    patterns: tuple[re.Pattern[str], ...]
    extract_value: ValueExtractor | None = None


def _compile(*sources: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


def _required_clearance(text: str) -> str:
    lowered = text.lower()
    if "ts/sci" in lowered or "ts sci" in lowered:
        return "TS/SCI"
    if "top secret" in lowered:
        return "Top Secret"
    if "secret" in lowered:
        return "Secret"
    if "public trust" in lowered:
        return "Public Trust"
    return "Required"


def _required_language(match: re.Match[str], text: str) -> str:
    found = match.group(0).lower()
    for language in LANGUAGES:
        if language in found:
            return language.capitalize()
    return "Bilingual"


_ONSITE_DAYS = re.compile(r"(\d+)\s*days?\s*(per\s*week\s*)?(on-?site|in-?office)", re.IGNORECASE)
_ONSITE_ONLY = re.compile(r"on-?site\s*only", re.IGNORECASE)
_NO_REMOTE = re.compile(r"no\s*remote", re.IGNORECASE)
_RELOCATE_TO = re.compile(r"(located|based|relocate)\s*(in|to|near)\s*([A-Z][a-zA-Z\s,]+)", re.IGNORECASE)


def _onsite_terms(match: re.Match[str], text: str) -> str:
    days = _ONSITE_DAYS.search(text)
    if days:
        return f"{days.group(1)} days/week on-site"
    if _ONSITE_ONLY.search(text):
        return "On-site only"
    if _NO_REMOTE.search(text):
        return "No remote"
    return "On-site required"


def _relocation_target(match: re.Match[str], text: str) -> str:
    location = _RELOCATE_TO.search(text)
    if location:
        return f"Relocate to {location.group(3).strip()}"
    return "Relocation required"


# The first pattern that matches decides each requirement; rules are scanned in order.
REQUIREMENT_RULES: tuple[RequirementRule, ...] = (
    RequirementRule(
        "citizenship",
        "US Citizenship",
        _compile(
            rf"\b{_US}\s*(citizen(ship)?)\s*(required|only|must|is required)",
            rf"must be\s*(a\s*)?{_US}\s*citizen",
            rf"citizen(ship)?\s*(of|in)\s*(the\s*)?{_US}\s*(required|is required)",
            r"requires?\s*(us|u\.s\.)\s*citizen(ship)?",
            r"proof of\s*(us|u\.s\.)\s*citizen(ship)?",
        ),
    ),
    RequirementRule(
        "security_clearance",
        "Security Clearance",
        _compile(
            r"\b(active\s*)?(security\s*)?clearance\s*(required|needed|is required)",
            r"\b(ts/sci|top secret|secret|public trust)\s*(clearance)?\s*(required|needed|is required)?",
            r"must\s*(have|hold|possess)\s*(an?\s*)?(active\s*)?(security\s*)?clearance",
            r"ability to obtain\s*(a\s*)?(security\s*)?clearance",
            r"clearance:\s*(ts/sci|top secret|secret|public trust)",
        ),
        lambda match, text: _required_clearance(text),
    ),
    RequirementRule(
        "background_check",
        "Background Check",
        _compile(
            r"background\s*(check|investigation|screening)\s*(required|is required|will be conducted)",
            r"must\s*(pass|clear|undergo)\s*(a\s*)?background\s*(check|investigation|screening)",
            r"subject to\s*(a\s*)?background\s*(check|investigation)",
            r"criminal\s*(background|history)\s*(check|screening)",
        ),
    ),
    RequirementRule(
        "sponsorship",
        "Visa Sponsorship",
        _compile(
            r"no\s*(visa\s*)?sponsorship",
            r"cannot\s*(provide\s*)?(visa\s*)?sponsor(ship)?",
            r"will\s*not\s*(provide\s*)?(visa\s*)?sponsor(ship)?",
            r"not\s*(able|willing)\s*to\s*sponsor",
            r"without\s*(visa\s*)?sponsorship",
            r"must be authorized to work.*(without|no).*sponsor",
            r"sponsorship\s*(is\s*)?not\s*(available|offered|provided)",
        ),
    ),
    RequirementRule(
        "language",
        "Language",
        _compile(
            rf"\b({_ALL_LANGUAGES})\s*(required|preferred|fluency|proficiency|speaking)",
            rf"(fluent|proficient|fluency)\s*(in\s*)?({_ALL_LANGUAGES})",
            r"bilingual\s*(in\s*)?(spanish|mandarin|chinese|french|english)",
            r"(speak|speaking)\s*(spanish|mandarin|chinese|french|german|japanese|korean)",
        ),
        _required_language,
    ),
    RequirementRule(
        "location",
        "On-site Work",
        _compile(
            r"\b(on-?site|in-?office)\s*(only|required|position|work|days?)",
            r"must\s*(work|be)\s*(on-?site|in-?office|in\s*person)",
            r"no\s*remote",
            r"not\s*(a\s*)?remote\s*(position|role|job)",
            r"this\s*(is\s*)?(an?\s*)?(on-?site|in-?office)\s*(position|role)",
            r"\d+\s*days?\s*(per\s*week\s*)?(on-?site|in-?office)",
        ),
        _onsite_terms,
    ),
    RequirementRule(
        "relocation",
        "Relocation",
        _compile(
            r"(must|willing\s*to)\s*relocate",
            r"relocation\s*(required|necessary|needed)",
            r"candidates?\s*(must|should)\s*be\s*(located|based)\s*(in|near)",
            r"local\s*candidates?\s*(only|preferred)",
        ),
        _relocation_target,
    ),
    RequirementRule(
        "drug_test",
        "Drug Test",
        _compile(
            r"drug\s*(test|screen|screening)\s*(required|is required|will be conducted)?",
            r"must\s*pass\s*(a\s*)?drug\s*(test|screen)",
            r"subject to\s*(a\s*)?drug\s*(test|screening)",
            r"pre-?employment\s*drug\s*(test|screening)",
        ),
    ),
)


_Status = tuple[RequirementStatus, str | None]


def _confirmation(value: bool | None, yes: str, no: str, unset: str = "Not confirmed") -> _Status:
    if value is None:
        return "unknown", unset
    return ("met", yes) if value else ("risk", no)


def _clearance_status(profile: RequirementProfile, text: str) -> _Status:
    held = profile.security_clearance
    if not held or held == "none":
        return ("risk" if held else "unknown"), held or "Not set"

    required = 1
    if "ts/sci" in text or "ts sci" in text:
        required = 4
    elif "top secret" in text:
        required = 3
    elif "secret" in text:
        required = 2
    if CLEARANCE_LEVELS.index(held) >= required:
        return "met", held
    return "risk", held


def _language_status(profile: RequirementProfile, text: str) -> _Status:
    if not profile.languages:
        return "unknown", "Not set"
    spoken = ", ".join(profile.languages)
    for language in LANGUAGES:
        if language in text:
            if any(language in item.lower() for item in profile.languages):
                return "met", spoken
            return "risk", spoken
    return "unknown", None


def check_user_status(
    requirement: RequirementType,
    profile: RequirementProfile,
    job_description: str,
) -> _Status:
    """Compare one detected requirement with the candidate's stated eligibility."""
    text = (job_description or "").lower()

    if requirement == "citizenship":
        authorization = profile.work_authorization
        if not authorization:
            return "unknown", "Not set"
        if authorization == "citizen":
            return "met", "US Citizen"
        return "risk", {
            "permanent_resident": "Permanent Resident",
            "visa": "Visa holder",
        }.get(authorization, "Other")

    if requirement == "security_clearance":
        return _clearance_status(profile, text)

    if requirement == "background_check":
        return _confirmation(profile.can_pass_background_check, "Can pass", "May not pass")

    if requirement == "sponsorship":
        if profile.requires_sponsorship is None:
            return "unknown", "Not set"
        if profile.requires_sponsorship:
            return "risk", "Needs sponsorship"
        return "met", "No sponsorship needed"

    if requirement == "language":
        return _language_status(profile, text)

    if requirement == "location":
        if profile.remote_preference == "remote":
            return "risk", "Prefers remote"
        if profile.remote_preference:
            return "met", profile.remote_preference
        return "unknown", "Not set"

    if requirement == "relocation":
        return _confirmation(
            profile.willing_to_relocate,
            "Willing to relocate",
            "Not willing to relocate",
            unset="Not set",
        )

    if requirement == "drug_test":
        return _confirmation(profile.can_pass_drug_test, "Can pass", "May not pass")

    return "unknown", None


def scan_requirements(
    job_description: str,
    profile: RequirementProfile | Mapping[str, Any] | None = None,
) -> list[RequirementGap]:
    """Find eligibility requirements in a posting and keep those the candidate has not met.

    Each requirement type is reported at most once, in rule order.
    """
    if not isinstance(profile, RequirementProfile):
        profile = RequirementProfile.model_validate(dict(profile or {}))
    text = job_description or ""

    gaps: list[RequirementGap] = []
    for rule in REQUIREMENT_RULES:
        match = next((m for m in (p.search(text) for p in rule.patterns) if m), None)
        if match is None:
            continue
        requirement = rule.extract_value(match, text) if rule.extract_value else f"{rule.label} required"
        status, value = check_user_status(rule.type, profile, text)
        if status == "met":
            continue
        gaps.append(
            RequirementGap(
                type=rule.type,
                label=rule.label,
                jd_requirement=requirement,
                user_status=status,
                user_value=value,
            )
        )

    logger.debug("requirements_scanned gaps=%s", len(gaps))
    return gaps


def format_gap(gap: RequirementGap) -> str:
    marker = "RISK" if gap.user_status == "risk" else "CHECK"
    suffix = f" - {gap.user_value}" if gap.user_value else ""
    return f"{marker}: {gap.jd_requirement}{suffix}"
