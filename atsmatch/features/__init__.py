from .backgrounds import (
    BACKGROUND_CONFIGS,
    RELATED_BACKGROUNDS,
    BackgroundConfig,
    BackgroundDetection,
    BackgroundMismatch,
    BackgroundType,
    check_background_mismatch,
    detect_background,
    detect_background_from_jd,
    get_background_config,
)
from .domain_classifier import JobDomain, detect_job_domain
from .keyword_extractor import (
    auto_detect_keywords,
    extract_requirements_section,
    extract_weighted_keywords,
)
from .profile_features import (
    ProfileFeatures,
    extract_profile_background,
    extract_profile_features,
    extract_profile_seniority,
    extract_profile_skills,
)
from .seniority import (
    SENIORITY_LADDER,
    SeniorityContext,
    compare_seniority,
    extract_seniority_context,
    level_from_years,
    normalize_profile_seniority,
)

__all__ = [
    "BACKGROUND_CONFIGS",
    "RELATED_BACKGROUNDS",
    "BackgroundConfig",
    "BackgroundDetection",
    "BackgroundMismatch",
    "BackgroundType",
    "check_background_mismatch",
    "detect_background",
    "detect_background_from_jd",
    "get_background_config",
    "JobDomain",
    "detect_job_domain",
    "auto_detect_keywords",
    "extract_requirements_section",
    "extract_weighted_keywords",
    "ProfileFeatures",
    "extract_profile_background",
    "extract_profile_features",
    "extract_profile_seniority",
    "extract_profile_skills",
    "SENIORITY_LADDER",
    "SeniorityContext",
    "compare_seniority",
    "extract_seniority_context",
    "level_from_years",
    "normalize_profile_seniority",
]
