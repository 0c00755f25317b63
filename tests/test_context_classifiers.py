import sys
import unittest
from pathlib import Path
from typing import get_args

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch import features  # noqa: E402
from atsmatch.features.backgrounds import (  # noqa: E402
    check_background_mismatch,
    detect_background,
    detect_background_from_jd,
    get_background_config,
)
from atsmatch.features.domain_classifier import detect_job_domain  # noqa: E402
from atsmatch.features.profile_features import (  # noqa: E402
    background_from_domain,
    extract_profile_background,
    extract_profile_features,
    extract_profile_skills,
)
from atsmatch.features.seniority import (  # noqa: E402
    compare_seniority,
    extract_seniority_context,
    extract_years_required,
    level_from_years,
    normalize_profile_seniority,
)
from atsmatch.schemas import ats as ats_schemas  # noqa: E402
from atsmatch.schemas.profile import parse_profile  # noqa: E402


class JobDomainTests(unittest.TestCase):
    def test_tech_job(self):
        self.assertEqual(detect_job_domain("Backend developer with Python and Docker"), "tech")

    def test_non_tech_job(self):
        self.assertEqual(
            detect_job_domain("Cashier needed for our retail store, customer service focus"),
            "non-tech",
        )

    def test_single_indicator_is_unknown(self):
        self.assertEqual(detect_job_domain("Python"), "unknown")
        self.assertEqual(detect_job_domain(""), "unknown")

    def test_tie_is_unknown(self):
        self.assertEqual(detect_job_domain("software developer for the warehouse driver app"), "unknown")

    def test_domain_labels_are_shared_with_result_schema(self):
        self.assertIs(features.JobDomain, ats_schemas.JobDomain)
        self.assertEqual(set(get_args(ats_schemas.JobDomain)), {"tech", "non-tech", "unknown"})


class BackgroundTests(unittest.TestCase):
    def test_detects_highest_scoring_background(self):
        text = "Attorney for our legal team, compliance and paralegal support"
        self.assertEqual(detect_background_from_jd(text), "legal")

    def test_no_indicator_returns_none(self):
        self.assertIsNone(detect_background_from_jd("Join our team, be a team player"))

    def test_ties_keep_configuration_order(self):
        self.assertEqual(detect_background_from_jd("software and analytics"), "computer-science")

    def test_confidence_is_share_of_top_two(self):
        single = detect_background("Attorney for our legal team, compliance and paralegal support")
        self.assertEqual(single.confidence, 1.0)
        self.assertIn("paralegal", single.indicators)

        tied = detect_background("software and analytics")
        self.assertEqual(tied.background, "computer-science")
        self.assertAlmostEqual(tied.confidence, 0.5)

        self.assertEqual(detect_background("").confidence, 0.0)

    def test_relatedness_is_checked_from_the_profile_side_only(self):
        self.assertFalse(check_background_mismatch("data-analytics", "mba-business").mismatch)
        self.assertTrue(check_background_mismatch("mba-business", "data-analytics").mismatch)
        self.assertFalse(check_background_mismatch("finance", "mba-business").mismatch)
        self.assertFalse(check_background_mismatch("computer-science", "design").mismatch)
        self.assertFalse(check_background_mismatch("design", "computer-science").mismatch)

    def test_unresolved_or_equal_backgrounds_never_mismatch(self):
        self.assertFalse(check_background_mismatch(None, "legal").mismatch)
        self.assertFalse(check_background_mismatch("legal", None).mismatch)
        self.assertFalse(check_background_mismatch("legal", "legal").mismatch)

    def test_mismatch_message_uses_display_names(self):
        result = check_background_mismatch("finance", "legal")
        self.assertTrue(result.mismatch)
        self.assertIn('"Finance / Accounting"', result.message)
        self.assertIn('"Legal"', result.message)
        self.assertEqual(get_background_config("other").indicators, ())


class SeniorityTests(unittest.TestCase):
    def test_years_in_three_orderings(self):
        self.assertEqual(extract_years_required("5+ years of experience with Go"), 5)
        self.assertEqual(extract_years_required("Experience of 3 yrs in sales"), 3)
        self.assertEqual(extract_years_required("Minimum of 7 years in the field"), 7)
        self.assertIsNone(extract_years_required("Plenty of experience"))

    def test_explicit_level_wins_over_years(self):
        context = extract_seniority_context("Staff Engineer, 3+ years of experience")
        self.assertEqual(context.level, "principal")
        self.assertEqual(context.years_required, 3)

    def test_most_senior_keyword_wins(self):
        self.assertEqual(extract_seniority_context("Senior engineer reporting to the Director").level, "director")
        self.assertEqual(extract_seniority_context("Mid-level or junior welcome").level, "mid")
        self.assertEqual(extract_seniority_context("Entry level analyst").level, "entry")

    def test_level_inferred_from_years(self):
        self.assertEqual(extract_seniority_context("10+ years of experience").level, "principal")
        self.assertEqual(extract_seniority_context("2 years experience").level, "mid")
        context = extract_seniority_context("A great job")
        self.assertIsNone(context.level)
        self.assertIsNone(context.years_required)

    def test_year_thresholds(self):
        self.assertEqual(
            [level_from_years(y) for y in (0, 2, 5, 7, 10)],
            ["entry", "mid", "senior", "lead", "principal"],
        )

    def test_profile_seniority_normalisation(self):
        self.assertEqual(normalize_profile_seniority("Staff Engineer"), "principal")
        self.assertEqual(normalize_profile_seniority("Team Lead"), "lead")
        self.assertEqual(normalize_profile_seniority("Junior"), "entry")
        self.assertEqual(normalize_profile_seniority("executive"), "executive")
        self.assertEqual(normalize_profile_seniority(None, 6), "senior")
        self.assertIsNone(normalize_profile_seniority(None, 0))

    def test_one_rung_either_way_still_matches(self):
        self.assertEqual(compare_seniority("mid", "senior"), "match")
        self.assertEqual(compare_seniority("lead", "senior"), "match")
        self.assertEqual(compare_seniority("entry", "senior"), "under")
        self.assertEqual(compare_seniority("director", "senior"), "over")
        self.assertEqual(compare_seniority("executive", "senior"), "unknown")
        self.assertEqual(compare_seniority("senior", None), "unknown")


class ProfileFeatureTests(unittest.TestCase):
    def test_master_profile_skills_include_details_and_aliases(self):
        profile = parse_profile(
            {
                "career_context": {"years_of_experience": 6, "primary_domain": "Backend Engineering"},
                "skills": {
                    "technical": [
                        {"name": "ReactJS", "normalized_name": "React", "aliases": ["React.js"]},
                    ],
                    "tools": ["Docker", {"name": "Jira"}],
                    "frameworks": [{"name": "Django"}],
                },
            }
        )
        self.assertEqual(
            extract_profile_skills(profile),
            {"reactjs", "react", "react.js", "docker", "jira", "django"},
        )
        features = extract_profile_features(profile)
        self.assertEqual(features.background, "computer-science")
        self.assertEqual(features.seniority, "senior")
        self.assertEqual(features.years_of_experience, 6)

    def test_resume_and_generated_profiles(self):
        resume = parse_profile({"skills": {"technical": ["Python", ""], "tools": ["Git"]}})
        self.assertEqual(extract_profile_skills(resume), {"python", "git"})
        self.assertIsNone(extract_profile_background(resume))

        generated = parse_profile({"highlightedSkills": ["Go"], "atsKeywords": ["gRPC"]})
        self.assertEqual(extract_profile_skills(generated), {"go", "grpc"})

    def test_explicit_background_config_wins(self):
        profile = parse_profile(
            {
                "background_config": {"background": "finance"},
                "career_context": {"primary_domain": "Software"},
            }
        )
        self.assertEqual(extract_profile_background(profile), "finance")

    def test_domain_rules_are_ordered(self):
        self.assertEqual(background_from_domain("Data Science"), "data-analytics")
        self.assertEqual(background_from_domain("Data Engineering"), "computer-science")
        self.assertEqual(background_from_domain("Product Design"), "design")
        self.assertEqual(background_from_domain("Corporate Law"), "legal")
        self.assertIsNone(background_from_domain("Hospitality"))
        self.assertIsNone(background_from_domain(None))


if __name__ == "__main__":
    unittest.main()
