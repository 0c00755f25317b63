import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.features.keyword_extractor import (  # noqa: E402
    auto_detect_keywords,
    extract_requirements_section,
    extract_weighted_keywords,
)
from atsmatch.taxonomy import KeywordEntry, KeywordIndex, get_default_keyword_index  # noqa: E402
from helpers import small_index  # noqa: E402


def _by_name(keywords):
    return {item.keyword: item for item in keywords}


class RequirementsSectionTests(unittest.TestCase):
    def test_section_stops_at_next_header(self):
        text = "Intro text\nRequirements: Python, Docker\nBenefits: free lunch"
        self.assertEqual(extract_requirements_section(text), "Python, Docker")

    def test_must_have_header_is_recognised(self):
        text = "must have: terraform and aws\nnice to have: go"
        self.assertEqual(extract_requirements_section(text), "terraform and aws")

    def test_no_header_yields_none(self):
        self.assertIsNone(extract_requirements_section("We build delightful things."))
        self.assertIsNone(extract_requirements_section(""))


class WeightedKeywordTests(unittest.TestCase):
    def test_frequency_and_requirements_bonus_are_capped(self):
        text = (
            "requirements:\n"
            "kubernetes kubernetes kubernetes kubernetes kubernetes\n"
            "python\n"
        )
        keywords = _by_name(extract_weighted_keywords(text, small_index()))
        self.assertEqual(keywords["Kubernetes"].weight, 5)
        self.assertEqual(keywords["Kubernetes"].frequency, 5)
        self.assertTrue(keywords["Kubernetes"].in_requirements_section)
        self.assertEqual(keywords["Python"].weight, 3)

    def test_frequency_bonus_without_requirements_section(self):
        text = "our stack is python. we love python and docker."
        keywords = _by_name(extract_weighted_keywords(text, small_index()))
        self.assertEqual(keywords["Python"].weight, 2)
        self.assertEqual(keywords["Docker"].weight, 1)
        self.assertFalse(keywords["Python"].in_requirements_section)

    def test_variations_count_towards_frequency(self):
        text = "we use postgres and postgresql daily"
        keywords = _by_name(extract_weighted_keywords(text, small_index()))
        self.assertEqual(keywords["PostgreSQL"].frequency, 2)

    def test_sorted_by_weight_with_stable_ties(self):
        text = "docker, react, python python python"
        keywords = extract_weighted_keywords(text, small_index())
        self.assertEqual([item.keyword for item in keywords], ["Python", "Docker", "React"])
        weights = [item.weight for item in keywords]
        self.assertEqual(weights, sorted(weights, reverse=True))

    def test_empty_text_yields_no_keywords(self):
        self.assertEqual(extract_weighted_keywords("", small_index()), [])

    def test_empty_taxonomy_still_auto_detects(self):
        keywords = extract_weighted_keywords(
            "Strong Snowflake platform knowledge", KeywordIndex.build([])
        )
        self.assertEqual([item.keyword for item in keywords], ["Snowflake"])

    def test_taxonomy_keywords_precede_auto_detected_on_ties(self):
        index = KeywordIndex.build([KeywordEntry("Docker")])
        keywords = extract_weighted_keywords("docker. We run Airflow platform jobs.", index)
        self.assertEqual([item.keyword for item in keywords], ["Docker", "Airflow"])


class SymbolTermTests(unittest.TestCase):
    def setUp(self):
        self.index = KeywordIndex.build(
            [
                KeywordEntry("C#", ("csharp", ".net"), 1.8, True, "backend"),
                KeywordEntry("C++", ("cpp",), 1.5, False, "backend"),
                KeywordEntry("C", (), 1.3, False, "backend"),
            ]
        )

    def test_terms_ending_or_starting_with_symbols_are_extracted(self):
        text = "Requirements: C++ and C# developer, .NET experience"
        keywords = _by_name(extract_weighted_keywords(text, self.index))
        self.assertIn("C++", keywords)
        self.assertIn("C#", keywords)
        self.assertEqual(keywords["C#"].frequency, 2)
        self.assertTrue(keywords["C++"].in_requirements_section)

    def test_plain_c_is_not_read_out_of_cpp_or_csharp(self):
        keywords = _by_name(extract_weighted_keywords("we write c++ and c#", self.index))
        self.assertNotIn("C", keywords)

        keywords = _by_name(extract_weighted_keywords("embedded c/c++ work", self.index))
        self.assertIn("C", keywords)
        self.assertIn("C++", keywords)

    def test_adjacent_repeats_are_each_counted(self):
        keywords = _by_name(extract_weighted_keywords("c++,c++ (c++)", self.index))
        self.assertEqual(keywords["C++"].frequency, 3)

    def test_embedded_dotnet_does_not_count_as_csharp(self):
        keywords = _by_name(extract_weighted_keywords("asp.net pages", self.index))
        self.assertNotIn("C#", keywords)

    def test_shipped_taxonomy_extracts_symbol_terms(self):
        text = "Requirements: C++ and C# developer, .NET experience, python, docker, kubernetes"
        names = [item.keyword for item in extract_weighted_keywords(text, get_default_keyword_index())]
        self.assertIn("C++", names)
        self.assertIn("C#", names)
        self.assertNotIn("C", names)


class AutoDetectionTests(unittest.TestCase):
    def test_capitalized_term_needs_technical_context(self):
        detected = _by_name(
            auto_detect_keywords("Experience with Snowflake platform and Snowflake pipelines", [])
        )
        self.assertEqual(detected["Snowflake"].weight, 2)
        self.assertEqual(detected["Snowflake"].frequency, 2)
        self.assertFalse(detected["Snowflake"].in_requirements_section)

        self.assertEqual(auto_detect_keywords("We love Snowflake.", []), [])

    def test_acronyms_need_two_mentions_and_skip_business_terms(self):
        detected = _by_name(
            auto_detect_keywords("Own ETL pipelines. Review ETL jobs. Report to HR. HR rules. One GCP", [])
        )
        self.assertEqual(detected["ETL"].weight, 2)
        self.assertNotIn("HR", detected)
        self.assertNotIn("GCP", detected)

    def test_versioned_terms(self):
        detected = _by_name(auto_detect_keywords("Upgrade apps to Angular 15 and java 17", []))
        self.assertEqual(detected["Angular 15"].weight, 2)
        self.assertIn("java 17", detected)

    def test_versioned_terms_accept_any_capitalised_word(self):
        detected = auto_detect_keywords("Minimum 5 shipped Swift 5 apps", [])
        self.assertEqual([item.keyword for item in detected], ["Minimum 5", "Swift 5"])

    def test_versioned_terms_skip_known_names(self):
        detected = auto_detect_keywords("Upgrade apps to Angular 15", ["angular"])
        self.assertEqual(detected, [])

    def test_suffix_terms(self):
        detected = _by_name(auto_detect_keywords("we use express.js with mongodb and MongoDB", []))
        self.assertEqual(detected["express.js"].weight, 2)
        self.assertEqual(detected["mongodb"].frequency, 2)
        self.assertEqual(detected["mongodb"].weight, 3)

    def test_hyphenated_compounds(self):
        detected = _by_name(auto_detect_keywords("design an event-driven system", []))
        self.assertEqual(detected["event-driven"].weight, 1)

    def test_known_and_stop_words_are_skipped(self):
        self.assertEqual(auto_detect_keywords("Join our team, be a team player", []), [])
        self.assertEqual(
            auto_detect_keywords("Terraform platform expertise", ["terraform"]), []
        )

    def test_auto_detected_weights_never_exceed_three(self):
        text = "ETL ETL ETL ETL ETL and Looker platform Looker Looker Looker"
        for item in auto_detect_keywords(text, []):
            self.assertLessEqual(item.weight, 3)
            self.assertGreaterEqual(item.weight, 1)


if __name__ == "__main__":
    unittest.main()
