import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.taxonomy import (  # noqa: E402
    CustomKeyword,
    KeywordEntry,
    KeywordIndex,
    get_default_keyword_index,
)
from atsmatch.taxonomy.keyword_index import load_custom_keywords, load_keyword_entries  # noqa: E402


class KeywordIndexTests(unittest.TestCase):
    def test_entries_are_deduplicated_by_name_case_insensitively(self):
        index = KeywordIndex.build(
            [
                KeywordEntry("Python", ("py",), 2.0, True, "backend"),
                KeywordEntry("python", ("python3",), 1.0, False, "data"),
            ]
        )
        self.assertEqual(len(index.entries), 1)
        self.assertEqual(index.entries[0].area, "backend")
        self.assertEqual(len(index.get_all_patterns()), 1)

    def test_lookup_resolves_names_and_variations(self):
        index = KeywordIndex.build([KeywordEntry("Kubernetes", ("k8s", "kube"))])
        self.assertEqual(index.find_keyword_by_name("K8S").name, "Kubernetes")
        self.assertEqual(index.find_keyword_by_name("kubernetes").name, "Kubernetes")
        self.assertIsNone(index.find_keyword_by_name("nomad"))

    def test_patterns_match_whole_words_only(self):
        index = KeywordIndex.build([KeywordEntry("Go", ("golang",))])
        pattern, name = index.get_all_patterns()[0]
        self.assertEqual(name, "Go")
        self.assertTrue(pattern.search("we write go and golang"))
        self.assertIsNone(pattern.search("google cargo"))

    def test_custom_keywords_follow_library_and_skip_known_names(self):
        index = KeywordIndex.build(
            [KeywordEntry("Docker")],
            [
                CustomKeyword("docker", ("containers",)),
                CustomKeyword("Splunk", ("splunk cloud",)),
            ],
        )
        names = [name for _, name in index.get_all_patterns()]
        self.assertEqual(names, ["Docker", "Splunk"])
        self.assertEqual(index.custom_variations()["splunk"], ("splunk cloud",))

    def test_invalid_custom_pattern_is_skipped_with_warning(self):
        with self.assertLogs("atsmatch.taxonomy.keyword_index", level="WARNING") as logs:
            index = KeywordIndex.build(
                [],
                [
                    CustomKeyword("Broken", pattern="(unclosed"),
                    CustomKeyword("ELK Stack", pattern=r"\belk\b|\belastic\s*stack\b"),
                ],
            )
        self.assertTrue(any("keyword_pattern_skipped" in line for line in logs.output))
        self.assertEqual([name for _, name in index.get_all_patterns()], ["ELK Stack"])

    def test_with_custom_keywords_escapes_and_reuses_library_patterns(self):
        base = KeywordIndex.build([KeywordEntry("Python"), KeywordEntry("Docker")])
        extended = base.with_custom_keywords(["Vue.js", "C++", "python", "  "])

        self.assertIsNot(base, extended)
        self.assertEqual(len(base.get_all_patterns()), 2)
        self.assertEqual(len(extended.get_all_patterns()), 4)
        for original, reused in zip(base.get_all_patterns(), extended.get_all_patterns()):
            self.assertIs(original[0], reused[0])

        vue_pattern = extended.get_all_patterns()[2][0]
        self.assertTrue(vue_pattern.search("experience with vue.js"))
        self.assertIsNone(vue_pattern.search("experience with vuexjs"))

    def test_with_custom_keywords_without_new_terms_returns_same_index(self):
        base = KeywordIndex.build([KeywordEntry("Python")])
        self.assertIs(base.with_custom_keywords(["PYTHON", ""]), base)

    def test_area_patterns_keep_names_listed_under_several_areas(self):
        index = KeywordIndex.build(
            [
                KeywordEntry("Git", ("github",), area="devops"),
                KeywordEntry("git", area="tools"),
                KeywordEntry("Jenkins", area="devops"),
            ]
        )
        self.assertEqual(len(index.entries), 2)
        devops = index.area_patterns("devops")
        tools = index.area_patterns("tools")
        self.assertEqual([entry.name for _, entry in devops], ["Git", "Jenkins"])
        self.assertEqual([entry.area for _, entry in tools], ["tools"])
        self.assertIs(devops[0][0], tools[0][0])
        self.assertEqual(index.area_patterns("frontend"), ())

        extended = index.with_custom_keywords(["Pulumi"])
        self.assertEqual(extended.area_patterns("tools"), tools)

    def test_stats_counts_total_and_core_per_area(self):
        index = KeywordIndex.build(
            [
                KeywordEntry("React", is_core=True, area="frontend"),
                KeywordEntry("Svelte", is_core=False, area="frontend"),
                KeywordEntry("Go", is_core=True, area="backend"),
            ]
        )
        self.assertEqual(
            index.stats(),
            {"frontend": {"total": 2, "core": 1}, "backend": {"total": 1, "core": 1}},
        )

    def test_loaders_read_yaml_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            keywords = Path(tmp) / "keywords.yaml"
            keywords.write_text(
                "areas:\n"
                "  devops:\n"
                '    - {name: "Docker", variations: ["dockerfile"], weight: 2.0, core: true}\n',
                encoding="utf-8",
            )
            custom = Path(tmp) / "custom.yaml"
            custom.write_text(
                'simple: ["Pulumi"]\n'
                "advanced:\n"
                '  - {keyword: "Grafana", variations: ["grafana cloud"]}\n',
                encoding="utf-8",
            )
            entries = load_keyword_entries(keywords)
            customs = load_custom_keywords(custom)

        self.assertEqual(entries[0].name, "Docker")
        self.assertEqual(entries[0].area, "devops")
        self.assertTrue(entries[0].is_core)
        self.assertEqual([c.keyword for c in customs], ["Pulumi", "Grafana"])

    def test_missing_data_file_raises_runtime_error(self):
        with self.assertRaises(RuntimeError):
            load_keyword_entries(Path("/nonexistent/keywords.yaml"))


class DefaultKeywordIndexTests(unittest.TestCase):
    def test_default_index_is_built_once_from_shipped_data(self):
        index = get_default_keyword_index()
        self.assertIs(index, get_default_keyword_index())
        self.assertGreater(len(index.entries), 500)
        self.assertEqual(index.find_keyword_by_name("k8s").name, "Kubernetes")
        self.assertIn("frontend", index.stats())
        self.assertIn("splunk", index.custom_variations())


if __name__ == "__main__":
    unittest.main()
