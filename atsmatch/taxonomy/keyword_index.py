from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence

import yaml

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().with_name("data")
DEFAULT_KEYWORDS_PATH = _DATA_DIR / "keywords.yaml"
DEFAULT_CUSTOM_KEYWORDS_PATH = _DATA_DIR / "custom_keywords.yaml"

KeywordPattern = tuple[re.Pattern[str], str]
AreaPattern = tuple[re.Pattern[str], "KeywordEntry"]


@dataclass(frozen=True, slots=True)
class KeywordEntry:
    name: str
    variations: tuple[str, ...] = ()
    weight: float = 1.0
    is_core: bool = False
    area: str | None = None

    @property
    def terms(self) -> tuple[str, ...]:
        return (self.name, *self.variations)


@dataclass(frozen=True, slots=True)
class CustomKeyword:
    keyword: str
    variations: tuple[str, ...] = ()
    pattern: str | None = None
    category: str | None = None


# Terms may start or end with symbols (C++, C#, .NET), so \b is not a usable edge.
_TERM_START = r"(?<![\w+#])"
_TERM_END = r"(?![\w+#])"


def _bounded(alternation: str) -> str:
    return rf"{_TERM_START}({alternation}){_TERM_END}"


def _term_alternation(terms: Sequence[str]) -> str:
    return "|".join(re.escape(term) for term in terms if term)


def _compile(source: str, name: str) -> re.Pattern[str] | None:
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as exc:
        logger.warning("keyword_pattern_skipped name=%s error=%s", name, exc)
        return None


def compile_entry_pattern(entry: KeywordEntry) -> re.Pattern[str] | None:
    alternation = _term_alternation(entry.terms)
    if not alternation:
        return None
    return _compile(_bounded(alternation), entry.name)


def compile_term_pattern(term: str) -> re.Pattern[str] | None:
    return compile_entry_pattern(KeywordEntry(term))


def compile_custom_pattern(custom: CustomKeyword) -> re.Pattern[str] | None:
    if custom.pattern:
        return _compile(custom.pattern, custom.keyword)
    alternation = _term_alternation((custom.keyword, *custom.variations))
    if not alternation:
        return None
    return _compile(_bounded(alternation), custom.keyword)


@dataclass(frozen=True)
class KeywordIndex:
    """Immutable, aggregated view over the keyword taxonomy.

    Built once and shared by reference. Holds the deduplicated pattern list used for
    extraction, a lower-cased name/variation lookup for the matcher, and the custom
    variation table. Per-area pattern groups keep every entry of an area, including
    names the global list already took from an earlier area.
    """

    entries: tuple[KeywordEntry, ...]
    custom_keywords: tuple[CustomKeyword, ...] = ()
    _patterns: tuple[KeywordPattern, ...] = field(default=(), repr=False, compare=False)
    _lookup: dict[str, KeywordEntry] = field(default_factory=dict, repr=False, compare=False)
    _custom_variations: dict[str, tuple[str, ...]] = field(
        default_factory=dict, repr=False, compare=False
    )
    _areas: dict[str, tuple[AreaPattern, ...]] = field(
        default_factory=dict, repr=False, compare=False
    )

    @classmethod
    def build(
        cls,
        entries: Iterable[KeywordEntry],
        custom_keywords: Iterable[CustomKeyword] = (),
    ) -> "KeywordIndex":
        raw = list(entries)
        unique: list[KeywordEntry] = []
        seen: set[str] = set()
        for entry in raw:
            key = entry.name.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            unique.append(entry)

        compiled: dict[str, re.Pattern[str]] = {}
        patterns: list[KeywordPattern] = []
        for entry in unique:
            pattern = compile_entry_pattern(entry)
            if pattern is not None:
                compiled[entry.name.strip().lower()] = pattern
                patterns.append((pattern, entry.name))

        customs = tuple(custom_keywords)
        patterns.extend(_custom_patterns(customs, seen))

        return cls(
            entries=tuple(unique),
            custom_keywords=customs,
            _patterns=tuple(patterns),
            _lookup=_build_lookup(unique),
            _custom_variations=_build_custom_variations(customs),
            _areas=_build_area_patterns(raw, compiled),
        )

    @classmethod
    def from_files(
        cls,
        keywords_path: str | Path | None = None,
        custom_keywords_path: str | Path | None = None,
    ) -> "KeywordIndex":
        entries = load_keyword_entries(keywords_path or DEFAULT_KEYWORDS_PATH)
        customs = load_custom_keywords(custom_keywords_path or DEFAULT_CUSTOM_KEYWORDS_PATH)
        index = cls.build(entries, customs)
        logger.info(
            "keyword_index_built entries=%s custom=%s patterns=%s",
            len(index.entries),
            len(index.custom_keywords),
            len(index.patterns),
        )
        return index

    @property
    def patterns(self) -> tuple[KeywordPattern, ...]:
        return self._patterns

    def get_all_patterns(self) -> tuple[KeywordPattern, ...]:
        return self._patterns

    def find_keyword_by_name(self, name: str) -> KeywordEntry | None:
        return self._lookup.get((name or "").lower())

    def area_patterns(self, area: str) -> tuple[AreaPattern, ...]:
        return self._areas.get(area, ())

    def custom_variations(self) -> dict[str, tuple[str, ...]]:
        return self._custom_variations

    def with_custom_keywords(self, keywords: Iterable[str]) -> "KeywordIndex":
        """Return a new index with extra plain-string custom keywords appended.

        Library patterns are reused as-is; only the new keywords are compiled.
        """
        known = {entry.name.lower() for entry in self.entries}
        known.update(custom.keyword.lower() for custom in self.custom_keywords)
        extra: list[CustomKeyword] = []
        for raw in keywords:
            keyword = str(raw or "").strip()
            if keyword and keyword.lower() not in known:
                known.add(keyword.lower())
                extra.append(CustomKeyword(keyword=keyword))
        if not extra:
            return self

        taken = {name.lower() for _, name in self._patterns}
        customs = self.custom_keywords + tuple(extra)
        return KeywordIndex(
            entries=self.entries,
            custom_keywords=customs,
            _patterns=self._patterns + tuple(_custom_patterns(extra, taken)),
            _lookup=self._lookup,
            _custom_variations=_build_custom_variations(customs),
            _areas=self._areas,
        )

    def stats(self) -> dict[str, dict[str, int]]:
        result: dict[str, dict[str, int]] = {}
        for entry in self.entries:
            bucket = result.setdefault(entry.area or "uncategorized", {"total": 0, "core": 0})
            bucket["total"] += 1
            if entry.is_core:
                bucket["core"] += 1
        return result


def _custom_patterns(customs: Iterable[CustomKeyword], taken: set[str]) -> list[KeywordPattern]:
    patterns: list[KeywordPattern] = []
    for custom in customs:
        key = custom.keyword.strip().lower()
        if not key or key in taken:
            continue
        pattern = compile_custom_pattern(custom)
        if pattern is None:
            continue
        taken.add(key)
        patterns.append((pattern, custom.keyword))
    return patterns


def _build_area_patterns(
    entries: Sequence[KeywordEntry],
    compiled: dict[str, re.Pattern[str]],
) -> dict[str, tuple[AreaPattern, ...]]:
    areas: dict[str, list[AreaPattern]] = {}
    names: dict[str, set[str]] = {}
    for entry in entries:
        key = entry.name.strip().lower()
        if not entry.area or not key:
            continue
        taken = names.setdefault(entry.area, set())
        if key in taken:
            continue
        pattern = compiled.get(key)
        if pattern is None:
            pattern = compile_entry_pattern(entry)
            if pattern is None:
                continue
            compiled[key] = pattern
        taken.add(key)
        areas.setdefault(entry.area, []).append((pattern, entry))
    return {area: tuple(items) for area, items in areas.items()}


def _build_lookup(entries: Sequence[KeywordEntry]) -> dict[str, KeywordEntry]:
    lookup: dict[str, KeywordEntry] = {}
    for entry in entries:
        for term in entry.terms:
            lookup.setdefault(term.lower(), entry)
    return lookup


def _build_custom_variations(customs: Iterable[CustomKeyword]) -> dict[str, tuple[str, ...]]:
    variations: dict[str, tuple[str, ...]] = {}
    for custom in customs:
        if custom.variations:
            variations[custom.keyword.lower()] = tuple(v.lower() for v in custom.variations)
    return variations


def read_yaml_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise RuntimeError(f"Taxonomy data not found at '{path}'.")
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise RuntimeError(f"Failed to load taxonomy data '{path}': {exc}") from exc
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid taxonomy data '{path}': expected a top-level mapping.")
    return parsed


def load_keyword_entries(path: str | Path) -> list[KeywordEntry]:
    raw = read_yaml_mapping(Path(path))
    areas = raw.get("areas") or {}
    entries: list[KeywordEntry] = []
    for area, items in areas.items():
        for item in items or []:
            if not isinstance(item, dict) or not item.get("name"):
                continue
            entries.append(
                KeywordEntry(
                    name=str(item["name"]),
                    variations=tuple(str(v) for v in item.get("variations") or []),
                    weight=float(item.get("weight", 1.0)),
                    is_core=bool(item.get("core", False)),
                    area=str(area),
                )
            )
    return entries


def load_custom_keywords(path: str | Path) -> list[CustomKeyword]:
    raw = read_yaml_mapping(Path(path))
    customs: list[CustomKeyword] = [
        CustomKeyword(keyword=str(item)) for item in raw.get("simple") or [] if str(item).strip()
    ]
    for item in raw.get("advanced") or []:
        if not isinstance(item, dict) or not item.get("keyword"):
            continue
        customs.append(
            CustomKeyword(
                keyword=str(item["keyword"]),
                variations=tuple(str(v) for v in item.get("variations") or []),
                pattern=item.get("pattern") or None,
                category=item.get("category"),
            )
        )
    return customs
