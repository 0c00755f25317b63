from __future__ import annotations

from typing import AbstractSet, Callable, Mapping, Sequence

from atsmatch.taxonomy import KeywordTaxonomy

SkillFallback = Callable[[str, AbstractSet[str]], bool]

CORE_ALIASES: dict[str, tuple[str, ...]] = {
    "javascript": ("js", "es6", "ecmascript"),
    "typescript": ("ts",),
    "c#": ("csharp", "dotnet"),
    "c++": ("cpp",),
    "python": ("py", "python3"),
    "golang": ("go",),
    "node.js": ("node", "nodejs"),
    "postgresql": ("postgres", "psql"),
    "kubernetes": ("k8s",),
    "ci/cd": ("cicd", "ci cd"),
    "machine learning": ("ml",),
    "deep learning": ("dl",),
    "rest api": ("restful", "rest"),
    "microservices": ("micro services",),
}


def substring_fallback(keyword: str, skills: AbstractSet[str]) -> bool:
    """Loose containment match in either direction.

    Only terms of at least three characters take part. This is permissive on purpose
    and produces false positives such as "java" for "javascript".
    """
    lowered = keyword.lower()
    if len(lowered) < 3:
        return False
    return any(
        len(skill) >= 3 and (lowered in skill or skill in lowered)
        for skill in skills
    )


def no_fallback(keyword: str, skills: AbstractSet[str]) -> bool:
    return False


def _alias_table_match(
    keyword: str,
    skills: AbstractSet[str],
    table: Mapping[str, Sequence[str]],
) -> bool:
    for main, alternatives in table.items():
        if keyword == main or keyword in alternatives:
            if main in skills or any(alt in skills for alt in alternatives):
                return True
    return False


class SkillMatcher:
    """Decides whether a candidate skill set covers a job keyword.

    Resolution order: exact membership, taxonomy variations, custom variations, the
    core alias table, then the fallback predicate. The first success wins.
    """

    def __init__(
        self,
        index: KeywordTaxonomy,
        *,
        aliases: Mapping[str, Sequence[str]] | None = None,
        fallback: SkillFallback = substring_fallback,
    ) -> None:
        self._index = index
        self._aliases = CORE_ALIASES if aliases is None else aliases
        self._fallback = fallback

    def matches(self, keyword: str, skills: AbstractSet[str]) -> bool:
        lowered = (keyword or "").lower()
        if not lowered:
            return False

        if lowered in skills:
            return True

        entry = self._index.find_keyword_by_name(lowered)
        if entry is not None:
            if any(term.lower() in skills for term in entry.terms):
                return True

        if _alias_table_match(lowered, skills, self._index.custom_variations()):
            return True

        if _alias_table_match(lowered, skills, self._aliases):
            return True

        return self._fallback(lowered, skills)
