from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .keyword_index import (
    AreaPattern,
    KeywordEntry,
    compile_entry_pattern,
    compile_term_pattern,
    read_yaml_mapping,
)
from .provider import KeywordTaxonomy

logger = logging.getLogger(__name__)

DEFAULT_SKILL_AREAS_PATH = Path(__file__).resolve().with_name("data") / "skill_areas.yaml"


@dataclass(frozen=True, slots=True)
class SkillAreaConfig:
    id: str
    name: str
    indicators: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()
    required: bool = False


@dataclass(frozen=True, slots=True)
class RoleConfig:
    id: str
    name: str
    indicators: tuple[str, ...] = ()
    seniority_levels: tuple[str, ...] = ()
    area_weights: tuple[tuple[str, int], ...] = ()
    indicator_patterns: tuple[re.Pattern[str], ...] = field(
        default=(), repr=False, compare=False
    )


@dataclass(frozen=True)
class SkillAreaCatalog:
    """Skill areas and per-background role templates used by the layered score.

    Areas with indicators can be detected from a job description; the rest are only
    reached through role defaults. An area either carries its own keyword list or is
    scored with the keyword taxonomy entries of its source areas.
    """

    areas: dict[str, SkillAreaConfig]
    roles: dict[str, tuple[RoleConfig, ...]]
    _indicator_patterns: dict[str, tuple[re.Pattern[str], ...]] = field(
        default_factory=dict, repr=False, compare=False
    )
    _keyword_patterns: dict[str, tuple[AreaPattern, ...]] = field(
        default_factory=dict, repr=False, compare=False
    )

    @classmethod
    def build(
        cls,
        areas: Mapping[str, SkillAreaConfig],
        roles: Mapping[str, tuple[RoleConfig, ...]],
    ) -> "SkillAreaCatalog":
        indicator_patterns: dict[str, tuple[re.Pattern[str], ...]] = {}
        keyword_patterns: dict[str, tuple[AreaPattern, ...]] = {}
        for area in areas.values():
            if area.indicators:
                indicator_patterns[area.id] = _compile_terms(area.indicators)
            if area.keywords:
                keyword_patterns[area.id] = _compile_keywords(area)
        return cls(
            areas=dict(areas),
            roles=dict(roles),
            _indicator_patterns=indicator_patterns,
            _keyword_patterns=keyword_patterns,
        )

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> "SkillAreaCatalog":
        raw = read_yaml_mapping(Path(path or DEFAULT_SKILL_AREAS_PATH))
        areas = _parse_areas(raw.get("areas") or {})
        roles = _parse_roles(raw.get("backgrounds") or {}, areas)
        catalog = cls.build(areas, roles)
        logger.info(
            "skill_area_catalog_built areas=%s detectable=%s roles=%s",
            len(catalog.areas),
            len(catalog.detectable_areas()),
            sum(len(items) for items in catalog.roles.values()),
        )
        return catalog

    def area_name(self, area_id: str) -> str:
        area = self.areas.get(area_id)
        return area.name if area else area_id

    def is_required(self, area_id: str) -> bool:
        area = self.areas.get(area_id)
        return bool(area and area.required)

    def detectable_areas(self) -> tuple[SkillAreaConfig, ...]:
        return tuple(area for area in self.areas.values() if area.id in self._indicator_patterns)

    def indicator_patterns(self, area_id: str) -> tuple[re.Pattern[str], ...]:
        return self._indicator_patterns.get(area_id, ())

    def roles_for(self, background: str | None) -> tuple[RoleConfig, ...]:
        return self.roles.get(background or "", ())

    def get_role(self, background: str | None, role_id: str | None) -> RoleConfig | None:
        for role in self.roles_for(background):
            if role.id == role_id:
                return role
        return None

    def keyword_patterns(self, area_id: str, index: KeywordTaxonomy) -> tuple[AreaPattern, ...]:
        own = self._keyword_patterns.get(area_id)
        if own:
            return own
        area = self.areas.get(area_id)
        sources = area.sources if area and area.sources else (area_id,)
        if len(sources) == 1:
            return index.area_patterns(sources[0])

        seen: set[str] = set()
        merged: list[AreaPattern] = []
        for source in sources:
            for pattern, entry in index.area_patterns(source):
                key = entry.name.lower()
                if key not in seen:
                    seen.add(key)
                    merged.append((pattern, entry))
        return tuple(merged)


def _compile_terms(terms: tuple[str, ...]) -> tuple[re.Pattern[str], ...]:
    patterns = (compile_term_pattern(term) for term in terms)
    return tuple(pattern for pattern in patterns if pattern is not None)


def _compile_keywords(area: SkillAreaConfig) -> tuple[AreaPattern, ...]:
    compiled: list[AreaPattern] = []
    for name in area.keywords:
        entry = KeywordEntry(name=name, area=area.id)
        pattern = compile_entry_pattern(entry)
        if pattern is not None:
            compiled.append((pattern, entry))
    return tuple(compiled)


def _str_tuple(values: Any) -> tuple[str, ...]:
    return tuple(str(value) for value in values or [] if str(value).strip())


def _parse_areas(raw: Mapping[str, Any]) -> dict[str, SkillAreaConfig]:
    areas: dict[str, SkillAreaConfig] = {}
    for area_id, item in raw.items():
        item = item or {}
        if not isinstance(item, dict):
            continue
        areas[str(area_id)] = SkillAreaConfig(
            id=str(area_id),
            name=str(item.get("name") or area_id),
            indicators=_str_tuple(item.get("indicators")),
            keywords=_str_tuple(item.get("keywords")),
            sources=_str_tuple(item.get("sources")),
            required=bool(item.get("required", False)),
        )
    return areas


def _parse_roles(
    raw: Mapping[str, Any],
    areas: Mapping[str, SkillAreaConfig],
) -> dict[str, tuple[RoleConfig, ...]]:
    roles: dict[str, tuple[RoleConfig, ...]] = {}
    for background, item in raw.items():
        item = item or {}
        defaults = {str(key): int(value) for key, value in (item.get("defaults") or {}).items()}
        parsed: list[RoleConfig] = []
        for role in item.get("roles") or []:
            if not isinstance(role, dict) or not role.get("id"):
                continue
            area_ids = _str_tuple(role.get("areas")) or tuple(defaults)
            overrides = {str(key): int(value) for key, value in (role.get("weights") or {}).items()}
            otherwise = role.get("otherwise")
            weights = tuple(
                (
                    area_id,
                    overrides.get(
                        area_id,
                        int(otherwise) if otherwise is not None else defaults.get(area_id, 0),
                    ),
                )
                for area_id in area_ids
            )
            unknown = [area_id for area_id, _ in weights if area_id not in areas]
            if unknown:
                logger.warning(
                    "role_unknown_areas background=%s role=%s areas=%s",
                    background,
                    role["id"],
                    ",".join(unknown),
                )
            indicators = _str_tuple(role.get("indicators"))
            parsed.append(
                RoleConfig(
                    id=str(role["id"]),
                    name=str(role.get("name") or role["id"]),
                    indicators=indicators,
                    seniority_levels=_str_tuple(role.get("seniority")),
                    area_weights=weights,
                    indicator_patterns=_compile_terms(indicators),
                )
            )
        roles[str(background)] = tuple(parsed)
    return roles
