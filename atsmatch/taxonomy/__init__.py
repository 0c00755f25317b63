from __future__ import annotations

import threading

from atsmatch.core.config import settings

from .keyword_index import CustomKeyword, KeywordEntry, KeywordIndex
from .provider import KeywordTaxonomy
from .skill_areas import RoleConfig, SkillAreaCatalog, SkillAreaConfig

_DEFAULT_INDEX: KeywordIndex | None = None
_DEFAULT_INDEX_LOCK = threading.Lock()
_DEFAULT_CATALOG: SkillAreaCatalog | None = None
_DEFAULT_CATALOG_LOCK = threading.Lock()


def get_default_keyword_index() -> KeywordIndex:
    global _DEFAULT_INDEX

    if _DEFAULT_INDEX is not None:
        return _DEFAULT_INDEX
    with _DEFAULT_INDEX_LOCK:
        if _DEFAULT_INDEX is None:
            _DEFAULT_INDEX = KeywordIndex.from_files(
                settings.keywords_path,
                settings.custom_keywords_path,
            )
    return _DEFAULT_INDEX


def is_default_keyword_index_loaded() -> bool:
    return _DEFAULT_INDEX is not None


def reset_default_keyword_index() -> None:
    global _DEFAULT_INDEX

    with _DEFAULT_INDEX_LOCK:
        _DEFAULT_INDEX = None


def get_default_skill_area_catalog() -> SkillAreaCatalog:
    global _DEFAULT_CATALOG

    if _DEFAULT_CATALOG is not None:
        return _DEFAULT_CATALOG
    with _DEFAULT_CATALOG_LOCK:
        if _DEFAULT_CATALOG is None:
            _DEFAULT_CATALOG = SkillAreaCatalog.from_file(settings.skill_areas_path)
    return _DEFAULT_CATALOG


__all__ = [
    "CustomKeyword",
    "KeywordEntry",
    "KeywordIndex",
    "KeywordTaxonomy",
    "RoleConfig",
    "SkillAreaCatalog",
    "SkillAreaConfig",
    "get_default_keyword_index",
    "get_default_skill_area_catalog",
    "is_default_keyword_index_loaded",
    "reset_default_keyword_index",
]
