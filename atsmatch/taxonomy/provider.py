from __future__ import annotations

import re
from typing import Protocol

from .keyword_index import KeywordEntry


class KeywordTaxonomy(Protocol):
    def get_all_patterns(self) -> tuple[tuple[re.Pattern[str], str], ...]:
        """Return (compiled pattern, canonical name) pairs in registration order."""

    def find_keyword_by_name(self, name: str) -> KeywordEntry | None:
        """Resolve a canonical name or variation to its entry, case-insensitively."""

    def custom_variations(self) -> dict[str, tuple[str, ...]]:
        """Return the user-defined variation table keyed by lower-cased keyword."""

    def area_patterns(self, area: str) -> tuple[tuple[re.Pattern[str], KeywordEntry], ...]:
        """Return the (pattern, entry) pairs registered under one taxonomy area."""
