from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class TaxonomyProvider(Protocol):
    categories: Mapping[str, tuple[str, ...]]
    skill_lookup: Mapping[str, str]
    action_verbs: frozenset[str]
    soft_skills: tuple[str, ...]

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Return normalized text and the canonical catalog spelling, if known."""
