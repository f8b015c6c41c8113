from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    """Read-only skill, action-verb and soft-skill catalogs backed by catalog.json."""

    def __init__(self, catalog_path: str | Path | None = None) -> None:
        path = Path(catalog_path) if catalog_path else Path(__file__).with_name("catalog.json")
        raw = self._load_catalog(path)

        categories: dict[str, tuple[str, ...]] = {}
        lookup: dict[str, str] = {}
        for category, terms in (raw.get("tech_skills") or {}).items():
            clean = tuple(str(term).strip() for term in terms if str(term).strip())
            categories[str(category)] = clean
            for term in clean:
                # Later categories win on duplicates; spellings are identical across the catalog.
                lookup[term.lower()] = term

        self.categories = MappingProxyType(categories)
        self.skill_lookup = MappingProxyType(lookup)
        self.action_verbs = frozenset(str(verb).strip().lower() for verb in raw.get("action_verbs") or [])
        self.soft_skills = tuple(str(skill).strip() for skill in raw.get("soft_skills") or [])

    @staticmethod
    def _load_catalog(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid taxonomy catalog '{path}': expected a top-level mapping.")
        return raw

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = raw.strip().lower()
        return normalized, self.skill_lookup.get(normalized)
