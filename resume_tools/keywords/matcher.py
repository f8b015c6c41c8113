from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache

from resume_tools.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

_SHORT_TERM_MAX_CHARS = 2
_BOUNDARY_CHARS = frozenset(" \t\n\r\f\v,.;:!?()[]{}<>/\"'`~@#$%^&*+=|\\-")
_NON_VERB_CHARS_RE = re.compile(r"[^a-z-]")


@dataclass(slots=True)
class KeywordMatch:
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@lru_cache(maxsize=512)
def _short_term_pattern(term: str) -> re.Pattern[str]:
    # Lookarounds instead of \b so that terms ending in symbols (C#, F#) still anchor.
    return re.compile(rf"(?<![A-Za-z0-9]){re.escape(term)}(?![A-Za-z0-9])", re.IGNORECASE)


def _is_boundary(ch: str) -> bool:
    return ch == "" or ch.isspace() or ch in _BOUNDARY_CHARS


def contains_term(text: str, term: str, *, lowered_text: str | None = None) -> bool:
    """True when term occurs in text bounded on both sides by whitespace, punctuation or the text edge."""
    needle = term.lower()
    if not needle:
        return False
    if len(needle) <= _SHORT_TERM_MAX_CHARS:
        return bool(_short_term_pattern(needle).search(text))

    haystack = lowered_text if lowered_text is not None else text.lower()
    start = haystack.find(needle)
    while start != -1:
        end = start + len(needle)
        before = haystack[start - 1] if start > 0 else ""
        after = haystack[end] if end < len(haystack) else ""
        if _is_boundary(before) and _is_boundary(after):
            return True
        start = haystack.find(needle, start + 1)
    return False


def extract_keywords(text: str, taxonomy: TaxonomyProvider | None = None) -> list[str]:
    """Canonical catalog terms present in text, sorted."""
    provider = taxonomy or get_default_taxonomy_provider()
    if not text:
        return []
    lowered = text.lower()
    found = {
        canonical
        for term, canonical in provider.skill_lookup.items()
        if contains_term(text, term, lowered_text=lowered)
    }
    return sorted(found)


def match_keywords(
    resume_text: str,
    job_keywords: Sequence[str],
    taxonomy: TaxonomyProvider | None = None,
) -> KeywordMatch:
    """Partition job_keywords, in input order, by presence in the resume's extracted keyword set."""
    resume_keywords = {keyword.lower() for keyword in extract_keywords(resume_text, taxonomy)}
    result = KeywordMatch()
    for keyword in job_keywords:
        if keyword.lower() in resume_keywords:
            result.matched.append(keyword)
        else:
            result.missing.append(keyword)
    return result


def extract_action_verbs(text: str, taxonomy: TaxonomyProvider | None = None) -> list[str]:
    provider = taxonomy or get_default_taxonomy_provider()
    found: set[str] = set()
    for word in (text or "").split():
        cleaned = _NON_VERB_CHARS_RE.sub("", word.lower())
        if cleaned in provider.action_verbs:
            found.add(cleaned)
    return sorted(found)


def extract_soft_skills(text: str, taxonomy: TaxonomyProvider | None = None) -> list[str]:
    provider = taxonomy or get_default_taxonomy_provider()
    if not text:
        return []
    lowered = text.lower()
    return sorted({skill for skill in provider.soft_skills if contains_term(text, skill, lowered_text=lowered)})


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def keyword_density(matched_count: int, total_count: int) -> float:
    """Percentage of total_count that matched, rounded half-up to one decimal."""
    if total_count <= 0:
        return 0.0
    return round_half_up(matched_count / total_count * 100, 1)


def unique_in_order(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))
