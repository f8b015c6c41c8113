from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

SectionKey = Literal["summary", "experience", "education", "skills", "certifications", "projects"]

# Checked in this order; a line is assigned to the first section whose synonyms match.
SECTION_HEADINGS: dict[SectionKey, tuple[str, ...]] = {
    "summary": (
        "professional summary",
        "summary",
        "profile",
        "about me",
        "executive summary",
        "career summary",
        "objective",
        "career objective",
    ),
    "experience": (
        "professional experience",
        "work experience",
        "experience",
        "employment history",
        "employment",
        "work history",
        "relevant experience",
    ),
    "education": (
        "education",
        "academic background",
        "academic history",
        "educational background",
    ),
    "skills": (
        "skills",
        "technical skills",
        "core competencies",
        "key skills",
        "technologies",
        "tech stack",
        "areas of expertise",
        "proficiencies",
    ),
    "certifications": (
        "certifications",
        "certificates",
        "licenses",
        "credentials",
        "professional certifications",
    ),
    "projects": (
        "projects",
        "key projects",
        "notable projects",
        "personal projects",
    ),
}


def _heading_pattern(synonyms: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(r"\s+".join(re.escape(word) for word in synonym.split()) for synonym in synonyms)
    return re.compile(rf"^\s*(?:{alternatives})\s*:?\s*$", re.IGNORECASE)


SECTION_PATTERNS: dict[SectionKey, re.Pattern[str]] = {
    key: _heading_pattern(synonyms) for key, synonyms in SECTION_HEADINGS.items()
}


@dataclass(frozen=True, slots=True)
class SectionSpan:
    key: SectionKey
    heading_index: int
    start: int
    end: int


def match_section_heading(line: str) -> SectionKey | None:
    trimmed = line.strip()
    if not trimmed:
        return None
    for key, pattern in SECTION_PATTERNS.items():
        if pattern.match(trimmed):
            return key
    return None


def is_section_heading(line: str) -> bool:
    return match_section_heading(line) is not None


def identify_sections(lines: list[str]) -> list[SectionSpan]:
    """Partition lines into sections; each runs from its heading to the next heading or EOF."""
    found: list[tuple[SectionKey, int]] = []
    for index, line in enumerate(lines):
        key = match_section_heading(line)
        if key is not None:
            found.append((key, index))

    spans: list[SectionSpan] = []
    for position, (key, heading_index) in enumerate(found):
        next_start = found[position + 1][1] if position + 1 < len(found) else len(lines)
        spans.append(SectionSpan(key=key, heading_index=heading_index, start=heading_index + 1, end=next_start))
    return spans


def first_heading_index(spans: list[SectionSpan]) -> int | None:
    if not spans:
        return None
    return min(span.heading_index for span in spans)


def section_lines(lines: list[str], spans: list[SectionSpan], key: SectionKey) -> list[str]:
    # Repeated headings are merged in document order, separated by a blank line.
    collected: list[str] = []
    for span in spans:
        if span.key != key:
            continue
        if collected:
            collected.append("")
        collected.extend(lines[span.start : span.end])
    return collected
