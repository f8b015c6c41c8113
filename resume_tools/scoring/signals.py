from __future__ import annotations

import re
from dataclasses import dataclass

from resume_tools.core.scoring import get_scoring_int
from resume_tools.keywords.matcher import extract_action_verbs
from resume_tools.parsing.utils import is_bullet_like
from resume_tools.schemas.resume import StructuredDocument

STANDARD_SECTIONS: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...] = (
    (
        "Experience",
        (re.compile(r"experience", re.I), re.compile(r"employment", re.I), re.compile(r"work\s+history", re.I)),
    ),
    ("Education", (re.compile(r"education", re.I), re.compile(r"academic", re.I))),
    (
        "Skills",
        (
            re.compile(r"skills", re.I),
            re.compile(r"competencies", re.I),
            re.compile(r"technologies", re.I),
            re.compile(r"tech\s+stack", re.I),
        ),
    ),
    (
        "Summary",
        (
            re.compile(r"summary", re.I),
            re.compile(r"profile", re.I),
            re.compile(r"objective", re.I),
            re.compile(r"about\s+me", re.I),
        ),
    ),
)

IMAGE_INDICATORS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\[image\]", re.I),
    re.compile(r"\[logo\]", re.I),
    re.compile(r"\[photo\]", re.I),
    re.compile(r"\[picture\]", re.I),
    re.compile(r"data:image", re.I),
)
TABLE_INDICATORS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\t{3,}"),
    re.compile(r"\|.*\|.*\|"),
)
MULTI_COLUMN_RE = re.compile(r"\s{10,}\S+\s{10,}")
DECORATIVE_SYMBOLS_RE = re.compile(r"[★☆⭐✦✧◆◇●○►▶▷▸◄◁▽△▲▼♦♠♣♥♡♢♤♧✔✓✗✘✕✖×÷]")
QUANTIFIABLE_RE = re.compile(
    r"\d+%|\$[\d,.]+[KkMmBb]?|\d+[xX]\s|\d+\+?\s*(?:users|customers|clients|employees|team|engineers"
    r"|developers|people|members|projects|applications|servers|requests|transactions|records|endpoints)",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class TextSignals:
    """Layout facts read once from the raw text and shared by scorers and rules."""

    word_count: int
    image_patterns: int
    table_patterns: int
    multi_column_lines: int
    decorative_symbols: int
    sections_found: tuple[str, ...]
    header_lines: tuple[str, ...]

    @property
    def has_images(self) -> bool:
        return self.image_patterns > 0

    @property
    def has_tables(self) -> bool:
        return self.table_patterns > 0


@dataclass(frozen=True, slots=True)
class BulletSignals:
    bullets: tuple[str, ...]
    action_verbs: tuple[str, ...]
    quantified: int

    @property
    def total(self) -> int:
        return len(self.bullets)


def _header_candidates(lines: list[str]) -> list[str]:
    max_chars = get_scoring_int("ats.section_header_max_chars", 60)
    return [line for line in lines if 0 < len(line) < max_chars and not is_bullet_like(line)]


def read_text_signals(raw_text: str) -> TextSignals:
    lines = raw_text.split("\n")
    trimmed = [line.strip() for line in lines]
    candidates = _header_candidates(trimmed)

    sections_found = tuple(
        name for name, patterns in STANDARD_SECTIONS if any(p.search(line) for line in candidates for p in patterns)
    )
    all_patterns = [pattern for _, patterns in STANDARD_SECTIONS for pattern in patterns]
    header_lines = tuple(line for line in candidates if any(p.search(line) for p in all_patterns))

    return TextSignals(
        word_count=len(raw_text.split()),
        image_patterns=sum(1 for pattern in IMAGE_INDICATORS if pattern.search(raw_text)),
        table_patterns=sum(1 for pattern in TABLE_INDICATORS if any(pattern.search(line) for line in lines)),
        multi_column_lines=sum(1 for line in lines if MULTI_COLUMN_RE.search(line)),
        decorative_symbols=len(DECORATIVE_SYMBOLS_RE.findall(raw_text)),
        sections_found=sections_found,
        header_lines=header_lines,
    )


def read_bullet_signals(document: StructuredDocument) -> BulletSignals:
    bullets = tuple(document.bullets)
    return BulletSignals(
        bullets=bullets,
        action_verbs=tuple(extract_action_verbs(" ".join(bullets))),
        quantified=sum(1 for bullet in bullets if QUANTIFIABLE_RE.search(bullet)),
    )

