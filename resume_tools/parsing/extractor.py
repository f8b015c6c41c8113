from __future__ import annotations

import logging
import re

from resume_tools.core.errors import NoContentError
from resume_tools.core.scoring import get_scoring_int
from resume_tools.schemas.resume import UNKNOWN_NAME, StructuredDocument

from .education import extract_education
from .experience import extract_experience
from .sections import SectionSpan, first_heading_index, identify_sections, is_section_heading, section_lines
from .utils import (
    EMAIL_RE,
    PHONE_LINE_RE,
    PHONE_RE,
    find_location,
    split_lines,
    strip_bullet_prefix,
)

logger = logging.getLogger(__name__)

_SKILL_SPLIT_RE = re.compile(r"[,|;•·●■▪►▸–—]")
_SKILL_EDGE_RE = re.compile(r"^[\-\s*]+|[\-\s*]+$")


def _first_match(pattern: re.Pattern[str], lines: list[str]) -> str | None:
    for line in lines:
        match = pattern.search(line)
        if match:
            return match.group(0).strip()
    return None


def extract_name(lines: list[str]) -> tuple[str, int | None]:
    """Return the detected name and its line index, or ("Unknown", None)."""
    for index, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed:
            continue
        if EMAIL_RE.search(trimmed):
            continue
        if PHONE_LINE_RE.match(trimmed):
            continue
        if is_section_heading(trimmed):
            continue
        return trimmed, index
    return UNKNOWN_NAME, None


def extract_location(header_lines: list[str], *, skip_index: int | None, limit: int | None) -> str | None:
    stop = len(header_lines) if limit is None else min(limit, len(header_lines))
    for index in range(stop):
        if index == skip_index:
            continue
        line = header_lines[index].strip()
        if not line or EMAIL_RE.search(line):
            continue
        location = find_location(line)
        if location:
            return location
    return None


def extract_title(lines: list[str], name_index: int | None, first_heading: int | None) -> str | None:
    if name_index is None:
        return None
    lookahead = get_scoring_int("extraction.title_lookahead_lines", 4)
    max_chars = get_scoring_int("extraction.title_max_chars", 80)
    stop = min(name_index + 1 + lookahead, len(lines))
    if first_heading is not None:
        stop = min(stop, first_heading)

    for index in range(name_index + 1, stop):
        trimmed = lines[index].strip()
        if not trimmed:
            continue
        if EMAIL_RE.search(trimmed) or PHONE_RE.search(trimmed):
            continue
        if find_location(trimmed):
            continue
        if 3 < len(trimmed) < max_chars:
            return trimmed
    return None


def extract_summary(section: list[str]) -> str | None:
    parts = [line.strip() for line in section if line.strip()]
    if not parts:
        return None
    return " ".join(parts)


def extract_skills(section: list[str]) -> list[str]:
    max_chars = get_scoring_int("extraction.skill_max_chars", 60)
    skills: list[str] = []
    seen: set[str] = set()
    for line in section:
        trimmed = line.strip()
        if not trimmed:
            continue
        _, colon, after = trimmed.partition(":")
        skill_part = after if colon else trimmed
        for part in _SKILL_SPLIT_RE.split(skill_part):
            cleaned = _SKILL_EDGE_RE.sub("", part).strip()
            if not cleaned or len(cleaned) > max_chars or cleaned in seen:
                continue
            seen.add(cleaned)
            skills.append(cleaned)
    return skills


def extract_certifications(section: list[str]) -> list[str]:
    certifications: list[str] = []
    for line in section:
        trimmed = line.strip()
        if not trimmed:
            continue
        cleaned = strip_bullet_prefix(trimmed)
        if cleaned:
            certifications.append(cleaned)
    return certifications


def _span_summary(spans: list[SectionSpan]) -> str:
    return ",".join(span.key for span in spans) or "none"


def extract(raw_text: str) -> StructuredDocument:
    """Recover a structured resume from raw text.

    Raises NoContentError when the text is empty. Every other miss degrades to
    a default (None, empty list or "Unknown") instead of failing.
    """
    if not raw_text or not raw_text.strip():
        raise NoContentError("Resume text is empty. The document may be an image-only PDF.")

    lines = split_lines(raw_text)
    header_lines = lines[: get_scoring_int("extraction.header_block_lines", 15)]
    spans = identify_sections(lines)
    first_heading = first_heading_index(spans)

    name, name_index = extract_name(lines)
    document = StructuredDocument(
        name=name,
        email=_first_match(EMAIL_RE, header_lines),
        phone=_first_match(PHONE_RE, header_lines),
        location=extract_location(header_lines, skip_index=name_index, limit=first_heading),
        title=extract_title(lines, name_index, first_heading),
        summary=extract_summary(section_lines(lines, spans, "summary")),
        skills=extract_skills(section_lines(lines, spans, "skills")),
        experience=extract_experience(section_lines(lines, spans, "experience")),
        education=extract_education(section_lines(lines, spans, "education")),
        certifications=extract_certifications(section_lines(lines, spans, "certifications")),
        raw_text=raw_text,
    )
    logger.debug("resume_sections detected=%s", _span_summary(spans))
    return document
