from __future__ import annotations

import re

from resume_tools.schemas.resume import UNKNOWN_NAME, EducationEntry

from .utils import DATE_RANGE_RE, YEAR_RE

# Spelled-out degrees match in any case; abbreviations only in their usual
# upper-case forms so that words like "as" or "ms" inside prose do not count.
_DEGREE_RE = re.compile(
    r"\b(?:"
    r"(?i:bachelor(?:['’]?s)?|master(?:['’]?s)?|doctorate|doctor|associate(?:['’]?s)?|diploma|certificate)"
    r"|Ph\.?D\.?|M\.?B\.?A\.?|B\.?Sc\.?|M\.?Sc\.?|B\.?Eng\.?|M\.?Eng\.?"
    r"|M\.?S\.?|B\.?S\.?|B\.?A\.?|A\.?S\.?|A\.?A\.?"
    r")(?![A-Za-z])"
    r"(?:\s+(?i:of|in|for))?"
    r"(?:\s+[A-Z][A-Za-z&,\s]*)?"
)
_FIELD_RE = re.compile(r".*\b(?:in|of|for)\s+(.+)$", re.IGNORECASE)
_SPACED_DASH_RE = re.compile(r"\s+[-–—]+\s+|\s+[-–—]+$|^[-–—]+\s+")
_EDGE_PUNCT = " \t,;|-–—()"


def _split_blocks(section: list[str]) -> list[list[str]]:
    blocks: list[list[str]] = []
    current: list[str] = []
    for line in section:
        stripped = line.strip()
        if stripped:
            current.append(stripped)
            continue
        if current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def find_degree(lines: list[str]) -> str | None:
    for line in lines:
        match = _DEGREE_RE.search(line)
        if match:
            phrase = match.group(0).strip(_EDGE_PUNCT)
            if phrase:
                return phrase
    return None


def field_of_study(degree: str | None) -> str | None:
    if not degree:
        return None
    match = _FIELD_RE.match(degree)
    if not match:
        return None
    value = match.group(1).strip(_EDGE_PUNCT)
    return value or None


def _clean_institution(line: str, degree: str | None) -> str:
    text = line
    if degree and degree in text:
        text = text.replace(degree, " ", 1)
    text = DATE_RANGE_RE.sub(" ", text)
    text = YEAR_RE.sub(" ", text)
    text = _SPACED_DASH_RE.sub(" ", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip(_EDGE_PUNCT)


def parse_education_block(block: list[str]) -> EducationEntry | None:
    if not block:
        return None

    joined = " ".join(block)
    degree = find_degree(block)
    years = YEAR_RE.findall(joined)

    institution = _clean_institution(block[0], degree)
    if not institution and len(block) > 1:
        institution = _clean_institution(block[1], degree)
    if not institution and not degree:
        return None

    return EducationEntry(
        institution=institution or UNKNOWN_NAME,
        degree=degree or joined[:100],
        field=field_of_study(degree),
        year=years[-1] if years else None,
    )


def extract_education(section: list[str]) -> list[EducationEntry]:
    entries: list[EducationEntry] = []
    for block in _split_blocks(section):
        entry = parse_education_block(block)
        if entry is not None:
            entries.append(entry)
    return entries
