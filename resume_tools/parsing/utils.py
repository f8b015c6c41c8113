from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►▸-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d{{1,2}}[\.\)]))\s+")
_BULLET_PREFIX = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]\s*|\d{{1,2}}[\.\)]\s*)")

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[\s.-]?)?\(?\d{2,4}\)?[\s.-]?\d{3,4}[\s.-]?\d{3,4}")
PHONE_LINE_RE = re.compile(r"^\+?\d[\d\s.()-]{7,}$")
LOCATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    # City, ST
    re.compile(r"([A-Z][a-zA-Z ]+,\s*[A-Z]{2})\b"),
    # City, State ZIP
    re.compile(r"([A-Z][a-zA-Z ]+,\s*[A-Z][a-zA-Z]+\s+\d{5})"),
    # City, Country
    re.compile(r"([A-Z][a-zA-Z ]+,\s*[A-Z][a-zA-Z ]+)"),
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?|Winter|Spring|Summer|Fall)"
)
DATE_RANGE_RE = re.compile(
    rf"(?:\b(?P<start_month>{_MONTH})\.?[\s,]*)?(?<!\d)(?P<start_year>\d{{4}})"
    rf"\s*(?:[-–—]+|\bto\b)\s*"
    rf"(?:\b(?P<end_month>{_MONTH})\.?[\s,]*)?(?P<end_year>\d{{4}}(?!\d)|present|current)",
    re.IGNORECASE,
)


def split_lines(text: str) -> list[str]:
    return [line.rstrip() for line in text.split("\n")]


def is_bullet_like(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line))


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PREFIX.sub("", line, count=1).strip()


def find_location(line: str) -> str | None:
    for pattern in LOCATION_PATTERNS:
        match = pattern.search(line)
        if match:
            return match.group(1).strip()
    return None


def format_date_token(month: str | None, year: str | None) -> str | None:
    if not year:
        return None
    clean_year = year.strip()
    if clean_year.lower() in {"present", "current"}:
        clean_year = clean_year.capitalize()
    if month:
        return f"{month.strip()} {clean_year}"
    return clean_year
