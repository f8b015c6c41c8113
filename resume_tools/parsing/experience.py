from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from resume_tools.core.scoring import get_scoring_int
from resume_tools.schemas.resume import WorkEntry

from .utils import DATE_RANGE_RE, format_date_token, is_bullet_like, strip_bullet_prefix

LineKind = Literal["blank", "header", "bullet", "text"]

_HEADER_SEPARATOR_RE = re.compile(r"\s*[|–—]\s*|\s+-\s+")
_AT_RE = re.compile(r"^(.+?)\s+at\s+(.+)$", re.IGNORECASE)
_FRAGMENT_EDGE_RE = re.compile(r"^[\s|,;:()\-–—]+|[\s|,;:()\-–—]+$")


def classify_experience_line(line: str) -> LineKind:
    trimmed = line.strip()
    if not trimmed:
        return "blank"
    if is_bullet_like(trimmed):
        return "bullet"
    if DATE_RANGE_RE.search(trimmed):
        return "header"
    return "text"


def header_fragment(line: str) -> str:
    """Text of a dated header line with the date range and edge separators removed."""
    without_date = DATE_RANGE_RE.sub(" ", line.strip(), count=1)
    return _FRAGMENT_EDGE_RE.sub("", re.sub(r"\s+", " ", without_date)).strip()


def split_company_title(fragment: str, counterpart: str | None = None) -> tuple[str, str]:
    """Guess (company, title) from a header fragment.

    Tries, in order: a pipe/dash two-part split ("Company | Title"), the
    "Title at Company" form, the counterpart line as company with the fragment
    as title, and finally the fragment alone as company. When the fragment is
    empty the counterpart is split instead. Nothing here can tell a company
    from a title with certainty, so unconventional layouts may come back swapped.
    """
    text = (fragment or "").strip()
    other = (counterpart or "").strip()
    if not text and other:
        text, other = other, ""

    parts = [part.strip() for part in _HEADER_SEPARATOR_RE.split(text) if part.strip()]
    if len(parts) >= 2:
        return parts[0], parts[1]

    at_match = _AT_RE.match(text)
    if at_match:
        return at_match.group(2).strip(), at_match.group(1).strip()

    if other:
        return other, text
    return text, ""


@dataclass(slots=True)
class _EntryDraft:
    company: str = ""
    title: str = ""
    start_date: str | None = None
    end_date: str | None = None
    bullets: list[str] = field(default_factory=list)
    tentative: bool = False

    def absorb_text(self, text: str, *, max_field_chars: int, implicit_bullet_min_chars: int) -> None:
        if not self.title and len(text) < max_field_chars:
            self.title = text
        elif not self.company and len(text) < max_field_chars:
            self.company = text
        elif len(text) > implicit_bullet_min_chars:
            self.bullets.append(text)

    def finalize(self) -> WorkEntry:
        return WorkEntry(
            company=self.company,
            title=self.title,
            start_date=self.start_date,
            end_date=self.end_date,
            bullets=list(self.bullets),
        )


def _kinds(lines: list[str]) -> list[LineKind]:
    return [classify_experience_line(line) for line in lines]


def _header_within(kinds: list[LineKind], index: int, lookahead: int) -> bool:
    return "header" in kinds[index + 1 : index + 1 + lookahead]


def _next_content_index(kinds: list[LineKind], index: int) -> int | None:
    for position in range(index + 1, len(kinds)):
        if kinds[position] != "blank":
            return position
    return None


def _is_self_describing_header(line: str) -> bool:
    """True when a dated header names its own company and title without help from the line above."""
    fragment = header_fragment(line)
    if not fragment:
        return False
    parts = [part for part in _HEADER_SEPARATOR_RE.split(fragment) if part.strip()]
    return len(parts) >= 2 or bool(_AT_RE.match(fragment))


def _heads_next_entry(section: list[str], kinds: list[LineKind], index: int) -> bool:
    next_index = _next_content_index(kinds, index)
    if next_index is None or kinds[next_index] != "header":
        return False
    return not _is_self_describing_header(section[next_index])


def extract_experience(section: list[str]) -> list[WorkEntry]:
    """Scan an experience section line by line into work entries.

    States: idle (no draft), tentative (a company-like line seen just before a
    date range) and in-entry (a dated header opened the draft). A dated,
    non-bullet line always closes the open draft and starts a new one, except
    that a tentative draft without bullets is folded into the header it precedes.
    """
    lookahead = get_scoring_int("extraction.experience_lookahead_lines", 3)
    max_field_chars = get_scoring_int("extraction.title_max_chars", 80)
    implicit_min = get_scoring_int("extraction.implicit_bullet_min_chars", 20)

    kinds = _kinds(section)
    entries: list[WorkEntry] = []
    draft: _EntryDraft | None = None
    previous_text: str | None = None

    for index, line in enumerate(section):
        kind = kinds[index]
        trimmed = line.strip()

        if kind == "blank":
            continue

        if kind == "header":
            match = DATE_RANGE_RE.search(trimmed)
            fragment = header_fragment(trimmed)
            if draft is not None and draft.tentative and not draft.bullets:
                if not fragment and draft.title:
                    company, title = draft.company, draft.title
                else:
                    company, title = split_company_title(fragment, draft.company)
            else:
                if draft is not None:
                    entries.append(draft.finalize())
                company, title = split_company_title(fragment, previous_text)
            draft = _EntryDraft(
                company=company,
                title=title,
                start_date=format_date_token(match.group("start_month"), match.group("start_year")) if match else None,
                end_date=format_date_token(match.group("end_month"), match.group("end_year")) if match else None,
            )
            previous_text = None
            continue

        if kind == "bullet":
            previous_text = None
            if draft is not None:
                bullet = strip_bullet_prefix(trimmed)
                if bullet:
                    draft.bullets.append(bullet)
            continue

        if draft is None:
            if _header_within(kinds, index, lookahead):
                draft = _EntryDraft(company=trimmed, tentative=True)
        elif draft.tentative or not (draft.company and draft.title) or not _heads_next_entry(section, kinds, index):
            draft.absorb_text(trimmed, max_field_chars=max_field_chars, implicit_bullet_min_chars=implicit_min)
        # Otherwise the line heads the next entry and is only kept as its counterpart.
        previous_text = trimmed

    if draft is not None:
        entries.append(draft.finalize())
    return entries
