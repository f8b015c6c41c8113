from __future__ import annotations

import logging
import re

from resume_tools.core.scoring import get_scoring_int
from resume_tools.schemas.reports import ATSBreakdown, ATSScore
from resume_tools.schemas.resume import StructuredDocument

from .ats_rules import collect_issues, collect_passed
from .signals import BulletSignals, TextSignals, read_bullet_signals, read_text_signals

logger = logging.getLogger(__name__)

SUB_SCORE_MAX = 25

_WORD_RE = re.compile(r"[A-Za-z][A-Za-z'&-]*")
_MINOR_WORDS = frozenset({"a", "an", "and", "at", "for", "in", "of", "on", "or", "the", "to", "with"})


def _clamp(score: int) -> int:
    return max(0, min(SUB_SCORE_MAX, score))


def _tier(value: int, tiers: tuple[tuple[int, int], ...], *, any_points: int = 0) -> int:
    """Points for the first (threshold, points) tier reached; any_points when value > 0 but below all tiers."""
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return any_points if value > 0 else 0


def _is_title_case(line: str) -> bool:
    words = _WORD_RE.findall(line)
    return bool(words) and all(word[0].isupper() or word.lower() in _MINOR_WORDS for word in words)


def score_formatting(signals: TextSignals) -> int:
    score = SUB_SCORE_MAX
    score -= min(signals.image_patterns * 5, 10)
    score -= min(signals.table_patterns * 5, 10)
    if signals.multi_column_lines > get_scoring_int("ats.multi_column_min_lines", 5):
        score -= 5

    if signals.word_count < get_scoring_int("ats.length.sparse_words", 100):
        score -= 3
    elif signals.word_count > get_scoring_int("ats.length.long_words", 2000):
        score -= 2

    if signals.decorative_symbols > get_scoring_int("ats.decorative_symbol_limit", 10):
        score -= 3
    return _clamp(score)


def score_section_headers(signals: TextSignals) -> int:
    score = 5 * len(signals.sections_found)
    headers = signals.header_lines
    if len(headers) >= 2:
        all_upper = all(header == header.upper() for header in headers)
        all_title = all(_is_title_case(header) for header in headers)
        if all_upper or all_title:
            score += 5
    return _clamp(score)


def score_parseability(document: StructuredDocument, bullets: BulletSignals) -> int:
    score = 0
    if document.has_name:
        score += 5
    if document.email:
        score += 4
    if document.phone:
        score += 3
    if any(entry.start_date or entry.end_date for entry in document.experience):
        score += 5
    if document.education:
        score += 4
    score += _tier(bullets.total, ((5, 4),), any_points=2)
    return _clamp(score)


def score_keyword_optimization(document: StructuredDocument, bullets: BulletSignals) -> int:
    score = _tier(len(document.skills), ((10, 7), (5, 5)), any_points=3)
    score += _tier(len(bullets.action_verbs), ((10, 8), (5, 6)), any_points=3)
    score += _tier(bullets.quantified, ((5, 7), (2, 5)), any_points=2)
    if document.summary and len(document.summary) > 30:
        score += 3
    return _clamp(score)


def calculate_ats_score(raw_text: str, document: StructuredDocument) -> ATSScore:
    """Score a resume for ATS compatibility.

    The four sub-scores are each clamped to 0..25 and summed; issues and
    passed checks come from independent rules and do not feed the numbers.
    """
    text = raw_text or document.raw_text
    signals = read_text_signals(text)
    bullets = read_bullet_signals(document)

    breakdown = ATSBreakdown(
        formatting=score_formatting(signals),
        section_headers=score_section_headers(signals),
        parseability=score_parseability(document, bullets),
        keyword_optimization=score_keyword_optimization(document, bullets),
    )
    score = ATSScore(
        overall_score=breakdown.total,
        breakdown=breakdown,
        issues=collect_issues(document, signals, bullets),
        passed=collect_passed(document, signals, bullets),
    )
    logger.info(
        "ats_scored overall=%s formatting=%s headers=%s parseability=%s keywords=%s issues=%s",
        score.overall_score,
        breakdown.formatting,
        breakdown.section_headers,
        breakdown.parseability,
        breakdown.keyword_optimization,
        len(score.issues),
    )
    return score
