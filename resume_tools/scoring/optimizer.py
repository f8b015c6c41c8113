from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from resume_tools.core.scoring import get_scoring_int
from resume_tools.keywords.classifier import RequirementBuckets, classify_requirements
from resume_tools.keywords.matcher import (
    contains_term,
    extract_action_verbs,
    extract_keywords,
    keyword_density,
    match_keywords,
    round_half_up,
    unique_in_order,
)
from resume_tools.schemas.reports import OptimizationReport, OptimizationSuggestion
from resume_tools.schemas.resume import StructuredDocument, WorkEntry

from .signals import QUANTIFIABLE_RE

logger = logging.getLogger(__name__)

_JOB_TITLE_RE = re.compile(r"^\s*(?:Job\s+Title|Position|Role)\s*:\s*(.+)$", re.IGNORECASE | re.MULTILINE)
_YEAR_TOKEN_RE = re.compile(r"\d{4}")
_SUGGESTED_VERBS = (
    "Developed, Implemented, Architected, Optimized, Led, Reduced, Increased, Delivered, Automated, Migrated"
)


@dataclass(frozen=True, slots=True)
class _RankedEntry:
    label: str
    score: int


def build_resume_corpus(document: StructuredDocument) -> str:
    parts: list[str] = [document.raw_text]
    if document.summary:
        parts.append(document.summary)
    if document.skills:
        parts.append(" ".join(document.skills))
    for entry in document.experience:
        parts.extend([entry.title, entry.company, " ".join(entry.bullets)])
    for education in document.education:
        parts.append(education.degree)
        if education.field:
            parts.append(education.field)
        parts.append(education.institution)
    if document.certifications:
        parts.append(" ".join(document.certifications))
    return " ".join(parts)


def _quality_points(document: StructuredDocument, action_verb_count: int) -> int:
    points = 0
    if document.summary and len(document.summary) > 30:
        points += 3

    skills = len(document.skills)
    if skills >= 10:
        points += 5
    elif skills >= 5:
        points += 3

    bullets = len(document.bullets)
    if bullets >= 10:
        points += 7
    elif bullets >= 5:
        points += 5
    elif bullets > 0:
        points += 2

    if action_verb_count >= 8:
        points += 5
    elif action_verb_count >= 4:
        points += 3

    if document.education:
        points += 3
    if document.certifications:
        points += 2
    return min(points, get_scoring_int("fit.weights.resume_quality", 25))


def calculate_fit_score(
    matched: list[str],
    missing: list[str],
    buckets: RequirementBuckets,
    document: StructuredDocument,
    action_verb_count: int,
) -> int:
    """Keyword overlap (0-50) + required coverage (0-25) + resume quality (0-25)."""
    score = 0
    total = len(matched) + len(missing)
    if total:
        score += int(round_half_up(len(matched) / total * get_scoring_int("fit.weights.keyword_overlap", 50)))

    if buckets.required_skills:
        required = {skill.lower() for skill in buckets.required_skills}
        required_matched = sum(1 for keyword in matched if keyword.lower() in required)
        coverage_weight = get_scoring_int("fit.weights.required_coverage", 25)
        score += int(round_half_up(required_matched / len(buckets.required_skills) * coverage_weight))
    else:
        score += get_scoring_int("fit.no_required_default", 15)

    score += _quality_points(document, action_verb_count)
    return max(0, min(100, score))


def _skills_suggestion(document: StructuredDocument, missing: list[str]) -> OptimizationSuggestion | None:
    listed = {skill.lower() for skill in document.skills}
    absent = [keyword for keyword in missing if keyword.lower() not in listed]
    if not absent:
        return None
    if document.skills:
        current = f"Current skills: {', '.join(document.skills[:5])}{'...' if len(document.skills) > 5 else ''}"
    else:
        current = "No skills section found"
    return OptimizationSuggestion(
        section="skills",
        current=current,
        suggested=f"Add these missing keywords to your skills section: {', '.join(absent[:8])}",
        reason=(
            "The job description requires these skills but they are not found in your resume. "
            "Adding them (if you have the experience) will improve ATS keyword matching."
        ),
    )


def _summary_suggestion(document: StructuredDocument, buckets: RequirementBuckets) -> OptimizationSuggestion | None:
    summary = document.summary or ""
    if len(summary) < 30:
        top_required = list(buckets.required_skills[:5])
        return OptimizationSuggestion(
            section="summary",
            current=document.summary or "No summary present",
            suggested=(
                f"Add a 2-3 sentence professional summary mentioning: {', '.join(top_required)}. "
                f'Example: "Results-driven [title] with [X] years of experience in {", ".join(top_required[:3])}. '
                'Proven track record of [key achievement]."'
            ),
            reason=(
                "A keyword-rich professional summary helps ATS systems quickly identify your fit "
                "and gives recruiters an immediate snapshot of your qualifications."
            ),
        )

    lowered = summary.lower()
    absent = [skill for skill in buckets.required_skills if not contains_term(summary, skill, lowered_text=lowered)][:4]
    if not absent:
        return None
    return OptimizationSuggestion(
        section="summary",
        current=summary[:100] + ("..." if len(summary) > 100 else ""),
        suggested=f"Incorporate these key terms into your summary: {', '.join(absent)}",
        reason=(
            "Your summary is missing key required skills from the job description. "
            "Weaving them in naturally improves ATS matching."
        ),
    )


def target_job_title(job_text: str) -> str | None:
    match = _JOB_TITLE_RE.search(job_text or "")
    if not match:
        return None
    title = match.group(1).strip()
    return title or None


def _title_suggestion(document: StructuredDocument, job_text: str) -> OptimizationSuggestion | None:
    target = target_job_title(job_text)
    if not target or not document.title:
        return None
    current_lower = document.title.lower()
    target_lower = target.lower()
    if current_lower in target_lower or target_lower in current_lower:
        return None
    return OptimizationSuggestion(
        section="title",
        current=document.title,
        suggested=f'Consider aligning your title to "{target}" if it accurately reflects your experience.',
        reason=(
            "ATS systems often match the job title in your resume against the posted position. "
            "Aligning titles (when truthful) improves match scores."
        ),
    )


def _action_verb_suggestion(document: StructuredDocument, action_verb_count: int) -> OptimizationSuggestion | None:
    if action_verb_count >= 5 or not document.experience:
        return None
    return OptimizationSuggestion(
        section="experience",
        current=f"Experience bullets use only {action_verb_count} action verbs",
        suggested=f"Rewrite bullet points to start with strong action verbs: {_SUGGESTED_VERBS}",
        reason=(
            "Action verbs make achievements concrete and are weighted by ATS systems. "
            "Aim for each bullet to start with a unique action verb."
        ),
    )


def _metrics_suggestion(bullets: list[str]) -> OptimizationSuggestion | None:
    quantified = sum(1 for bullet in bullets if QUANTIFIABLE_RE.search(bullet))
    if quantified >= 3 or len(bullets) <= 3:
        return None
    return OptimizationSuggestion(
        section="experience",
        current=f"Only {quantified} of {len(bullets)} bullets contain quantifiable metrics",
        suggested=(
            'Add numbers and percentages to more bullet points. Examples: "Reduced API response time by 60%", '
            '"Managed deployment pipeline serving 2M daily requests", "Led team of 5 engineers"'
        ),
        reason=(
            "Quantifiable results demonstrate impact and are strongly weighted by both ATS systems "
            "and human reviewers."
        ),
    )


def _experience_keyword_suggestion(bullets: list[str], missing: list[str]) -> OptimizationSuggestion | None:
    bullet_text = " ".join(bullets)
    lowered = bullet_text.lower()
    absent = [keyword for keyword in missing if not contains_term(bullet_text, keyword, lowered_text=lowered)]
    if not absent:
        return None
    return OptimizationSuggestion(
        section="experience",
        current="Experience bullets missing key job keywords",
        suggested=(
            "Naturally incorporate these terms into your experience bullets where truthful: "
            f"{', '.join(absent[:5])}"
        ),
        reason=(
            "Keywords appearing in the context of actual work experience carry more weight "
            "than skills listed in isolation."
        ),
    )


def generate_suggestions(
    document: StructuredDocument,
    buckets: RequirementBuckets,
    missing: list[str],
    job_text: str,
    action_verb_count: int,
) -> list[OptimizationSuggestion]:
    bullets = document.bullets
    candidates = (
        _skills_suggestion(document, missing),
        _summary_suggestion(document, buckets),
        _title_suggestion(document, job_text),
        _action_verb_suggestion(document, action_verb_count),
        _metrics_suggestion(bullets),
        _experience_keyword_suggestion(bullets, missing),
    )
    return [suggestion for suggestion in candidates if suggestion is not None]


def recency_bonus(end_date: str | None, current_year: int) -> int:
    if not end_date:
        return 0
    lowered = end_date.lower()
    if "present" in lowered or "current" in lowered:
        return get_scoring_int("fit.recency.current", 3)
    match = _YEAR_TOKEN_RE.search(end_date)
    if not match:
        return 0
    year = int(match.group(0))
    if year >= current_year - 1:
        return get_scoring_int("fit.recency.last_year", 2)
    if year >= current_year - 3:
        return get_scoring_int("fit.recency.last_three_years", 1)
    return 0


def rank_experience(entries: list[WorkEntry], job_text: str, *, current_year: int | None = None) -> list[str]:
    """Labels of entries ordered by job-keyword overlap plus recency, highest first.

    The sort is stable, so equally scored entries keep resume order.
    """
    if len(entries) <= 1:
        return [entry.label for entry in entries]

    year = current_year if current_year is not None else datetime.now().year
    job_keywords = extract_keywords(job_text)
    ranked: list[_RankedEntry] = []
    for entry in entries:
        text = " ".join([entry.title, entry.company, *entry.bullets])
        lowered = text.lower()
        overlap = sum(1 for keyword in job_keywords if contains_term(text, keyword, lowered_text=lowered))
        ranked.append(_RankedEntry(label=entry.label, score=overlap + recency_bonus(entry.end_date, year)))

    ranked.sort(key=lambda item: item.score, reverse=True)
    return [item.label for item in ranked]


def optimize_resume(
    document: StructuredDocument,
    job_text: str,
    *,
    current_year: int | None = None,
) -> OptimizationReport:
    buckets = classify_requirements(job_text)
    job_keywords = unique_in_order([*buckets.required_skills, *buckets.nice_to_have])
    match = match_keywords(build_resume_corpus(document), job_keywords)
    action_verb_count = len(extract_action_verbs(" ".join(document.bullets)))

    report = OptimizationReport(
        fit_score=calculate_fit_score(match.matched, match.missing, buckets, document, action_verb_count),
        matched_keywords=match.matched,
        missing_keywords=match.missing,
        keyword_density=keyword_density(len(match.matched), len(job_keywords)),
        suggestions=generate_suggestions(document, buckets, match.missing, job_text, action_verb_count),
        reordered_experience=rank_experience(document.experience, job_text, current_year=current_year),
    )
    logger.info(
        "job_fit_scored fit=%s matched=%s missing=%s suggestions=%s",
        report.fit_score,
        len(report.matched_keywords),
        len(report.missing_keywords),
        len(report.suggestions),
    )
    return report
