from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from resume_tools.schemas.reports import KeywordAnalysis
from resume_tools.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .matcher import extract_action_verbs, extract_keywords, extract_soft_skills

Context = Literal["required", "nice_to_have", "neutral"]

# Substring triggers: a line containing any phrase switches the active bucket
# until another trigger line appears. Nice-to-have is checked second and wins
# when a line carries both ("required: no, nice to have").
REQUIRED_TRIGGERS: tuple[str, ...] = (
    "must have",
    "required",
    "requirements",
    "minimum",
    "essential",
    "mandatory",
    "need",
    "needs",
    "shall",
    "must",
    "expect",
    "qualifications",
    "responsibilities",
)
NICE_TO_HAVE_TRIGGERS: tuple[str, ...] = (
    "preferred",
    "nice to have",
    "nice-to-have",
    "bonus",
    "plus",
    "desirable",
    "ideally",
    "advantageous",
    "a plus",
    "would be nice",
    "optional",
    "extra credit",
    "not required",
    "familiarity with",
    "exposure to",
    "experience with",
)

_LINE_SPLIT_RE = re.compile(r"[\n\r]+")


@dataclass(frozen=True, slots=True)
class RequirementBuckets:
    required_skills: tuple[str, ...]
    nice_to_have: tuple[str, ...]
    technical_terms: tuple[str, ...]


def next_context(line: str, current: Context) -> Context:
    lowered = line.lower()
    context = current
    if any(trigger in lowered for trigger in REQUIRED_TRIGGERS):
        context = "required"
    if any(trigger in lowered for trigger in NICE_TO_HAVE_TRIGGERS):
        context = "nice_to_have"
    return context


def classify_requirements(job_text: str, taxonomy: TaxonomyProvider | None = None) -> RequirementBuckets:
    """Bucket job-description keywords into required and nice-to-have.

    Keywords on lines under a neutral context count as required. A keyword
    seen in both buckets stays required only.
    """
    provider = taxonomy or get_default_taxonomy_provider()
    lines = [line.strip() for line in _LINE_SPLIT_RE.split(job_text or "") if line.strip()]

    required: set[str] = set()
    nice: set[str] = set()
    context: Context = "neutral"
    for line in lines:
        context = next_context(line, context)
        bucket = nice if context == "nice_to_have" else required
        bucket.update(extract_keywords(line, provider))

    return RequirementBuckets(
        required_skills=tuple(sorted(required)),
        nice_to_have=tuple(sorted(nice - required)),
        technical_terms=tuple(extract_keywords(job_text or "", provider)),
    )


def analyze_job_description(job_text: str, taxonomy: TaxonomyProvider | None = None) -> KeywordAnalysis:
    provider = taxonomy or get_default_taxonomy_provider()
    buckets = classify_requirements(job_text, provider)
    return KeywordAnalysis(
        required_skills=list(buckets.required_skills),
        nice_to_have=list(buckets.nice_to_have),
        action_verbs=extract_action_verbs(job_text or "", provider),
        technical_terms=list(buckets.technical_terms),
        soft_skills=extract_soft_skills(job_text or "", provider),
    )
