from .classifier import RequirementBuckets, analyze_job_description, classify_requirements
from .matcher import (
    KeywordMatch,
    extract_action_verbs,
    extract_keywords,
    extract_soft_skills,
    keyword_density,
    match_keywords,
)

__all__ = [
    "RequirementBuckets",
    "analyze_job_description",
    "classify_requirements",
    "KeywordMatch",
    "extract_action_verbs",
    "extract_keywords",
    "extract_soft_skills",
    "keyword_density",
    "match_keywords",
]
