from __future__ import annotations

from collections.abc import Callable

from resume_tools.core.scoring import get_scoring_int
from resume_tools.schemas.reports import ATSIssue
from resume_tools.schemas.resume import StructuredDocument

from .signals import STANDARD_SECTIONS, BulletSignals, TextSignals

IssueRule = Callable[[StructuredDocument, TextSignals, BulletSignals], "ATSIssue | None"]


def _missing_name(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if doc.has_name:
        return None
    return ATSIssue(
        severity="critical",
        category="Contact Info",
        message="Name could not be detected at the top of the resume.",
        fix="Place your full name prominently on the first line of the resume.",
    )


def _missing_email(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if doc.email:
        return None
    return ATSIssue(
        severity="critical",
        category="Contact Info",
        message="Email address not found in the resume.",
        fix="Add a professional email address near the top of your resume.",
    )


def _images(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if not text.has_images:
        return None
    return ATSIssue(
        severity="critical",
        category="Formatting",
        message="Resume appears to contain images or embedded graphics.",
        fix="Remove all images, logos, and photos. ATS systems cannot parse image content.",
    )


def _missing_experience_header(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if "Experience" in text.sections_found:
        return None
    return ATSIssue(
        severity="critical",
        category="Section Headers",
        message='No "Experience" or "Work Experience" section header found.',
        fix='Add a clearly labeled "Professional Experience" or "Work Experience" section.',
    )


def _missing_phone(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if doc.phone:
        return None
    return ATSIssue(
        severity="warning",
        category="Contact Info",
        message="Phone number not found in the resume.",
        fix="Include a phone number for recruiter callbacks.",
    )


def _sparse_skills(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    count = len(doc.skills)
    if count == 0:
        return ATSIssue(
            severity="warning",
            category="Skills",
            message="No dedicated skills section detected.",
            fix='Add a "Technical Skills" or "Skills" section with relevant keywords from your target job descriptions.',
        )
    if count < 5:
        return ATSIssue(
            severity="warning",
            category="Skills",
            message=f"Skills section only contains {count} items, which is quite sparse.",
            fix="Expand your skills section to include at least 8-12 relevant technical and professional skills.",
        )
    return None


def _missing_education(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if doc.education:
        return None
    return ATSIssue(
        severity="warning",
        category="Education",
        message="No education entries detected.",
        fix='Add an "Education" section with your degree(s), institution(s), and graduation year(s).',
    )


def _undated_experience(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    undated = sum(1 for entry in doc.experience if not entry.start_date and not entry.end_date)
    if not undated:
        return None
    return ATSIssue(
        severity="warning",
        category="Experience",
        message=f"{undated} experience entry/entries missing date ranges.",
        fix=(
            'Add start and end dates (e.g., "Jan 2020 - Present") for all positions. '
            "ATS systems use dates to calculate experience length."
        ),
    )


def _table_layout(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if not text.has_tables:
        return None
    return ATSIssue(
        severity="warning",
        category="Formatting",
        message="Resume may contain a table-based layout.",
        fix="Replace tables with simple left-aligned text. Use standard bullet points for lists.",
    )


def _excessive_length(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if text.word_count <= get_scoring_int("ats.length.excessive_words", 1500):
        return None
    return ATSIssue(
        severity="warning",
        category="Length",
        message=f"Resume is approximately {text.word_count} words, which may be too long.",
        fix=(
            "Aim for a concise resume (400-800 words for 1 page, 800-1200 for 2 pages). "
            "Focus on the most relevant experience."
        ),
    )


def _missing_summary(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if doc.summary:
        return None
    return ATSIssue(
        severity="info",
        category="Summary",
        message="No professional summary or objective detected.",
        fix="Add a 2-3 sentence professional summary at the top to quickly convey your value proposition.",
    )


def _few_action_verbs(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if len(bullets.action_verbs) >= 5 or not doc.experience:
        return None
    return ATSIssue(
        severity="info",
        category="Language",
        message="Bullet points use few strong action verbs.",
        fix='Start each bullet point with a strong action verb (e.g., "Developed", "Implemented", "Optimized", "Led").',
    )


def _few_quantified(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if bullets.quantified >= 3 or bullets.total <= 5:
        return None
    return ATSIssue(
        severity="info",
        category="Impact",
        message=f"Only {bullets.quantified} bullet points contain quantifiable results.",
        fix='Add metrics and numbers to more bullet points (e.g., "Reduced load time by 40%", "Managed team of 8 engineers").',
    )


def _missing_certifications(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> ATSIssue | None:
    if doc.certifications:
        return None
    return ATSIssue(
        severity="info",
        category="Certifications",
        message="No certifications section detected.",
        fix="If you have relevant certifications (AWS, PMP, Google, etc.), add a Certifications section.",
    )


ISSUE_RULES: tuple[IssueRule, ...] = (
    _missing_name,
    _missing_email,
    _images,
    _missing_experience_header,
    _missing_phone,
    _sparse_skills,
    _missing_education,
    _undated_experience,
    _table_layout,
    _excessive_length,
    _missing_summary,
    _few_action_verbs,
    _few_quantified,
    _missing_certifications,
)


def collect_issues(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> list[ATSIssue]:
    issues: list[ATSIssue] = []
    for rule in ISSUE_RULES:
        issue = rule(doc, text, bullets)
        if issue is not None:
            issues.append(issue)
    return issues


def collect_passed(doc: StructuredDocument, text: TextSignals, bullets: BulletSignals) -> list[str]:
    passed: list[str] = []
    if doc.has_name:
        passed.append("Name is clearly identifiable at the top of the resume.")
    if doc.email:
        passed.append("Professional email address is present.")
    if doc.phone:
        passed.append("Phone number is included.")
    if doc.location:
        passed.append("Location information is provided.")

    for name, _ in STANDARD_SECTIONS:
        if name in text.sections_found:
            passed.append(f'"{name}" section header found with standard naming.')

    if len(doc.skills) >= 5:
        passed.append(f"Skills section contains {len(doc.skills)} items, good keyword density.")
    if bullets.total >= 5:
        passed.append(f"Experience section has {bullets.total} bullet points with clear descriptions.")
    if len(bullets.action_verbs) >= 5:
        passed.append(f"Uses {len(bullets.action_verbs)} strong action verbs in experience bullets.")
    if bullets.quantified >= 3:
        passed.append(f"{bullets.quantified} bullet points include quantifiable metrics.")
    if doc.experience and all(entry.start_date or entry.end_date for entry in doc.experience):
        passed.append("All experience entries include date ranges.")
    if doc.education:
        passed.append("Education section is present with parsed entries.")
    if doc.summary and len(doc.summary) > 30:
        passed.append("Professional summary/objective is present.")
    if not text.has_images:
        passed.append("No images or embedded graphics detected, ATS-safe.")
    return passed
