from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from resume_tools.core.config import settings
from resume_tools.core.errors import InvalidInputError, NoContentError
from resume_tools.keywords.classifier import analyze_job_description
from resume_tools.parsing.extractor import extract
from resume_tools.parsing.pdf_text import decode_pdf_payload, document_to_text, file_extension, pdf_to_text
from resume_tools.schemas.reports import ATSScore, KeywordAnalysis, OptimizationReport
from resume_tools.schemas.resume import StructuredDocument
from resume_tools.scoring.ats import calculate_ats_score
from resume_tools.scoring.optimizer import optimize_resume

logger = logging.getLogger(__name__)


def parse_document(raw_text: str) -> StructuredDocument:
    try:
        document = extract(raw_text)
    except NoContentError:
        logger.warning("resume_parse_failed reason=no_content")
        raise
    logger.info(
        "resume_parsed name_found=%s experience=%s education=%s skills=%s certifications=%s",
        document.has_name,
        len(document.experience),
        len(document.education),
        len(document.skills),
        len(document.certifications),
    )
    return document


def pdf_payload_to_text(payload: str) -> str:
    return pdf_to_text(decode_pdf_payload(payload))


def parse_pdf(payload: str) -> StructuredDocument:
    return parse_document(pdf_payload_to_text(payload))


def parse_upload(filename: str, content: bytes) -> StructuredDocument:
    text = document_to_text(filename, content)
    logger.info("resume_upload_extracted ext=%s chars=%s", file_extension(filename), len(text))
    return parse_document(text)


def score_document(raw_text: str, document: StructuredDocument | None = None) -> ATSScore:
    """ATS score for raw text; the structured document is extracted when not supplied."""
    doc = document if document is not None else parse_document(raw_text)
    return calculate_ats_score(raw_text, doc)


def score_pdf(payload: str) -> ATSScore:
    raw_text = pdf_payload_to_text(payload)
    return score_document(raw_text)


def classify_job_text(job_text: str) -> KeywordAnalysis:
    return analyze_job_description(job_text)


def extract_job_keywords(job_text: str) -> KeywordAnalysis:
    text = (job_text or "").strip()
    if not text:
        raise InvalidInputError("No job description provided. Please supply the full text of the job posting.")
    if len(text) < settings.min_job_description_chars:
        raise InvalidInputError(
            "Job description is too short to extract meaningful keywords. "
            "Please provide the full job posting text (at least a few sentences)."
        )
    analysis = classify_job_text(job_text)
    logger.info(
        "job_keywords_extracted required=%s nice_to_have=%s terms=%s",
        len(analysis.required_skills),
        len(analysis.nice_to_have),
        len(analysis.technical_terms),
    )
    return analysis


def load_structured_document(resume_data: str | Mapping[str, Any] | StructuredDocument) -> StructuredDocument:
    """Accept a StructuredDocument, its JSON encoding or a decoded mapping."""
    if isinstance(resume_data, StructuredDocument):
        return resume_data

    if isinstance(resume_data, str):
        if not resume_data.strip():
            raise InvalidInputError("No resume data provided. Please supply a JSON string of parsed resume data.")
        try:
            decoded = json.loads(resume_data)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(
                "Invalid resume data JSON. Please provide a valid JSON string (output from parse-resume)."
            ) from exc
    else:
        decoded = resume_data

    if not isinstance(decoded, Mapping):
        raise InvalidInputError("Resume data must be a JSON object.")
    try:
        return StructuredDocument.model_validate(dict(decoded))
    except ValidationError as exc:
        raise InvalidInputError(f"Resume data is incomplete or malformed: {exc.error_count()} validation error(s).") from exc


def optimize_for_job(
    resume_data: str | Mapping[str, Any] | StructuredDocument,
    job_text: str,
    *,
    current_year: int | None = None,
) -> OptimizationReport:
    if not job_text or not job_text.strip():
        raise InvalidInputError("No job description provided. Please supply the full text of the job posting.")
    document = load_structured_document(resume_data)
    return optimize_resume(document, job_text, current_year=current_year)
