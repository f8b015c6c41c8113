from __future__ import annotations


class ResumeToolError(RuntimeError):
    status_code = 400


class NoContentError(ResumeToolError):
    """Input carried no usable text, e.g. an image-only PDF."""

    status_code = 422


class InvalidInputError(ResumeToolError):
    status_code = 400


class ExtractionError(ResumeToolError):
    """The document-to-text library failed on the given bytes."""

    status_code = 422
