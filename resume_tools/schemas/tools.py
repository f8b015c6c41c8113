from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

MAX_TEXT_CHARS = 200_000


class PdfRequest(BaseModel):
    pdf: str = Field(default="", description="Base64-encoded PDF, optionally with a data-URL prefix.")


class TextRequest(BaseModel):
    text: str = Field(default="", max_length=MAX_TEXT_CHARS)


class ScoreRequest(BaseModel):
    pdf: str | None = None
    text: str | None = Field(default=None, max_length=MAX_TEXT_CHARS)

    @model_validator(mode="after")
    def _one_source(self) -> "ScoreRequest":
        if bool(self.pdf) == bool(self.text):
            raise ValueError("Provide exactly one of 'pdf' or 'text'.")
        return self


class JobDescriptionRequest(BaseModel):
    job_description: str = Field(default="", max_length=MAX_TEXT_CHARS)


class OptimizeRequest(BaseModel):
    resume_data: str | dict[str, Any] = Field(
        default="",
        description="Structured resume as returned by parse-resume, either a JSON string or an object.",
    )
    job_description: str = Field(default="", max_length=MAX_TEXT_CHARS)
