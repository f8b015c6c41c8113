from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN_NAME = "Unknown"


class CamelModel(BaseModel):
    """Wire payloads use camelCase keys; Python code uses the snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class WorkEntry(CamelModel):
    company: str = ""
    title: str = ""
    start_date: str | None = None
    end_date: str | None = None
    bullets: list[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.title} at {self.company}"


class EducationEntry(CamelModel):
    institution: str = UNKNOWN_NAME
    degree: str = ""
    field: str | None = None
    year: str | None = None


class StructuredDocument(CamelModel):
    name: str = UNKNOWN_NAME
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    title: str | None = None
    summary: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[WorkEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    raw_text: str

    @field_validator("raw_text")
    @classmethod
    def _validate_raw_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("rawText must contain the original resume text")
        return value

    @property
    def has_name(self) -> bool:
        return bool(self.name) and self.name != UNKNOWN_NAME

    @property
    def bullets(self) -> list[str]:
        return [bullet for entry in self.experience for bullet in entry.bullets]
