from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from .resume import CamelModel

IssueSeverity = Literal["critical", "warning", "info"]
SuggestionSection = Literal["skills", "experience", "summary", "title"]


class ATSIssue(CamelModel):
    severity: IssueSeverity
    category: str
    message: str
    fix: str


class ATSBreakdown(CamelModel):
    formatting: int = Field(ge=0, le=25)
    section_headers: int = Field(ge=0, le=25)
    parseability: int = Field(ge=0, le=25)
    keyword_optimization: int = Field(ge=0, le=25)

    @property
    def total(self) -> int:
        return self.formatting + self.section_headers + self.parseability + self.keyword_optimization


class ATSScore(CamelModel):
    overall_score: int = Field(ge=0, le=100)
    breakdown: ATSBreakdown
    issues: list[ATSIssue] = Field(default_factory=list)
    passed: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _overall_matches_breakdown(self) -> "ATSScore":
        if self.overall_score != self.breakdown.total:
            raise ValueError("overallScore must equal the sum of the breakdown sub-scores")
        return self


class KeywordAnalysis(BaseModel):
    required_skills: list[str] = Field(default_factory=list)
    nice_to_have: list[str] = Field(default_factory=list)
    action_verbs: list[str] = Field(default_factory=list)
    technical_terms: list[str] = Field(default_factory=list)
    soft_skills: list[str] = Field(default_factory=list)


class OptimizationSuggestion(CamelModel):
    section: SuggestionSection
    current: str
    suggested: str
    reason: str


class OptimizationReport(CamelModel):
    fit_score: int = Field(ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    keyword_density: float = Field(ge=0.0, le=100.0)
    suggestions: list[OptimizationSuggestion] = Field(default_factory=list)
    reordered_experience: list[str] = Field(default_factory=list)
