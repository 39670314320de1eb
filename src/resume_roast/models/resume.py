"""Pydantic models for generated resumes and their ATS analysis."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, StrictStr

from resume_roast.models.candidate import ContactInfo


class TemplateTag(str, Enum):
    MODERN = "modern"
    CLASSIC = "classic"
    CREATIVE = "creative"

    @classmethod
    def coerce(cls, value: str | TemplateTag | None) -> TemplateTag:
        """Resolve a user-supplied tag, falling back to modern for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MODERN


class ATSAnalysis(BaseModel):
    ats_score: int
    match_score: str  # e.g. "87%"
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    reasoning: str


class GenerationPayload(BaseModel):
    """Shape of the generation model's JSON reply."""

    resume: StrictStr = Field(min_length=1)

    model_config = {"str_strip_whitespace": True}


class GeneratedResume(BaseModel):
    id: str | None = None
    owner_id: str
    job_description: str
    content: str
    cover_letter: str | None = None
    template: TemplateTag = TemplateTag.MODERN
    ats_score: int = Field(ge=0, le=100)
    ats_analysis: ATSAnalysis | None = None
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    created_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}
