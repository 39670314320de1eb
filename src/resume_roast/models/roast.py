"""Pydantic models for roast and general-analysis output."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _clamp_percent(v: Any) -> Any:
    """Coerce a model-supplied score to an int in [0, 100]."""
    if isinstance(v, bool):
        raise ValueError("score must be numeric")
    if isinstance(v, str):
        v = v.strip().rstrip("%")
        v = float(v)
    if isinstance(v, (int, float)):
        if not math.isfinite(v):
            raise ValueError("score must be finite")
        return max(0, min(100, round(v)))
    return v


class Verdict(str, Enum):
    APPLY = "apply"
    DO_NOT_APPLY = "do-not-apply"
    MAYBE = "maybe"


_VERDICT_ALIASES = {
    "apply": Verdict.APPLY,
    "don't apply": Verdict.DO_NOT_APPLY,
    "dont apply": Verdict.DO_NOT_APPLY,
    "do not apply": Verdict.DO_NOT_APPLY,
    "do-not-apply": Verdict.DO_NOT_APPLY,
    "maybe": Verdict.MAYBE,
}


class SectionRoast(BaseModel):
    score: int = 0
    roast: str = ""
    severity: str | None = None  # brutal | harsh | mild
    missing_skills: list[str] = Field(default_factory=list)
    weak_bullets: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, v: Any) -> Any:
        return _clamp_percent(v)


class RoastSections(BaseModel):
    summary: SectionRoast = Field(default_factory=SectionRoast)
    skills: SectionRoast = Field(default_factory=SectionRoast)
    experience: SectionRoast = Field(default_factory=SectionRoast)
    projects: SectionRoast = Field(default_factory=SectionRoast)
    formatting: SectionRoast = Field(default_factory=SectionRoast)


class JDMismatch(BaseModel):
    missing_requirements: list[str] = Field(default_factory=list)
    irrelevant_content: list[str] = Field(default_factory=list)


class RoastResult(BaseModel):
    verdict: Verdict
    verdict_reason: str
    shortlist_probability: int
    ats_score: int
    keyword_match_percent: int = 0
    top_3_rejection_reasons: list[str] = Field(default_factory=list)
    keyword_gaps: list[str] = Field(default_factory=list)
    sections: RoastSections = Field(default_factory=RoastSections)
    jd_mismatch: JDMismatch = Field(default_factory=JDMismatch)
    overall_roast: str = ""
    is_fallback: bool = False

    @field_validator("verdict", mode="before")
    @classmethod
    def _normalize_verdict(cls, v: Any) -> Any:
        if isinstance(v, str):
            key = v.strip().lower().replace("’", "'")
            if key in _VERDICT_ALIASES:
                return _VERDICT_ALIASES[key]
        return v

    @field_validator("shortlist_probability", "ats_score", "keyword_match_percent", mode="before")
    @classmethod
    def _clamp_scores(cls, v: Any) -> Any:
        return _clamp_percent(v)


class SectionFeedback(BaseModel):
    name: str
    score: int
    feedback: str

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, v: Any) -> Any:
        return _clamp_percent(v)


class ResumeAnalysis(BaseModel):
    """General ATS review of a resume without a target job description."""

    ats_score: int
    overall_feedback: str
    sections: list[SectionFeedback]
    is_fallback: bool = False

    @field_validator("ats_score", mode="before")
    @classmethod
    def _clamp_score(cls, v: Any) -> Any:
        return _clamp_percent(v)
