"""Pydantic models for the structured master CV (candidate profile)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ContactInfo(BaseModel):
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None


class Experience(BaseModel):
    company: str | None = None
    title: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False
    achievements: list[str] = Field(default_factory=list)


class Education(BaseModel):
    institution: str | None = None
    degree: str | None = None
    major: str | None = None
    graduation_date: str | None = None
    gpa: str | None = None

    @field_validator("gpa", mode="before")
    @classmethod
    def _gpa_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)):
            return str(v)
        return v


class Project(BaseModel):
    name: str | None = None
    description: str | None = None
    technologies: list[str] = Field(default_factory=list)
    outcomes: str | None = None


class Certification(BaseModel):
    name: str | None = None
    issuer: str | None = None
    date: str | None = None
    credential_id: str | None = None


class Achievement(BaseModel):
    title: str | None = None
    description: str | None = None
    date: str | None = None


class CandidateProfile(BaseModel):
    contact: ContactInfo = Field(default_factory=ContactInfo)
    summary: str | None = None
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: dict[str, list[str]] = Field(default_factory=dict)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize_skills(cls, v: Any) -> Any:
        # The parser model sometimes returns a flat list instead of categories
        if v is None:
            return {}
        if isinstance(v, list):
            return {"general": [str(s) for s in v]}
        if isinstance(v, dict):
            return {k: vals for k, vals in v.items() if isinstance(vals, list)}
        return v

    @field_validator("experience", "education", "projects", "certifications", "achievements", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def all_skills(self) -> list[str]:
        """Flatten categorized skills, keeping first-seen order."""
        seen: dict[str, None] = {}
        for values in self.skills.values():
            for skill in values:
                seen.setdefault(skill, None)
        return list(seen)
