"""Data models for the resume roast pipeline."""

from resume_roast.models.candidate import (
    Achievement,
    CandidateProfile,
    Certification,
    ContactInfo,
    Education,
    Experience,
    Project,
)
from resume_roast.models.resume import ATSAnalysis, GeneratedResume, GenerationPayload, TemplateTag
from resume_roast.models.roast import (
    JDMismatch,
    ResumeAnalysis,
    RoastResult,
    RoastSections,
    SectionFeedback,
    SectionRoast,
    Verdict,
)

__all__ = [
    "ATSAnalysis",
    "Achievement",
    "CandidateProfile",
    "Certification",
    "ContactInfo",
    "Education",
    "Experience",
    "GeneratedResume",
    "GenerationPayload",
    "JDMismatch",
    "Project",
    "ResumeAnalysis",
    "RoastResult",
    "RoastSections",
    "SectionFeedback",
    "SectionRoast",
    "TemplateTag",
    "Verdict",
]
