"""Tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from resume_roast.models import (
    CandidateProfile,
    Education,
    GeneratedResume,
    GenerationPayload,
    ResumeAnalysis,
    RoastResult,
    SectionRoast,
    TemplateTag,
    Verdict,
)


class TestCandidateProfile:
    def test_create_minimal(self):
        profile = CandidateProfile()
        assert profile.contact.full_name is None
        assert profile.experience == []
        assert profile.skills == {}

    def test_flat_skill_list_becomes_category(self):
        profile = CandidateProfile(skills=["Python", "Go"])
        assert profile.skills == {"general": ["Python", "Go"]}

    def test_non_list_skill_categories_dropped(self):
        profile = CandidateProfile(skills={"languages": ["Python"], "notes": "lots"})
        assert profile.skills == {"languages": ["Python"]}

    def test_null_lists_become_empty(self):
        profile = CandidateProfile(experience=None, projects=None, certifications=None)
        assert profile.experience == []
        assert profile.projects == []

    def test_all_skills_deduplicated(self):
        profile = CandidateProfile(skills={"a": ["Python", "SQL"], "b": ["SQL", "Docker"]})
        assert profile.all_skills() == ["Python", "SQL", "Docker"]

    def test_numeric_gpa(self):
        assert Education(gpa=3.9).gpa == "3.9"

    def test_serialization(self, sample_candidate):
        data = sample_candidate.model_dump()
        restored = CandidateProfile(**data)
        assert restored == sample_candidate


class TestTemplateTag:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("modern", TemplateTag.MODERN),
            ("Classic", TemplateTag.CLASSIC),
            (" creative ", TemplateTag.CREATIVE),
            ("neon", TemplateTag.MODERN),
            (None, TemplateTag.MODERN),
            (TemplateTag.CLASSIC, TemplateTag.CLASSIC),
        ],
    )
    def test_coerce(self, value, expected):
        assert TemplateTag.coerce(value) == expected


class TestGeneratedResume:
    def test_ats_score_bounds(self):
        with pytest.raises(ValidationError):
            GeneratedResume(owner_id="u", job_description="jd", content="c", ats_score=120)

    def test_frozen(self):
        resume = GeneratedResume(owner_id="u", job_description="jd", content="c", ats_score=80)
        with pytest.raises(ValidationError):
            resume.content = "changed"


class TestGenerationPayload:
    def test_valid(self):
        payload = GenerationPayload.model_validate({"resume": " JANE DOE ", "cover_letter": 7})
        assert payload.resume == "JANE DOE"

    @pytest.mark.parametrize("value", [None, 42, ["JANE DOE"], {"name": "Jane"}, "", "   "])
    def test_resume_must_be_non_empty_text(self, value):
        with pytest.raises(ValidationError):
            GenerationPayload.model_validate({"resume": value})


class TestRoastResult:
    def _base(self, **overrides):
        data = {
            "verdict": "apply",
            "verdict_reason": "Strong fit.",
            "shortlist_probability": 80,
            "ats_score": 75,
        }
        data.update(overrides)
        return RoastResult.model_validate(data)

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("APPLY", Verdict.APPLY),
            ("DON'T APPLY", Verdict.DO_NOT_APPLY),
            ("don’t apply", Verdict.DO_NOT_APPLY),
            ("do-not-apply", Verdict.DO_NOT_APPLY),
            (" Maybe ", Verdict.MAYBE),
        ],
    )
    def test_verdict_aliases(self, raw, expected):
        assert self._base(verdict=raw).verdict == expected

    def test_unknown_verdict_rejected(self):
        with pytest.raises(ValidationError):
            self._base(verdict="sure")

    def test_scores_clamped(self):
        result = self._base(shortlist_probability=150, ats_score=-3, keyword_match_percent="42%")
        assert result.shortlist_probability == 100
        assert result.ats_score == 0
        assert result.keyword_match_percent == 42

    def test_boolean_score_rejected(self):
        with pytest.raises(ValidationError):
            self._base(ats_score=True)

    def test_section_defaults(self):
        result = self._base()
        assert result.sections.summary == SectionRoast()
        assert result.is_fallback is False

    def test_section_score_clamped(self):
        assert SectionRoast(score=250).score == 100

    @pytest.mark.parametrize("score", [float("inf"), float("-inf"), float("nan"), "inf", "NaN%"])
    def test_non_finite_score_rejected(self, score):
        with pytest.raises(ValidationError):
            self._base(shortlist_probability=score)

    def test_non_finite_section_score_rejected(self):
        with pytest.raises(ValidationError):
            SectionRoast(score=float("inf"))


class TestResumeAnalysis:
    def test_sections(self):
        analysis = ResumeAnalysis(
            ats_score=101,
            overall_feedback="ok",
            sections=[{"name": "Skills", "score": "90", "feedback": "good"}],
        )
        assert analysis.ats_score == 100
        assert analysis.sections[0].score == 90
