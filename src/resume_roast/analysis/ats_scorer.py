"""Keyword-match ATS scoring for generated resumes."""

from __future__ import annotations

import re
from collections.abc import Iterable

from resume_roast.models.resume import ATSAnalysis

ATS_MIN_SCORE = 65
ATS_MAX_SCORE = 98
NO_KEYWORDS_MATCH = 75

MAX_MATCHED_SKILLS = 15
MAX_MISSING_SKILLS = 10
MAX_MISSING_KEYWORDS = 8

_SKILL_RE = re.compile(r"^[a-z0-9+#.\-]+$", re.IGNORECASE)

REASONING = {
    "excellent": "Excellent match! Your resume aligns well with the job requirements.",
    "good": "Good match. Consider adding missing skills if you have experience with them.",
    "moderate": "Moderate match. Focus on highlighting more relevant experience.",
}


def is_skill_like(keyword: str) -> bool:
    return len(keyword) > 3 and bool(_SKILL_RE.match(keyword))


def clamp_ats_score(match_percentage: int) -> int:
    """Clamp a raw match percentage to the generation-path range [65, 98]."""
    return min(ATS_MAX_SCORE, max(ATS_MIN_SCORE, match_percentage))


def reasoning_for(score: int) -> str:
    if score >= 85:
        return REASONING["excellent"]
    if score >= 70:
        return REASONING["good"]
    return REASONING["moderate"]


def score_match(keywords: Iterable[str], generated_text: str) -> ATSAnalysis:
    """Compare job-description keywords against a generated resume.

    An ordered sequence (such as ``extract_keyword_list`` output) is visited
    in its own order, so the capped lists follow the job description. Sets
    have no order and are visited sorted.
    """
    text = (generated_text or "").lower()

    matched_skills: list[str] = []
    missing_skills: list[str] = []
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []

    if isinstance(keywords, (set, frozenset)):
        keywords = sorted(k.lower() for k in keywords)
    for keyword in dict.fromkeys(k.lower() for k in keywords):
        skill = is_skill_like(keyword)
        if keyword in text:
            matched_keywords.append(keyword)
            if skill:
                matched_skills.append(keyword)
        else:
            missing_keywords.append(keyword)
            if skill:
                missing_skills.append(keyword)

    total = len(matched_keywords) + len(missing_keywords)
    if total:
        # half-up rounding
        match_percentage = (200 * len(matched_keywords) + total) // (2 * total)
    else:
        match_percentage = NO_KEYWORDS_MATCH

    ats_score = clamp_ats_score(match_percentage)

    return ATSAnalysis(
        ats_score=ats_score,
        match_score=f"{ats_score}%",
        matched_skills=matched_skills[:MAX_MATCHED_SKILLS],
        missing_skills=missing_skills[:MAX_MISSING_SKILLS],
        missing_keywords=missing_keywords[:MAX_MISSING_KEYWORDS],
        reasoning=reasoning_for(ats_score),
    )
