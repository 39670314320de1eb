"""Resume Roaster - candid review of a resume against a job description."""

from __future__ import annotations

import logging

from resume_roast.clients.llm_client import LLMClient
from resume_roast.models.roast import RoastResult
from resume_roast.pipeline.prompt_builder import build_roast_prompt
from resume_roast.utils.json_parser import parse_generated_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a blunt senior recruiter. Respond with strict JSON only."

ROAST_FALLBACK: dict = {
    "shortlist_probability": 35,
    "verdict": "maybe",
    "verdict_reason": "Your resume has potential but needs significant work to stand out.",
    "top_3_rejection_reasons": [
        "Missing key skills mentioned in the job description",
        "Bullets don't demonstrate measurable impact",
        "Resume doesn't tell a clear career story",
    ],
    "ats_score": 50,
    "keyword_match_percent": 40,
    "keyword_gaps": ["Unable to analyze specific keywords"],
    "sections": {
        "summary": {
            "score": 50,
            "roast": "Your summary needs work - it should sell you in 2-3 lines.",
            "severity": "harsh",
        },
        "skills": {
            "score": 50,
            "roast": "Skills section needs better alignment with job requirements.",
            "missing_skills": [],
        },
        "experience": {
            "score": 50,
            "roast": "Experience bullets lack impact metrics.",
            "weak_bullets": [],
        },
        "projects": {
            "score": 50,
            "roast": "Projects section could better showcase relevant work.",
        },
        "formatting": {
            "score": 60,
            "roast": "Formatting appears acceptable but could be cleaner.",
            "issues": [],
        },
    },
    "jd_mismatch": {
        "missing_requirements": ["Review job description for specific requirements"],
        "irrelevant_content": [],
    },
    "overall_roast": (
        "This resume needs optimization to compete effectively. Focus on tailoring "
        "content to the specific job requirements and quantifying your achievements."
    ),
    "is_fallback": True,
}


class ResumeRoaster:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-sonnet-4-5-20250929",
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def roast(self, resume_text: str, job_description: str) -> RoastResult:
        """Roast a resume against a job description."""
        logger.info("Starting resume roast...")
        response = await self.llm.generate(
            prompt=build_roast_prompt(resume_text, job_description),
            system=SYSTEM_PROMPT,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        data = parse_generated_json(
            response.text,
            ROAST_FALLBACK,
            required=("verdict", "shortlist_probability", "ats_score"),
            validator=RoastResult,
        )
        data.setdefault("is_fallback", False)
        result = RoastResult.model_validate(data)
        logger.info(
            "Roast complete: %s (shortlist %d%%)",
            result.verdict.value,
            result.shortlist_probability,
        )
        return result
