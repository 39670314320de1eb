"""Resume Analyzer - general ATS review of a resume without a target job."""

from __future__ import annotations

import logging

from resume_roast.clients.llm_client import LLMClient
from resume_roast.models.roast import ResumeAnalysis
from resume_roast.pipeline.prompt_builder import build_analysis_prompt
from resume_roast.utils.json_parser import parse_generated_json

logger = logging.getLogger(__name__)

ANALYSIS_FALLBACK: dict = {
    "ats_score": 75,
    "overall_feedback": (
        "Your resume has been analyzed. The system encountered a parsing issue, but "
        "based on the content, consider optimizing keywords, improving formatting, and "
        "adding quantifiable achievements to boost your ATS score."
    ),
    "sections": [
        {
            "name": "Overall Structure",
            "score": 75,
            "feedback": (
                "Resume structure is adequate but could benefit from better organization "
                "and keyword optimization. Consider adding more specific achievements and metrics."
            ),
        }
    ],
    "is_fallback": True,
}


class ResumeAnalyzer:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-haiku-4-5-20251001",
        *,
        max_tokens: int = 2048,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens

    async def analyze(self, resume_text: str) -> ResumeAnalysis:
        response = await self.llm.generate(
            prompt=build_analysis_prompt(resume_text),
            model=self.model,
            max_tokens=self.max_tokens,
        )
        data = parse_generated_json(
            response.text,
            ANALYSIS_FALLBACK,
            required=("ats_score", "overall_feedback", "sections"),
            validator=ResumeAnalysis,
        )
        data.setdefault("is_fallback", False)
        result = ResumeAnalysis.model_validate(data)
        logger.info("Resume analysis complete: ATS %d", result.ats_score)
        return result
