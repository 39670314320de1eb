"""Master CV Parser - turns free-text resumes into a structured candidate profile."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from resume_roast.clients.llm_client import LLMClient
from resume_roast.models.candidate import CandidateProfile
from resume_roast.pipeline.prompt_builder import build_cv_parse_prompt

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert resume parser. Output ONLY strict JSON per the required schema."


class MasterCVParser:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-haiku-4-5-20251001",
        *,
        max_tokens: int = 4096,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens

    async def parse(self, resume_text: str) -> CandidateProfile:
        """Parse resume text into a CandidateProfile.

        Unlike roasting, there is no generic fallback for a profile: an
        unparseable response raises ValueError.
        """
        data = await self.llm.generate_json(
            prompt=build_cv_parse_prompt(resume_text),
            system=SYSTEM_PROMPT,
            model=self.model,
            max_tokens=self.max_tokens,
        )
        if not isinstance(data, dict):
            raise ValueError(f"Expected dict from LLM, got {type(data).__name__}")
        try:
            profile = CandidateProfile.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Parsed resume does not match the profile schema: {e}") from e
        logger.info(
            "Parsed master CV: %d roles, %d skills",
            len(profile.experience),
            len(profile.all_skills()),
        )
        return profile
