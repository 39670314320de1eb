"""Resume Generator - tailors a master CV to a job description and scores the result."""

from __future__ import annotations

import logging
import time

from resume_roast.analysis.ats_scorer import score_match
from resume_roast.analysis.keyword_extractor import extract_keyword_list
from resume_roast.clients.llm_client import LLMClient
from resume_roast.errors import GenerationUnavailableError
from resume_roast.models.candidate import CandidateProfile
from resume_roast.models.resume import GeneratedResume, GenerationPayload, TemplateTag
from resume_roast.pipeline.prompt_builder import (
    build_cover_letter_prompt,
    build_generation_prompt,
)
from resume_roast.utils.json_parser import parse_generated_json, strip_code_fences

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert ATS resume writer. Follow the output format exactly."


def generation_fallback(raw_text: str) -> dict:
    """Degraded generation result: the raw model text as the resume, no cover letter."""
    return {"resume": strip_code_fences(raw_text), "cover_letter": None}


class ResumeGenerator:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-sonnet-4-5-20250929",
        *,
        resume_temperature: float = 0.2,
        resume_max_tokens: int = 3000,
        cover_letter_temperature: float = 0.4,
        cover_letter_max_tokens: int = 1500,
    ):
        self.llm = llm
        self.model = model
        self.resume_temperature = resume_temperature
        self.resume_max_tokens = resume_max_tokens
        self.cover_letter_temperature = cover_letter_temperature
        self.cover_letter_max_tokens = cover_letter_max_tokens

    async def generate(
        self,
        candidate: CandidateProfile,
        job_description: str,
        template: TemplateTag | str = TemplateTag.MODERN,
        *,
        owner_id: str = "anonymous",
        include_cover_letter: bool = False,
    ) -> GeneratedResume:
        """Generate a tailored resume (and optionally a cover letter) with ATS analysis."""
        tag = TemplateTag.coerce(template)
        keywords = extract_keyword_list(job_description)
        logger.info("Extracted %d job description keywords", len(keywords))

        start = time.monotonic()
        response = await self.llm.generate(
            prompt=build_generation_prompt(candidate, job_description, tag, keywords=keywords),
            system=SYSTEM_PROMPT,
            model=self.model,
            temperature=self.resume_temperature,
            max_tokens=self.resume_max_tokens,
        )
        data = parse_generated_json(
            response.text,
            generation_fallback(response.text),
            required=("resume",),
            validator=GenerationPayload,
        )
        content = data["resume"].strip()
        logger.info(
            "Resume generated in %.1fs, %d chars", time.monotonic() - start, len(content)
        )

        cover_letter = None
        if include_cover_letter:
            cover_letter = await self._cover_letter(candidate, job_description)

        analysis = score_match(keywords, content)
        return GeneratedResume(
            owner_id=owner_id,
            job_description=job_description,
            content=content,
            cover_letter=cover_letter,
            template=tag,
            ats_score=analysis.ats_score,
            ats_analysis=analysis,
            contact_info=candidate.contact,
        )

    async def _cover_letter(self, candidate: CandidateProfile, job_description: str) -> str | None:
        # A failed cover letter does not fail the resume
        try:
            response = await self.llm.generate(
                prompt=build_cover_letter_prompt(candidate, job_description),
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.cover_letter_temperature,
                max_tokens=self.cover_letter_max_tokens,
            )
        except GenerationUnavailableError:
            logger.warning("Cover letter generation failed; returning resume only", exc_info=True)
            return None
        logger.info("Cover letter generated")
        return strip_code_fences(response.text)
