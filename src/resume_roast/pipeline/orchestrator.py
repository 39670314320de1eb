"""Request-level orchestration: rate limiting, validation, agents and persistence."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from resume_roast.clients.llm_client import LLMClient
from resume_roast.config import AppConfig
from resume_roast.errors import InputValidationError, RateLimitExceededError
from resume_roast.limits.rate_limiter import RateLimiter, build_rate_limiters
from resume_roast.models.candidate import CandidateProfile
from resume_roast.models.resume import GeneratedResume, TemplateTag
from resume_roast.models.roast import ResumeAnalysis, RoastResult
from resume_roast.pipeline.cv_parser import MasterCVParser
from resume_roast.pipeline.resume_analyzer import ResumeAnalyzer
from resume_roast.pipeline.resume_generator import ResumeGenerator
from resume_roast.pipeline.roaster import ResumeRoaster
from resume_roast.storage.resume_store import ResumeStore

logger = logging.getLogger(__name__)


def validate_text(name: str, text: str | None, min_chars: int, max_chars: int) -> str:
    """Reject missing, too-short or too-long input before any external call."""
    if text is None or not text.strip():
        raise InputValidationError(f"{name} is required")
    length = len(text.strip())
    if length < min_chars:
        raise InputValidationError(f"{name} is too short ({length} < {min_chars} characters)")
    if length > max_chars:
        raise InputValidationError(f"{name} is too long ({length} > {max_chars} characters)")
    return text.strip()


class ResumeService:
    """Entry point for callers (CLI, web handlers).

    Every operation runs: rate-limit check, input validation, the agent
    pipeline, then persistence when a store is configured.
    """

    def __init__(
        self,
        llm: LLMClient,
        *,
        config: AppConfig | None = None,
        limiters: Mapping[str, RateLimiter] | None = None,
        store: ResumeStore | None = None,
    ):
        self.config = config or AppConfig()
        self.limiters = dict(limiters) if limiters is not None else build_rate_limiters(self.config.limits)
        self.store = store
        gen = self.config.generation
        self.roaster = ResumeRoaster(
            llm,
            model=self.config.llm.model,
            temperature=gen.roast_temperature,
            max_tokens=gen.roast_max_tokens,
        )
        self.generator = ResumeGenerator(
            llm,
            model=self.config.llm.model,
            resume_temperature=gen.resume_temperature,
            resume_max_tokens=gen.resume_max_tokens,
            cover_letter_temperature=gen.cover_letter_temperature,
            cover_letter_max_tokens=gen.cover_letter_max_tokens,
        )
        self.cv_parser = MasterCVParser(
            llm, model=self.config.llm.parse_model, max_tokens=gen.parse_max_tokens
        )
        self.analyzer = ResumeAnalyzer(
            llm, model=self.config.llm.parse_model, max_tokens=gen.analyze_max_tokens
        )

    def _enforce_rate_limit(self, endpoint: str, client_key: str) -> None:
        limiter = self.limiters.get(endpoint)
        if limiter is None:
            return
        decision = limiter.check(client_key)
        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s on %s", client_key, endpoint)
            raise RateLimitExceededError(client_key, decision.retry_after)
        logger.debug("Request from %s on %s, remaining: %d", client_key, endpoint, decision.remaining)

    def _resume_text(self, text: str | None) -> str:
        v = self.config.validation
        return validate_text("Resume", text, v.resume_min_chars, v.resume_max_chars)

    def _job_description(self, text: str | None) -> str:
        v = self.config.validation
        return validate_text("Job description", text, v.jd_min_chars, v.jd_max_chars)

    async def roast(self, client_key: str, resume_text: str, job_description: str) -> RoastResult:
        self._enforce_rate_limit("roast", client_key)
        resume_text = self._resume_text(resume_text)
        job_description = self._job_description(job_description)
        return await self.roaster.roast(resume_text, job_description)

    async def generate(
        self,
        client_key: str,
        owner_id: str,
        job_description: str,
        candidate: CandidateProfile | None = None,
        template: TemplateTag | str = TemplateTag.MODERN,
        *,
        include_cover_letter: bool = False,
    ) -> GeneratedResume:
        """Generate, score and (when a store is configured) persist a tailored resume."""
        self._enforce_rate_limit("generate", client_key)
        job_description = self._job_description(job_description)

        if candidate is None:
            if self.store is None:
                raise InputValidationError("A candidate profile is required")
            candidate = self.store.get_profile(owner_id)
            if candidate is None:
                raise InputValidationError(f"No master CV on file for {owner_id}")

        resume = await self.generator.generate(
            candidate,
            job_description,
            template,
            owner_id=owner_id,
            include_cover_letter=include_cover_letter,
        )
        if self.store is not None:
            resume_id = self.store.save_resume(resume)
            resume = resume.model_copy(update={"id": resume_id})
        return resume

    async def parse_master_cv(self, client_key: str, owner_id: str, resume_text: str) -> CandidateProfile:
        self._enforce_rate_limit("parse", client_key)
        resume_text = self._resume_text(resume_text)
        profile = await self.cv_parser.parse(resume_text)
        if self.store is not None:
            self.store.save_profile(owner_id, profile)
        return profile

    async def analyze(self, client_key: str, resume_text: str) -> ResumeAnalysis:
        self._enforce_rate_limit("analyze", client_key)
        resume_text = self._resume_text(resume_text)
        return await self.analyzer.analyze(resume_text)
