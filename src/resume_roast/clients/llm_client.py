"""Claude API wrapper with async support and retry logic."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import anthropic
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
)

from resume_roast.errors import GenerationUnavailableError
from resume_roast.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


def is_transient(exc: BaseException) -> bool:
    """Rate limits, 5xx responses and transport failures are worth retrying."""
    if isinstance(exc, anthropic.RateLimitError):
        return True
    if isinstance(exc, anthropic.APIStatusError):
        return exc.status_code >= 500
    return isinstance(exc, anthropic.APIConnectionError)


def backoff_for(exc: BaseException | None, attempt_number: int, base_delay: float = 1.0) -> float:
    """Seconds to wait after failed attempt ``attempt_number`` (1-based).

    Rate limits back off exponentially (1s, 2s, 4s, ...); server and network
    errors wait a fixed ``base_delay``.
    """
    if isinstance(exc, anthropic.RateLimitError):
        return base_delay * (2 ** (attempt_number - 1))
    return base_delay


class LLMClient:
    """Async Claude API client with bounded, error-aware retries."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        *,
        max_retries: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        # Retries are handled here, not by the SDK
        kwargs: dict = {"max_retries": 0}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    def _wait(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        return backoff_for(exc, retry_state.attempt_number, self.base_delay)

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        status = getattr(exc, "status_code", None)
        logger.warning(
            "Generation attempt %d failed (%s%s), retrying in %.1fs",
            retry_state.attempt_number,
            type(exc).__name__,
            f" {status}" if status else "",
            retry_state.next_action.sleep if retry_state.next_action else 0.0,
        )

    async def _call_api(
        self,
        prompt: str,
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> anthropic.types.Message:
        """Make the actual API call under the retry policy."""
        messages = [{"role": "user", "content": prompt}]
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self._wait,
            retry=retry_if_exception(is_transient),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        try:
            return await retrying(self.client.messages.create, **kwargs)
        except anthropic.APIStatusError as e:
            raise GenerationUnavailableError(
                f"Generation service returned {e.status_code}", status_code=e.status_code
            ) from e
        except anthropic.APIConnectionError as e:
            raise GenerationUnavailableError("Generation service unreachable") from e

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        logger.debug("LLM call: model=%s", model)
        try:
            message = await self._call_api(
                prompt=prompt,
                system=system,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except GenerationUnavailableError:
            logger.error("LLM call failed", exc_info=True)
            raise
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = message.content[0].text if message.content else ""
        if not text:
            raise GenerationUnavailableError("Generation service returned an empty response")
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    async def generate_json(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> dict | list:
        """Send a prompt and parse JSON from the response (raises ValueError if none)."""
        response = await self.generate(
            prompt=prompt,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return extract_json(response.text)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
