"""Utilities to extract JSON payloads from generation-service responses."""

from __future__ import annotations

import copy
import json
import logging
import re
from typing import Any

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def extract_json(text: str) -> dict | list:
    """Extract JSON from an LLM response, handling ```json blocks.

    Tries in order:
    1. Direct json.loads on the full text
    2. Strip fenced code block markers and parse
    3. First balanced {...} object (string-literal aware)
    4. First '[' to last ']' (JSON array)
    5. Repair a truncated object (missing closing braces)
    """
    text = (text or "").strip()

    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass

    stripped = strip_code_fences(text)
    if stripped != text:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    span = _balanced_span(stripped, stripped.find("{"))
    while span is not None:
        try:
            return json.loads(stripped[span[0] : span[1]])
        except json.JSONDecodeError:
            span = _balanced_span(stripped, stripped.find("{", span[0] + 1))

    result = _extract_brackets(stripped)
    if result is not None:
        return result

    result = _try_repair_truncated(stripped)
    if result is not None:
        return result

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def strip_code_fences(text: str) -> str:
    """Remove a wrapping markdown code fence (``` optionally followed by a language tag)."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text, count=1)
        text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def find_json_object(text: str, start: int = 0) -> str | None:
    """Return the first complete top-level {...} substring at or after ``start``.

    Braces inside string literals are ignored, and backslash escapes inside
    strings are honoured, so values like "a } b" do not end the object early.
    """
    span = _balanced_span(text, text.find("{", start))
    if span is None:
        return None
    return text[span[0] : span[1]]


def _balanced_span(text: str, start: int) -> tuple[int, int] | None:
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return start, i + 1
    return None


def parse_generated_json(
    text: str,
    fallback: dict[str, Any],
    *,
    required: tuple[str, ...] | list[str] = (),
    validator: type[BaseModel] | None = None,
) -> dict[str, Any]:
    """Decode a JSON object from model output, degrading to ``fallback``.

    Never raises. The decoded object is returned only when it is a dict that
    holds every key in ``required`` and, when ``validator`` is given, passes
    that model's validation. Otherwise a deep copy of ``fallback`` is
    returned and the failure is logged.
    """
    try:
        data = extract_json(text)
    except (ValueError, RecursionError):
        logger.warning("Could not decode model response, using fallback: %.200r", text)
        return copy.deepcopy(fallback)

    if not isinstance(data, dict):
        logger.warning("Model response is %s, not an object; using fallback", type(data).__name__)
        return copy.deepcopy(fallback)

    missing = [key for key in required if key not in data]
    if missing:
        logger.warning("Model response missing keys %s; using fallback", missing)
        return copy.deepcopy(fallback)

    if validator is not None:
        try:
            validator.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "Model response failed %s validation (%d errors); using fallback",
                validator.__name__,
                e.error_count(),
            )
            return copy.deepcopy(fallback)
        except Exception:
            logger.warning(
                "Model response could not be checked against %s; using fallback",
                validator.__name__,
                exc_info=True,
            )
            return copy.deepcopy(fallback)

    return data


def _extract_brackets(text: str) -> list | None:
    """Try to extract a JSON array from first '[' to last ']'."""
    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass
    return None


def _try_repair_truncated(text: str) -> dict | None:
    """Try to repair truncated JSON by closing open braces/brackets."""
    start = text.find("{")
    if start == -1:
        return None

    candidate = text[start:]
    open_braces = candidate.count("{") - candidate.count("}")
    open_brackets = candidate.count("[") - candidate.count("]")

    if open_braces <= 0 and open_brackets <= 0:
        return None

    repaired = candidate.rstrip().rstrip(",")
    repaired += "]" * max(0, open_brackets) + "}" * max(0, open_braces)
    try:
        result = json.loads(repaired)
    except json.JSONDecodeError:
        result = None
    if isinstance(result, dict):
        return result

    # Cut back to the last complete string value and close from there
    last_quote = candidate.rfind('"')
    if last_quote > 0:
        truncated = candidate[: last_quote + 1]
        ob = truncated.count("{") - truncated.count("}")
        ol = truncated.count("[") - truncated.count("]")
        if ob > 0 or ol > 0:
            repaired = truncated.rstrip().rstrip(",")
            repaired += "]" * max(0, ol) + "}" * max(0, ob)
            try:
                result = json.loads(repaired)
            except json.JSONDecodeError:
                return None
            if isinstance(result, dict):
                return result

    return None
