"""Best-effort JSON extraction from free-text model replies.

Models asked to "answer in JSON" do not always comply: replies may wrap the
JSON in a fenced block, surround it with prose, or not contain any.  Every
function here returns the caller's fallback instead of raising.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from services.llm_service import LLMError, chat_completion

logger = logging.getLogger("truthscan.engine.extraction")

JSON_INSTRUCTION = " IMPORTANT: Format your response as valid JSON."

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE)
_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)
_ARRAY_SPAN = re.compile(r"\[.*\]", re.DOTALL)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def _find_json_span(text: str) -> str | None:
    fenced = _FENCED_JSON.search(text)
    if fenced:
        return fenced.group(1)
    for pattern in (_OBJECT_SPAN, _ARRAY_SPAN):
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def extract_json(text: Any, fallback: T) -> Any | T:
    """Return the first JSON value found in *text*, or *fallback*.

    Search order: a fenced ```json block, then the widest ``{...}`` span, then
    the widest ``[...]`` span.  When *fallback* is a dict or list, a parsed
    value of the other container type counts as non-conforming.
    """
    if not isinstance(text, str):
        return fallback

    span = _find_json_span(text)
    if span is None:
        logger.warning("No JSON found in response")
        return fallback

    try:
        parsed = json.loads(span)
    except ValueError as exc:
        logger.warning("Error parsing JSON from response: %s", exc)
        return fallback

    if isinstance(fallback, (dict, list)) and not isinstance(parsed, type(fallback)):
        logger.warning("JSON response has unexpected shape %s", type(parsed).__name__)
        return fallback
    return parsed


async def extract_json_from_llm(system_prompt: str, prompt: str, fallback: T) -> Any | T:
    """Ask the model for JSON and extract it; *fallback* on any failure."""
    try:
        reply = await chat_completion(system_prompt + JSON_INSTRUCTION, prompt, max_tokens=1000)
    except LLMError as exc:
        logger.warning("Error getting JSON from LLM: %s", exc)
        return fallback
    return extract_json(reply, fallback)


async def extract_model(system_prompt: str, prompt: str, fallback: M) -> M:
    """Like ``extract_json_from_llm`` but validates into ``type(fallback)``."""
    data = await extract_json_from_llm(system_prompt, prompt, None)
    if data is None:
        return fallback
    try:
        return type(fallback).model_validate(data)
    except ValidationError as exc:
        logger.warning("Extracted JSON does not match %s: %s", type(fallback).__name__, exc.error_count())
        return fallback
    except (ArithmeticError, ValueError, TypeError) as exc:
        logger.warning("Extracted JSON could not be converted to %s: %s", type(fallback).__name__, exc)
        return fallback
