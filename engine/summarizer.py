"""Final summary of the gathered analyses."""

from __future__ import annotations

import logging

from engine.factor_synthesizer import format_analyses
from services.llm_service import LLMError, chat_completion

logger = logging.getLogger("truthscan.engine.summarizer")

FALLBACK_SUMMARY = "The content could not be summarized."


async def summarize(system_role: str, analyses: dict[str, str]) -> str:
    """Return a 3-4 sentence summary of *analyses*, or a fixed fallback."""
    try:
        summary = await chat_completion(system_role, format_analyses(analyses), max_tokens=300)
    except LLMError as exc:
        logger.warning("Summary generation failed; using fallback: %s", exc)
        return FALLBACK_SUMMARY
    if not summary:
        logger.warning("LLM returned empty summary; using fallback.")
        return FALLBACK_SUMMARY
    return summary
