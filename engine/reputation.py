"""Source reputation narrative for a domain."""

from __future__ import annotations

import logging

from prompts.system_prompt import REPUTATION_ROLE, build_reputation_prompt
from schemas.analysis import TrustSignals
from services.llm_service import LLMError, chat_completion

logger = logging.getLogger("truthscan.engine.reputation")

FALLBACK_REPUTATION = "Source reputation could not be assessed."


async def assess_reputation(domain: str, trust: TrustSignals) -> str:
    """2-3 sentence reputation assessment of *domain*, informed by its trust signals."""
    prompt = build_reputation_prompt(domain, trust.model_dump(mode="json", by_alias=True))
    try:
        return await chat_completion(REPUTATION_ROLE, prompt, max_tokens=250)
    except LLMError as exc:
        logger.warning("Reputation assessment for %s failed: %s", domain, exc)
        return FALLBACK_REPUTATION
