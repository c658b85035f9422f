"""Misinformation detection from two independent analyses plus a YES/NO check."""

from __future__ import annotations

import logging

from prompts.system_prompt import MISINFO_VERIFICATION_PROMPT, build_verification_message
from schemas.analysis import MisinfoVerdict
from services.llm_service import chat_completion

logger = logging.getLogger("truthscan.engine.misinfo_classifier")

MIN_CONTENT_LENGTH = 5
MAX_EXCERPT_CHARS = 1000
CONFIDENCE_PER_HIT = 20
CONFIDENCE_THRESHOLD = 40
ACCURATE_REASON = "Content appears factually accurate"

MISINFO_INDICATORS: tuple[str, ...] = (
    "no scientific evidence", "lacks credibility", "unsubstantiated",
    "misleading", "false claim", "misinformation", "disinformation",
    "unfounded", "pseudoscience", "not supported by research",
    "factually incorrect", "no credible sources", "conspiracy",
    "debunked", "false", "myth", "not credible", "unsupported",
)


def match_indicators(analysis: str) -> list[str]:
    """Distinct indicator phrases present in *analysis*, in list order."""
    lowered = analysis.lower()
    return [phrase for phrase in MISINFO_INDICATORS if phrase in lowered]


def indicator_confidence(hits: int) -> int:
    return min(100, hits * CONFIDENCE_PER_HIT)


async def detect_misinformation(
    content: str,
    primary_analysis: str,
    secondary_analysis: str,
) -> MisinfoVerdict:
    """Combine indicator-phrase hits with a binary model verdict.

    The content is flagged when the model answers YES *or* the phrase-based
    confidence reaches 40, so a NO from the model does not clear content the
    analyses describe as misleading.
    """
    if len(content.strip()) < MIN_CONTENT_LENGTH:
        return MisinfoVerdict(
            is_misinformation=False,
            confidence=0,
            reason="Content too short for reliable analysis",
        )

    try:
        matched = match_indicators(f"{primary_analysis} {secondary_analysis}")
        confidence = indicator_confidence(len(matched))

        excerpt = content
        if len(content) > MAX_EXCERPT_CHARS:
            excerpt = content[:MAX_EXCERPT_CHARS] + "..."

        answer = await chat_completion(
            MISINFO_VERIFICATION_PROMPT,
            build_verification_message(excerpt, matched),
            max_tokens=10,
        )
        model_says_yes = "YES" in answer.strip().upper()
        flagged = model_says_yes or confidence >= CONFIDENCE_THRESHOLD
    except Exception as exc:
        logger.warning("Error in misinformation detection: %s", exc)
        return MisinfoVerdict(is_misinformation=False, confidence=0, reason=f"Analysis error: {exc}")

    logger.info(
        "Misinformation check: %d indicator(s), model=%s → %s",
        len(matched),
        "YES" if model_says_yes else "NO",
        "flagged" if flagged else "clear",
    )

    if flagged:
        reason = f"Analysis found {len(matched)} indicators of misinformation: {', '.join(matched)}"
    else:
        reason = ACCURATE_REASON
    return MisinfoVerdict(is_misinformation=flagged, confidence=confidence, reason=reason)
