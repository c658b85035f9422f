"""Factor synthesis — asks the model for four named 0-100 factors and a truth score."""

from __future__ import annotations

import logging

from engine.extraction import extract_model
from prompts.system_prompt import build_factors_prompt
from schemas.analysis import Factor, FactorSet
from schemas.response import ContentType

logger = logging.getLogger("truthscan.engine.factor_synthesizer")

NEUTRAL_SCORE = 50

FACTOR_TEMPLATES: dict[ContentType, tuple[str, ...]] = {
    ContentType.URL: ("Source Credibility", "Factual Accuracy", "Bias Assessment", "Manipulation Detection"),
    ContentType.TEXT: ("Factual Accuracy", "Bias Assessment", "Manipulation Detection", "AI Generation Probability"),
    ContentType.IMAGE: ("Image Quality", "Manipulation Detection", "Deepfake Probability", "Overall Authenticity"),
    ContentType.VIDEO: ("Video Quality", "Manipulation Likelihood", "Deepfake Probability", "Content Authenticity"),
}


def fallback_factor_set(content_type: ContentType) -> FactorSet:
    """Every template factor at the neutral score."""
    return FactorSet(
        truth_score=NEUTRAL_SCORE,
        factors=[Factor(name=name, score=NEUTRAL_SCORE) for name in FACTOR_TEMPLATES[content_type]],
    )


def format_analyses(analyses: dict[str, str]) -> str:
    return "\n\n".join(f"{label}: {text}" for label, text in analyses.items())


async def synthesize_factors(content_type: ContentType, analyses: dict[str, str]) -> FactorSet:
    """Return a FactorSet with exactly as many factors as the template names.

    Scores are passed through as the model produced them; bounding them is
    left to the blender.
    """
    names = FACTOR_TEMPLATES[content_type]
    fallback = fallback_factor_set(content_type)

    result = await extract_model(build_factors_prompt(content_type.value, names), format_analyses(analyses), fallback)
    if result is fallback:
        logger.info("Using fallback factors for %s analysis", content_type.value)
        return fallback

    if len(result.factors) != len(names):
        logger.warning(
            "Model returned %d factors for %s, expected %d; using fallback",
            len(result.factors),
            content_type.value,
            len(names),
        )
        return fallback

    return result
