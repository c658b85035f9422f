"""Score blending.

Deterministic, no I/O.  Folds the misinformation verdict and the domain trust
score into the synthesized factors, in this order:

1. Misinformation adjustment (text / url, only when flagged)
     factual factor      → max(5, 100 − score)
     truth score         → round(0.7 × (100 − confidence) + 0.3 × truth)
2. Domain trust blend (url)
     truth score         → round(0.6 × truth + 0.4 × trust)
3. Credibility merge (url)
     credibility factor  → round(0.5 × score + 0.5 × trust), appended if absent
4. Government / education bonus (url)
     append a factor fixed at 90

Each stage consumes the previous stage's output, so applying the blend twice
is not the same as applying it once.
"""

from __future__ import annotations

import logging

from schemas.analysis import Factor, FactorSet, MisinfoVerdict, TrustSignals, round_half_up

logger = logging.getLogger("truthscan.engine.blender")

MISINFO_WEIGHT = 0.7
CONTENT_WEIGHT = 0.6
TRUST_WEIGHT = 0.4
CREDIBILITY_MERGE_WEIGHT = 0.5
FACTUAL_FLOOR = 5
GOV_EDU_BONUS_SCORE = 90

DOMAIN_CREDIBILITY_FACTOR = "Indian Source Credibility"
GOV_EDU_FACTOR = "Indian Government/Educational Source"


def _find_factor(factors: list[Factor], *keywords: str) -> Factor | None:
    """First factor whose name contains any of *keywords* (case-insensitive)."""
    for factor in factors:
        name = factor.name.lower()
        if any(k in name for k in keywords):
            return factor
    return None


def apply_misinformation(factor_set: FactorSet, misinfo: MisinfoVerdict) -> None:
    if not misinfo.is_misinformation:
        return

    factual = _find_factor(factor_set.factors, "factual", "accuracy")
    if factual is not None:
        factual.score = max(FACTUAL_FLOOR, 100 - factual.score)

    factor_set.truth_score = round_half_up(
        MISINFO_WEIGHT * (100 - misinfo.confidence) + (1 - MISINFO_WEIGHT) * factor_set.truth_score
    )


def apply_domain_trust(factor_set: FactorSet, trust: TrustSignals) -> None:
    content_score = factor_set.truth_score
    factor_set.truth_score = round_half_up(CONTENT_WEIGHT * content_score + TRUST_WEIGHT * trust.score)
    logger.info(
        "Content score %d, domain trust %d → combined %d",
        content_score,
        trust.score,
        factor_set.truth_score,
    )

    credibility = _find_factor(factor_set.factors, "credibility", "source")
    if credibility is not None:
        credibility.score = round_half_up(
            CREDIBILITY_MERGE_WEIGHT * credibility.score + (1 - CREDIBILITY_MERGE_WEIGHT) * trust.score
        )
    else:
        factor_set.factors.append(Factor(name=DOMAIN_CREDIBILITY_FACTOR, score=trust.score))

    if trust.is_government_or_edu:
        factor_set.factors.append(Factor(name=GOV_EDU_FACTOR, score=GOV_EDU_BONUS_SCORE))


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def enforce_bounds(factor_set: FactorSet) -> FactorSet:
    """Clamp every score into [0, 100], logging anything that was out of range."""
    if not 0 <= factor_set.truth_score <= 100:
        logger.error("Truth score %d out of range after blending; clamping", factor_set.truth_score)
        factor_set.truth_score = _clamp(factor_set.truth_score)
    for factor in factor_set.factors:
        if not 0 <= factor.score <= 100:
            logger.error("Factor %r score %d out of range; clamping", factor.name, factor.score)
            factor.score = _clamp(factor.score)
    return factor_set


def blend_scores(
    factor_set: FactorSet,
    *,
    misinfo: MisinfoVerdict | None = None,
    trust: TrustSignals | None = None,
) -> FactorSet:
    """Return a blended copy of *factor_set*; the input is left untouched."""
    blended = factor_set.model_copy(deep=True)

    if misinfo is not None:
        if misinfo.is_misinformation:
            logger.info("Misinformation detected: %s. Adjusting scores.", misinfo.reason)
        apply_misinformation(blended, misinfo)

    if trust is not None:
        apply_domain_trust(blended, trust)

    return enforce_bounds(blended)
