"""Pipeline orchestrator — one coroutine per content type.

Each flow gathers model analyses, runs them through the misinformation
classifier and factor synthesizer, blends the result and caches it under the
input's fingerprint.  Independent external calls run concurrently; if a
mandatory call fails its siblings are cancelled and the error propagates.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlsplit

from config import settings
from engine.blender import blend_scores
from engine.domain_trust import evaluate_domain_trust
from engine.factor_synthesizer import synthesize_factors
from engine.metadata import (
    extract_image_details,
    extract_text_metadata,
    extract_url_metadata,
    extract_video_details,
)
from engine.misinfo_classifier import detect_misinformation
from engine.reputation import assess_reputation
from engine.summarizer import summarize
from engine.verdict import credibility_label
from prompts.system_prompt import (
    IMAGE_SUMMARY_ROLE,
    MEDIA_ANALYSIS_ROLE,
    MEDIA_TEXT_ANALYSIS_ROLE,
    PRIMARY_ANALYSIS_ROLE,
    PRIMARY_TEXT_ANALYSIS_ROLE,
    TEXT_SUMMARY_ROLE,
    URL_SUMMARY_ROLE,
    VIDEO_ROLE,
    VIDEO_SUMMARY_ROLE,
    VISION_PROMPT,
    VISION_ROLE,
    build_text_analysis_prompt,
    build_text_media_prompt,
    build_url_analysis_prompt,
    build_url_media_prompt,
    build_video_prompt,
)
from schemas.analysis import MisinfoVerdict, TrustSignals
from schemas.response import (
    ContentType,
    ImageAnalysisResult,
    MisinformationBlock,
    TextAnalysisResult,
    TrustSignalsSummary,
    UrlAnalysisResult,
    VideoAnalysisResult,
)
from services.cache import (
    ResultCache,
    fingerprint_file,
    fingerprint_text,
    fingerprint_url,
    result_cache,
)
from services.fetcher import fetch_url_content
from services.llm_service import LLMError, analyze_with_fallback, chat_completion, vision_completion

logger = logging.getLogger("truthscan.pipeline")


class AnalysisInputError(ValueError):
    """Missing or unusable input; surfaced to the caller without a partial result."""


# ── Helpers ────────────────────────────────────────────────────────────

def _now() -> datetime:
    return datetime.now(timezone.utc)


def _result_id(content_type: ContentType) -> str:
    return f"{content_type.value}-{int(time.time() * 1000)}"


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def _misinformation_block(verdict: MisinfoVerdict) -> MisinformationBlock:
    if verdict.is_misinformation:
        return MisinformationBlock(detected=True, confidence=verdict.confidence, reason=verdict.reason)
    return MisinformationBlock(detected=False)


def _trust_summary(trust: TrustSignals) -> TrustSignalsSummary:
    return TrustSignalsSummary(
        score=trust.score,
        is_known_misinformation=trust.is_known_misinformation,
        is_credible_source=trust.is_credible_source,
        is_government_or_edu=trust.is_government_or_edu,
        https=trust.https,
        valid_ssl=trust.valid_ssl,
        reason=trust.reason,
    )


async def _join(*aws: Awaitable[Any]) -> list[Any]:
    """Run *aws* concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _secondary_analysis(system_role: str, prompt: str) -> str:
    """Second, independent analysis.  Degrades to empty text on failure."""
    try:
        return await chat_completion(system_role, prompt, max_tokens=1000)
    except LLMError as exc:
        logger.warning("Media analysis unavailable, continuing without it: %s", exc)
        return ""


async def _cached(cache: ResultCache, key: str):
    cached = await cache.get(key)
    if cached is not None:
        logger.info("Cache hit for %s", key[:80])
    return cached


# ── URL ────────────────────────────────────────────────────────────────

async def analyze_url(url: str, *, cache: ResultCache | None = None) -> UrlAnalysisResult:
    """Fetch and analyse a web page, blending content scores with domain trust.

    Raises
    ------
    AnalysisInputError
        Empty URL.
    FetchError
        The page could not be retrieved.
    LLMError
        Both primary and fallback analysis providers failed.
    """
    cache = result_cache if cache is None else cache
    url = (url or "").strip()
    if not url:
        raise AnalysisInputError("URL is required")

    key = fingerprint_url(url)
    cached = await _cached(cache, key)
    if cached is not None:
        return cached

    t0 = time.perf_counter()
    now = _now()
    domain = urlsplit(url).hostname or url

    # ── Domain trust runs alongside the fetch and the analyses ─────────
    trust_task = asyncio.create_task(evaluate_domain_trust(url))
    try:
        logger.info("Fetching content from URL: %s", url)
        content = await fetch_url_content(url)
        excerpt = content[: settings.max_content_chars]

        primary, media, metadata = await _join(
            analyze_with_fallback(build_url_analysis_prompt(url, excerpt), PRIMARY_ANALYSIS_ROLE),
            _secondary_analysis(MEDIA_ANALYSIS_ROLE, build_url_media_prompt(url, excerpt)),
            extract_url_metadata(excerpt, domain, now.date().isoformat()),
        )
        trust = await trust_task
    except BaseException:
        trust_task.cancel()
        await asyncio.gather(trust_task, return_exceptions=True)
        raise

    reputation = await assess_reputation(domain, trust)

    analyses = {
        "Primary analysis": primary,
        "Media analysis": media,
        "Source reputation": reputation,
    }
    misinfo, factors = await _join(
        detect_misinformation(content, primary, media),
        synthesize_factors(ContentType.URL, analyses),
    )
    blended = blend_scores(factors, misinfo=misinfo, trust=trust)

    summary = await summarize(
        URL_SUMMARY_ROLE,
        {**analyses, "Technical trust analysis": trust.model_dump_json(indent=2, by_alias=True)},
    )

    result = UrlAnalysisResult(
        id=_result_id(ContentType.URL),
        url=url,
        title=metadata.title or domain,
        source=metadata.source or domain,
        publish_date=metadata.publish_date or now.date().isoformat(),
        truth_score=blended.truth_score,
        credibility=credibility_label(blended.truth_score),
        source_reputation=reputation,
        factors=blended.factors,
        factual_errors=metadata.factual_errors,
        misleading_claims=metadata.misleading_claims,
        political_bias=metadata.political_bias,
        sentiment=metadata.sentiment,
        indian_context=metadata.indian_context,
        misinformation=_misinformation_block(misinfo),
        trust_signals=_trust_summary(trust),
        summary=summary,
        timestamp=now.isoformat(),
        primary_analysis=primary,
        media_analysis=media,
        raw_content=_truncate(content, 1000),
    )

    await cache.put(key, result)
    logger.info(
        "URL analysis complete in %.2fs — content %d, domain trust %d → %d/100",
        time.perf_counter() - t0,
        factors.truth_score,
        trust.score,
        result.truth_score,
    )
    return result


# ── Text ───────────────────────────────────────────────────────────────

async def analyze_text(text: str, *, cache: ResultCache | None = None) -> TextAnalysisResult:
    """Analyse free text.  No domain trust blending applies."""
    cache = result_cache if cache is None else cache
    if not text or not text.strip():
        raise AnalysisInputError("Text content is required")

    key = fingerprint_text(text)
    cached = await _cached(cache, key)
    if cached is not None:
        return cached

    t0 = time.perf_counter()
    excerpt = text[: settings.max_content_chars]

    primary, media, metadata = await _join(
        analyze_with_fallback(build_text_analysis_prompt(excerpt), PRIMARY_TEXT_ANALYSIS_ROLE),
        _secondary_analysis(MEDIA_TEXT_ANALYSIS_ROLE, build_text_media_prompt(excerpt)),
        extract_text_metadata(excerpt),
    )

    analyses = {"Primary analysis": primary, "Media analysis": media}
    misinfo, factors = await _join(
        detect_misinformation(text, primary, media),
        synthesize_factors(ContentType.TEXT, analyses),
    )
    blended = blend_scores(factors, misinfo=misinfo)
    summary = await summarize(TEXT_SUMMARY_ROLE, analyses)

    result = TextAnalysisResult(
        id=_result_id(ContentType.TEXT),
        text=_truncate(text, 100),
        truth_score=blended.truth_score,
        factors=blended.factors,
        factual_errors=metadata.factual_errors,
        misleading_claims=metadata.misleading_claims,
        political_bias=metadata.political_bias,
        sentiment=metadata.sentiment,
        misinformation=_misinformation_block(misinfo),
        summary=summary,
        timestamp=_now().isoformat(),
        primary_analysis=primary,
        media_analysis=media,
        raw_content=_truncate(text, 1000),
    )

    await cache.put(key, result)
    logger.info("Text analysis complete in %.2fs — %d/100", time.perf_counter() - t0, result.truth_score)
    return result


# ── Image ──────────────────────────────────────────────────────────────

async def analyze_image(
    filename: str,
    data: bytes,
    mime_type: str,
    *,
    cache: ResultCache | None = None,
) -> ImageAnalysisResult:
    """Analyse an uploaded image with the vision model."""
    cache = result_cache if cache is None else cache
    if not filename or not data:
        raise AnalysisInputError("Image file is required")
    if not mime_type or not mime_type.startswith("image/"):
        raise AnalysisInputError(f"Unsupported image type: {mime_type or 'unknown'}")

    key = fingerprint_file(ContentType.IMAGE.value, filename, len(data))
    cached = await _cached(cache, key)
    if cached is not None:
        return cached

    t0 = time.perf_counter()
    logger.info("Analyzing image: %s (%d bytes)", filename, len(data))
    vision = await vision_completion(VISION_ROLE, VISION_PROMPT, data, mime_type)

    analyses = {"Image analysis": vision}
    details, factors, summary = await _join(
        extract_image_details(vision),
        synthesize_factors(ContentType.IMAGE, analyses),
        summarize(IMAGE_SUMMARY_ROLE, analyses),
    )
    blended = blend_scores(factors)

    result = ImageAnalysisResult(
        id=_result_id(ContentType.IMAGE),
        filename=filename,
        truth_score=blended.truth_score,
        factors=blended.factors,
        manipulation_detected=details.manipulation_detected,
        deepfake_confidence=details.deepfake_confidence,
        manipulated_regions=details.manipulated_regions,
        original_found=details.original_found,
        original_source=details.original_source,
        summary=summary,
        timestamp=_now().isoformat(),
        vision_analysis=vision,
    )

    await cache.put(key, result)
    logger.info("Image analysis complete in %.2fs — %d/100", time.perf_counter() - t0, result.truth_score)
    return result


# ── Video ──────────────────────────────────────────────────────────────

async def analyze_video(
    filename: str,
    size: int,
    mime_type: str,
    *,
    cache: ResultCache | None = None,
) -> VideoAnalysisResult:
    """Estimate video authenticity from file metadata only; frames are not inspected."""
    cache = result_cache if cache is None else cache
    if not filename or size <= 0:
        raise AnalysisInputError("Video file is required")

    key = fingerprint_file(ContentType.VIDEO.value, filename, size)
    cached = await _cached(cache, key)
    if cached is not None:
        return cached

    t0 = time.perf_counter()
    logger.info("Analyzing video: %s (%d bytes)", filename, size)
    basic = await chat_completion(VIDEO_ROLE, build_video_prompt(filename, size, mime_type), max_tokens=500)

    analyses = {"Video analysis": basic}
    details, factors, summary = await _join(
        extract_video_details(basic),
        synthesize_factors(ContentType.VIDEO, analyses),
        summarize(VIDEO_SUMMARY_ROLE, analyses),
    )
    blended = blend_scores(factors)

    result = VideoAnalysisResult(
        id=_result_id(ContentType.VIDEO),
        filename=filename,
        truth_score=blended.truth_score,
        factors=blended.factors,
        manipulation_detected=details.manipulation_detected,
        deepfake_confidence=details.deepfake_confidence,
        manipulated_elements=details.manipulated_elements,
        inconsistencies=details.inconsistencies,
        summary=summary,
        timestamp=_now().isoformat(),
        basic_analysis=basic,
    )

    await cache.put(key, result)
    logger.info("Video analysis complete in %.2fs — %d/100", time.perf_counter() - t0, result.truth_score)
    return result
