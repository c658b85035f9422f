"""Domain trust evaluation.

Scores a URL's domain from static list membership, TLD and hostname
heuristics, and a HEAD probe for TLS reachability and security headers.

Scoring formula
---------------
Base score: 50

  Known misinformation domain          → −40
  Credible news domain                 → +30
  Government / educational domain      → +40
  HTTPS scheme                         → +5   (no HTTPS → −10)
  Probe reached the site (valid SSL)   → +5
  Trusted TLD ending in ``.in``        → +5
  Misinformation keyword in hostname   → −15
  ≥ 2 of 3 security headers present    → +5

The result is clamped to [0, 100].
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from urllib.parse import urlsplit

from engine.trust_lists import DEFAULT_TRUST_LISTS, TrustLists
from schemas.analysis import ProbeResult, SecurityHeaders, TrustSignals
from services.fetcher import probe_domain

logger = logging.getLogger("truthscan.engine.domain_trust")

FALLBACK_SCORE = 30
NEUTRAL_REASON = "No specific trust signals detected."

Probe = Callable[[str], Awaitable[ProbeResult]]


def _contains_any(hostname: str, entries: tuple[str, ...]) -> bool:
    return any(entry.lower() in hostname for entry in entries)


def parse_url(url: str) -> tuple[str, str]:
    """Return the lower-cased ``(scheme, hostname)`` of *url*.

    Raises ``ValueError`` when either is missing.
    """
    parts = urlsplit(url.strip())
    hostname = (parts.hostname or "").lower()
    if not parts.scheme or not hostname:
        raise ValueError(f"Invalid URL: {url!r}")
    return parts.scheme.lower(), hostname


def build_fallback_signals() -> TrustSignals:
    """Signals returned when the URL cannot be evaluated at all."""
    return TrustSignals(
        score=FALLBACK_SCORE,
        reason="Failed to verify website due to technical issues",
    )


def collect_signals(
    url: str,
    probe: ProbeResult,
    lists: TrustLists = DEFAULT_TRUST_LISTS,
) -> tuple[TrustSignals, str]:
    """Derive the boolean trust flags for *url*; returns ``(signals, hostname)``.

    Raises ``ValueError`` when *url* has no scheme or hostname.
    """
    scheme, hostname = parse_url(url)
    tld = hostname.rsplit(".", 1)[-1]
    headers = probe.headers if probe.success else {}

    signals = TrustSignals(
        https=scheme == "https",
        is_known_misinformation=_contains_any(hostname, lists.misinformation_domains),
        is_credible_source=_contains_any(hostname, lists.credible_domains),
        is_government_or_edu=_contains_any(hostname, lists.government_edu_domains),
        trusted_tld=tld in lists.trusted_tlds,
        has_misinfo_keyword=_contains_any(hostname, lists.misinfo_keywords),
        official_subdomain=any(m in hostname for m in lists.official_subdomain_markers),
        valid_ssl=probe.success,
        security_headers=SecurityHeaders(
            content_security="content-security-policy" in headers,
            x_frame_options="x-frame-options" in headers,
            strict_transport="strict-transport-security" in headers,
        ),
    )
    return signals, hostname


def score_trust_signals(signals: TrustSignals, hostname: str) -> TrustSignals:
    """Return a copy of *signals* with ``score`` and ``reason`` populated."""
    score = 50
    positive: list[str] = []
    negative: list[str] = []

    if signals.is_known_misinformation:
        score -= 40
        negative.append("Domain appears on list of known misinformation sources in India")

    if signals.is_credible_source:
        score += 30
        positive.append("Domain is a recognized credible Indian news source")

    if signals.is_government_or_edu:
        score += 40
        positive.append("Domain is an Indian government or educational institution")

    if signals.https:
        score += 5
        positive.append("Uses secure HTTPS connection")
    else:
        score -= 10
        negative.append("Does not use secure HTTPS connection")

    if signals.valid_ssl:
        score += 5
        positive.append("Has valid SSL certificate")

    if signals.trusted_tld and hostname.endswith(".in"):
        score += 5
        positive.append("Uses official Indian TLD (.in)")

    if signals.has_misinfo_keyword:
        score -= 15
        negative.append("Domain includes keywords often associated with misinformation")

    if signals.security_headers.present_count >= 2:
        score += 5
        positive.append("Implements security best practices")

    if positive and negative:
        reason = f"Positive: {', '.join(positive)}. Concerns: {', '.join(negative)}."
    elif positive:
        reason = f"Positive factors: {', '.join(positive)}."
    elif negative:
        reason = f"Concerns: {', '.join(negative)}."
    else:
        reason = NEUTRAL_REASON

    return signals.model_copy(update={"score": max(0, min(100, score)), "reason": reason})


async def evaluate_domain_trust(
    url: str,
    *,
    lists: TrustLists = DEFAULT_TRUST_LISTS,
    probe: Probe = probe_domain,
) -> TrustSignals:
    """Compute scored trust signals for *url*.  Never raises."""
    try:
        parse_url(url)
        result = await probe(url)
        signals, hostname = collect_signals(url, result, lists)
        scored = score_trust_signals(signals, hostname)
    except Exception as exc:
        logger.warning("Error verifying trust for %s: %s", url, exc)
        return build_fallback_signals()

    logger.info("Domain trust for %s: %d (%s)", hostname, scored.score, scored.reason)
    return scored
