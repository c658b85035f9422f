"""Credibility label for a final truth score."""

from __future__ import annotations

from schemas.response import CredibilityLabel


def credibility_label(score: int) -> CredibilityLabel:
    """Map a truth score to a credibility tier.

    70–100 → High
    40–69  → Medium
     0–39  → Low
    """
    if score >= 70:
        return CredibilityLabel.HIGH
    elif score >= 40:
        return CredibilityLabel.MEDIUM
    else:
        return CredibilityLabel.LOW
