"""Request schemas for the TruthScan API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UrlAnalysisRequest(BaseModel):
    """Payload sent by the web app or browser extension to analyse a page."""

    url: str = Field(
        ...,
        max_length=2048,
        description="Absolute http(s) URL of the page to analyse.",
    )


class TextAnalysisRequest(BaseModel):
    """Payload for free-text analysis (pasted article, post, caption, ...)."""

    text: str = Field(
        ...,
        max_length=50_000,
        description="Raw text to analyse.",
    )
