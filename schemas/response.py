"""Response schemas for the TruthScan API."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from schemas.analysis import CamelModel, Factor


# ── Enums ──────────────────────────────────────────────────────────────

class ContentType(str, Enum):
    URL = "url"
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class CredibilityLabel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# ── Sub-models ─────────────────────────────────────────────────────────

class MisinformationBlock(CamelModel):
    """``confidence`` and ``reason`` are only populated when ``detected`` is true."""

    detected: bool
    confidence: int | None = Field(default=None, ge=0, le=100)
    reason: str | None = None


class TrustSignalsSummary(CamelModel):
    score: int = Field(ge=0, le=100)
    is_known_misinformation: bool
    is_credible_source: bool
    is_government_or_edu: bool
    https: bool
    valid_ssl: bool
    reason: str


# ── Analysis results (tagged union on ``type``) ────────────────────────

class BaseAnalysisResult(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    truth_score: int = Field(ge=0, le=100)
    factors: list[Factor] = Field(default_factory=list)
    summary: str
    timestamp: str


class UrlAnalysisResult(BaseAnalysisResult):
    type: Literal["url"] = "url"
    url: str
    title: str
    source: str
    publish_date: str
    credibility: CredibilityLabel
    source_reputation: str
    factual_errors: int = Field(default=0, ge=0)
    misleading_claims: int = Field(default=0, ge=0)
    political_bias: str = "Unknown"
    sentiment: str = "Neutral"
    indian_context: bool = False
    misinformation: MisinformationBlock
    trust_signals: TrustSignalsSummary
    primary_analysis: str
    media_analysis: str
    raw_content: str


class TextAnalysisResult(BaseAnalysisResult):
    type: Literal["text"] = "text"
    text: str
    factual_errors: int = Field(default=0, ge=0)
    misleading_claims: int = Field(default=0, ge=0)
    political_bias: str = "Unknown"
    sentiment: str = "Neutral"
    misinformation: MisinformationBlock
    primary_analysis: str
    media_analysis: str
    raw_content: str


class ImageAnalysisResult(BaseAnalysisResult):
    type: Literal["image"] = "image"
    filename: str
    manipulation_detected: bool = False
    deepfake_confidence: float = Field(default=0, ge=0, le=100)
    manipulated_regions: list[str] = Field(default_factory=list)
    original_found: bool = False
    original_source: str | None = None
    vision_analysis: str


class VideoAnalysisResult(BaseAnalysisResult):
    type: Literal["video"] = "video"
    filename: str
    manipulation_detected: bool = False
    deepfake_confidence: float = Field(default=0, ge=0, le=100)
    manipulated_elements: list[str] = Field(default_factory=list)
    inconsistencies: list[str] = Field(default_factory=list)
    basic_analysis: str


AnalysisResult = Annotated[
    Union[UrlAnalysisResult, TextAnalysisResult, ImageAnalysisResult, VideoAnalysisResult],
    Field(discriminator="type"),
]


class ErrorResponse(CamelModel):
    error: str
    message: str | None = None
