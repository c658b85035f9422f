"""Core data model threaded through the scoring engine."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Raises ``ValueError`` for NaN and infinities.
    """
    if not math.isfinite(value):
        raise ValueError(f"score must be a finite number, got {value!r}")
    return int(math.floor(value + 0.5))


class CamelModel(BaseModel):
    """Base for models exchanged with LLM JSON and API clients (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Factors ────────────────────────────────────────────────────────────

class Factor(CamelModel):
    name: str
    score: int

    @field_validator("score", mode="before")
    @classmethod
    def _round_score(cls, value):
        if isinstance(value, float):
            return round_half_up(value)
        return value


class FactorSet(CamelModel):
    """Overall truth score plus its named sub-scores, in insertion order."""

    truth_score: int
    factors: list[Factor] = Field(default_factory=list)

    @field_validator("truth_score", mode="before")
    @classmethod
    def _round_truth_score(cls, value):
        if isinstance(value, float):
            return round_half_up(value)
        return value


# ── Domain trust ───────────────────────────────────────────────────────

class SecurityHeaders(CamelModel):
    content_security: bool = False
    x_frame_options: bool = False
    strict_transport: bool = False

    @property
    def present_count(self) -> int:
        return sum((self.content_security, self.x_frame_options, self.strict_transport))


class ProbeResult(BaseModel):
    """Outcome of a HEAD probe against a URL. Header names are lower-cased."""

    success: bool = False
    headers: dict[str, str] = Field(default_factory=dict)


class TrustSignals(CamelModel):
    https: bool = False
    is_known_misinformation: bool = False
    is_credible_source: bool = False
    is_government_or_edu: bool = False
    trusted_tld: bool = False
    has_misinfo_keyword: bool = False
    official_subdomain: bool = False
    valid_ssl: bool = False
    security_headers: SecurityHeaders = Field(default_factory=SecurityHeaders)
    score: int = Field(default=50, ge=0, le=100)
    reason: str = ""


# ── Misinformation ─────────────────────────────────────────────────────

class MisinfoVerdict(CamelModel):
    is_misinformation: bool
    confidence: int = Field(ge=0, le=100)
    reason: str


# ── Structured extraction shapes ───────────────────────────────────────

class TextMetadata(CamelModel):
    factual_errors: int = Field(default=0, ge=0)
    misleading_claims: int = Field(default=0, ge=0)
    political_bias: str = "Unknown"
    sentiment: str = "Neutral"


class UrlMetadata(TextMetadata):
    title: str | None = None
    source: str | None = None
    publish_date: str | None = None
    indian_context: bool = False


class ImageDetails(CamelModel):
    manipulation_detected: bool = False
    manipulated_regions: list[str] = Field(default_factory=list)
    deepfake_confidence: float = Field(default=0, ge=0, le=100)
    original_found: bool = False
    original_source: str | None = None


class VideoDetails(CamelModel):
    manipulation_detected: bool = False
    deepfake_confidence: float = Field(default=0, ge=0, le=100)
    manipulated_elements: list[str] = Field(default_factory=list)
    inconsistencies: list[str] = Field(default_factory=list)
