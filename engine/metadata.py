"""Metadata and media-detail extraction through the JSON adapter."""

from __future__ import annotations

from engine.extraction import extract_model
from prompts.system_prompt import (
    IMAGE_DETAILS_PROMPT,
    TEXT_METADATA_PROMPT,
    URL_METADATA_PROMPT,
    VIDEO_DETAILS_PROMPT,
    build_metadata_prompt,
)
from schemas.analysis import ImageDetails, TextMetadata, UrlMetadata, VideoDetails


async def extract_url_metadata(content: str, domain: str, today: str) -> UrlMetadata:
    fallback = UrlMetadata(title=domain, source=domain, publish_date=today)
    return await extract_model(URL_METADATA_PROMPT, build_metadata_prompt(content), fallback)


async def extract_text_metadata(content: str) -> TextMetadata:
    return await extract_model(TEXT_METADATA_PROMPT, build_metadata_prompt(content), TextMetadata())


async def extract_image_details(vision_analysis: str) -> ImageDetails:
    return await extract_model(IMAGE_DETAILS_PROMPT, f"Initial analysis: {vision_analysis}", ImageDetails())


async def extract_video_details(basic_analysis: str) -> VideoDetails:
    return await extract_model(VIDEO_DETAILS_PROMPT, f"Video analysis: {basic_analysis}", VideoDetails())
