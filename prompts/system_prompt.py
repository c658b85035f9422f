"""System roles and prompt templates used by each pipeline stage.

Free-text stages (analysis, reputation, summary) ask for prose.  Stages whose
output is parsed (metadata, media details, factors) ask for JSON and go through
the extraction adapter, which tolerates non-compliant replies.
"""

from __future__ import annotations

import json

# ── Content analysis ──────────────────────────────────────────────────

PRIMARY_ANALYSIS_ROLE = (
    "You are a fact-checking assistant that analyzes content for credibility and accuracy. "
    "Provide detailed analysis on factual errors, source reputation, and potential misinformation, "
    "with particular attention to Indian news and content."
)

PRIMARY_TEXT_ANALYSIS_ROLE = (
    "You are a fact-checking assistant that analyzes content for credibility and accuracy. "
    "Provide detailed analysis on factual errors, and potential misinformation."
)

MEDIA_ANALYSIS_ROLE = (
    "You are a media analysis expert specialized in identifying patterns of misinformation, "
    "manipulated media, and bias in content, with particular expertise in Indian media and "
    "information ecosystem."
)

MEDIA_TEXT_ANALYSIS_ROLE = (
    "You are a media analysis expert specialized in identifying patterns of misinformation, "
    "AI-generated content, and bias. Analyze the provided content for these issues."
)


def build_url_analysis_prompt(url: str, content: str) -> str:
    return (
        f"Analyze this content from URL {url} for credibility, factual accuracy, and potential "
        "misinformation. If the content appears to be from India or about Indian topics, pay extra "
        f"attention to common misinformation patterns in Indian media:\n\n{content}"
    )


def build_url_media_prompt(url: str, content: str) -> str:
    return (
        f"Analyze this content from URL {url} for manipulation, bias, and signs of generated or "
        "misleading information. If the content relates to India, consider common patterns of "
        f"misinformation in Indian media:\n\n{content}"
    )


def build_text_analysis_prompt(text: str) -> str:
    return f"Analyze this content for credibility, factual accuracy, and potential misinformation:\n\n{text}"


def build_text_media_prompt(text: str) -> str:
    return f"Analyze this content for manipulation, bias, and signs of generated or misleading information:\n\n{text}"


# ── Source reputation ─────────────────────────────────────────────────

REPUTATION_ROLE = (
    "You are a media literacy expert who evaluates the credibility of news sources, "
    "with particular expertise in Indian media ecosystem."
)


def build_reputation_prompt(domain: str, trust_signals: dict) -> str:
    return (
        f'Provide a brief assessment of the credibility and reputation of "{domain}" as a news source '
        "or information provider. Consider factors such as their history of factual reporting, political "
        "bias, and reliability. If this is an Indian source, mention that specifically. Additionally, here "
        f"are technical trust signals about the site: {json.dumps(trust_signals, indent=2)}. "
        "Respond in 2-3 sentences."
    )


# ── Misinformation verification ───────────────────────────────────────

MISINFO_VERIFICATION_PROMPT = (
    "You are a fact-checking expert. Analyze the following content and determine if it contains "
    "misinformation, answering only YES or NO."
)


def build_verification_message(excerpt: str, matched: list[str]) -> str:
    if matched:
        findings = "this might be misinformation with these issues: " + ", ".join(matched)
    else:
        findings = "no issues identified"
    return (
        f'Content: "{excerpt}"\n\nAnalysis so far suggests {findings}. '
        "Is this content likely misinformation? Reply with ONLY a single word: YES or NO."
    )


# ── Structured extraction ─────────────────────────────────────────────

URL_METADATA_PROMPT = (
    "Extract key metadata from content. Format response as JSON with keys: title, source, publishDate, "
    "factualErrors (number), misleadingClaims (number), politicalBias (None, Slight, Moderate, Strong), "
    "sentiment (Positive, Negative, Neutral), indianContext (boolean, true if content relates to India)."
)

TEXT_METADATA_PROMPT = (
    "Extract key metadata from content. Format response as JSON with keys: factualErrors (number), "
    "misleadingClaims (number), politicalBias (None, Slight, Moderate, Strong), "
    "sentiment (Positive, Negative, Neutral)."
)

IMAGE_DETAILS_PROMPT = (
    "Based on the initial image analysis, provide specific details about potential manipulation. "
    "Format as JSON with keys: manipulationDetected (boolean), manipulatedRegions (array of strings), "
    "deepfakeConfidence (number 0-100), originalFound (boolean), originalSource (string or null)."
)

VIDEO_DETAILS_PROMPT = (
    "Based on the video analysis, estimate details about potential manipulation. Format as JSON with "
    "keys: manipulationDetected (boolean), deepfakeConfidence (number 0-100), manipulatedElements "
    "(array of strings), inconsistencies (array of strings)."
)


def build_metadata_prompt(content: str) -> str:
    return f"Extract metadata from this content:\n\n{content}"


def build_factors_prompt(content_type: str, factor_names: tuple[str, ...]) -> str:
    numbered = "\n".join(f"{i}. {name}" for i, name in enumerate(factor_names, start=1))
    subject = {"image": "image analysis", "video": "video analysis"}.get(content_type, "analysis")
    return (
        f"Based on the {subject}, calculate {len(factor_names)} factors with scores from 0-100:\n"
        f"{numbered}\n\n"
        "Also calculate an overall truth score from 0-100. Format as JSON with keys: truthScore and "
        "factors (array of objects with name and score)."
    )


# ── Image / video ─────────────────────────────────────────────────────

VISION_ROLE = (
    "You are an expert in detecting image manipulation, deepfakes, and visual misinformation. "
    "Analyze the provided image in detail for signs of manipulation."
)

VISION_PROMPT = (
    "Analyze this image for signs of manipulation, photoshopping, or deepfake technology. Look for "
    "inconsistencies, artifacts, unnatural elements, and other signs of digital alteration."
)

VIDEO_ROLE = (
    "You are an expert in detecting video manipulation and deepfakes. Based on the limited "
    "information provided, estimate the likelihood of manipulation."
)


def build_video_prompt(filename: str, size: int, mime_type: str) -> str:
    return f"Analyze this video file information:\nFilename: {filename}\nSize: {size} bytes\nMIME type: {mime_type}"


# ── Summary ───────────────────────────────────────────────────────────

URL_SUMMARY_ROLE = (
    "Provide a concise 3-4 sentence summary of the analysis, highlighting key findings about the "
    "content credibility, factual accuracy, and potential issues. If the content relates to India, "
    "mention this specifically."
)

TEXT_SUMMARY_ROLE = (
    "Provide a concise 3-4 sentence summary of the analysis, highlighting key findings about the "
    "content credibility, factual accuracy, and potential issues."
)

IMAGE_SUMMARY_ROLE = (
    "Provide a concise 3-4 sentence summary of the image analysis, highlighting key findings about "
    "authenticity and potential manipulation."
)

VIDEO_SUMMARY_ROLE = (
    "Provide a concise 3-4 sentence summary of the video analysis, acknowledging the limitations of "
    "the analysis and highlighting potential authenticity concerns."
)
