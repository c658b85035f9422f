"""Thin wrapper around LLM providers (OpenAI / Azure / local-compatible, plus the
OpenAI-compatible primary analysis endpoint)."""

from __future__ import annotations

import base64
import logging
from typing import Any

from openai import AsyncAzureOpenAI, AsyncOpenAI
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from config import settings

logger = logging.getLogger("truthscan.llm")

PRIMARY = "primary"
DEFAULT = "default"

FALLBACK_ROLE_NOTE = " (Note: This is a fallback analysis as the primary service is unavailable.)"
FALLBACK_TEXT_NOTE = " [Analysis provided by fallback service]"


def _build_client() -> tuple[AsyncOpenAI, str]:
    """Return (async_client, model_name) based on the configured provider."""
    provider = settings.llm_provider.lower()

    if provider == "azure":
        client = AsyncAzureOpenAI(
            azure_endpoint=settings.azure_openai_endpoint,
            api_key=settings.azure_openai_api_key,
            api_version="2024-12-01-preview",
        )
        model = settings.azure_openai_deployment
    elif provider == "local":
        client = AsyncOpenAI(
            base_url=settings.local_llm_base_url,
            api_key="not-needed",
        )
        model = settings.local_llm_model
    else:  # default: openai
        client = AsyncOpenAI(api_key=settings.openai_api_key)
        model = settings.openai_model

    return client, model


def _build_primary_client() -> tuple[AsyncOpenAI, str]:
    client = AsyncOpenAI(
        base_url=settings.perplexity_base_url,
        api_key=settings.perplexity_api_key or "not-configured",
    )
    return client, settings.perplexity_model


def _vision_model() -> str:
    """Azure and local providers address the model by deployment / local name."""
    provider = settings.llm_provider.lower()
    if provider == "azure":
        return settings.azure_openai_deployment
    if provider == "local":
        return settings.local_llm_model
    return settings.openai_vision_model


_client, _model = _build_client()
_primary_client, _primary_model = _build_primary_client()


class LLMError(Exception):
    """Raised when an LLM call fails after retries."""


@retry(
    stop=stop_after_attempt(settings.llm_max_attempts),
    wait=wait_exponential(multiplier=1, min=2, max=30),
    retry=retry_if_exception_type(Exception),
    reraise=True,
)
async def _complete(
    client: AsyncOpenAI,
    model: str,
    messages: list[dict[str, Any]],
    max_tokens: int,
) -> str:
    response = await client.chat.completions.create(
        model=model,
        messages=messages,
        max_tokens=max_tokens,
        temperature=settings.llm_temperature,
    )
    content = response.choices[0].message.content
    if content is None:
        raise LLMError("LLM returned empty content.")
    return content.strip()


async def chat_completion(
    system_prompt: str,
    user_message: str,
    *,
    max_tokens: int = 1000,
    provider: str = DEFAULT,
) -> str:
    """Send a chat-completion request and return the assistant's text reply.

    Parameters
    ----------
    system_prompt : str
        The system-level instruction.
    user_message : str
        The user-level content to analyse.
    max_tokens : int
        Completion length cap.
    provider : str
        ``"default"`` for the configured OpenAI-family client, ``"primary"``
        for the primary analysis endpoint.

    Raises
    ------
    LLMError
        When the provider still fails after retries.
    """
    client, model = (_primary_client, _primary_model) if provider == PRIMARY else (_client, _model)
    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_message},
    ]
    try:
        return await _complete(client, model, messages, max_tokens)
    except LLMError:
        raise
    except Exception as exc:
        logger.error("LLM call to %s provider failed: %s", provider, exc)
        raise LLMError(f"{provider} LLM call failed: {exc}") from exc


async def analyze_with_fallback(prompt: str, system_role: str, *, max_tokens: int = 1000) -> str:
    """Run the general analysis on the primary provider, retrying once on the default one.

    A fallback answer carries a trailing note so callers can tell the analysis
    was degraded.  Raises ``LLMError`` only when both providers fail.
    """
    try:
        return await chat_completion(system_role, prompt, max_tokens=max_tokens, provider=PRIMARY)
    except LLMError as exc:
        logger.warning("Primary analysis failed, falling back: %s", exc)

    text = await chat_completion(system_role + FALLBACK_ROLE_NOTE, prompt, max_tokens=max_tokens)
    return text + FALLBACK_TEXT_NOTE


async def vision_completion(
    system_prompt: str,
    prompt: str,
    image_bytes: bytes,
    mime_type: str,
    *,
    max_tokens: int = 1000,
) -> str:
    """Ask the vision model about an image.  No fallback provider."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    messages = [
        {"role": "system", "content": system_prompt},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}},
            ],
        },
    ]
    try:
        return await _complete(_client, _vision_model(), messages, max_tokens)
    except LLMError:
        raise
    except Exception as exc:
        logger.error("Vision LLM call failed: %s", exc)
        raise LLMError(f"Vision LLM call failed: {exc}") from exc
