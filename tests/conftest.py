"""Shared fakes for the LLM and network collaborators."""

from __future__ import annotations

import json
import os
from functools import partial
from unittest.mock import AsyncMock, patch

import pytest

# The LLM clients are built at import time; tests patch every call, so a placeholder key suffices.
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from engine.domain_trust import evaluate_domain_trust
from engine.extraction import JSON_INSTRUCTION
from prompts.system_prompt import MISINFO_VERIFICATION_PROMPT, REPUTATION_ROLE, VIDEO_ROLE
from schemas.analysis import ProbeResult
from services.cache import ResultCache
from services.llm_service import LLMError

PAGE_TEXT = "The Union Budget was presented in Parliament on Thursday with revised tax slabs."


class FakeLLM:
    """Canned replies keyed off the system prompt of each call."""

    def __init__(self) -> None:
        self.primary = "The article is well sourced and consistent with official records."
        self.media = "No signs of manipulation; the tone is neutral."
        self.reputation = "A long-established national daily with a record of accurate reporting."
        self.verdict = "NO"
        self.factors_reply = "I am unable to provide numeric scores for this content."
        self.metadata_reply = json.dumps(
            {
                "title": "Budget 2025",
                "source": "The Hindu",
                "publishDate": "2025-02-01",
                "factualErrors": 0,
                "misleadingClaims": 0,
                "politicalBias": "None",
                "sentiment": "Neutral",
                "indianContext": True,
            }
        )
        self.details_reply = "No JSON here."
        self.vision_reply = "The lighting and shadows are consistent; no cloning artifacts."
        self.video_reply = "The file metadata looks like a standard phone recording."
        self.summary = "The content appears credible."
        self.fail_summary = False
        self.fail_primary = False
        self.calls: list[tuple[str, str]] = []

    async def chat(self, system_prompt: str, user_message: str, **kwargs) -> str:
        self.calls.append((system_prompt, user_message))
        if system_prompt == MISINFO_VERIFICATION_PROMPT:
            return self.verdict
        if system_prompt.endswith(JSON_INSTRUCTION):
            if "factors" in system_prompt:
                return self.factors_reply
            if "metadata" in system_prompt:
                return self.metadata_reply
            return self.details_reply
        if system_prompt == REPUTATION_ROLE:
            return self.reputation
        if "summary" in system_prompt:
            if self.fail_summary:
                raise LLMError("summary provider down")
            return self.summary
        if system_prompt == VIDEO_ROLE:
            return self.video_reply
        return self.media

    async def analyze(self, prompt: str, system_role: str, **kwargs) -> str:
        self.calls.append((system_role, prompt))
        if self.fail_primary:
            raise LLMError("primary and fallback providers failed")
        return self.primary

    async def vision(self, system_prompt: str, prompt: str, image_bytes: bytes, mime_type: str, **kwargs) -> str:
        self.calls.append((system_prompt, prompt))
        return self.vision_reply


@pytest.fixture
def fake_llm():
    fake = FakeLLM()
    targets = {
        "engine.pipeline.chat_completion": fake.chat,
        "engine.pipeline.analyze_with_fallback": fake.analyze,
        "engine.pipeline.vision_completion": fake.vision,
        "engine.extraction.chat_completion": fake.chat,
        "engine.misinfo_classifier.chat_completion": fake.chat,
        "engine.reputation.chat_completion": fake.chat,
        "engine.summarizer.chat_completion": fake.chat,
    }
    patches = [patch(target, new=fn) for target, fn in targets.items()]
    for p in patches:
        p.start()
    yield fake
    for p in patches:
        p.stop()


@pytest.fixture
def fake_network():
    """Successful fetch and a probe that reaches HTTPS sites without security headers."""

    async def probe(url: str) -> ProbeResult:
        return ProbeResult(success=url.startswith("https://"))

    fetch = AsyncMock(return_value=PAGE_TEXT)
    with patch("engine.pipeline.fetch_url_content", new=fetch), patch(
        "engine.pipeline.evaluate_domain_trust", new=partial(evaluate_domain_trust, probe=probe)
    ):
        yield fetch


@pytest.fixture
def cache():
    return ResultCache(ttl_seconds=3600, max_entries=50)
