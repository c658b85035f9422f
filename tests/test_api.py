"""Tests for the FastAPI routes (mocked LLM and network)."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app
from services.cache import ResultCache
from services.fetcher import FetchError


client = TestClient(app)


@pytest.fixture(autouse=True)
def _fresh_cache():
    with patch("engine.pipeline.result_cache", new=ResultCache()):
        yield


class TestHealthEndpoint:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["version"] == "0.1.0"
        assert set(data["cache"]) == {"entries", "hits", "misses", "hit_rate"}


class TestTextEndpoint:
    def test_successful_analysis(self, fake_llm):
        resp = client.post("/analyze/text", json={"text": "The Union Budget was presented on Thursday."})
        assert resp.status_code == 200
        data = resp.json()

        assert data["type"] == "text"
        assert data["truthScore"] == 50
        assert len(data["factors"]) == 4
        assert data["misinformation"] == {"detected": False, "confidence": None, "reason": None}
        assert data["primaryAnalysis"] == fake_llm.primary
        assert data["summary"] == fake_llm.summary
        assert "truth_score" not in data

    def test_empty_text_is_400(self):
        resp = client.post("/analyze/text", json={"text": ""})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Text content is required", "message": "Text content is required"}

    def test_missing_body_rejected(self):
        resp = client.post("/analyze/text", json={})
        assert resp.status_code == 422

    def test_provider_failure_is_500(self, fake_llm):
        fake_llm.fail_primary = True
        resp = client.post("/analyze/text", json={"text": "Some claim worth checking."})
        assert resp.status_code == 500
        data = resp.json()
        assert data["error"] == "Failed to analyze text"
        assert "providers failed" in data["message"]


class TestUrlEndpoint:
    def test_successful_analysis(self, fake_llm, fake_network):
        resp = client.post("/analyze/url", json={"url": "https://www.thehindu.com/news/budget"})
        assert resp.status_code == 200
        data = resp.json()

        assert data["type"] == "url"
        assert data["truthScore"] == 66
        assert data["credibility"] == "Medium"
        assert data["trustSignals"]["score"] == 90
        assert data["trustSignals"]["isCredibleSource"] is True
        assert data["sourceReputation"] == fake_llm.reputation

    def test_fetch_failure_is_500(self, fake_llm, fake_network):
        fake_network.side_effect = FetchError("Failed to fetch URL content: 503")
        resp = client.post("/analyze/url", json={"url": "https://www.thehindu.com/news/budget"})
        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Failed to analyze URL",
            "message": "Failed to fetch URL content: 503",
        }

    def test_blank_url_is_400(self, fake_llm, fake_network):
        resp = client.post("/analyze/url", json={"url": "   "})
        assert resp.status_code == 400
        assert resp.json()["error"] == "URL is required"

    def test_empty_url_is_400(self, fake_llm, fake_network):
        resp = client.post("/analyze/url", json={"url": ""})
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required", "message": "URL is required"}
        fake_network.assert_not_called()


class TestUploadEndpoints:
    def test_image_upload(self, fake_llm):
        resp = client.post("/analyze/image", files={"image": ("photo.jpg", b"\xff\xd8\xff\xe0" * 16, "image/jpeg")})
        assert resp.status_code == 200
        data = resp.json()
        assert data["type"] == "image"
        assert data["filename"] == "photo.jpg"
        assert data["visionAnalysis"] == fake_llm.vision_reply
        assert data["manipulationDetected"] is False

    def test_non_image_upload_is_400(self, fake_llm):
        resp = client.post("/analyze/image", files={"image": ("notes.txt", b"hello", "text/plain")})
        assert resp.status_code == 400
        assert "text/plain" in resp.json()["message"]

    def test_missing_image_is_422(self):
        resp = client.post("/analyze/image")
        assert resp.status_code == 422

    def test_video_upload(self, fake_llm):
        resp = client.post("/analyze/video", files={"video": ("clip.mp4", b"\x00" * 64, "video/mp4")})
        assert resp.status_code == 200
        data = resp.json()
        assert data["type"] == "video"
        assert data["basicAnalysis"] == fake_llm.video_reply

    def test_oversized_upload_is_413(self, fake_llm):
        with patch.object(settings, "max_upload_bytes", 16):
            resp = client.post("/analyze/video", files={"video": ("clip.mp4", b"\x00" * 17, "video/mp4")})
        assert resp.status_code == 413
        assert resp.json()["error"] == "File too large"
