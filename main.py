"""TruthScan — content credibility scoring service.

FastAPI application entry-point.
Consumed by the web front-end and the browser extension.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from engine.pipeline import (
    AnalysisInputError,
    analyze_image,
    analyze_text,
    analyze_url,
    analyze_video,
)
from schemas.request import TextAnalysisRequest, UrlAnalysisRequest
from schemas.response import (
    ErrorResponse,
    ImageAnalysisResult,
    TextAnalysisResult,
    UrlAnalysisResult,
    VideoAnalysisResult,
)
from services.cache import result_cache

VERSION = "0.1.0"

# ── Logging ────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("truthscan")


# ── Lifespan ───────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    logger.info(
        "TruthScan starting — provider=%s model=%s primary=%s cache_ttl=%ds",
        settings.llm_provider,
        settings.openai_model,
        settings.perplexity_model,
        settings.cache_ttl_seconds,
    )
    yield
    logger.info("TruthScan shutting down.")


# ── App ────────────────────────────────────────────────────────────────

app = FastAPI(
    title="TruthScan",
    description="Truth scoring for URLs, text, images and videos.",
    version=VERSION,
    lifespan=lifespan,
)

# Parse allowed_origins (comma-separated string → list)
_origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@app.exception_handler(HTTPException)
async def _error_body(request: Request, exc: HTTPException):
    # Analysis failures carry {"error", "message"} as the whole body.
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=exc.headers)
    return await http_exception_handler(request, exc)


def _failure(status_code: int, error: str, exc: Exception) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": error, "message": str(exc)})


async def _read_upload(upload: UploadFile) -> bytes:
    data = await upload.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail={"error": "File too large", "message": f"Limit is {settings.max_upload_bytes} bytes."},
        )
    return data


# ── Routes ─────────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {
        "status": "ok",
        "engine": "truthscan",
        "version": VERSION,
        "cache": result_cache.stats,
    }


@app.post(
    "/analyze/url",
    response_model=UrlAnalysisResult,
    responses=_ERROR_RESPONSES,
    summary="Analyse a web page",
)
async def analyze_url_route(payload: UrlAnalysisRequest) -> UrlAnalysisResult:
    try:
        return await analyze_url(payload.url)
    except AnalysisInputError as exc:
        raise _failure(400, "URL is required", exc) from exc
    except Exception as exc:
        logger.exception("Error analyzing URL")
        raise _failure(500, "Failed to analyze URL", exc) from exc


@app.post(
    "/analyze/text",
    response_model=TextAnalysisResult,
    responses=_ERROR_RESPONSES,
    summary="Analyse free text",
)
async def analyze_text_route(payload: TextAnalysisRequest) -> TextAnalysisResult:
    try:
        return await analyze_text(payload.text)
    except AnalysisInputError as exc:
        raise _failure(400, "Text content is required", exc) from exc
    except Exception as exc:
        logger.exception("Error analyzing text")
        raise _failure(500, "Failed to analyze text", exc) from exc


@app.post(
    "/analyze/image",
    response_model=ImageAnalysisResult,
    responses=_ERROR_RESPONSES,
    summary="Analyse an uploaded image for manipulation",
)
async def analyze_image_route(image: UploadFile = File(...)) -> ImageAnalysisResult:
    data = await _read_upload(image)
    try:
        return await analyze_image(image.filename or "", data, image.content_type or "")
    except AnalysisInputError as exc:
        raise _failure(400, "Image file is required", exc) from exc
    except Exception as exc:
        logger.exception("Error analyzing image")
        raise _failure(500, "Failed to analyze image", exc) from exc


@app.post(
    "/analyze/video",
    response_model=VideoAnalysisResult,
    responses=_ERROR_RESPONSES,
    summary="Estimate video authenticity from file metadata",
)
async def analyze_video_route(video: UploadFile = File(...)) -> VideoAnalysisResult:
    data = await _read_upload(video)
    try:
        return await analyze_video(video.filename or "", len(data), video.content_type or "unknown")
    except AnalysisInputError as exc:
        raise _failure(400, "Video file is required", exc) from exc
    except Exception as exc:
        logger.exception("Error analyzing video")
        raise _failure(500, "Failed to analyze video", exc) from exc


# ── Dev runner ─────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        reload=True,
    )
