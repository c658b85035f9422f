"""TruthScan configuration — loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- LLM provider (structured extraction, verification, summaries) --
    llm_provider: str = "openai"  # "openai" | "azure" | "local"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_vision_model: str = "gpt-4o"

    # Azure OpenAI
    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_deployment: str = ""

    # Local / Ollama
    local_llm_base_url: str = "http://localhost:11434/v1"
    local_llm_model: str = "llama3"

    # --- Primary analysis provider (OpenAI-compatible endpoint) ---------
    perplexity_api_key: str = ""
    perplexity_base_url: str = "https://api.perplexity.ai"
    perplexity_model: str = "r1-1776"

    llm_temperature: float = 0.2
    llm_max_attempts: int = 3

    # --- Server ---------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"
    allowed_origins: str = "*"  # comma-separated origins, e.g. "http://localhost:5173,chrome-extension://abc"

    # --- Result cache ---------------------------------------------------
    cache_ttl_seconds: int = 3600
    cache_max_entries: int = 500

    # --- Network collaborators ------------------------------------------
    probe_timeout: float = 5.0
    probe_max_redirects: int = 3
    fetch_timeout: float = 15.0

    # --- Pipeline -------------------------------------------------------
    max_content_chars: int = 4000
    max_upload_bytes: int = 10 * 1024 * 1024


settings = Settings()
