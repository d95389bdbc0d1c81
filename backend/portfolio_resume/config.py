from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Portfolio Resume Generator"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    frontend_url: str = "http://localhost:3000"

    # LLM API Keys (per-request headers take precedence over these server defaults)
    groq_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    # Default model selection
    llm_provider: str = "groq"
    llm_model: str = "llama-3.3-70b"
    validator_model: Optional[str] = None  # None → VALIDATOR_MODELS[provider]
    llm_timeout_seconds: float = 60.0

    # Scraping
    scrape_timeout_seconds: float = 20.0
    render_js: bool = True
    user_agent: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

    # Output (CLI)
    output_dir: str = "data/outputs"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


# ── Model Registry ──────────────────────────────────────────────────────────

MODELS = {
    "groq": {
        "llama-3.3-70b": {
            "name": "LLaMA 3.3 70B",
            "model_id": "groq/llama-3.3-70b-versatile",
            "description": "Best all-rounder for resume extraction and edits",
            "recommended": True,
        },
        "llama-3.1-8b": {
            "name": "LLaMA 3.1 8B Instant",
            "model_id": "groq/llama-3.1-8b-instant",
            "description": "Fast and cheap, used for content checks",
            "recommended": False,
        },
    },
    "google": {
        "gemini-2.0-flash": {
            "name": "Gemini 2.0 Flash",
            "model_id": "gemini/gemini-2.0-flash",
            "description": "Most reliable structured output",
            "recommended": True,
        },
        "gemini-1.5-flash": {
            "name": "Gemini 1.5 Flash",
            "model_id": "gemini/gemini-1.5-flash",
            "description": "Fallback when 2.0 hits rate limits",
            "recommended": False,
        },
    },
    "openrouter": {
        "deepseek-r1-0528": {
            "name": "DeepSeek R1 0528",
            "model_id": "openrouter/deepseek/deepseek-r1-0528:free",
            "description": "Deep reasoning, slower",
            "recommended": False,
        },
        "kimi-k2": {
            "name": "Kimi K2",
            "model_id": "openrouter/moonshotai/kimi-k2:free",
            "description": "Good with tech-heavy portfolios",
            "recommended": True,
        },
    },
}

# Small model used by the content check when the caller picks a provider
VALIDATOR_MODELS = {
    "groq": "llama-3.1-8b",
    "google": "gemini-1.5-flash",
    "openrouter": "kimi-k2",
}

# ── Prompt Configuration ────────────────────────────────────────────────────

PROMPT_CONFIG = {
    "content_validator": {"temperature": 0.1, "max_tokens": 200},
    "resume_extractor": {"temperature": 0.3, "max_tokens": 2048},
    "resume_editor": {"temperature": 0.3, "max_tokens": 2048},
}

# ── Input Budgets ───────────────────────────────────────────────────────────

VALIDATION_CHAR_LIMIT = 4000
EXTRACTION_CHAR_LIMIT = 8000
CRAWL_PAGE_LIMIT = 3
