"""
Request-scoped helpers — extract API keys from headers, resolve active model, etc.
"""

from __future__ import annotations

from fastapi import Depends, Header
from typing import Optional

from portfolio_resume.config import MODELS, settings
from portfolio_resume.services.llm_service import LLMSelection, get_recommended_model


class APIKeys:
    """Container for per-request API keys (headers first, then server defaults)."""

    def __init__(
        self,
        groq: str | None = None,
        google: str | None = None,
        openrouter: str | None = None,
    ):
        self.groq = groq
        self.google = google
        self.openrouter = openrouter

    def get_key(self, provider: str) -> str | None:
        """Get the key for a specific provider."""
        return getattr(self, provider, None)

    def available_providers(self) -> list[str]:
        return [p for p in ("groq", "google", "openrouter") if self.get_key(p)]


async def get_api_keys(
    x_groq_key: Optional[str] = Header(None, alias="X-Groq-Key"),
    x_google_key: Optional[str] = Header(None, alias="X-Google-Key"),
    x_openrouter_key: Optional[str] = Header(None, alias="X-OpenRouter-Key"),
) -> APIKeys:
    """FastAPI dependency that extracts API keys from request headers."""
    return APIKeys(
        groq=x_groq_key or settings.groq_api_key,
        google=x_google_key or settings.gemini_api_key,
        openrouter=x_openrouter_key or settings.openrouter_api_key,
    )


async def get_llm_selection(
    provider: Optional[str] = Header(None, alias="X-LLM-Provider"),
    model_key: Optional[str] = Header(None, alias="X-LLM-Model"),
    api_keys: APIKeys = Depends(get_api_keys),
) -> LLMSelection:
    """
    Resolve provider, model and key for this request.

    A missing key is not rejected here; the pipeline validates the request
    body first and raises ConfigurationError afterwards.
    """
    return build_llm_selection(provider, model_key, api_keys)


def build_llm_selection(
    provider: str | None,
    model_key: str | None,
    api_keys: APIKeys,
) -> LLMSelection:
    provider = (provider or settings.llm_provider).strip().lower()
    if model_key:
        model_key = model_key.strip()
    elif provider == settings.llm_provider:
        model_key = settings.llm_model
    elif provider in MODELS:
        model_key = get_recommended_model(provider)
    else:
        model_key = ""
    return LLMSelection(
        provider=provider,
        model_key=model_key,
        api_key=api_keys.get_key(provider),
        validator_model_key=settings.validator_model if provider == settings.llm_provider else None,
    )

