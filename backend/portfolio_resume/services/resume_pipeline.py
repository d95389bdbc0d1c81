"""
Resume Pipeline — the two caller-facing operations.

  generate_resume: URL → scrape → content check → extraction → document
  modify_resume:   (Resume, instruction) → edit → document

Input is validated before any collaborator is contacted, then credentials,
then the stages run in order. Each stage raises a ResumeServiceError
subclass; the content check is the only stage whose failures are ignored.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from portfolio_resume.exceptions import (
    ConfigurationError,
    ExtractionSourceError,
    InputError,
    InsufficientContentError,
    NoContentError,
    ResumeServiceError,
)
from portfolio_resume.models.resume_models import DocumentFormat, Resume, ScrapeMode
from portfolio_resume.services import content_gate, extraction_service, mutation_service, scraper_service
from portfolio_resume.services.docx_builder import build_docx
from portfolio_resume.services.llm_service import LLMSelection, is_known_model
from portfolio_resume.services.pdf_renderer import render_pdf

logger = logging.getLogger(__name__)

_MEDIA_TYPES = {
    DocumentFormat.PDF: "application/pdf",
    DocumentFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

_RENDERERS = {
    DocumentFormat.PDF: render_pdf,
    DocumentFormat.DOCX: build_docx,
}


@dataclass(frozen=True)
class ResumeDocument:
    """A rendered document together with the resume it shows."""

    document: bytes
    resume: Resume
    format: DocumentFormat = DocumentFormat.PDF

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self.format]

    @property
    def file_extension(self) -> str:
        return self.format.value

    def file_name(self, suffix: str = "resume") -> str:
        stem = _slug(self.resume.name) if self.resume.name else ""
        return f"{stem}-{suffix}.{self.file_extension}" if stem else f"{suffix}.{self.file_extension}"


# ── Public API ───────────────────────────────────────────────────────────────


async def generate_resume(
    url: str | None,
    llm: LLMSelection,
    mode: ScrapeMode = ScrapeMode.SCRAPE,
    output_format: DocumentFormat = DocumentFormat.PDF,
) -> ResumeDocument:
    """Build a resume and document from a portfolio URL."""
    url = validate_url(url)
    _check_llm(llm)

    content = await _scrape(url, mode)
    if not content.strip():
        raise NoContentError(
            "Failed to extract content from the website. "
            "The website may be inaccessible or have no readable content."
        )

    assessment = await content_gate.assess(content, llm)
    if not assessment.valid:
        raise InsufficientContentError(
            "Insufficient content for resume",
            details=assessment.reason or (
                "The website does not contain enough information to create a basic resume. "
                "Please ensure the portfolio includes your name, projects, skills, or professional experience."
            ),
        )

    resume = await extraction_service.extract(content, llm)
    return await render_document(resume, output_format)


async def modify_resume(
    resume: Resume | None,
    instruction: str | None,
    llm: LLMSelection,
    output_format: DocumentFormat = DocumentFormat.PDF,
) -> ResumeDocument:
    """Apply a free-text edit to a resume and re-render it."""
    if resume is None:
        raise InputError("Resume data is required")
    if not instruction or not instruction.strip():
        raise InputError("Modification request is required")
    _check_llm(llm)

    updated = await mutation_service.mutate(resume, instruction, llm)
    return await render_document(updated, output_format)


async def render_document(
    resume: Resume,
    output_format: DocumentFormat = DocumentFormat.PDF,
) -> ResumeDocument:
    """Render off the event loop; ReportLab and python-docx are CPU-bound."""
    renderer = _RENDERERS[output_format]
    document = await asyncio.to_thread(renderer, resume)
    return ResumeDocument(document=document, resume=resume, format=output_format)


def validate_url(url: str | None) -> str:
    """Return the trimmed URL, or raise InputError."""
    if not url or not url.strip():
        raise InputError("URL is required")
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InputError("Invalid URL format", details="Use a full address like https://example.dev")
    return url


# ── Helpers ──────────────────────────────────────────────────────────────────


def _check_llm(llm: LLMSelection) -> None:
    if not is_known_model(llm.provider, llm.model_key):
        raise InputError(f"Unknown model '{llm.model_key}' for provider '{llm.provider}'")
    if not llm.api_key:
        raise ConfigurationError(f"API key for provider '{llm.provider}' is not configured")


async def _scrape(url: str, mode: ScrapeMode) -> str:
    try:
        return await scraper_service.extract_content(url, mode)
    except ResumeServiceError:
        raise
    except Exception as e:
        logger.error(f"Scraper error for {url}: {e}")
        raise ExtractionSourceError(f"Failed to scrape website: {e}") from e


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
