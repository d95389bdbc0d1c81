"""
Error taxonomy for the resume pipeline.

Every collaborator failure (scraper, model provider, renderer) is caught at
its boundary and re-raised as one of these, so routes and the CLI only ever
deal with ResumeServiceError subclasses.
"""

from typing import Optional


class ResumeServiceError(Exception):
    """
    Base class for all caller-facing pipeline errors.

    Attributes:
        message: Short, user-readable error description
        details: Optional longer hint for the user
        error_type: Stable machine-readable tag used in API responses
        status_code: HTTP status the API layer maps this error to
    """

    error_type = "internal"
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict:
        body = {"error": self.message, "errorType": self.error_type}
        if self.details:
            body["details"] = self.details
        return body


class InputError(ResumeServiceError):
    """Missing or malformed caller input (URL, resume, instruction)."""

    error_type = "invalid_input"
    status_code = 400


class ConfigurationError(ResumeServiceError):
    """A required external-service credential is not configured."""

    error_type = "configuration"
    status_code = 500


class ExtractionSourceError(ResumeServiceError):
    """
    The content source could not be read.

    `blocked` distinguishes sites that actively refuse access (403, bot
    protection, block lists) from plain network or HTTP failures, so the
    caller can suggest trying a different URL.
    """

    def __init__(self, message: str, details: Optional[str] = None, blocked: bool = False):
        self.blocked = blocked
        super().__init__(message, details)

    @property
    def error_type(self) -> str:  # type: ignore[override]
        return "blocklisted" if self.blocked else "source_unavailable"

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return 403 if self.blocked else 502


class NoContentError(ResumeServiceError):
    """The source was reachable but yielded no readable text."""

    error_type = "no_content"
    status_code = 422


class InsufficientContentError(ResumeServiceError):
    """The content check judged the text too sparse to build a resume."""

    error_type = "insufficient_content"
    status_code = 400


class ExtractionError(ResumeServiceError):
    """The model produced no usable resume from the scraped text."""

    error_type = "extraction_failed"
    status_code = 502


class MutationError(ResumeServiceError):
    """The model produced no usable resume for the requested edit."""

    error_type = "mutation_failed"
    status_code = 502


class RenderError(ResumeServiceError):
    """The resume could not be turned into a document."""

    error_type = "render_failed"
    status_code = 500
