from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


# ── Sub-Models ──────────────────────────────────────────────────────────────


class ExperienceEntry(BaseModel):
    """A single work experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    company: str
    location: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    description: Optional[str] = None
    responsibilities: Optional[list[str]] = None


class EducationEntry(BaseModel):
    """A single education entry."""

    degree: str
    institution: str
    location: Optional[str] = None
    year: Optional[str] = None
    description: Optional[str] = None


class ProjectEntry(BaseModel):
    """A single portfolio project."""

    name: str
    description: Optional[str] = None
    technologies: Optional[list[str]] = None
    url: Optional[str] = None


# ── Main Resume Model ──────────────────────────────────────────────────────


class Resume(BaseModel):
    """
    Structured resume built from a portfolio site.

    Every edit produces a whole new Resume; nothing patches one in place.
    The four collections are always lists so renderers can iterate them
    without checks.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    skills: list[str] = []
    projects: list[ProjectEntry] = []

    def to_payload(self) -> dict:
        """JSON-ready dict using the camelCase wire keys."""
        return self.model_dump(mode="json", by_alias=True)


# ── Request / Response Models ───────────────────────────────────────────────


class ScrapeMode(str, Enum):
    """How much of the site to read."""

    SCRAPE = "scrape"  # single page
    CRAWL = "crawl"  # same-site crawl, limited page count


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"


class GenerateResumeRequest(BaseModel):
    """Input for building a resume from a portfolio URL."""

    url: Optional[str] = None
    mode: ScrapeMode = ScrapeMode.SCRAPE
    format: DocumentFormat = DocumentFormat.PDF


class ModifyResumeRequest(BaseModel):
    """Input for applying a free-text edit to an existing resume."""

    model_config = ConfigDict(populate_by_name=True)

    resume_data: Optional[Resume] = Field(default=None, alias="resumeData")
    modification: Optional[str] = None
    format: DocumentFormat = DocumentFormat.PDF


class RenderRequest(BaseModel):
    """Input for rendering a resume without any model call."""

    model_config = ConfigDict(populate_by_name=True)

    resume_data: Optional[Resume] = Field(default=None, alias="resumeData")
    format: DocumentFormat = DocumentFormat.PDF


class ResumeDocumentResponse(BaseModel):
    """
    Rendered document plus the resume it was built from.

    The document field stays named `pdf` (base64) even for DOCX output,
    so existing clients keep working.
    """

    model_config = ConfigDict(populate_by_name=True)

    pdf: str
    resume_data: Resume = Field(alias="resumeData")
    format: DocumentFormat = DocumentFormat.PDF
    file_name: str = Field(alias="fileName")
