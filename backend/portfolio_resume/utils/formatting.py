"""
Display helpers shared by the PDF and DOCX renderers.
"""

from __future__ import annotations

from portfolio_resume.models.resume_models import (
    EducationEntry,
    ExperienceEntry,
    Resume,
)


def contact_parts(resume: Resume) -> list[str]:
    """Contact fields that are present, in header order."""
    return [v for v in (resume.email, resume.phone, resume.website, resume.location) if v]


def date_range(exp: ExperienceEntry) -> str:
    """'start - end', or whichever side exists."""
    if exp.start_date and exp.end_date:
        return f"{exp.start_date} - {exp.end_date}"
    return exp.start_date or exp.end_date or ""


def institution_line(edu: EducationEntry) -> str:
    line = edu.institution
    if edu.location:
        line += f", {edu.location}"
    if edu.year:
        line += f" • {edu.year}"
    return line
