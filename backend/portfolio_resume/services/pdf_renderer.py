"""
PDF Renderer — lay out a Resume as an A4 PDF with ReportLab.

Sections (each skipped when empty):
  - Name + contact line
  - Summary
  - Experience (description plus responsibility bullets)
  - Education
  - Skills
  - Projects (description, technologies, link)

Platypus handles page breaks, so long resumes paginate on their own.
"""

from __future__ import annotations

import io
import logging
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    HRFlowable,
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from portfolio_resume.exceptions import RenderError
from portfolio_resume.models.resume_models import Resume
from portfolio_resume.utils.formatting import contact_parts, date_range, institution_line
from portfolio_resume.utils.text_cleanup import extract_bullet_prefix

logger = logging.getLogger(__name__)

_MARGIN = 0.6 * inch
_TEXT = HexColor("#333333")
_MUTED = HexColor("#666666")
_ACCENT = HexColor("#1A1A1A")

STYLES = {
    "name": ParagraphStyle("Name", fontName="Helvetica-Bold", fontSize=22, leading=26, textColor=_ACCENT, spaceAfter=4),
    "contact": ParagraphStyle("Contact", fontName="Helvetica", fontSize=9, leading=12, textColor=_MUTED, spaceAfter=8),
    "section": ParagraphStyle("Section", fontName="Helvetica-Bold", fontSize=12, leading=15, textColor=_ACCENT, spaceBefore=10, spaceAfter=2),
    "body": ParagraphStyle("Body", fontName="Helvetica", fontSize=10, leading=13, textColor=_TEXT),
    "item_title": ParagraphStyle("ItemTitle", fontName="Helvetica-Bold", fontSize=11, leading=14, textColor=_ACCENT),
    "item_sub": ParagraphStyle("ItemSub", fontName="Helvetica", fontSize=10, leading=13, textColor=_TEXT),
    "meta": ParagraphStyle("Meta", fontName="Helvetica-Oblique", fontSize=9, leading=12, textColor=_MUTED),
    "date": ParagraphStyle("Date", fontName="Helvetica", fontSize=9, leading=14, textColor=_MUTED, alignment=TA_RIGHT),
    "bullet": ParagraphStyle("Bullet", fontName="Helvetica", fontSize=9.5, leading=12.5, textColor=_TEXT, leftIndent=12, firstLineIndent=-8),
}


def render_pdf(resume: Resume) -> bytes:
    """Render a Resume to PDF bytes. Raises RenderError."""
    try:
        pdf_bytes = _build(resume)
    except Exception as e:
        logger.error(f"PDF generation failed: {e}")
        raise RenderError(f"Failed to generate PDF: {e}") from e

    logger.info(f"PDF generated ({len(pdf_bytes)} bytes)")
    return pdf_bytes


def _build(resume: Resume) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=_MARGIN,
        rightMargin=_MARGIN,
        topMargin=_MARGIN,
        bottomMargin=_MARGIN,
        title=f"{resume.name} - Resume" if resume.name else "Resume",
    )
    width = A4[0] - 2 * _MARGIN

    story: list = []

    # ── Header ───────────────────────────────────────────────────────────
    if resume.name:
        story.append(Paragraph(_text(resume.name), STYLES["name"]))
    contacts = contact_parts(resume)
    if contacts:
        story.append(Paragraph("  |  ".join(_text(c) for c in contacts), STYLES["contact"]))

    # ── Summary ──────────────────────────────────────────────────────────
    if resume.summary:
        _section(story, "Summary", width)
        story.append(Paragraph(_text(resume.summary), STYLES["body"]))

    # ── Experience ───────────────────────────────────────────────────────
    if resume.experience:
        _section(story, "Experience", width)
        for exp in resume.experience:
            block = [
                _title_row(exp.title, date_range(exp), width),
                Paragraph(_text(exp.company), STYLES["item_sub"]),
            ]
            if exp.location:
                block.append(Paragraph(_text(exp.location), STYLES["meta"]))
            if exp.description:
                block.append(Spacer(1, 2))
                block.append(Paragraph(_text(exp.description), STYLES["body"]))
            for item in exp.responsibilities or []:
                block.append(Paragraph(f"• {_text(extract_bullet_prefix(item))}", STYLES["bullet"]))
            block.append(Spacer(1, 6))
            story.append(KeepTogether(block))

    # ── Education ────────────────────────────────────────────────────────
    if resume.education:
        _section(story, "Education", width)
        for edu in resume.education:
            block = [
                Paragraph(_text(edu.degree), STYLES["item_title"]),
                Paragraph(_text(institution_line(edu)), STYLES["item_sub"]),
            ]
            if edu.description:
                block.append(Paragraph(_text(edu.description), STYLES["body"]))
            block.append(Spacer(1, 6))
            story.append(KeepTogether(block))

    # ── Skills ───────────────────────────────────────────────────────────
    if resume.skills:
        _section(story, "Skills", width)
        story.append(Paragraph(_text(", ".join(resume.skills)), STYLES["body"]))

    # ── Projects ─────────────────────────────────────────────────────────
    if resume.projects:
        _section(story, "Projects", width)
        for proj in resume.projects:
            block = [Paragraph(_text(proj.name), STYLES["item_title"])]
            if proj.description:
                block.append(Paragraph(_text(proj.description), STYLES["body"]))
            if proj.technologies:
                block.append(Paragraph(f"Technologies: {_text(', '.join(proj.technologies))}", STYLES["meta"]))
            if proj.url:
                block.append(Paragraph(_text(proj.url), STYLES["meta"]))
            block.append(Spacer(1, 6))
            story.append(KeepTogether(block))

    if not story:
        # ReportLab refuses to build an empty document
        story.append(Spacer(1, 1))

    doc.build(story)
    return buffer.getvalue()


def _section(story: list, title: str, width: float) -> None:
    story.append(Paragraph(title.upper(), STYLES["section"]))
    story.append(HRFlowable(width=width, thickness=0.5, color=_MUTED, spaceBefore=1, spaceAfter=5))


def _title_row(title: str, dates: str, width: float) -> Table:
    """Bold title on the left, dates flush right, same line."""
    table = Table(
        [[Paragraph(_text(title), STYLES["item_title"]), Paragraph(_text(dates), STYLES["date"])]],
        colWidths=[width * 0.7, width * 0.3],
    )
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ("TOPPADDING", (0, 0), (-1, -1), 0),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
    ]))
    return table


def _text(value: str) -> str:
    """Escape for ReportLab's mini-markup and keep single lines single."""
    return escape(value).replace("\n", "<br/>")
