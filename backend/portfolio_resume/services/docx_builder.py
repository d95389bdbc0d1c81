"""
DOCX Builder Service — generate an editable Word resume from a Resume.

Uses python-docx to create a clean, ATS-friendly single-column resume with:
  - Name + contact info header
  - Summary
  - Experience (with bullet points)
  - Education
  - Skills
  - Projects
"""

from __future__ import annotations

import io
import logging

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from portfolio_resume.exceptions import RenderError
from portfolio_resume.models.resume_models import Resume
from portfolio_resume.utils.formatting import contact_parts, date_range, institution_line
from portfolio_resume.utils.text_cleanup import extract_bullet_prefix

logger = logging.getLogger(__name__)


def build_docx(resume: Resume) -> bytes:
    """Render a Resume to DOCX bytes. Raises RenderError."""
    try:
        buffer = _build(resume)
    except Exception as e:
        logger.error(f"DOCX generation failed: {e}")
        raise RenderError(f"Failed to generate DOCX: {e}") from e

    data = buffer.getvalue()
    logger.info(f"DOCX generated ({len(data)} bytes)")
    return data


def _build(resume: Resume) -> io.BytesIO:
    doc = Document()

    # ── Page margins ─────────────────────────────────────────────────────
    for section in doc.sections:
        section.top_margin = Inches(0.5)
        section.bottom_margin = Inches(0.5)
        section.left_margin = Inches(0.6)
        section.right_margin = Inches(0.6)

    # ── Default font ─────────────────────────────────────────────────────
    style = doc.styles["Normal"]
    font = style.font
    font.name = "Calibri"
    font.size = Pt(10)
    font.color.rgb = RGBColor(0x33, 0x33, 0x33)

    # Reduce paragraph spacing globally
    style.paragraph_format.space_before = Pt(0)
    style.paragraph_format.space_after = Pt(2)

    # ── Name ─────────────────────────────────────────────────────────────
    if resume.name:
        name_para = doc.add_paragraph()
        name_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        name_run = name_para.add_run(resume.name)
        name_run.bold = True
        name_run.font.size = Pt(18)
        name_run.font.color.rgb = RGBColor(0x1A, 0x1A, 0x1A)
        name_para.paragraph_format.space_after = Pt(2)

    # ── Contact Line ─────────────────────────────────────────────────────
    contacts = contact_parts(resume)
    if contacts:
        contact_para = doc.add_paragraph()
        contact_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        contact_run = contact_para.add_run(" | ".join(contacts))
        contact_run.font.size = Pt(9)
        contact_run.font.color.rgb = RGBColor(0x55, 0x55, 0x55)
        contact_para.paragraph_format.space_after = Pt(4)

    # ── Section: Summary ─────────────────────────────────────────────────
    if resume.summary:
        _add_section_heading(doc, "SUMMARY")
        sum_para = doc.add_paragraph(resume.summary)
        sum_para.paragraph_format.space_after = Pt(4)

    # ── Section: Experience ──────────────────────────────────────────────
    if resume.experience:
        _add_section_heading(doc, "EXPERIENCE")
        for exp in resume.experience:
            title_para = doc.add_paragraph()
            title_run = title_para.add_run(exp.title)
            title_run.bold = True
            title_run.font.size = Pt(10)

            sep_run = title_para.add_run(f", {exp.company}")
            sep_run.font.size = Pt(10)
            sep_run.font.color.rgb = RGBColor(0x44, 0x44, 0x44)

            # Dates (right-aligned via tab)
            dates = date_range(exp)
            if dates:
                date_run = title_para.add_run(f"\t{dates}")
                date_run.font.size = Pt(9)
                date_run.font.color.rgb = RGBColor(0x66, 0x66, 0x66)
                title_para.paragraph_format.tab_stops.add_tab_stop(Inches(7.3), WD_TAB_ALIGNMENT.RIGHT)

            title_para.paragraph_format.space_before = Pt(6)
            title_para.paragraph_format.space_after = Pt(1)

            if exp.location:
                loc_para = doc.add_paragraph()
                loc_run = loc_para.add_run(exp.location)
                loc_run.italic = True
                loc_run.font.size = Pt(9)
                loc_run.font.color.rgb = RGBColor(0x66, 0x66, 0x66)

            if exp.description:
                doc.add_paragraph(exp.description)

            for bullet in exp.responsibilities or []:
                _add_bullet(doc, extract_bullet_prefix(bullet))

    # ── Section: Education ───────────────────────────────────────────────
    if resume.education:
        _add_section_heading(doc, "EDUCATION")
        for edu in resume.education:
            edu_para = doc.add_paragraph()
            deg_run = edu_para.add_run(edu.degree)
            deg_run.bold = True
            deg_run.font.size = Pt(10)
            edu_para.paragraph_format.space_before = Pt(4)
            edu_para.paragraph_format.space_after = Pt(0)

            sch_para = doc.add_paragraph()
            sch_run = sch_para.add_run(institution_line(edu))
            sch_run.font.size = Pt(10)
            sch_run.font.color.rgb = RGBColor(0x44, 0x44, 0x44)

            if edu.description:
                doc.add_paragraph(edu.description)

    # ── Section: Skills ──────────────────────────────────────────────────
    if resume.skills:
        _add_section_heading(doc, "SKILLS")
        doc.add_paragraph(", ".join(resume.skills))

    # ── Section: Projects ────────────────────────────────────────────────
    if resume.projects:
        _add_section_heading(doc, "PROJECTS")
        for proj in resume.projects:
            proj_para = doc.add_paragraph()
            proj_run = proj_para.add_run(proj.name)
            proj_run.bold = True
            proj_run.font.size = Pt(10)
            proj_para.paragraph_format.space_before = Pt(4)
            proj_para.paragraph_format.space_after = Pt(1)

            if proj.description:
                doc.add_paragraph(proj.description)

            if proj.technologies:
                tech_para = doc.add_paragraph()
                label = tech_para.add_run("Technologies: ")
                label.bold = True
                label.font.size = Pt(9)
                techs = tech_para.add_run(", ".join(proj.technologies))
                techs.font.size = Pt(9)

            if proj.url:
                url_para = doc.add_paragraph()
                url_run = url_para.add_run(proj.url)
                url_run.font.size = Pt(9)
                url_run.font.color.rgb = RGBColor(0x1F, 0x4E, 0x99)

    # ── Write to buffer ──────────────────────────────────────────────────
    buffer = io.BytesIO()
    doc.save(buffer)
    buffer.seek(0)
    return buffer


def _add_bullet(doc: Document, text: str) -> None:
    bp = doc.add_paragraph(style="List Bullet")
    br = bp.add_run(text)
    br.font.size = Pt(9.5)
    bp.paragraph_format.space_before = Pt(0)
    bp.paragraph_format.space_after = Pt(1)
    bp.paragraph_format.left_indent = Inches(0.25)


def _add_section_heading(doc: Document, title: str) -> None:
    """Add a styled section heading with a bottom border."""
    para = doc.add_paragraph()
    run = para.add_run(title)
    run.bold = True
    run.font.size = Pt(11)
    run.font.color.rgb = RGBColor(0x1A, 0x1A, 0x1A)
    para.paragraph_format.space_before = Pt(10)
    para.paragraph_format.space_after = Pt(3)

    # Add bottom border via XML
    pPr = para._element.get_or_add_pPr()
    pBdr = pPr.makeelement(qn("w:pBdr"), {})
    bottom = pBdr.makeelement(
        qn("w:bottom"),
        {
            qn("w:val"): "single",
            qn("w:sz"): "4",
            qn("w:space"): "1",
            qn("w:color"): "999999",
        },
    )
    pBdr.append(bottom)
    pPr.append(pBdr)
