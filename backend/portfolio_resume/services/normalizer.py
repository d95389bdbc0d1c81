"""
Normalizer — turn untrusted model JSON into a valid Resume.

Pure and idempotent: no I/O, no model calls, and normalizing an already
normalized resume gives back an equal one. Both the extraction and the
editing paths run their output through normalize_resume().
"""

from __future__ import annotations

from typing import Any

from portfolio_resume.models.resume_models import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    Resume,
)

_SCALAR_FIELDS = ("name", "email", "phone", "website", "location", "summary")


def normalize_resume(data: Any) -> Resume:
    """Build a Resume from raw model output, with safe defaults."""
    if isinstance(data, list):
        data = data[0] if data else {}
    if not isinstance(data, dict):
        data = {}

    scalars = {field: _clean_scalar(data.get(field)) for field in _SCALAR_FIELDS}

    return Resume(
        **scalars,
        experience=_collect(data.get("experience"), _build_experience),
        education=_collect(data.get("education"), _build_education),
        skills=_ensure_str_list(data.get("skills")),
        projects=_collect(data.get("projects"), _build_project),
    )


# ── Entry builders ───────────────────────────────────────────────────────────
# Each returns None when a required field is missing; the entry is dropped.


def _build_experience(d: dict[str, Any]) -> ExperienceEntry | None:
    title = _clean_scalar(d.get("title"))
    company = _clean_scalar(d.get("company"))
    if not title or not company:
        return None
    return ExperienceEntry(
        title=title,
        company=company,
        location=_clean_scalar(d.get("location")),
        start_date=_clean_scalar(_first_present(d, "startDate", "start_date")),
        end_date=_clean_scalar(_first_present(d, "endDate", "end_date")),
        description=_clean_scalar(d.get("description")),
        responsibilities=_optional_str_list(d.get("responsibilities")),
    )


def _build_education(d: dict[str, Any]) -> EducationEntry | None:
    degree = _clean_scalar(d.get("degree"))
    institution = _clean_scalar(d.get("institution"))
    if not degree or not institution:
        return None
    return EducationEntry(
        degree=degree,
        institution=institution,
        location=_clean_scalar(d.get("location")),
        year=_clean_scalar(d.get("year")),
        description=_clean_scalar(d.get("description")),
    )


def _build_project(d: dict[str, Any]) -> ProjectEntry | None:
    name = _clean_scalar(d.get("name"))
    if not name:
        return None
    return ProjectEntry(
        name=name,
        description=_clean_scalar(d.get("description")),
        technologies=_optional_str_list(d.get("technologies")),
        url=_clean_scalar(d.get("url")),
    )


# ── Helpers ──────────────────────────────────────────────────────────────────


def _clean_scalar(val: Any) -> str | None:
    """Falsy and blank values become None; other non-strings go through str()."""
    if not val:
        return None
    if isinstance(val, str):
        return val.strip() or None
    return str(val)


def _first_present(d: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if d.get(key):
            return d[key]
    return None


def _collect(val: Any, builder) -> list:
    """Apply builder to every dict in a list, dropping the rejects."""
    if not isinstance(val, list):
        return []
    entries = []
    for item in val:
        if not isinstance(item, dict):
            continue
        entry = builder(item)
        if entry is not None:
            entries.append(entry)
    return entries


def _ensure_str_list(val: Any) -> list[str]:
    """Keep the non-blank strings of a list as they are; drop everything else."""
    if not isinstance(val, list):
        return []
    return [v for v in val if isinstance(v, str) and v.strip()]


def _optional_str_list(val: Any) -> list[str] | None:
    """Like _ensure_str_list, but an absent field stays absent."""
    if val is None:
        return None
    return _ensure_str_list(val)
