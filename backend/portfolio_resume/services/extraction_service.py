"""
Extraction Service — scraped portfolio text → structured Resume.

Responsibilities:
  • Cap the input at EXTRACTION_CHAR_LIMIT characters
  • Make one JSON-mode model call with the resume extractor prompt
  • Parse and normalize the output so Resume invariants always hold

No retries here; callers decide whether to try again.
"""

from __future__ import annotations

import logging

from portfolio_resume.config import EXTRACTION_CHAR_LIMIT
from portfolio_resume.exceptions import ExtractionError, ResumeServiceError
from portfolio_resume.models.resume_models import Resume
from portfolio_resume.prompts.resume_extractor import SYSTEM_PROMPT, USER_PROMPT_TEMPLATE
from portfolio_resume.services.llm_service import LLMSelection, complete, parse_json_response
from portfolio_resume.services.normalizer import normalize_resume
from portfolio_resume.utils.text_cleanup import truncate

logger = logging.getLogger(__name__)


async def extract(raw_text: str, llm: LLMSelection) -> Resume:
    """Build a Resume from raw portfolio text. Raises ExtractionError."""
    content = truncate(raw_text, EXTRACTION_CHAR_LIMIT)
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT_TEMPLATE.format(content=content)},
    ]

    logger.info(f"Extracting resume from {len(content)} chars with {llm.provider}/{llm.model_key}")

    resume = await request_structured_resume(
        messages=messages,
        llm=llm,
        prompt_name="resume_extractor",
        error_cls=ExtractionError,
        action="parse content",
    )

    logger.info(
        f"Parsed resume: name={resume.name} experience={len(resume.experience)} "
        f"projects={len(resume.projects)} skills={len(resume.skills)}"
    )
    return resume


async def request_structured_resume(
    *,
    messages: list[dict[str, str]],
    llm: LLMSelection,
    prompt_name: str,
    error_cls: type[ResumeServiceError],
    action: str,
) -> Resume:
    """
    Run one JSON-mode completion and normalize it into a Resume.

    Shared by extraction and editing; `error_cls` decides which error the
    caller sees when the model gives nothing usable.
    """
    try:
        raw = await complete(
            provider=llm.provider,
            model_key=llm.model_key,
            api_key=llm.api_key,
            messages=messages,
            prompt_name=prompt_name,
            json_mode=True,
        )
    except Exception as e:
        raise error_cls(f"Failed to {action}: {e}") from e

    if not raw.strip():
        raise error_cls(f"Failed to {action}: No response from model")

    try:
        data = parse_json_response(raw)
    except ValueError as e:
        raise error_cls(f"Failed to {action}: {e}") from e

    return normalize_resume(data)
