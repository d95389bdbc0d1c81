"""
Content Gate — advisory check that scraped text can support a resume.

Fails open: any problem with the classification call (missing key, timeout,
provider error, malformed JSON, empty output) counts as a pass, so a flaky
classifier never blocks resume generation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from portfolio_resume.config import VALIDATION_CHAR_LIMIT
from portfolio_resume.prompts.content_validator import SYSTEM_PROMPT, USER_PROMPT_TEMPLATE
from portfolio_resume.services.llm_service import LLMSelection, complete_json
from portfolio_resume.utils.text_cleanup import truncate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentAssessment:
    valid: bool
    reason: str | None = None


async def assess(raw_text: str, llm: LLMSelection) -> ContentAssessment:
    """Ask a small model whether the text has a name plus some professional signal."""
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(content=truncate(raw_text, VALIDATION_CHAR_LIMIT)),
        },
    ]

    try:
        data = await complete_json(
            provider=llm.provider,
            model_key=llm.content_check_model,
            api_key=llm.api_key,
            messages=messages,
            prompt_name="content_validator",
        )
    except Exception as e:
        logger.warning(f"Content check failed, treating content as valid: {e}")
        return ContentAssessment(valid=True)

    if not isinstance(data, dict):
        return ContentAssessment(valid=True)

    reason = data.get("reason")
    assessment = ContentAssessment(
        valid=data.get("valid") is True,
        reason=reason if isinstance(reason, str) and reason.strip() else None,
    )
    logger.info(f"Content check: valid={assessment.valid} reason={assessment.reason!r}")
    return assessment
