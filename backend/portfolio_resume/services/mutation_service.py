"""
Mutation Service — apply a free-text edit to an existing Resume.

The full resume goes to the model (no truncation) and the full resume comes
back; the prompt keeps the change minimal. Output goes through the same
normalization as extraction.
"""

from __future__ import annotations

import json
import logging

from portfolio_resume.exceptions import MutationError
from portfolio_resume.models.resume_models import Resume
from portfolio_resume.prompts.resume_editor import SYSTEM_PROMPT, USER_PROMPT_TEMPLATE
from portfolio_resume.services.extraction_service import request_structured_resume
from portfolio_resume.services.llm_service import LLMSelection

logger = logging.getLogger(__name__)


async def mutate(resume: Resume, instruction: str, llm: LLMSelection) -> Resume:
    """Return a new Resume with `instruction` applied. Raises MutationError."""
    resume_json = json.dumps(resume.to_payload(), indent=2, ensure_ascii=False)
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(
                resume_json=resume_json,
                instruction=instruction.strip(),
            ),
        },
    ]

    logger.info(f"Applying modification ({len(instruction)} chars) with {llm.provider}/{llm.model_key}")

    updated = await request_structured_resume(
        messages=messages,
        llm=llm,
        prompt_name="resume_editor",
        error_cls=MutationError,
        action="apply modifications",
    )

    logger.info(
        f"Modified resume: experience={len(updated.experience)} "
        f"projects={len(updated.projects)} skills={len(updated.skills)}"
    )
    return updated
