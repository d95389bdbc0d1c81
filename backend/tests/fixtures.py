"""Shared sample data for the test suite."""

import json

from portfolio_resume.models.resume_models import Resume
from portfolio_resume.services.llm_service import LLMSelection

LLM = LLMSelection(provider="groq", model_key="llama-3.3-70b", api_key="test-key")

SAMPLE_PAYLOAD = {
    "name": "Ada Lovelace",
    "email": "ada@example.dev",
    "phone": None,
    "website": "https://example.dev",
    "location": "London, UK",
    "summary": "Engineer who writes programs for analytical engines.",
    "experience": [
        {
            "title": "Lead Programmer",
            "company": "Analytical Engines Ltd",
            "location": "London",
            "startDate": "1842",
            "endDate": "1843",
            "description": "Wrote the first published algorithm.",
            "responsibilities": ["Designed Bernoulli number routine", "Annotated the Menabrea paper"],
        },
        {
            "title": "Research Assistant",
            "company": "Babbage Lab",
            "location": None,
            "startDate": "1833",
            "endDate": None,
            "description": None,
        },
    ],
    "education": [
        {"degree": "Private tutoring in Mathematics", "institution": "University of London", "year": "1840"},
    ],
    "skills": ["Go"],
    "projects": [
        {
            "name": "Note G",
            "description": "Bernoulli numbers on the Analytical Engine",
            "technologies": ["Punched cards"],
            "url": "https://example.dev/note-g",
        },
    ],
}

PORTFOLIO_TEXT = (
    "# Ada Lovelace\n"
    "Engineer in London. ada@example.dev\n\n"
    "## Experience\n"
    "- Lead Programmer at Analytical Engines Ltd (1842 - 1843)\n"
    "- Research Assistant at Babbage Lab (1833)\n\n"
    "## Projects\n"
    "- Note G: Bernoulli numbers on the Analytical Engine\n"
)


def sample_resume() -> Resume:
    return Resume.model_validate(SAMPLE_PAYLOAD)


def model_json(payload: dict) -> str:
    return json.dumps(payload)


def resume_from_editor_prompt(messages: list[dict]) -> dict:
    """Pull the resume JSON that the editor prompt embedded in the user message."""
    content = messages[-1]["content"]
    body = content.split("Current resume data (JSON):\n", 1)[1]
    body = body.split("\n\nModification request:", 1)[0]
    return json.loads(body)
