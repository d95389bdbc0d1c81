from portfolio_resume.api import (
    resume_routes,
    llm_routes,
)

__all__ = [
    "resume_routes",
    "llm_routes",
]
