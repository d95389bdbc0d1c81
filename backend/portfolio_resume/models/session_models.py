from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from portfolio_resume.models.resume_models import Resume


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationTurn(BaseModel):
    """One generate or modify step and the document it produced."""

    index: int
    instruction: Optional[str] = None  # None for the initial generation
    resume: Resume
    document_path: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)


class ResumeSession(BaseModel):
    """
    Client-held conversation state: the current resume plus every turn.

    The server never stores any of this; the client chains each new
    resume into the next modify request.
    """

    source_url: str
    turns: list[ConversationTurn] = []

    @property
    def current(self) -> Resume | None:
        return self.turns[-1].resume if self.turns else None

    def record(
        self,
        resume: Resume,
        *,
        instruction: str | None = None,
        document_path: str | None = None,
    ) -> ConversationTurn:
        turn = ConversationTurn(
            index=len(self.turns),
            instruction=instruction,
            resume=resume,
            document_path=document_path,
        )
        self.turns.append(turn)
        return turn
