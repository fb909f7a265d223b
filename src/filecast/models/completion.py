"""Tab-completion outcome model."""

from __future__ import annotations

from pydantic import BaseModel


class CompletionOutcome(BaseModel):
    """Buffer after one Tab press plus a status line for the UI."""

    buffer: str
    message: str = ""
    candidate_count: int = 0
    cursor: int = 0
