"""
schemas.py -- Pydantic v2 models for summaries and conversation turns.

SummaryResult is the one contract both summarizers must honour. The local
extractor builds it directly; the remote summarizer gets JSON back from
the model and pushes it through model_validate(), so a malformed answer
is caught here instead of in whatever renders the summary.
"""

from __future__ import annotations

import uuid
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Confidence = Literal["low", "medium", "high"]


class SummaryResult(BaseModel):
    """Structured summary of a whole document."""
    short_summary: str
    relevance_to_officials: List[str] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list)
    confidence_estimate: Confidence = Field(default="low")

    @field_validator("confidence_estimate", mode="before")
    @classmethod
    def normalise_confidence(cls, v):
        # Models love answering "High" or " medium ". Anything that is not
        # one of the three levels after this still fails the Literal check.
        if isinstance(v, str):
            return v.strip().lower()
        return v


class SummaryRequest(BaseModel):
    """Body of the summarize endpoints."""
    text: str


class QueryRequest(BaseModel):
    """One user prompt against the loaded document."""
    prompt: str

    @field_validator("prompt")
    @classmethod
    def prompt_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("prompt cannot be empty or whitespace")
        return v


def _new_turn_id() -> str:
    return uuid.uuid4().hex[:8]


class Turn(BaseModel):
    """A single chat message, either the user's or the assistant's."""
    turn_id: str = Field(default_factory=_new_turn_id)
    role: Literal["user", "assistant"]
    content: str
    summary: Optional[SummaryResult] = Field(default=None)
    is_error: bool = Field(default=False)


class Conversation(BaseModel):
    """Append-only list of turns, in the order they were produced."""
    turns: List[Turn] = Field(default_factory=list)

    def append(self, turn: Turn) -> Turn:
        self.turns.append(turn)
        return turn
