"""
Pydantic schemas for prompts.

A prompt is a reusable text template with a title, a longer
description, the prompt body itself, a list of tag labels and a vote
counter.  Tags are plain lists here; their serialized storage form
never leaves the service layer.
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator


ALLOWED_VOTE_DELTAS = (1, -1)


def normalize_tags(tags: List[str]) -> List[str]:
    """Strip labels, drop empty ones and remove duplicates, keeping order."""
    seen = set()
    result: List[str] = []
    for tag in tags:
        label = tag.strip()
        if label and label not in seen:
            seen.add(label)
            result.append(label)
    return result


class PromptCreate(BaseModel):
    """Schema for creating a new prompt."""

    title: str = Field(..., min_length=1, max_length=200, description="Short display title")
    description: str = Field("", max_length=2000, description="Longer free-text description")
    content: str = Field(..., min_length=1, description="The prompt body")
    tags: List[str] = Field(default_factory=list, description="Tag labels, e.g. ['react', 'typescript']")

    @field_validator("title", "content")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)


class PromptRead(BaseModel):
    """Schema for reading a prompt."""

    id: int
    title: str
    description: str
    content: str
    tags: List[str]
    votes: int


class VoteRequest(BaseModel):
    """Body of a vote request.

    ``delta`` must be the integer ``1`` or ``-1``.  Booleans, floats
    (even ``1.0``) and numeric strings are rejected rather than
    coerced.
    """

    delta: int = Field(..., description="1 to upvote, -1 to downvote")

    @field_validator("delta", mode="before")
    @classmethod
    def validate_delta(cls, v: Any) -> int:
        if isinstance(v, bool) or not isinstance(v, int) or v not in ALLOWED_VOTE_DELTAS:
            raise ValueError("delta must be 1 or -1")
        return v
