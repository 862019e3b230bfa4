"""
Prompt endpoints.

``GET /prompts`` lists prompts filtered by free-text ``search`` and a
comma-separated ``tags`` list, and ``PATCH /prompts/{id}/vote``
adjusts a prompt's vote counter by one.  The create, get and delete
routes let clients populate and clean up the library.

Listing never fails on odd filter values: an empty search, an empty
tag list or an unknown ``tag_mode`` simply means that filter is not
applied.
"""

import logging
import sqlite3
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from prompt_library_api.app.schemas.prompt import PromptCreate, PromptRead, VoteRequest
from prompt_library_api.app.services.prompt_service import (
    InvalidVoteError,
    PromptNotFoundError,
    PromptService,
    parse_tag_query,
)

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("", response_model=List[PromptRead])
async def list_prompts(
    search: Optional[str] = Query(None, description="Case-insensitive text to look for in title, description or content"),
    tags: Optional[str] = Query(None, description="Comma-separated tag labels, e.g. 'react,typescript'"),
    tag_mode: str = Query("any", description="'any' matches prompts with at least one tag, 'all' requires every tag"),
) -> List[PromptRead]:
    """Return all prompts matching the filters."""
    try:
        return await PromptService.list_prompts(
            search=search,
            tags=parse_tag_query(tags),
            tag_mode=tag_mode,
        )
    except sqlite3.Error:
        logger.exception("Failed to list prompts")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")


@router.post("", response_model=PromptRead, status_code=status.HTTP_201_CREATED)
async def create_prompt(prompt_in: PromptCreate) -> PromptRead:
    """Create a new prompt.  Votes always start at zero."""
    try:
        return await PromptService.create_prompt(prompt_in)
    except sqlite3.Error:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")


@router.get("/{prompt_id}", response_model=PromptRead)
async def get_prompt(prompt_id: int) -> PromptRead:
    """Retrieve a single prompt by ID.

    Returns HTTP 404 if the prompt does not exist.
    """
    try:
        prompt = await PromptService.get_prompt(prompt_id)
    except sqlite3.Error:
        logger.exception("Failed to read prompt %s", prompt_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    if prompt is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prompt not found")
    return prompt


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prompt(prompt_id: int) -> None:
    """Delete a prompt."""
    try:
        deleted = await PromptService.delete_prompt(prompt_id)
    except sqlite3.Error:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prompt not found")
    return None


@router.patch("/{prompt_id}/vote", response_model=PromptRead)
async def vote_prompt(prompt_id: int, vote: VoteRequest) -> PromptRead:
    """Upvote (``delta: 1``) or downvote (``delta: -1``) a prompt.

    Returns the updated prompt.  Any other delta is rejected with
    HTTP 400 before the prompt is touched; an unknown ID yields 404.
    """
    try:
        return await PromptService.adjust_vote(prompt_id, vote.delta)
    except InvalidVoteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PromptNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except sqlite3.Error:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
