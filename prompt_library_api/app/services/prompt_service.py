"""
Service layer for prompts.

``PromptService`` implements listing with search and tag filters, the
vote counter adjustment and the small authoring surface (create, get,
delete) used to populate the store.

Tags are stored in the ``prompts.tags`` column as a JSON array.
``encode_tags`` and ``decode_tags`` are the only functions that see
that form; everything above this module works with ``List[str]``.

Vote adjustments run as a single ``votes = votes + ?`` statement
inside a ``BEGIN IMMEDIATE`` transaction, so concurrent votes on the
same prompt are serialised by SQLite and none are lost.

All queries use parameterized statements.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Iterable, List, Optional

from prompt_library_api.app.core.db import get_connection, write_transaction
from prompt_library_api.app.schemas.prompt import (
    ALLOWED_VOTE_DELTAS,
    PromptCreate,
    PromptRead,
)


logger = logging.getLogger(__name__)

PROMPT_COLUMNS = "id, title, description, content, tags, votes"

TAG_MODES = {"any", "all"}


class PromptNotFoundError(ValueError):
    """Raised when a prompt id does not exist."""


class InvalidVoteError(ValueError):
    """Raised when a vote delta is not exactly 1 or -1."""


def encode_tags(tags: Iterable[str]) -> str:
    return json.dumps(list(tags))


def decode_tags(raw: Optional[str]) -> List[str]:
    """Decode the stored tags column.

    Anything that is not a JSON list decodes to an empty list, and
    non-string items are dropped.
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        value = None
    if not isinstance(value, list):
        logger.warning("Ignoring undecodable tags value %r", raw)
        return []
    return [item for item in value if isinstance(item, str)]


def parse_tag_query(raw: Optional[str]) -> List[str]:
    """Split a ``tags=a,b`` query value into distinct, trimmed labels."""
    if not raw:
        return []
    labels: List[str] = []
    for part in raw.split(","):
        label = part.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def escape_like(term: str) -> str:
    """Escape ``LIKE`` wildcards so the term matches literally (escape char ``\\``)."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def tags_match(prompt_tags: List[str], wanted: List[str], mode: str = "any") -> bool:
    """Case-insensitive tag match; ``any`` is OR semantics, ``all`` is AND."""
    have = {tag.casefold() for tag in prompt_tags}
    want = {tag.casefold() for tag in wanted}
    if mode == "all":
        return want <= have
    return bool(have & want)


class PromptService:
    """Service class for querying, voting on and authoring prompts."""

    @classmethod
    async def list_prompts(
        cls,
        search: Optional[str] = None,
        tags: Optional[List[str]] = None,
        tag_mode: str = "any",
    ) -> List[PromptRead]:
        """Return prompts matching the given filters, ordered by id.

        - ``search``: case-insensitive substring of the title,
          description or content.  Blank means no filter.
        - ``tags``: labels to match; empty or ``None`` means no filter.
        - ``tag_mode``: ``any`` (default) or ``all``.  Other values are
          treated as ``any``.

        When both filters are given a prompt must satisfy both.
        """
        query = f"SELECT {PROMPT_COLUMNS} FROM prompts"
        params: list = []
        where_clauses: List[str] = []
        term = search.strip() if search else ""
        if term:
            pattern = f"%{escape_like(term)}%"
            where_clauses.append(
                "(title LIKE ? ESCAPE '\\' OR description LIKE ? ESCAPE '\\' "
                "OR content LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY id ASC"

        if tag_mode not in TAG_MODES:
            tag_mode = "any"

        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
        finally:
            conn.close()

        prompts = [cls._row_to_prompt_read(row) for row in rows]
        if tags:
            prompts = [p for p in prompts if tags_match(p.tags, tags, tag_mode)]
        return prompts

    @classmethod
    async def get_prompt(cls, prompt_id: int) -> Optional[PromptRead]:
        """Retrieve a single prompt by its ID."""
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {PROMPT_COLUMNS} FROM prompts WHERE id = ?",
                (prompt_id,),
            ).fetchone()
            if not row:
                return None
            return cls._row_to_prompt_read(row)
        finally:
            conn.close()

    @classmethod
    async def create_prompt(cls, data: PromptCreate) -> PromptRead:
        """Insert a new prompt with ``votes = 0`` and return it."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO prompts (title, description, content, tags, votes)
                VALUES (?, ?, ?, ?, 0)
                """,
                (data.title, data.description, data.content, encode_tags(data.tags)),
            )
            prompt_id = cursor.lastrowid
            conn.commit()
            logger.info("Created prompt %s", prompt_id)
            row = cursor.execute(
                f"SELECT {PROMPT_COLUMNS} FROM prompts WHERE id = ?",
                (prompt_id,),
            ).fetchone()
            return cls._row_to_prompt_read(row)
        except sqlite3.Error:
            conn.rollback()
            logger.exception("Failed to create prompt")
            raise
        finally:
            conn.close()

    @classmethod
    async def delete_prompt(cls, prompt_id: int) -> bool:
        """Delete a prompt by ID.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM prompts WHERE id = ?", (prompt_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted prompt %s", prompt_id)
            return affected > 0
        except sqlite3.Error:
            conn.rollback()
            logger.exception("Failed to delete prompt %s", prompt_id)
            raise
        finally:
            conn.close()

    @classmethod
    async def adjust_vote(cls, prompt_id: int, delta: int) -> PromptRead:
        """Add ``delta`` (1 or -1) to a prompt's vote counter.

        The delta is validated before the database is touched.  The
        increment and the read-back happen in one write transaction, so
        the returned count is the value this call produced.

        Raises
        ------
        InvalidVoteError
            ``delta`` is not exactly ``1`` or ``-1``.
        PromptNotFoundError
            No prompt has id ``prompt_id``.
        """
        if isinstance(delta, bool) or not isinstance(delta, int) or delta not in ALLOWED_VOTE_DELTAS:
            logger.warning("Rejected vote delta %r for prompt %s", delta, prompt_id)
            raise InvalidVoteError("delta must be 1 or -1")

        conn = get_connection()
        try:
            with write_transaction(conn) as cursor:
                cursor.execute(
                    """
                    UPDATE prompts
                    SET votes = votes + ?, updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (delta, prompt_id),
                )
                if cursor.rowcount == 0:
                    raise PromptNotFoundError(f"Prompt {prompt_id} not found")
                row = cursor.execute(
                    f"SELECT {PROMPT_COLUMNS} FROM prompts WHERE id = ?",
                    (prompt_id,),
                ).fetchone()
            logger.info("Prompt %s votes %+d -> %s", prompt_id, delta, row["votes"])
            return cls._row_to_prompt_read(row)
        except sqlite3.Error:
            logger.exception("Failed to adjust votes for prompt %s", prompt_id)
            raise
        finally:
            conn.close()

    @staticmethod
    def _row_to_prompt_read(row: sqlite3.Row) -> PromptRead:
        """Convert a database row to a PromptRead schema instance."""
        return PromptRead(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            content=row["content"],
            tags=decode_tags(row["tags"]),
            votes=row["votes"],
        )
