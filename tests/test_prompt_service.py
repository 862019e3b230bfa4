"""
Tests for the prompt service helpers and listing logic
"""
import asyncio
import logging
import sqlite3

import pytest

from prompt_library_api.app.services import prompt_service
from prompt_library_api.app.services.prompt_service import (
    PromptService,
    decode_tags,
    encode_tags,
    escape_like,
    parse_tag_query,
    tags_match,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('["react", "typescript"]', ["react", "typescript"]),
        ("[]", []),
        ("", []),
        (None, []),
        ("react,typescript", []),
        ('{"tags": ["react"]}', []),
        ('["react", 3, null]', ["react"]),
    ],
)
def test_decode_tags(raw, expected):
    assert decode_tags(raw) == expected


def test_encode_tags_keeps_order():
    assert decode_tags(encode_tags(("b", "a"))) == ["b", "a"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("react,typescript", ["react", "typescript"]),
        (" react , ,typescript,react ", ["react", "typescript"]),
        (",,", []),
        ("", []),
        (None, []),
    ],
)
def test_parse_tag_query(raw, expected):
    assert parse_tag_query(raw) == expected


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestTagsMatch:
    def test_any_needs_one_common_tag(self):
        assert tags_match(["react", "css"], ["css", "vue"])
        assert not tags_match(["react"], ["vue"])

    def test_all_needs_every_tag(self):
        assert tags_match(["react", "css", "ts"], ["css", "react"], "all")
        assert not tags_match(["react"], ["css", "react"], "all")

    def test_case_insensitive(self):
        assert tags_match(["React"], ["react"])

    def test_prompt_without_tags_never_matches(self):
        assert not tags_match([], ["react"])


def test_list_prompts_unknown_tag_mode_falls_back_to_any(make_prompt):
    make_prompt(title="a", tags=["x"])
    make_prompt(title="b", tags=["y"])

    result = asyncio.run(PromptService.list_prompts(tags=["x", "y"], tag_mode="both"))

    assert [p.title for p in result] == ["a", "b"]


def test_list_prompts_has_no_side_effects(make_prompt):
    prompt = make_prompt(tags=["x"])

    asyncio.run(PromptService.list_prompts(search="test", tags=["x"]))

    assert asyncio.run(PromptService.get_prompt(prompt.id)) == prompt


@pytest.mark.parametrize("raw", ["react,typescript", '{"tags": ["react"]}', '"react"', "42"])
def test_decode_tags_warns_on_non_list_values(caplog, raw):
    with caplog.at_level(logging.WARNING, logger="prompt_library_api.app.services.prompt_service"):
        assert decode_tags(raw) == []

    assert "Ignoring undecodable tags value" in caplog.text


def test_decode_tags_valid_list_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="prompt_library_api.app.services.prompt_service"):
        decode_tags('["react"]')

    assert caplog.records == []


class FailingConnection:
    """Connection whose statements fail the way a locked database does"""

    def __init__(self):
        self.rolled_back = False
        self.closed = False

    def cursor(self):
        return self

    def execute(self, *args):
        raise sqlite3.OperationalError("database is locked")

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


def test_delete_prompt_rolls_back_and_logs_on_store_error(monkeypatch, caplog):
    conn = FailingConnection()
    monkeypatch.setattr(prompt_service, "get_connection", lambda: conn)

    with pytest.raises(sqlite3.OperationalError):
        asyncio.run(PromptService.delete_prompt(1))

    assert conn.rolled_back
    assert conn.closed
    assert "Failed to delete prompt 1" in caplog.text
