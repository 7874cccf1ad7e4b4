"""Unit tests for TokenSession."""

from __future__ import annotations

from mediqueue.client import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, TokenSession


def test_new_session_is_empty():
    tokens = TokenSession()
    assert tokens.access_token is None
    assert tokens.refresh_token is None
    assert tokens.is_authenticated is False


def test_set_tokens_writes_camel_case_keys():
    storage: dict[str, str] = {}
    tokens = TokenSession(storage)
    tokens.set_tokens("acc", "ref")
    assert storage == {ACCESS_TOKEN_KEY: "acc", REFRESH_TOKEN_KEY: "ref"}
    assert ACCESS_TOKEN_KEY == "accessToken"
    assert REFRESH_TOKEN_KEY == "refreshToken"


def test_set_tokens_without_refresh_keeps_current_refresh():
    tokens = TokenSession()
    tokens.set_tokens("acc-1", "ref-1")
    tokens.set_tokens("acc-2")
    assert tokens.access_token == "acc-2"
    assert tokens.refresh_token == "ref-1"


def test_clear_removes_both_tokens_only():
    storage = {"theme": "dark"}
    tokens = TokenSession(storage)
    tokens.set_tokens("acc", "ref")
    assert tokens.clear() is True
    assert tokens.access_token is None
    assert tokens.refresh_token is None
    assert storage == {"theme": "dark"}


def test_existing_storage_is_picked_up():
    tokens = TokenSession({ACCESS_TOKEN_KEY: "persisted", REFRESH_TOKEN_KEY: "persisted-rt"})
    assert tokens.is_authenticated
    assert tokens.refresh_token == "persisted-rt"


def test_clear_reports_nothing_held_on_second_call():
    tokens = TokenSession()
    tokens.set_tokens("acc", "ref")
    assert tokens.clear() is True
    assert tokens.clear() is False
