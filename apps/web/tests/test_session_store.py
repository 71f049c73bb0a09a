"""Tests for the in-memory session store."""
from __future__ import annotations

import time

from renthome.schemas.auth import SessionUser
from renthome.schemas.notices import Notice
from renthome.services.session_store import AuthSession, SessionStatus, SessionStore


def test_new_sessions_are_anonymous_and_unsaved() -> None:
    store = SessionStore(ttl_seconds=60)

    state = store.new()

    assert state.status is SessionStatus.UNAUTHENTICATED
    assert not state.should_persist
    assert store.get(state.session_id) is None
    assert len(store) == 0


def test_sign_in_and_out_flip_status() -> None:
    state = AuthSession(session_id="abc")

    state.sign_in(SessionUser(id="u1", name="Ada"), "token")
    assert state.is_authenticated
    assert state.user_id == "u1"
    assert state.should_persist

    state.sign_out()
    assert state.status is SessionStatus.UNAUTHENTICATED
    assert state.token is None


def test_notices_are_drained_once() -> None:
    state = AuthSession(session_id="abc")
    state.flash(Notice.success("Saved"))

    assert state.should_persist
    assert [notice.message for notice in state.pop_notices()] == ["Saved"]
    assert state.pop_notices() == []


def test_save_get_and_clear() -> None:
    store = SessionStore(ttl_seconds=60)
    state = AuthSession(session_id="abc", user=SessionUser(id="u1"))

    store.save(state)
    assert store.get("abc") is state

    store.clear("abc")
    assert store.get("abc") is None


def test_rotate_issues_a_new_identifier() -> None:
    store = SessionStore(ttl_seconds=60)
    state = AuthSession(session_id="abc", user=SessionUser(id="u1"))
    store.save(state)

    store.rotate(state)

    assert state.session_id != "abc"
    assert store.get("abc") is None


def test_expired_sessions_are_evicted(monkeypatch) -> None:
    store = SessionStore(ttl_seconds=60)
    store.save(AuthSession(session_id="old", user=SessionUser(id="u1")))

    now = time.time()
    monkeypatch.setattr(time, "time", lambda: now + 120)

    assert store.get("old") is None
    assert len(store) == 0
