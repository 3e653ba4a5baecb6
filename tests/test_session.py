"""Tests for the explicit session provider."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from tradejournal.session import Session, SessionProvider


@pytest.fixture
def provider():
    p = SessionProvider()
    yield p
    p.close()


def _session(user="user-1", **kwargs):
    return Session(user_id=user, access_token="token", **kwargs)


def test_starts_without_session(provider):
    assert provider.get_current_session() is None


def test_set_session_notifies_listeners(provider):
    seen = []
    provider.subscribe(seen.append)

    s = _session()
    provider.set_session(s)

    assert provider.get_current_session() == s
    assert seen == [s]


def test_unchanged_session_does_not_notify(provider):
    seen = []
    provider.subscribe(seen.append)

    provider.set_session(_session())
    provider.set_session(_session())

    assert len(seen) == 1


def test_unsubscribe_stops_notifications(provider):
    seen = []
    unsubscribe = provider.subscribe(seen.append)
    unsubscribe()
    unsubscribe()  # second call is a no-op

    provider.set_session(_session())

    assert seen == []


def test_clear_notifies_with_none(provider):
    seen = []
    provider.set_session(_session())
    provider.subscribe(seen.append)

    provider.clear()

    assert seen == [None]
    assert provider.get_current_session() is None


def test_failing_listener_is_logged_and_others_still_run(provider, caplog):
    seen = []

    def broken(session):
        raise RuntimeError("boom")

    provider.subscribe(broken)
    provider.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger="tradejournal.session"):
        provider.set_session(_session())

    assert len(seen) == 1
    assert "Session listener broken failed" in caplog.text


def test_expired_session_is_not_current():
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    p = SessionProvider(_session(expires_at=past))
    assert p.get_current_session() is None


def test_session_is_expired():
    expires = datetime(2025, 1, 1, tzinfo=timezone.utc)
    s = _session(expires_at=expires)
    assert s.is_expired(now=expires) is True
    assert s.is_expired(now=expires - timedelta(seconds=1)) is False
    assert _session().is_expired() is False


def test_closed_provider_rejects_use():
    p = SessionProvider(_session())
    p.close()

    assert p.closed
    assert p.get_current_session() is None
    with pytest.raises(RuntimeError, match="closed"):
        p.subscribe(lambda s: None)
    with pytest.raises(RuntimeError, match="closed"):
        p.set_session(_session())
