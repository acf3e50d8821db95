import time
from datetime import timedelta

import pytest
from flask import session

from utils.session_store import SessionStore, TOKEN_KEY, EXPIRES_KEY, USER_KEY


def test_get_is_absent_without_token(app):
    with app.test_request_context():
        assert SessionStore().get() is None


def test_set_persists_token_with_expiry_hint(app):
    with app.test_request_context():
        store = SessionStore()
        store.set('tok-123', timedelta(days=30))

        assert store.get() == 'tok-123'
        assert session.permanent is True
        assert session[EXPIRES_KEY] > time.time() + 29 * 24 * 3600


def test_set_without_hint_is_not_permanent(app):
    with app.test_request_context():
        store = SessionStore()
        store.set('tok-123')

        assert store.get() == 'tok-123'
        assert EXPIRES_KEY not in session


def test_set_rejects_empty_token(app):
    with app.test_request_context():
        with pytest.raises(ValueError):
            SessionStore().set('')


def test_elapsed_expiry_hint_drops_token(app):
    with app.test_request_context():
        store = SessionStore()
        store.set('tok-123', 60, user={'_id': 'u1', 'email': 'a@b.com'})
        session[EXPIRES_KEY] = time.time() - 1

        assert store.get() is None
        assert TOKEN_KEY not in session
        assert USER_KEY not in session


def test_clear_removes_token_and_user(app):
    with app.test_request_context():
        store = SessionStore()
        store.set('tok-123', 60, user={'_id': 'u1', 'email': 'a@b.com'})
        store.clear()

        assert store.get() is None
        assert store.get_user() is None
        assert session.permanent is False


def test_user_snapshot_needs_a_token(app):
    with app.test_request_context():
        store = SessionStore()
        store.set_user({'_id': 'u1'})
        assert store.get_user() is None

        store.set('tok-123', 60)
        store.set_user({'_id': 'u1'})
        assert store.get_user() == {'_id': 'u1'}
