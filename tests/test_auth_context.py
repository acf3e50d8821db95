from datetime import timedelta

import pytest
import requests
from flask import session
from flask_login import current_user

from conftest import ADMIN
from extensions import api
from utils.auth import AuthContext, AuthState, AuthenticationError, get_auth
from utils.session_store import SessionStore


def make_context(**kwargs):
    return AuthContext(SessionStore(), api, ttl_hint=timedelta(days=30), **kwargs)


def test_context_starts_in_loading_state(app):
    with app.test_request_context():
        auth = make_context()
        assert auth.state is AuthState.LOADING
        assert auth.loading
        assert not auth.is_authenticated


def test_resolve_without_token_is_unauthenticated(app):
    with app.test_request_context():
        auth = make_context().resolve()
        assert auth.state is AuthState.UNAUTHENTICATED
        assert auth.user is None
        assert auth.token is None


def test_login_stores_token_and_exposes_user(app, fake_api):
    fake_api.on('POST', '/auth/login', dict(ADMIN, token='tok-123'))

    with app.test_request_context():
        auth = make_context().resolve()
        user = auth.login('a@b.com', 'pw')

        assert SessionStore().get() == 'tok-123'
        assert auth.state is AuthState.AUTHENTICATED
        assert auth.token == 'tok-123'
        assert auth.user is user
        assert user.email == 'a@b.com'
        assert auth.is_admin
        assert current_user.is_authenticated
        assert current_user.get_id() == 'u1'

    call = fake_api.calls_to('POST', '/auth/login')[0]
    assert call.json == {'email': 'a@b.com', 'password': 'pw'}
    assert 'Authorization' not in call.headers


def test_login_accepts_nested_user_payload(app, fake_api):
    fake_api.on('POST', '/auth/login', {'user': ADMIN, 'token': 'tok-456'})

    with app.test_request_context():
        auth = make_context().resolve()
        user = auth.login('a@b.com', 'pw')
        assert user.name == 'Ada'
        assert SessionStore().get() == 'tok-456'


def test_failed_login_leaves_store_empty(app, fake_api):
    fake_api.on('POST', '/auth/login', {'message': 'Invalid email or password'}, status=401)

    with app.test_request_context():
        auth = make_context().resolve()
        with pytest.raises(AuthenticationError) as exc:
            auth.login('a@b.com', 'wrong')

        assert exc.value.message == 'Invalid email or password'
        assert SessionStore().get() is None
        assert auth.state is AuthState.UNAUTHENTICATED
        assert auth.user is None


def test_failed_login_drops_previous_token(app, fake_api):
    fake_api.on('POST', '/auth/login', {'message': 'Invalid email or password'}, status=401)

    with app.test_request_context():
        SessionStore().set('old-token', 60)
        auth = make_context().resolve()
        with pytest.raises(AuthenticationError):
            auth.login('a@b.com', 'wrong')
        assert SessionStore().get() is None


def test_login_when_api_is_down(app, fake_api):
    fake_api.on('POST', '/auth/login', requests.ConnectionError('refused'))

    with app.test_request_context():
        auth = make_context().resolve()
        with pytest.raises(AuthenticationError) as exc:
            auth.login('a@b.com', 'pw')
        assert 'unavailable' in exc.value.message
        assert SessionStore().get() is None


def test_logout_clears_store_and_state(app, fake_api):
    fake_api.on('POST', '/auth/login', dict(ADMIN, token='tok-123'))

    with app.test_request_context():
        auth = make_context().resolve()
        auth.login('a@b.com', 'pw')
        auth.logout()

        assert SessionStore().get() is None
        assert auth.state is AuthState.UNAUTHENTICATED
        assert auth.user is None
        assert auth.token is None
        assert not current_user.is_authenticated


def test_reload_repopulates_user_from_snapshot(app, fake_api):
    with app.test_request_context():
        SessionStore().set('tok-123', 60, user=ADMIN)
        auth = make_context().resolve()

        assert auth.is_authenticated
        assert auth.user.email == 'a@b.com'
        assert auth.is_admin
    assert fake_api.calls == []


def test_token_without_snapshot_is_not_admin(app):
    with app.test_request_context():
        SessionStore().set('tok-123', 60)
        auth = make_context().resolve()

        assert auth.is_authenticated
        assert auth.user is None
        assert not auth.is_admin


def test_verify_on_load_refreshes_user(app, fake_api):
    fake_api.on('GET', '/auth/me', dict(ADMIN, name='Ada Lovelace'))

    with app.test_request_context():
        SessionStore().set('tok-123', 60, user=ADMIN)
        auth = make_context(verify_on_load=True).resolve()

        assert auth.user.name == 'Ada Lovelace'
        assert SessionStore().get_user()['name'] == 'Ada Lovelace'

    assert fake_api.calls[0].headers['Authorization'] == 'Bearer tok-123'


def test_verify_on_load_rejected_token_clears_session(app, fake_api):
    fake_api.on('GET', '/auth/me', {'message': 'Token expired'}, status=401)

    with app.test_request_context():
        SessionStore().set('tok-123', 60, user=ADMIN)
        auth = make_context(verify_on_load=True).resolve()

        assert auth.state is AuthState.UNAUTHENTICATED
        assert SessionStore().get() is None


def test_verify_on_load_keeps_snapshot_when_api_is_down(app, fake_api):
    fake_api.on('GET', '/auth/me', requests.Timeout('slow'))

    with app.test_request_context():
        SessionStore().set('tok-123', 60, user=ADMIN)
        auth = make_context(verify_on_load=True).resolve()

        assert auth.is_authenticated
        assert auth.user.name == 'Ada'


def test_get_auth_is_request_scoped(app):
    with app.test_request_context():
        first = get_auth()
        assert first is get_auth()
        assert first.state is AuthState.UNAUTHENTICATED

    with app.test_request_context():
        assert get_auth() is not first


def test_expired_token_also_drops_flask_login_user(app):
    with app.test_request_context():
        SessionStore().set('tok-123', -1, user=ADMIN)
        session['_user_id'] = 'u1'

        auth = get_auth()

        assert auth.state is AuthState.UNAUTHENTICATED
        assert '_user_id' not in session
        assert not current_user.is_authenticated
