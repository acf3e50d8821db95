"""
Auth Module - Request-scoped authentication context

AuthContext wraps the SessionStore and the API client. It starts in the
``loading`` state, and resolve() moves it to ``authenticated`` (a token is
stored) or ``unauthenticated``. login() and logout() are the only writers of
the stored token.
"""

from datetime import timedelta
from enum import Enum

from flask import current_app, g, session
from flask_login import login_user, logout_user

from models import User
from .api import ApiError, UnauthorizedError
from .session_store import SessionStore

USER_ID_KEY = '_user_id'


class AuthState(str, Enum):
    LOADING = 'loading'
    AUTHENTICATED = 'authenticated'
    UNAUTHENTICATED = 'unauthenticated'


class AuthenticationError(Exception):
    """Login was rejected or could not be completed"""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class AuthContext:

    def __init__(self, store, api, ttl_hint=None, verify_on_load=False):
        self.store = store
        self.api = api
        self.ttl_hint = ttl_hint
        self.verify_on_load = verify_on_load
        self.state = AuthState.LOADING
        self.user = None
        self.token = None

    @property
    def loading(self):
        return self.state is AuthState.LOADING

    @property
    def is_authenticated(self):
        return self.state is AuthState.AUTHENTICATED

    @property
    def is_admin(self):
        return self.is_authenticated and self.user is not None and self.user.is_admin

    def resolve(self):
        """Read the stored token and leave the loading state"""
        if not self.loading:
            return self

        token = self.store.get()
        if not token:
            self._drop()
            return self

        self.token = token
        self.user = User.from_session(self.store.get_user())
        self.state = AuthState.AUTHENTICATED

        if self.verify_on_load:
            self._refresh_user()
        return self

    def _refresh_user(self):
        try:
            user = self.api.current_user(self.token)
        except UnauthorizedError:
            current_app.logger.info('Stored token rejected by the API; clearing session')
            self._drop()
            return
        except ApiError as e:
            current_app.logger.warning(f"Could not refresh current user: {str(e)}")
            return
        self.user = user
        self.store.set_user(user.to_session())

    def login(self, email, password):
        """Exchange credentials for a token. Raises AuthenticationError on failure."""
        try:
            user, token = self.api.login(email, password)
        except ApiError as e:
            self._drop()
            current_app.logger.warning(f"Login failed for {email}: {str(e)}")
            if isinstance(e, UnauthorizedError) or e.status_code == 400:
                raise AuthenticationError(e.message or 'Invalid credentials', cause=e) from e
            raise AuthenticationError('Login is unavailable right now. Please try again.', cause=e) from e

        self.store.set(token, self.ttl_hint, user=user.to_session())
        self.token = token
        self.user = user
        self.state = AuthState.AUTHENTICATED
        login_user(user)
        current_app.logger.info(f"User logged in: {user.email}")
        return user

    def logout(self):
        """Forget the user and token. The API has no revocation endpoint."""
        if self.user is not None:
            current_app.logger.info(f"User logged out: {self.user.email}")
        self._drop()

    def _drop(self):
        self.store.clear()
        self.user = None
        self.token = None
        self.state = AuthState.UNAUTHENTICATED
        # Flask-Login keeps its own user id in the cookie; it goes with the token
        if USER_ID_KEY in session:
            logout_user()


def get_auth():
    """The AuthContext for the current request, resolved on first use"""
    if 'auth' not in g:
        from extensions import api

        config = current_app.config
        g.auth = AuthContext(
            SessionStore(),
            api,
            ttl_hint=timedelta(days=config.get('AUTH_TOKEN_TTL_DAYS', 30)),
            verify_on_load=config.get('AUTH_VERIFY_ON_LOAD', False),
        )
        g.auth.resolve()
    return g.auth


__all__ = ['AuthState', 'AuthContext', 'AuthenticationError', 'get_auth']
