"""
Session Store - Bearer token persistence

The API token is kept in Flask's signed session cookie, next to an expiry
hint and a snapshot of the user returned at login. Nothing here validates
the token; only the auth server knows whether it is still good.
"""

import time
from datetime import timedelta

from flask import session

TOKEN_KEY = 'auth_token'
EXPIRES_KEY = 'auth_token_expires'
USER_KEY = 'auth_user'


def _seconds(ttl_hint):
    if isinstance(ttl_hint, timedelta):
        return ttl_hint.total_seconds()
    return float(ttl_hint)


class SessionStore:
    """get() / set(token, ttl_hint) / clear() over the session cookie"""

    def get(self):
        token = session.get(TOKEN_KEY)
        if not token:
            return None
        expires_at = session.get(EXPIRES_KEY)
        if expires_at is not None and time.time() >= expires_at:
            self.clear()
            return None
        return token

    def set(self, token, ttl_hint=None, user=None):
        if not token:
            raise ValueError('token must be a non-empty string')
        session[TOKEN_KEY] = token
        if ttl_hint is not None:
            session[EXPIRES_KEY] = time.time() + _seconds(ttl_hint)
            session.permanent = True
        else:
            session.pop(EXPIRES_KEY, None)
        if user is not None:
            session[USER_KEY] = user

    def get_user(self):
        """User snapshot saved with the token, or None when there is no token"""
        if self.get() is None:
            return None
        return session.get(USER_KEY)

    def set_user(self, user):
        if self.get() is not None:
            session[USER_KEY] = user

    def clear(self):
        for key in (TOKEN_KEY, EXPIRES_KEY, USER_KEY):
            session.pop(key, None)
        if session.permanent:
            session.permanent = False


__all__ = ['SessionStore', 'TOKEN_KEY', 'EXPIRES_KEY', 'USER_KEY']
