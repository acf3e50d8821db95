import json
from collections import namedtuple
from http import HTTPStatus
from urllib.parse import urlsplit

import pytest
import requests

from app import create_app
from extensions import api
from utils.security import reset_rate_limits

API_URL = 'http://api.test'

ApiCall = namedtuple('ApiCall', ['method', 'path', 'headers', 'json'])

ADMIN = {'_id': 'u1', 'name': 'Ada', 'email': 'a@b.com', 'isAdmin': True}
READER = {'_id': 'u2', 'name': 'Bob', 'email': 'bob@example.com', 'isAdmin': False}

BLOG = {
    '_id': '123',
    'title': 'Hello World',
    'slug': 'hello-world',
    'excerpt': 'First post',
    'content': '# Hello\n\nSome **bold** text.',
    'tags': ['python', 'flask'],
    'publishedAt': '2024-05-01T10:00:00.000Z',
}

SECOND_BLOG = {
    '_id': '456',
    'title': 'Second Post',
    'slug': 'second-post',
    'excerpt': 'Another one',
    'content': 'More words.',
    'tags': ['notes'],
    'publishedAt': '2024-06-01T10:00:00.000Z',
}

PROJECT = {
    '_id': 'p1',
    'title': 'Weather App',
    'description': 'Forecasts with charts',
    'image': 'https://img.example.com/weather.png',
    'githubUrl': 'https://github.com/example/weather',
    'liveUrl': 'https://weather.example.com',
    'technologies': ['React', 'Node'],
    'featured': False,
}

FEATURED_PROJECT = {
    '_id': 'p2',
    'title': 'Portfolio CMS',
    'description': 'Headless CMS for this site',
    'technologies': ['Python'],
    'featured': True,
}


def make_response(status=200, body=None, url=API_URL):
    """Build a real requests.Response; bytes bodies are sent verbatim"""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.reason = HTTPStatus(status).phrase
    if body is None:
        response._content = b''
    elif isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
    return response


class FakeApi:
    """Stand-in for the remote portfolio API.

    Routes map (METHOD, path) to (status, body). A body may be an exception
    to raise or a callable taking the ApiCall and returning (status, body).
    Unknown routes answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, method, path, body=None, status=200):
        self.routes[(method.upper(), path)] = (status, body)

    def calls_to(self, method, path=None):
        return [c for c in self.calls
                if c.method == method.upper() and (path is None or c.path == path)]

    def __call__(self, method, url, json=None, headers=None, timeout=None, **kwargs):
        path = url[len(API_URL):] if url.startswith(API_URL) else url
        call = ApiCall(method.upper(), path, dict(headers or {}), json)
        self.calls.append(call)

        route = self.routes.get((call.method, path))
        if route is None:
            return make_response(404, {'message': 'Not found'}, url)
        status, body = route
        if isinstance(body, Exception):
            raise body
        if callable(body):
            status, body = body(call)
        return make_response(status, body, url)


@pytest.fixture
def app():
    app = create_app('testing')
    reset_rate_limits()
    yield app
    reset_rate_limits()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fake_api(monkeypatch):
    fake = FakeApi()
    monkeypatch.setattr(api.session, 'request', fake)
    return fake


@pytest.fixture
def login_as(client, fake_api):
    """Log in through the login form against the fake API"""
    def _login(user=ADMIN, token='tok-123'):
        fake_api.on('POST', '/auth/login', dict(user, token=token))
        response = client.post('/login', data={'email': user['email'], 'password': 'pw'})
        fake_api.calls.clear()
        return response
    return _login


def location_path(response):
    """Path of a redirect's Location header, ignoring host and query"""
    return urlsplit(response.headers['Location']).path
