"""
API Client Module - HTTP access to the remote portfolio API

Every blog, project and account lives behind the remote REST API:

    GET/POST        /blogs
    GET/PUT/DELETE  /blogs/<id or slug>
    GET/POST        /projects
    GET/PUT/DELETE  /projects/<id>
    POST            /auth/login
    GET             /auth/me

Responses are validated against the schemas in models.py before they reach
a view. Failures are raised as ApiError subclasses so views can turn them
into a flash message or a not-found page.
"""

from typing import Any, List, Optional, Tuple
from urllib.parse import quote

import requests
from flask import current_app
from pydantic import ValidationError

from models import Blog, BlogInput, LoginResponse, Project, ProjectInput, User


class ApiError(Exception):
    """Base error for calls to the portfolio API"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self):
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class ApiConnectionError(ApiError):
    """The API could not be reached (DNS, refused connection, timeout)"""


class ApiResponseError(ApiError):
    """The API answered with a non-2xx status or an unexpected body"""


class NotFoundError(ApiResponseError):
    """The requested resource does not exist (404 or empty body)"""


class UnauthorizedError(ApiResponseError):
    """The bearer token was missing, rejected or expired (401/403)"""


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ('message', 'error', 'detail'):
            if body.get(key):
                return str(body[key])
    return response.reason or 'Request failed'


def error_from_response(response):
    """Map a non-2xx response to the matching ApiError subclass"""
    message = _error_message(response)
    status = response.status_code
    if status == 404:
        return NotFoundError(message, status_code=status)
    if status in (401, 403):
        return UnauthorizedError(message, status_code=status)
    return ApiResponseError(message, status_code=status)


class PortfolioApiClient:
    """Thin wrapper over requests.Session bound to API_BASE_URL.

    Initialized like a Flask extension; settings are read from the current
    app on every call so one client can serve several app instances.
    """

    def __init__(self, app=None):
        self.session = requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault('API_BASE_URL', 'http://localhost:5000/api')
        app.config.setdefault('API_TIMEOUT', 10)
        app.extensions['portfolio_api'] = self

    def url_for(self, path):
        base = current_app.config['API_BASE_URL'].rstrip('/')
        return f"{base}/{path.lstrip('/')}"

    def request(self, method, path, token=None, payload=None):
        """Send one request and return the decoded JSON body (None when empty)"""
        headers = {}
        if token:
            headers['Authorization'] = f'Bearer {token}'

        try:
            response = self.session.request(
                method,
                self.url_for(path),
                json=payload,
                headers=headers,
                timeout=current_app.config['API_TIMEOUT'],
            )
        except requests.RequestException as e:
            current_app.logger.warning(f"API {method} {path} failed: {str(e)}")
            raise ApiConnectionError('Could not reach the API') from e

        current_app.logger.debug(f"API {method} {path} -> {response.status_code}")

        if not response.ok:
            error = error_from_response(response)
            current_app.logger.warning(f"API {method} {path} error: {error}")
            raise error

        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError('API returned a non-JSON body', status_code=response.status_code) from e

    # Parsing

    def _parse(self, model, data, what):
        if data is None or data == {}:
            raise NotFoundError(f'{what} not found', status_code=404)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            current_app.logger.warning(f"Invalid {what} payload from API: {str(e)}")
            raise ApiResponseError(f'Unexpected {what} data from the API') from e

    def _parse_list(self, model, data, what):
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiResponseError(f'Expected a list of {what} from the API')
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            current_app.logger.warning(f"Invalid {what} list from API: {str(e)}")
            raise ApiResponseError(f'Unexpected {what} data from the API') from e

    def _parse_written(self, model, data, what):
        # Some API revisions answer writes with an empty body or a status message
        if not isinstance(data, dict) or '_id' not in data:
            return None
        return self._parse(model, data, what)

    # Auth

    def login(self, email, password) -> Tuple[User, str]:
        data = self.request('POST', '/auth/login', payload={'email': email, 'password': password})
        try:
            result = LoginResponse.from_payload(data or {})
        except ValidationError as e:
            current_app.logger.warning(f"Invalid login payload from API: {str(e)}")
            raise ApiResponseError('Unexpected login response from the API') from e
        return result.user, result.token

    def current_user(self, token) -> User:
        data = self.request('GET', '/auth/me', token=token)
        if isinstance(data, dict) and isinstance(data.get('user'), dict):
            data = data['user']
        return self._parse(User, data, 'user')

    # Blogs

    def list_blogs(self, token=None) -> List[Blog]:
        return self._parse_list(Blog, self.request('GET', '/blogs', token=token), 'blogs')

    def get_blog(self, id_or_slug, token=None) -> Blog:
        data = self.request('GET', f'/blogs/{quote(str(id_or_slug), safe="")}', token=token)
        return self._parse(Blog, data, 'blog')

    def create_blog(self, blog: BlogInput, token) -> Optional[Blog]:
        data = self.request('POST', '/blogs', token=token, payload=blog.to_payload())
        return self._parse_written(Blog, data, 'blog')

    def update_blog(self, blog_id, blog: BlogInput, token) -> Optional[Blog]:
        data = self.request('PUT', f'/blogs/{quote(str(blog_id), safe="")}', token=token,
                            payload=blog.to_payload())
        return self._parse_written(Blog, data, 'blog')

    def delete_blog(self, blog_id, token) -> Any:
        return self.request('DELETE', f'/blogs/{quote(str(blog_id), safe="")}', token=token)

    # Projects

    def list_projects(self, token=None) -> List[Project]:
        return self._parse_list(Project, self.request('GET', '/projects', token=token), 'projects')

    def get_project(self, project_id, token=None) -> Project:
        data = self.request('GET', f'/projects/{quote(str(project_id), safe="")}', token=token)
        return self._parse(Project, data, 'project')

    def create_project(self, project: ProjectInput, token) -> Optional[Project]:
        data = self.request('POST', '/projects', token=token, payload=project.to_payload())
        return self._parse_written(Project, data, 'project')

    def update_project(self, project_id, project: ProjectInput, token) -> Optional[Project]:
        data = self.request('PUT', f'/projects/{quote(str(project_id), safe="")}', token=token,
                            payload=project.to_payload())
        return self._parse_written(Project, data, 'project')

    def delete_project(self, project_id, token) -> Any:
        return self.request('DELETE', f'/projects/{quote(str(project_id), safe="")}', token=token)


__all__ = [
    'ApiError',
    'ApiConnectionError',
    'ApiResponseError',
    'NotFoundError',
    'UnauthorizedError',
    'PortfolioApiClient',
    'error_from_response'
]
