"""
Models - Schemas for the remote portfolio API

The API is the source of truth for every entity. These models only validate
what crosses the network boundary: responses are parsed into User, Blog and
Project, and dashboard form input is checked with BlogInput / ProjectInput
before it is sent.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from flask_login import UserMixin
from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.helpers import slugify, split_list


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


def _coerce_id(value):
    if value is None:
        return value
    return str(value)


def _unique(items):
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class User(ApiModel, UserMixin):
    """Authenticated account as returned by /auth/login"""

    id: str = Field(alias='_id')
    name: str = ''
    email: str
    is_admin: bool = Field(default=False, alias='isAdmin')

    @field_validator('id', mode='before')
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

    @field_validator('name', mode='before')
    @classmethod
    def blank_name(cls, value):
        return value or ''

    def to_session(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True)

    @classmethod
    def from_session(cls, data) -> Optional['User']:
        """Rebuild the user snapshot kept in the session cookie"""
        if not data:
            return None
        try:
            return cls.model_validate(data)
        except ValueError:
            return None


class LoginResponse(ApiModel):
    """Body of a successful POST /auth/login.

    Older API revisions return the user fields at the top level next to the
    token, newer ones nest them under ``user``.
    """

    token: str = Field(min_length=1)
    user: User

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'LoginResponse':
        if isinstance(data, dict) and 'user' not in data:
            data = {'token': data.get('token'), 'user': data}
        return cls.model_validate(data)


class Blog(ApiModel):
    id: str = Field(alias='_id')
    title: str
    slug: str
    excerpt: str = ''
    content: str = ''
    tags: List[str] = Field(default_factory=list)
    published_at: Optional[datetime] = Field(default=None, alias='publishedAt')

    @field_validator('id', mode='before')
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

    @field_validator('excerpt', 'content', mode='before')
    @classmethod
    def blank_text(cls, value):
        return value or ''

    @field_validator('tags', mode='before')
    @classmethod
    def clean_tags(cls, value):
        if value is None:
            return []
        return _unique(split_list(value))

    def to_form(self) -> Dict[str, str]:
        return {
            'title': self.title,
            'excerpt': self.excerpt,
            'slug': self.slug,
            'content': self.content,
            'tags': ', '.join(self.tags),
        }


class Project(ApiModel):
    id: str = Field(alias='_id')
    title: str
    description: str = ''
    image: Optional[str] = None
    github_url: Optional[str] = Field(default=None, alias='githubUrl')
    live_url: Optional[str] = Field(default=None, alias='liveUrl')
    technologies: List[str] = Field(default_factory=list)
    featured: bool = False

    @field_validator('id', mode='before')
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

    @field_validator('description', mode='before')
    @classmethod
    def blank_description(cls, value):
        return value or ''

    @field_validator('technologies', mode='before')
    @classmethod
    def clean_technologies(cls, value):
        if value is None:
            return []
        return _unique(split_list(value))

    def to_form(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'description': self.description,
            'image': self.image or '',
            'githubUrl': self.github_url or '',
            'liveUrl': self.live_url or '',
            'technologies': ', '.join(self.technologies),
            'featured': self.featured,
        }


def _check_url(value):
    if not value:
        return ''
    if not value.startswith(('http://', 'https://', '/')):
        raise ValueError('must be an http(s) URL or a site-relative path')
    return value


class BlogInput(ApiModel):
    """Blog fields submitted from the dashboard"""

    model_config = ConfigDict(populate_by_name=True, extra='ignore', str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    excerpt: str = Field(default='', max_length=500)
    slug: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)

    @field_validator('tags', mode='before')
    @classmethod
    def split_tags(cls, value):
        return _unique(split_list(value))

    @field_validator('slug', mode='before')
    @classmethod
    def normalize_slug(cls, value):
        return slugify(value or '')

    @classmethod
    def from_form(cls, form) -> 'BlogInput':
        """Build from a submitted form; a blank slug is derived from the title"""
        title = (form.get('title') or '').strip()
        return cls(
            title=title,
            excerpt=form.get('excerpt') or '',
            slug=(form.get('slug') or '').strip() or title,
            content=form.get('content') or '',
            tags=form.get('tags') or '',
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ProjectInput(ApiModel):
    """Project fields submitted from the dashboard"""

    model_config = ConfigDict(populate_by_name=True, extra='ignore', str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    image: str = ''
    github_url: str = Field(default='', alias='githubUrl')
    live_url: str = Field(default='', alias='liveUrl')
    technologies: List[str] = Field(default_factory=list)
    featured: bool = False

    @field_validator('technologies', mode='before')
    @classmethod
    def split_technologies(cls, value):
        return _unique(split_list(value))

    @field_validator('image', 'github_url', 'live_url')
    @classmethod
    def check_urls(cls, value):
        return _check_url(value)

    @classmethod
    def from_form(cls, form) -> 'ProjectInput':
        return cls(
            title=form.get('title') or '',
            description=form.get('description') or '',
            image=form.get('image') or '',
            github_url=form.get('githubUrl') or '',
            live_url=form.get('liveUrl') or '',
            technologies=form.get('technologies') or '',
            featured=form.get('featured') in ('on', 'true', '1', 'yes'),
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


__all__ = ['User', 'LoginResponse', 'Blog', 'Project', 'BlogInput', 'ProjectInput']
