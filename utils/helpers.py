"""
Helpers Module - Text utilities shared by models, views and templates
"""

import re
import unicodedata
from datetime import datetime

import markdown
import nh3
from flask import current_app
from markupsafe import Markup


MARKDOWN_EXTENSIONS = ['extra', 'sane_lists', 'smarty']

# Blog HTML allowlist: nh3 defaults plus the markup Markdown "extra" emits
ALLOWED_TAGS = set(nh3.ALLOWED_TAGS)
ALLOWED_ATTRIBUTES = {tag: set(attrs) for tag, attrs in nh3.ALLOWED_ATTRIBUTES.items()}
ALLOWED_ATTRIBUTES.setdefault('*', set()).update({'id', 'class', 'title'})
ALLOWED_URL_SCHEMES = {'http', 'https', 'mailto'}


def split_list(value):
    """Split a comma separated string (or an iterable) into trimmed, non-empty items"""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(',')
    else:
        items = value
    result = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            result.append(text)
    return result


def slugify(text):
    """Turn a title into a URL slug: lowercase ascii words joined by hyphens"""
    if not text:
        return ''
    normalized = unicodedata.normalize('NFKD', str(text))
    ascii_text = normalized.encode('ascii', 'ignore').decode('ascii').lower()
    ascii_text = re.sub(r'[^a-z0-9]+', '-', ascii_text)
    return ascii_text.strip('-')


def sanitize_html(html):
    """Reduce rendered HTML to an allowlist of tags, attributes and URL schemes.

    - <script> and <style> are dropped together with their content
    - Event handler attributes (onclick=..., onerror=...) never survive
    - Links and images keep only http(s), mailto and relative URLs, so
      javascript: is removed however it is quoted or entity-encoded
    """
    if not html:
        return ''
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_URL_SCHEMES,
    )


def render_markdown(text):
    """Render blog markdown to safe HTML for templates"""
    if not text:
        return Markup('')
    try:
        html = markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format='html')
    except Exception as e:
        current_app.logger.error(f"Error rendering markdown: {str(e)}")
        return Markup('')
    return Markup(sanitize_html(html))


def format_date(value, fmt='%B %d, %Y'):
    """Format an optional datetime for display"""
    if not value:
        return ''
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return value
    return value.strftime(fmt)


def validation_messages(error):
    """Flatten a pydantic ValidationError into readable messages"""
    messages = []
    for item in error.errors():
        field = '.'.join(str(part) for part in item.get('loc', ()) if part != '__root__')
        label = field.replace('_', ' ').capitalize() if field else 'Form'
        msg = item.get('msg', 'is invalid')
        if msg.startswith('Value error, '):
            msg = msg[len('Value error, '):]
        messages.append(f"{label}: {msg}")
    return messages


def is_safe_redirect(target):
    """Only allow site-relative redirect targets after login"""
    if not target:
        return False
    return target.startswith('/') and not target.startswith('//') and '\\' not in target


__all__ = [
    'split_list',
    'slugify',
    'sanitize_html',
    'render_markdown',
    'format_date',
    'validation_messages',
    'is_safe_redirect'
]
