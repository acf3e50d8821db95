"""
Utils Package - Centralized utility modules initialization

api, auth, session_store and decorators depend on models/extensions and are
imported from their own modules.
"""

from .helpers import (
    split_list,
    slugify,
    sanitize_html,
    render_markdown,
    format_date,
    validation_messages,
    is_safe_redirect
)
from .security import get_client_ip, check_rate_limit, reset_rate_limits
from .notifications import get_emailjs_config, is_email_configured, send_contact_message

__all__ = [
    # Helpers
    'split_list',
    'slugify',
    'sanitize_html',
    'render_markdown',
    'format_date',
    'validation_messages',
    'is_safe_redirect',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'reset_rate_limits',

    # Notifications
    'get_emailjs_config',
    'is_email_configured',
    'send_contact_message'
]
