"""
Notifications Module - Contact form delivery through EmailJS
"""

import requests
from flask import current_app

EMAILJS_SEND_URL = 'https://api.emailjs.com/api/v1.0/email/send'


def get_emailjs_config():
    """Load EmailJS credentials from the app config"""
    return {
        'service_id': current_app.config.get('EMAILJS_SERVICE_ID'),
        'template_id': current_app.config.get('EMAILJS_TEMPLATE_ID'),
        'public_key': current_app.config.get('EMAILJS_PUBLIC_KEY'),
        'private_key': current_app.config.get('EMAILJS_PRIVATE_KEY'),
    }


def is_email_configured():
    config = get_emailjs_config()
    return all([config['service_id'], config['template_id'], config['public_key']])


def send_contact_message(name, email, message):
    """
    Send a contact form message through the EmailJS REST API

    Args:
        name (str): Sender name
        email (str): Sender email, used as reply-to
        message (str): Message body

    Returns:
        bool: True if sent successfully, False otherwise
    """
    config = get_emailjs_config()
    if not is_email_configured():
        current_app.logger.warning("EmailJS is not configured - contact message not sent")
        return False

    payload = {
        'service_id': config['service_id'],
        'template_id': config['template_id'],
        'user_id': config['public_key'],
        'template_params': {
            'from_name': name,
            'from_email': email,
            'reply_to': email,
            'message': message,
        }
    }
    if config['private_key']:
        payload['accessToken'] = config['private_key']

    try:
        response = requests.post(EMAILJS_SEND_URL, json=payload, timeout=10)
        if response.status_code == 200:
            current_app.logger.info(f"Contact message sent from {email}")
            return True
        current_app.logger.error(f"EmailJS error: {response.status_code} {response.text[:200]}")
        return False
    except requests.RequestException as e:
        current_app.logger.error(f"EmailJS request error: {str(e)}")
        return False


__all__ = ['get_emailjs_config', 'is_email_configured', 'send_contact_message']
