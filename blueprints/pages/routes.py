"""
Pages Routes - Public pages and the contact form
"""

import re
from flask import render_template, redirect, url_for, request, flash, current_app
from extensions import api
from utils.api import ApiError
from utils.notifications import send_contact_message
from utils.security import check_rate_limit
from . import pages_bp

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
LATEST_POSTS = 3


@pages_bp.route('/')
def index():
    """Landing page - hero, featured projects and latest posts"""
    try:
        projects = api.list_projects()
    except ApiError as e:
        current_app.logger.warning(f"Home page could not load projects: {str(e)}")
        projects = []
    try:
        blogs = api.list_blogs()
    except ApiError as e:
        current_app.logger.warning(f"Home page could not load blogs: {str(e)}")
        blogs = []

    featured = [p for p in projects if p.featured] or projects[:3]
    latest = sorted(
        blogs,
        key=lambda b: b.published_at.timestamp() if b.published_at else 0,
        reverse=True
    )[:LATEST_POSTS]

    return render_template('pages/index.html',
                           featured_projects=featured,
                           latest_posts=latest)


@pages_bp.route('/about')
def about():
    """About page"""
    return render_template('pages/about.html')


@pages_bp.route('/contact', methods=['POST'])
def contact():
    """Contact form processing - delivered through EmailJS"""
    # Honeypot spam protection
    if request.form.get('website'):
        return redirect(url_for('pages.index'))

    if not check_rate_limit('contact'):
        flash('Too many requests. Please try again later.', 'error')
        return redirect(url_for('pages.index', _anchor='contact'))

    name = request.form.get('name', '').strip()
    email = request.form.get('email', '').strip()
    message = request.form.get('message', '').strip()

    if not all([name, email, message]):
        flash('Please fill in your name, email and message.', 'error')
        return redirect(url_for('pages.index', _anchor='contact'))

    if not EMAIL_RE.match(email):
        flash('Please enter a valid email address.', 'error')
        return redirect(url_for('pages.index', _anchor='contact'))

    if send_contact_message(name[:200], email[:200], message[:5000]):
        flash('Message sent successfully! I will get back to you soon.', 'success')
    else:
        flash('Error sending message. Please try again.', 'error')
    return redirect(url_for('pages.index', _anchor='contact'))
