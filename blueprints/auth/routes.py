"""
Auth Routes - Login and logout against the portfolio API
"""

from flask import render_template, redirect, url_for, request, flash
from utils.auth import get_auth, AuthenticationError
from utils.helpers import is_safe_redirect
from utils.security import check_rate_limit
from . import auth_bp


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login"""
    auth = get_auth()
    next_url = request.values.get('next', '')

    if request.method == 'GET' and auth.is_authenticated:
        return redirect(url_for('dashboard.index') if auth.is_admin else url_for('pages.index'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Email and password are required.', 'error')
            return render_template('auth/login.html', email=email, next=next_url), 400

        if not check_rate_limit('login'):
            flash('Too many login attempts. Please wait a minute.', 'error')
            return render_template('auth/login.html', email=email, next=next_url), 429

        try:
            user = auth.login(email, password)
        except AuthenticationError as e:
            flash(e.message, 'error')
            return render_template('auth/login.html', email=email, next=next_url), 401

        flash(f'Welcome back, {user.name or user.email}!', 'success')
        if is_safe_redirect(next_url):
            return redirect(next_url)
        if user.is_admin:
            return redirect(url_for('dashboard.index'))
        return redirect(url_for('pages.index'))

    return render_template('auth/login.html', email='', next=next_url)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Logout current user"""
    auth = get_auth()
    if not auth.is_authenticated:
        return redirect(url_for('auth.login'))

    auth.logout()
    flash('Logged out successfully', 'success')
    return redirect(url_for('pages.index'))
