"""
Portfolio Site - Main Application Entry Point
Application Factory Pattern with blueprints

The site renders a public portfolio (about, projects, blogs) and an admin
dashboard. All content lives behind the remote portfolio API; this app is
its client and keeps only the bearer token in the session cookie.
"""

import os
import sys
import logging
from datetime import datetime
from flask import Flask, render_template
from werkzeug.middleware.proxy_fix import ProxyFix
from config import get_config
from extensions import login_manager, api
from utils.auth import get_auth
from utils.helpers import render_markdown, format_date

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.dashboard import dashboard_bp
from blueprints.portfolio import portfolio_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))

    configure_logging(app)

    # Trust X-Forwarded-For only from the configured number of proxies
    if app.config.get('PROXY_FIX_X_FOR'):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config['PROXY_FIX_X_FOR'], x_proto=1)

    # Initialize extensions with app
    initialize_extensions(app)

    # Register Jinja filters
    app.jinja_env.filters['markdown'] = render_markdown
    app.jinja_env.filters['date'] = format_date

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio site is running'}, 200

    app.logger.info(f"✓ Application started (API: {app.config['API_BASE_URL']})")
    return app


def configure_logging(app):
    """Log to stdout by default; LOG_TO_FILE adds a rotating file handler"""
    formatter = logging.Formatter('%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    if app.config.get('LOG_TO_FILE'):
        from logging.handlers import RotatingFileHandler
        if not any(isinstance(h, RotatingFileHandler) for h in app.logger.handlers):
            try:
                os.makedirs('logs', exist_ok=True)
                file_handler = RotatingFileHandler('logs/app.log', maxBytes=10240, backupCount=3)
                file_handler.setFormatter(formatter)
                app.logger.addHandler(file_handler)
            except OSError:
                app.logger.warning('Could not configure file logging; logs will be sent to stdout')

    if not app.testing and not any(type(h) is logging.StreamHandler for h in app.logger.handlers):
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        app.logger.addHandler(stream_handler)

    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    login_manager.init_app(app)
    api.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        auth = get_auth()
        if auth.user is not None and auth.user.get_id() == user_id:
            return auth.user
        return None


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(portfolio_bp)


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return render_template('500.html'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        """Site metadata and footer links for all templates; Flask-Login provides current_user"""
        config = app.config
        return {
            'current_year': datetime.now().year,
            'site': {
                'name': config.get('SITE_NAME'),
                'title': config.get('SITE_TITLE'),
                'tagline': config.get('SITE_TAGLINE'),
            },
            'social_links': {
                'GitHub': config.get('SOCIAL_GITHUB'),
                'LinkedIn': config.get('SOCIAL_LINKEDIN'),
                'Twitter': config.get('SOCIAL_TWITTER'),
            },
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "img-src * data:; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self' 'unsafe-inline'; "
            "frame-ancestors 'none';"
        )
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        if app.config.get('SESSION_COOKIE_SECURE'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 8000)),
        debug=(env == 'development')
    )
