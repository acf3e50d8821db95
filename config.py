import os
from datetime import timedelta


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Remote portfolio API
    API_BASE_URL = os.environ.get('PORTFOLIO_API_URL', 'http://localhost:5000/api')
    API_TIMEOUT = float(os.environ.get('PORTFOLIO_API_TIMEOUT', '10'))

    # Bearer token persistence. The TTL is a hint, the auth server owns the real expiry.
    AUTH_TOKEN_TTL_DAYS = int(os.environ.get('AUTH_TOKEN_TTL_DAYS', '30'))
    PERMANENT_SESSION_LIFETIME = timedelta(days=AUTH_TOKEN_TTL_DAYS)
    AUTH_VERIFY_ON_LOAD = _env_flag('AUTH_VERIFY_ON_LOAD')

    # Contact form (EmailJS)
    EMAILJS_SERVICE_ID = os.environ.get('EMAILJS_SERVICE_ID')
    EMAILJS_TEMPLATE_ID = os.environ.get('EMAILJS_TEMPLATE_ID')
    EMAILJS_PUBLIC_KEY = os.environ.get('EMAILJS_PUBLIC_KEY')
    EMAILJS_PRIVATE_KEY = os.environ.get('EMAILJS_PRIVATE_KEY')

    # Rate limiting for public forms
    RATE_LIMIT_MAX_REQUESTS = 10
    RATE_LIMIT_WINDOW = 60

    # Number of trusted reverse proxies in front of the app (0 = none)
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '0'))

    # Site owner
    SITE_NAME = os.environ.get('SITE_NAME', 'Portfolio')
    SITE_TITLE = os.environ.get('SITE_TITLE', 'Full-Stack Developer')
    SITE_TAGLINE = os.environ.get('SITE_TAGLINE', 'I build things for the web.')
    SOCIAL_GITHUB = os.environ.get('SOCIAL_GITHUB', '')
    SOCIAL_LINKEDIN = os.environ.get('SOCIAL_LINKEDIN', '')
    SOCIAL_TWITTER = os.environ.get('SOCIAL_TWITTER', '')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_TO_FILE = _env_flag('LOG_TO_FILE')

    # JSON Settings
    JSON_AS_ASCII = False


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    API_BASE_URL = 'http://api.test'
    API_TIMEOUT = 5
    AUTH_VERIFY_ON_LOAD = False
    EMAILJS_SERVICE_ID = None
    EMAILJS_TEMPLATE_ID = None
    EMAILJS_PUBLIC_KEY = None
    EMAILJS_PRIVATE_KEY = None
    LOG_TO_FILE = False
    PROXY_FIX_X_FOR = 0


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config(name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
