"""
Extensions Module - Centralized initialization of Flask extensions
Decouples extensions from the main app.py to avoid circular imports
and enable better testing.
"""

from flask_login import LoginManager
from utils.api import PortfolioApiClient

# Initialize extensions without binding to app
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Please login to access this page.'
login_manager.login_message_category = 'error'

api = PortfolioApiClient()

__all__ = ['login_manager', 'api']
