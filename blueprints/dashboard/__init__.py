"""
Dashboard Blueprint - Admin content management
Handles: Creating, editing and deleting blogs and projects through the API
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')

from . import routes
