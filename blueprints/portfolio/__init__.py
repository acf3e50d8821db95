"""
Portfolio Blueprint - Public portfolio views
Handles: Project list, blog list, blog posts
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='')

from . import routes
