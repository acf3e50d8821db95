"""
Pages Blueprint - Public pages
Handles: Home, About, Contact form
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
