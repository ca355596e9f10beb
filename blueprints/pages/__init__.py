"""
Pages Blueprint - Public portfolio pages
Handles: Home, About, Projects, Skills, Blog, Contact, Resume
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
