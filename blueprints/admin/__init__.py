"""
Admin Blueprint - Content management panel
Handles: Dashboard, Projects, Skills, Blog, Contacts, Profile
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

from . import routes
