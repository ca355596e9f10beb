"""
API Blueprint - JSON API for a separate frontend
Handles: Auth, Projects, Skills, Blog, Contact
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import common, auth, projects, skills, blog, contact
