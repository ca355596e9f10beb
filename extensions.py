"""
Extensions Module - Centralized initialization of Flask extensions
Decouples extensions from app.py to avoid circular imports
and enable better testing.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Initialize extensions without binding to app
db = SQLAlchemy()
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Access denied. Admin privileges required.'
login_manager.login_message_category = 'error'

__all__ = ['db', 'login_manager']
