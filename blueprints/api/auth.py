"""
API Auth - Session login for the JSON API
"""

from flask import current_app
from flask_login import current_user
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import User
from blueprints.auth.routes import start_user_session, end_user_session
from utils.data import get_user_by_email, user_to_dict
from utils.validation import clean_registration
from . import api_bp
from .common import json_body, success, failure, server_error


@api_bp.route('/auth/register', methods=['POST'])
def register():
    """Create a regular user account and sign it in"""
    attrs = clean_registration(json_body())
    if get_user_by_email(attrs['email']):
        return failure('User already exists', 400)

    try:
        user = User(name=attrs['name'], email=attrs['email'], role='user', is_active=True)
        user.set_password(attrs['password'])
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return failure('User already exists', 400)
    except Exception as e:
        return server_error('Register', e)

    current_app.logger.info(f"User registered: {user.email}")
    start_user_session(user)
    return success(user_to_dict(user), status=201)


@api_bp.route('/auth/login', methods=['POST'])
def login():
    data = json_body()
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''
    if not email or not password:
        return failure('Please provide an email and password', 400)

    user = get_user_by_email(email)
    if not user or not user.check_password(password):
        current_app.logger.warning(f"Failed API login for {email}")
        return failure('Invalid credentials', 401)
    if not user.is_active:
        return failure('Account is deactivated', 401)

    start_user_session(user)
    return success(user_to_dict(user))


@api_bp.route('/auth/logout', methods=['POST'])
def logout():
    end_user_session()
    return success(message='Logged out successfully')


@api_bp.route('/auth/me')
def me():
    if not current_user.is_authenticated:
        return failure('Not authorized to access this route', 401)
    return success(user_to_dict(current_user))
