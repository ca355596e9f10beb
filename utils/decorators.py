"""
Decorators Module - Authentication and authorization decorators
"""

from functools import wraps
from flask import redirect, url_for, flash, jsonify
from flask_login import current_user


def is_admin_user():
    """True when the current session belongs to an active admin"""
    return bool(
        current_user.is_authenticated
        and current_user.is_active
        and current_user.role == 'admin'
    )


def admin_required(f):
    """Decorator to require an admin session on admin panel pages"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin_user():
            flash('Access denied. Admin privileges required.', 'error')
            return redirect(url_for('auth.login'))
        return f(*args, **kwargs)
    return decorated_function


def api_admin_required(f):
    """Decorator to require an admin session on JSON endpoints"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin_user():
            return jsonify({
                'success': False,
                'message': 'Not authorized to access this route'
            }), 401
        return f(*args, **kwargs)
    return decorated_function


__all__ = ['is_admin_user', 'admin_required', 'api_admin_required']
