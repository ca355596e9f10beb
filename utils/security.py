"""
Security Module - Client identification and credential checks
"""

from flask import request


def get_client_ip():
    """Get real client IP address, honoring the first X-Forwarded-For hop"""
    forwarded = request.environ.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.environ.get('REMOTE_ADDR', 'unknown')


def get_user_agent():
    return request.headers.get('User-Agent', 'Unknown')[:500]


def validate_password_change(user, current_password, new_password, confirm_password):
    """Return a list of error messages for an admin password change"""
    errors = []
    if not current_password or not user.check_password(current_password):
        errors.append('Current password is incorrect')
    if not new_password or len(new_password) < 6:
        errors.append('New password must be at least 6 characters')
    if new_password != confirm_password:
        errors.append('New password and confirmation do not match')
    if new_password and current_password and new_password == current_password:
        errors.append('New password must be different from the current password')
    return errors


__all__ = ['get_client_ip', 'get_user_agent', 'validate_password_change']
