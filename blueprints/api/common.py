"""
API Common - Response envelope helpers and shared error handlers
"""

from flask import request, jsonify, current_app
from extensions import db
from utils.validation import ValidationError
from . import api_bp


def json_body():
    """Request JSON as a dict; anything else counts as an empty body"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def success(data=None, status=200, **extra):
    payload = {'success': True}
    payload.update(extra)
    if data is not None:
        payload['data'] = data
    return jsonify(payload), status


def failure(message, status):
    return jsonify({'success': False, 'message': message}), status


def not_found(resource):
    return failure(f'{resource} not found', 404)


def server_error(operation, error):
    current_app.logger.error(f"{operation} error: {str(error)}")
    db.session.rollback()
    return failure('Server error', 500)


@api_bp.errorhandler(ValidationError)
def handle_validation_error(error):
    current_app.logger.info(f"API validation failed on {request.path}: {error.message}")
    return jsonify(error.to_dict()), 400
