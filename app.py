"""
Portfolio - Main Application Entry Point
Application Factory Pattern: public site, admin panel and JSON API

This module initializes the Flask application with all necessary extensions,
configurations, and middleware. All actual route handling is delegated to blueprints.
"""

import os
import time
from datetime import datetime
from flask import Flask, render_template, request, session, jsonify, g
from config import get_config
from extensions import db, login_manager
from models import User
from utils.cache import content_cache
from utils.decorators import is_admin_user
from utils.helpers import (
    render_content,
    get_category_icon,
    get_category_description,
    get_skill_level,
    get_skill_level_text
)

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.admin import admin_bp
from blueprints.api import api_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))

    # Initialize extensions with app
    initialize_extensions(app)

    # Public list cache starts empty for every application instance
    content_cache.ttl = app.config.get('CONTENT_CACHE_TTL', 300)
    content_cache.invalidate()

    # Register Jinja filters
    app.jinja_env.filters['render_content'] = render_content

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'OK',
            'message': 'Server is running',
            'timestamp': datetime.utcnow().isoformat()
        }), 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("Database initialized successfully")
        except Exception as e:
            app.logger.error(f"Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(api_bp)


def _is_api_request():
    return request.path.startswith('/api')


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        if _is_api_request():
            return jsonify({'success': False, 'message': 'API route not found'}), 404
        return render_template('404.html'), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        if _is_api_request():
            return jsonify({'success': False, 'message': 'Method not allowed'}), 405
        return render_template('404.html'), 405

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        db.session.rollback()
        if _is_api_request():
            return jsonify({'success': False, 'message': 'Server error'}), 500
        return render_template('500.html'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.context_processor
    def inject_global_vars():
        """Values shared by every template"""
        return {
            'session_user': session.get('user'),
            'is_admin': is_admin_user(),
            'current_year': datetime.now().year,
            'get_category_icon': get_category_icon,
            'get_category_description': get_category_description,
            'get_skill_level': get_skill_level,
            'get_skill_level_text': get_skill_level_text,
        }

    @app.after_request
    def add_api_headers(response):
        """CORS origin for the separate frontend"""
        if _is_api_request():
            response.headers['Access-Control-Allow-Origin'] = app.config.get('FRONTEND_URL', '*')
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
            response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response

    @app.after_request
    def log_slow_requests(response):
        started = g.get('request_started')
        if started is not None:
            elapsed = time.perf_counter() - started
            if elapsed > app.config.get('SLOW_REQUEST_THRESHOLD', 1.0):
                app.logger.warning(
                    f"Slow request: {request.method} {request.path} took {elapsed:.3f}s")
        return response


# Create app instance for gunicorn
app = create_app()

if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
