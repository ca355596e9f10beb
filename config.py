import os
from datetime import timedelta


def _build_database_url():
    """Resolve the database URL from the environment"""
    database_url = os.environ.get('DATABASE_URL')
    if not database_url:
        # Fall back to individual MySQL settings when DATABASE_URL is missing
        db_host = os.environ.get('DB_HOST')
        if db_host:
            db_user = os.environ.get('DB_USER', 'root')
            db_pass = os.environ.get('DB_PASSWORD', '')
            db_port = os.environ.get('DB_PORT', '3306')
            db_name = os.environ.get('DB_NAME', 'portfolio')
            database_url = f"mysql+pymysql://{db_user}:{db_pass}@{db_host}:{db_port}/{db_name}"

    if database_url and database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    return database_url or 'sqlite:///portfolio.db'


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'your-session-secret-here')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Database Settings
    SQLALCHEMY_DATABASE_URI = _build_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JSON Settings
    JSON_AS_ASCII = False
    JSON_SORT_KEYS = False

    # Admin seed credentials
    ADMIN_NAME = os.environ.get('ADMIN_NAME', 'Admin User')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@portfolio.com')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'admin123')

    # Email Settings
    EMAIL_HOST = os.environ.get('EMAIL_HOST')
    EMAIL_PORT = os.environ.get('EMAIL_PORT', '587')
    EMAIL_USER = os.environ.get('EMAIL_USER')
    EMAIL_PASS = os.environ.get('EMAIL_PASS')
    EMAIL_FROM = os.environ.get('EMAIL_FROM', os.environ.get('EMAIL_USER'))

    # Admin Notification Settings
    ADMIN_TELEGRAM_BOT_TOKEN = os.environ.get('ADMIN_TELEGRAM_BOT_TOKEN')
    ADMIN_TELEGRAM_CHAT_ID = os.environ.get('ADMIN_TELEGRAM_CHAT_ID')

    # Frontend origin allowed to call the JSON API
    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:3000')

    # Resume download
    RESUME_PATH = os.environ.get(
        'RESUME_PATH',
        os.path.join(os.path.dirname(os.path.abspath(__file__)), 'static', 'resume.pdf'))
    RESUME_DOWNLOAD_NAME = os.environ.get('RESUME_DOWNLOAD_NAME', 'Resume.pdf')

    # Public list cache lifetime in seconds
    CONTENT_CACHE_TTL = int(os.environ.get('CONTENT_CACHE_TTL', '300'))

    # Requests slower than this (seconds) are logged
    SLOW_REQUEST_THRESHOLD = float(os.environ.get('SLOW_REQUEST_THRESHOLD', '1.0'))


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing pool settings that SQLite's StaticPool rejects.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    EMAIL_HOST = None
    EMAIL_USER = None
    ADMIN_TELEGRAM_BOT_TOKEN = None
    ADMIN_TELEGRAM_CHAT_ID = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
