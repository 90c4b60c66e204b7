"""
Application configuration - settings for each environment.
Values are read from environment variables with defaults as fallback.
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

# Load .env if present
load_dotenv()


class Config:
    """
    Base configuration shared by every environment.
    """

    # Flask core
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        'postgresql://localhost:5432/wastewatch'
    )
    # Heroku still hands out postgres:// URLs
    if SQLALCHEMY_DATABASE_URI.startswith('postgres://'):
        SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace(
            'postgres://', 'postgresql://', 1
        )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,  # Check the connection before handing it out
        'pool_recycle': 300,    # Recycle pooled connections after 5 min
    }

    # JWT Authentication
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        seconds=int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 604800))  # 7 days
    )

    # Identity
    MIN_PASSWORD_LENGTH = 6

    # Pagination defaults
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
    LEADERBOARD_SIZE = 10

    # External content (Gemini)
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY', '')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-1.5-flash')
    CONTENT_PROVIDER_TIMEOUT = float(os.getenv('CONTENT_PROVIDER_TIMEOUT', 20))
    CONTENT_REGION = os.getenv('CONTENT_REGION', 'India')
    CONTENT_CACHE_TTL_HOURS = int(os.getenv('CONTENT_CACHE_TTL_HOURS', 24))
    CONTENT_CACHE_MAX_ITEMS = int(os.getenv('CONTENT_CACHE_MAX_ITEMS', 5))

    # CORS
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*').split(',')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Values that must never reach production
    INSECURE_SECRETS = [
        'jwt-secret-key-change-in-production',
        'dev-secret-key-change-in-production',
        'your_jwt_secret_key_change_in_production',
        'changeme',
        'secret',
    ]


class DevelopmentConfig(Config):
    """
    Development configuration - debug mode on.
    """
    DEBUG = True
    SQLALCHEMY_ECHO = True  # Log SQL statements
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """
    Test configuration - used by pytest.
    """
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    GEMINI_API_KEY = ''


def _get_production_cors_origins() -> list:
    """
    CORS origins for production. Never a wildcard.
    """
    origins = os.getenv('CORS_ORIGINS', '')
    if not origins or origins.strip() == '*':
        return ['https://wastewatch.in', 'https://www.wastewatch.in']
    return [o.strip() for o in origins.split(',') if o.strip()]


class ProductionConfig(Config):
    """
    Production configuration - strict security settings.
    Secrets are validated in validate_production_config() at startup.
    """
    DEBUG = False

    SECRET_KEY = os.getenv('SECRET_KEY', '')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', '')

    CORS_ORIGINS = _get_production_cors_origins()

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_size': 10,
        'max_overflow': 20,
    }


def validate_production_config(app):
    """
    Validates the production configuration when the app starts.

    Raises:
        ValueError: if a secret is missing or insecure
    """
    if app.config.get('ENV') != 'production' and os.getenv('FLASK_ENV') != 'production':
        return

    for key in ('SECRET_KEY', 'JWT_SECRET_KEY'):
        value = app.config.get(key, '')
        if not value:
            raise ValueError(
                f"CRITICAL: {key} environment variable must be set in production!\n"
                "Generate with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )
        if len(value) < 32:
            raise ValueError(f"{key} must be at least 32 characters")
        for insecure in Config.INSECURE_SECRETS:
            if insecure.lower() in value.lower():
                raise ValueError(f"CRITICAL: {key} contains insecure default value!")


# Environment name -> config class
config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}


def get_config():
    """
    Returns the config class for FLASK_ENV. Defaults to development.
    """
    env = os.getenv('FLASK_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)
