"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '0') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False
    JSON_SORT_KEYS = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Bearer tokens (issued by `flask issue-token`)
    JWT_SECRET = os.getenv('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_HOURS = int(os.getenv('JWT_EXPIRES_HOURS', '12'))

    # Database - Support multiple environment variable naming conventions
    # Priority: DATABASE_URL > DB_* > POSTGRES_*
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        # Try DB_* variables (Docker style)
        DB_HOST = os.getenv('DB_HOST') or os.getenv('POSTGRES_HOST', 'localhost')
        DB_PORT = os.getenv('DB_PORT') or os.getenv('POSTGRES_PORT', '5432')
        DB_NAME = os.getenv('DB_NAME') or os.getenv('POSTGRES_DB', 'sfv')
        DB_USER = os.getenv('DB_USER') or os.getenv('POSTGRES_USER', 'sfv')
        DB_PASSWORD = os.getenv('DB_PASSWORD') or os.getenv('POSTGRES_PASSWORD', 'sfv')

        DATABASE_URL = (
            f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', '0') == '1'
    SQLALCHEMY_EXPIRE_ON_COMMIT = True

    # Quotations
    QUOTE_REF_PREFIX = os.getenv('QUOTE_REF_PREFIX', 'SFV')

    # Company defaults used to seed quotation_settings on first read
    COMPANY_NAME = os.getenv('COMPANY_NAME', 'SFV TECHNOLOGY')
    COMPANY_ADDRESS = os.getenv('COMPANY_ADDRESS', 'Sample Address, Ilorin, Kwara State, Nigeria')
    COMPANY_PHONE = os.getenv('COMPANY_PHONE', '+234-800-000-0000')
    COMPANY_EMAIL = os.getenv('COMPANY_EMAIL', 'sfvtech@gmail.com')

    # Observability
    SENTRY_DSN = os.getenv('SENTRY_DSN')


class TestingConfig(Config):
    """Configuration used by the test-suite (in-memory SQLite)."""

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URL', 'sqlite:///:memory:')
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_EXPIRE_ON_COMMIT = False  # avoid DetachedInstanceError in tests
    JWT_SECRET = 'test-jwt-secret-with-enough-length-for-hs256'
    SENTRY_DSN = None
