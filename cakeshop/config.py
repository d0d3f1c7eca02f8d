"""
Application configuration, read from the environment
"""
import os
from datetime import timedelta
from decimal import Decimal


def _env_flag(name, default):
    return os.getenv(name, default).lower() == 'true'


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # In-memory SQLite keeps the record store process-local
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite://')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE', 'false')
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)

    STRIPE_SECRET_KEY = os.getenv('STRIPE_SECRET_KEY')
    PAYMENT_CURRENCY = os.getenv('PAYMENT_CURRENCY', 'usd')
    PAYMENT_MOCK_FALLBACK = _env_flag('PAYMENT_MOCK_FALLBACK', 'true')

    SEED_SAMPLE_DATA = _env_flag('SEED_SAMPLE_DATA', 'true')
    RESET_TOKEN_TTL_SECONDS = int(os.getenv('RESET_TOKEN_TTL_SECONDS', '3600'))
    SALES_TAX_RATE = Decimal(os.getenv('SALES_TAX_RATE', '0.08'))


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SESSION_COOKIE_SECURE = False
    STRIPE_SECRET_KEY = None
    PAYMENT_MOCK_FALLBACK = True
    SEED_SAMPLE_DATA = True
