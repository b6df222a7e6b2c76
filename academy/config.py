"""
Configuration settings for the Academy Portal
"""

import os
from datetime import timedelta


class Config:
    """Flask application configuration"""

    APP_ENV = os.environ.get('APP_ENV', 'development').lower()

    # Signs the session id cookie (CHANGE THIS IN PRODUCTION!)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Storage backend: 'sql' (SQLAlchemy) or 'memory' (document collections)
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'sql').lower()

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'academy.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session cookie
    SESSION_COOKIE_NAME = 'academy_session'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = APP_ENV == 'production'
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.environ.get('SESSION_LIFETIME_HOURS', '24')))

    # ---------------------------------------------------------------------
    # Bootstrap administrator account.
    # ADMIN_PASSWORD must be set in production; start-up fails otherwise.
    # ---------------------------------------------------------------------
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    DEV_ADMIN_PASSWORD = 'dev_password_replace_in_production'


class ProductionConfig(Config):
    """Production configuration"""
    APP_ENV = 'production'
    SESSION_COOKIE_SECURE = True


class TestConfig(Config):
    """Testing configuration"""
    APP_ENV = 'testing'
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SESSION_COOKIE_SECURE = False
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'admin-test-password'
