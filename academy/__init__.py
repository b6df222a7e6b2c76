"""
Academy Portal - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from academy.config import Config
from academy.errors import AcademyError, ConfigurationError
from academy.extensions import login_manager
from academy.sessions import StorageSessionInterface
from academy.storage import EXTENSION_KEY, build_storage, get_storage

logger = logging.getLogger(__name__)


def create_app(config_class=Config, storage=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        storage: Pre-built storage to use instead of the configured backend

    Returns:
        Configured Flask application instance

    Raises:
        ConfigurationError: production deployment without ADMIN_PASSWORD
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _check_production_settings(app)

    # Storage
    if storage is None:
        storage = build_storage(app.config['STORAGE_BACKEND'])
    if storage.backend == 'sql':
        _ensure_instance_dir(app)
    storage.init_app(app)
    app.extensions[EXTENSION_KEY] = storage

    # Sessions and login
    app.session_interface = StorageSessionInterface()
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(account_id):
        from academy.services import AccountUser, load_account
        record = load_account(get_storage(), account_id)
        return AccountUser(record) if record else None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'message': 'Authentication required'}), 401

    # Register blueprints
    from academy.auth import auth_bp
    from academy.public import public_bp
    from academy.admin import admin_bp

    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(public_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api')

    _register_error_handlers(app)

    from academy.commands import register_commands
    register_commands(app)

    # Bootstrap administrator
    with app.app_context():
        _ensure_admin(app, storage)

    return app


def _is_production(app):
    return app.config.get('APP_ENV') == 'production'


def _check_production_settings(app):
    """Refuse to start a production app that would fall back to guessable secrets."""
    if not _is_production(app):
        return
    if not app.config.get('ADMIN_PASSWORD'):
        raise ConfigurationError('ADMIN_PASSWORD must be set in production')
    if app.config.get('SECRET_KEY') == Config.SECRET_KEY:
        raise ConfigurationError('SECRET_KEY must be set in production')


def _ensure_instance_dir(app):
    uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    prefix = 'sqlite:///'
    if uri.startswith(prefix) and ':memory:' not in uri:
        os.makedirs(os.path.dirname(uri[len(prefix):]) or '.', exist_ok=True)


def _ensure_admin(app, storage):
    from academy.services import ensure_admin_account

    password = app.config.get('ADMIN_PASSWORD')
    if not password:
        password = app.config['DEV_ADMIN_PASSWORD']
        logger.warning(
            'ADMIN_PASSWORD is not set; using the development default for %s',
            app.config['ADMIN_USERNAME'],
        )
    ensure_admin_account(storage, app.config['ADMIN_USERNAME'], password)


def _register_error_handlers(app):

    @app.errorhandler(AcademyError)
    def handle_academy_error(error):
        if error.status_code >= 500:
            app.logger.error('%s %s failed: %s', request.method, request.path, error, exc_info=error)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        body = {'message': 'Internal server error'}
        if app.debug:
            body['detail'] = str(error)
        return jsonify(body), 500
