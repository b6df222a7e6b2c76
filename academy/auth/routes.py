"""
Auth Routes

Session-based authentication using Flask-Login.
"""

import logging

from flask import jsonify, request, session
from flask_login import current_user, login_user, logout_user

from academy.auth import auth_bp
from academy.auth.decorators import require_authenticated
from academy.errors import AuthenticationError
from academy.serializers import serialize_account
from academy.services import AccountUser, authenticate, register_account
from academy.storage import get_storage

logger = logging.getLogger(__name__)


def _start_session(account):
    # New id on every login so an id handed out before login cannot be reused
    session.regenerate()
    session.permanent = True
    login_user(AccountUser(account))


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create a regular account and log it in."""
    account = register_account(get_storage(), request.get_json(silent=True))
    _start_session(account)
    return jsonify(serialize_account(account)), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    account = authenticate(get_storage(), request.get_json(silent=True))
    if account is None:
        # Same answer for unknown usernames and wrong passwords
        raise AuthenticationError('Invalid username or password')

    _start_session(account)
    logger.info('User logged in: %s', account['username'])
    return jsonify(serialize_account(account)), 200


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the session. Logging out without a session is harmless."""
    if current_user.is_authenticated:
        logger.info('User logged out: %s', current_user.username)
    logout_user()
    session.clear()
    return jsonify({'message': 'Logged out'}), 200


@auth_bp.route('/user', methods=['GET'])
@require_authenticated
def current_account():
    return jsonify(serialize_account(current_user.record))
