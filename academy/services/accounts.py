"""
Account Services

Registration, credential checks and the bootstrap administrator.
"""

import logging

from flask_login import UserMixin
from pydantic import ValidationError as SchemaError

from academy.errors import ValidationError
from academy.schemas import LoginRequest, RegisterRequest
from academy.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


class AccountUser(UserMixin):
    """Flask-Login view of an account record, rebuilt on every request."""

    def __init__(self, record):
        self.record = record

    @property
    def id(self):
        return self.record['id']

    @property
    def username(self):
        return self.record['username']

    @property
    def is_admin(self):
        return bool(self.record.get('is_admin'))

    def get_id(self):
        return str(self.record['id'])

    def __repr__(self):
        return f'<AccountUser {self.username}>'


def public_account(record):
    """Account record without the password hash."""
    return {k: v for k, v in record.items() if k != 'password'}


def load_account(storage, account_id):
    return storage.accounts.get_by_id(account_id)


def register_account(storage, payload):
    """Create a regular account from a registration body.

    Raises:
        ValidationError: on a malformed body or a taken username
    """
    try:
        data = RegisterRequest.model_validate(payload or {})
    except SchemaError as e:
        raise ValidationError.from_pydantic(e, 'Invalid registration data') from e

    if storage.accounts.find_one(username=data.username):
        raise ValidationError('Username already exists')

    fields = data.model_dump(exclude={'password'})
    account = storage.accounts.create({
        **fields,
        'password': hash_password(data.password),
        'is_admin': False,
    })
    logger.info('Registered account %s (%s)', account['id'], account['username'])
    return account


def authenticate(storage, payload):
    """Return the account whose credentials match, or None.

    An unknown username and a wrong password give the same None. A body
    missing either field is rejected before any lookup.
    """
    try:
        credentials = LoginRequest.model_validate(payload or {})
    except SchemaError as e:
        raise ValidationError.from_pydantic(e, 'Username and password are required') from e

    account = storage.accounts.find_one(username=credentials.username)
    if account is None or not verify_password(credentials.password, account['password']):
        logger.warning('Failed login attempt for username %r', credentials.username)
        return None
    return account


def ensure_admin_account(storage, username, password):
    """Create the administrator account unless it already exists."""
    existing = storage.accounts.find_one(username=username)
    if existing:
        logger.info('Admin user %s already exists.', username)
        return existing

    account = storage.accounts.create({
        'username': username,
        'password': hash_password(password),
        'email': None,
        'first_name': 'Admin',
        'last_name': 'User',
        'profile_image_url': None,
        'is_admin': True,
    })
    logger.info('Admin user created successfully: %s', username)
    return account
