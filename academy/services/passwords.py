"""
Password hashing

Werkzeug's scrypt hasher derives a 64-byte key and stores it as
``scrypt:N:r:p$salt$hash``; checking goes through ``hmac.compare_digest``
so the comparison does not stop at the first differing byte.
"""

import logging

from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)

HASH_METHOD = 'scrypt'
SALT_LENGTH = 32


def hash_password(password):
    if not password:
        raise ValueError('Password must not be empty')
    return generate_password_hash(password, method=HASH_METHOD, salt_length=SALT_LENGTH)


def verify_password(password, stored):
    """True when ``password`` matches the stored hash.

    Malformed or unsupported stored values read as a mismatch; the caller
    cannot tell which part of the record was wrong.
    """
    if not password or not stored:
        return False
    try:
        return check_password_hash(stored, password)
    except (ValueError, TypeError):
        logger.warning('Stored password hash could not be parsed')
        return False
