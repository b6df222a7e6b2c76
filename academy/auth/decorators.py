"""
Authorization gates

Flask-Login resolves the session to an account once per request; these
decorators only read that result and never touch the session or the
account.
"""

from functools import wraps

from flask_login import current_user

from academy.errors import AuthenticationError, AuthorizationError


def is_authenticated():
    return bool(current_user and current_user.is_authenticated)


def is_admin():
    return is_authenticated() and bool(getattr(current_user, 'is_admin', False))


def require_authenticated(f):
    """401 unless the request carries a live session bound to an account."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not is_authenticated():
            raise AuthenticationError()
        return f(*args, **kwargs)
    return wrapper


def require_admin(f):
    """401 without a session, 403 when the account is not an administrator."""
    @wraps(f)
    @require_authenticated
    def wrapper(*args, **kwargs):
        if not is_admin():
            raise AuthorizationError()
        return f(*args, **kwargs)
    return wrapper
