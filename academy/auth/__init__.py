"""
Auth Blueprint

Registration, login, logout and the current-account endpoint under /api.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from academy.auth import routes  # noqa: E402, F401
