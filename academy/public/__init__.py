"""
Public Blueprint

Read endpoints for the marketing site and the visitor submission forms.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from academy.public import routes  # noqa: E402, F401
