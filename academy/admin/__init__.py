"""
Admin Blueprint

Every route here sits behind the admin gate. Listing create/update/delete
live on the public resource paths (/api/courses, ...) to match the
published API; review screens live under /api/admin.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from academy.admin import routes  # noqa: E402, F401
