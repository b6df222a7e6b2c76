"""
Flask Extensions

The SQLAlchemy instance backs the relational storage backend only; the
document backend never touches it.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Resolves the current account from the server-side session
login_manager = LoginManager()
