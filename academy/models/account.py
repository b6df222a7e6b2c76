"""
Account and Session Models
"""

from academy.extensions import db
from academy.models.base import RecordMixin


class Account(RecordMixin, db.Model):
    """Credential-bearing identity"""
    __tablename__ = 'accounts'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    # scrypt hash, never the plaintext
    password = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(120))
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    profile_image_url = db.Column(db.String(500))
    is_admin = db.Column(db.Boolean, default=False, nullable=False)

    def __repr__(self):
        return f'<Account {self.username}>'


class SessionRecord(db.Model):
    """Server-side session payload keyed by the opaque session id"""
    __tablename__ = 'sessions'

    sid = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.Text, nullable=False)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False, index=True)

    def __repr__(self):
        return f'<SessionRecord {self.sid[:8]}>'
