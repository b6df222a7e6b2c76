"""
Storage interface

Application code talks to these classes only. Both backends hand out
records as plain dicts with snake_case keys and a string ``id``; a
``where`` mapping is an AND of equality constraints and ``order_by`` names
a field, prefixed with ``-`` for descending order.
"""

from abc import ABC, abstractmethod

# Repository attribute names on a Storage, in a stable order
KINDS = (
    'accounts',
    'categories',
    'courses',
    'testimonials',
    'team_members',
    'jobs',
    'student_applications',
    'career_applications',
    'contact_messages',
)

# Timestamps are always stamped by the store itself
SERVER_FIELDS = ('id', 'created_at', 'updated_at')


def strip_server_fields(data):
    return {k: v for k, v in data.items() if k not in SERVER_FIELDS}


class Repository(ABC):
    """CRUD over one kind of record."""

    kind = None

    @abstractmethod
    def get_by_id(self, record_id):
        """Return the record or None."""

    @abstractmethod
    def list(self, where=None, order_by=None):
        """Return all records matching ``where``."""

    @abstractmethod
    def create(self, data):
        """Insert a record and return it with ``id`` and timestamps."""

    @abstractmethod
    def update(self, record_id, data):
        """Apply a partial update. Returns None when the id does not exist."""

    @abstractmethod
    def delete(self, record_id):
        """Hard delete. Returns False when the id does not exist."""

    @abstractmethod
    def count(self, where=None):
        """Number of records matching ``where``."""

    def find_one(self, **where):
        records = self.list(where=where)
        return records[0] if records else None


class SessionStore(ABC):
    """Server-side session payloads keyed by an opaque session id."""

    @abstractmethod
    def load(self, sid):
        """Return the payload dict, or None when missing or expired."""

    @abstractmethod
    def save(self, sid, data, expires_at):
        """Insert or replace the payload for ``sid``."""

    @abstractmethod
    def delete(self, sid):
        """Remove the session. Missing ids are ignored."""

    @abstractmethod
    def purge_expired(self):
        """Drop expired sessions and return how many were removed."""


class Storage:
    """Bundle of repositories plus the session store for one backend."""

    backend = None

    def __init__(self, repositories, sessions):
        missing = [kind for kind in KINDS if kind not in repositories]
        if missing:
            raise ValueError(f'Storage is missing repositories: {", ".join(missing)}')
        self._repositories = dict(repositories)
        self.sessions = sessions
        for kind, repo in self._repositories.items():
            setattr(self, kind, repo)

    def repository(self, kind):
        try:
            return self._repositories[kind]
        except KeyError:
            raise ValueError(f'Unknown record kind: {kind}') from None

    def __repr__(self):
        return f'<Storage {self.backend}>'
