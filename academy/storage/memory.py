"""
Document storage backend

Each kind is a collection of schemaless documents keyed by a generated
string id. Everything lives in process memory, so the backend suits local
development and tests; records vanish on restart.
"""

import copy
import itertools
import logging
import threading
import uuid

from academy.models.base import utcnow
from academy.storage.base import KINDS, Repository, SessionStore, Storage, strip_server_fields

logger = logging.getLogger(__name__)


def _sort_key(field):
    # None sorts first, like NULLs in SQLite
    def key(doc):
        value = doc.get(field)
        return (value is not None, value)
    return key


class DocumentCollection(Repository):

    def __init__(self, kind, lock):
        self.kind = kind
        self._docs = {}
        self._lock = lock
        self._sequence = itertools.count()

    @staticmethod
    def _matches(doc, where):
        for field, value in where.items():
            if field == 'id' or field.endswith('_id'):
                current = doc.get(field)
                if (None if current is None else str(current)) != (None if value is None else str(value)):
                    return False
            elif doc.get(field) != value:
                return False
        return True

    @staticmethod
    def _public(doc):
        record = copy.deepcopy(doc)
        record.pop('_seq', None)
        return record

    def get_by_id(self, record_id):
        with self._lock:
            doc = self._docs.get(str(record_id))
            return self._public(doc) if doc else None

    def list(self, where=None, order_by=None):
        with self._lock:
            docs = [d for d in self._docs.values() if self._matches(d, where or {})]
            descending = bool(order_by) and order_by.startswith('-')
            # insertion order breaks ties, in the same direction as the sort
            docs.sort(key=lambda d: d['_seq'], reverse=descending)
            if order_by:
                docs.sort(key=_sort_key(order_by.lstrip('-')), reverse=descending)
            return [self._public(d) for d in docs]

    def create(self, data):
        now = utcnow()
        doc = strip_server_fields(copy.deepcopy(data))
        for field, value in list(doc.items()):
            if field.endswith('_id') and value is not None:
                doc[field] = str(value)
        with self._lock:
            doc.update(id=uuid.uuid4().hex, created_at=now, updated_at=now, _seq=next(self._sequence))
            self._docs[doc['id']] = doc
            return self._public(doc)

    def update(self, record_id, data):
        changes = strip_server_fields(copy.deepcopy(data))
        for field, value in list(changes.items()):
            if field.endswith('_id') and value is not None:
                changes[field] = str(value)
        with self._lock:
            doc = self._docs.get(str(record_id))
            if doc is None:
                return None
            doc.update(changes)
            doc['updated_at'] = utcnow()
            return self._public(doc)

    def delete(self, record_id):
        with self._lock:
            return self._docs.pop(str(record_id), None) is not None

    def count(self, where=None):
        with self._lock:
            return sum(1 for d in self._docs.values() if self._matches(d, where or {}))


class MemorySessionStore(SessionStore):

    def __init__(self):
        self._sessions = {}
        self._lock = threading.Lock()

    def load(self, sid):
        with self._lock:
            entry = self._sessions.get(sid)
            if entry is None:
                return None
            data, expires_at = entry
            if expires_at <= utcnow():
                del self._sessions[sid]
                return None
            return copy.deepcopy(data)

    def save(self, sid, data, expires_at):
        with self._lock:
            self._sessions[sid] = (copy.deepcopy(data), expires_at)

    def delete(self, sid):
        with self._lock:
            self._sessions.pop(sid, None)

    def purge_expired(self):
        now = utcnow()
        with self._lock:
            expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.debug('Purged %d expired sessions', len(expired))
        return len(expired)


class MemoryStorage(Storage):
    backend = 'memory'

    def __init__(self):
        lock = threading.RLock()
        super().__init__(
            {kind: DocumentCollection(kind, lock) for kind in KINDS},
            MemorySessionStore(),
        )

    @staticmethod
    def init_app(app):
        """Nothing to bind; documents live in this process."""
