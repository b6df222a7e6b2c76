"""
Relational storage backend (Flask-SQLAlchemy)
"""

import json
import logging

from sqlalchemy import delete as sa_delete
from sqlalchemy.exc import SQLAlchemyError

from academy.errors import PersistenceError, ValidationError
from academy.extensions import db
from academy.models import (
    Account, SessionRecord, Category, Course, Testimonial, TeamMember, Job,
    StudentApplication, CareerApplication, ContactMessage,
)
from academy.models.base import as_utc, utcnow
from academy.storage.base import Repository, SessionStore, Storage, strip_server_fields

logger = logging.getLogger(__name__)

MODELS = {
    'accounts': Account,
    'categories': Category,
    'courses': Course,
    'testimonials': Testimonial,
    'team_members': TeamMember,
    'jobs': Job,
    'student_applications': StudentApplication,
    'career_applications': CareerApplication,
    'contact_messages': ContactMessage,
}


# Signed 64-bit range of an INTEGER column
MIN_KEY = -2 ** 63
MAX_KEY = 2 ** 63 - 1


def _int_key(value):
    """Integer primary key for an opaque id, or None if it cannot be one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        key = value
    else:
        try:
            key = int(str(value).strip())
        except (TypeError, ValueError):
            return None
    if not MIN_KEY <= key <= MAX_KEY:
        return None
    return key


def _get(model, key, what):
    try:
        return db.session.get(model, key)
    except SQLAlchemyError as e:
        logger.error('Lookup of %s failed: %s', what, e)
        raise PersistenceError() from e


class SqlRepository(Repository):

    def __init__(self, kind, model):
        self.kind = kind
        self.model = model
        self._columns = {c.name for c in model.__table__.columns}
        self._keys = {'id', *model.__reference_fields__}

    def _check_fields(self, fields):
        unknown = set(fields) - self._columns
        if unknown:
            raise ValueError(f'{self.kind} has no field(s): {", ".join(sorted(unknown))}')

    def _coerce_refs(self, data):
        """Convert reference fields from opaque ids to integer keys."""
        coerced = dict(data)
        for field in self.model.__reference_fields__:
            value = coerced.get(field)
            if value is None:
                continue
            key = _int_key(value)
            if key is None:
                raise ValidationError(
                    'Invalid reference',
                    errors=[{'field': field, 'message': f'Unknown {field}: {value!r}'}],
                )
            coerced[field] = key
        return coerced

    def _query(self, where):
        query = self.model.query
        for field, value in (where or {}).items():
            self._check_fields([field])
            if field in self._keys and value is not None:
                value = _int_key(value)
                if value is None:
                    return None
            query = query.filter(getattr(self.model, field) == value)
        return query

    def _commit(self, action):
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Could not %s %s: %s', action, self.kind, e)
            raise PersistenceError() from e

    def get_by_id(self, record_id):
        key = _int_key(record_id)
        if key is None:
            return None
        row = _get(self.model, key, self.kind)
        return row.to_dict() if row else None

    def list(self, where=None, order_by=None):
        query = self._query(where)
        if query is None:
            return []
        if order_by:
            descending = order_by.startswith('-')
            field = order_by.lstrip('-')
            self._check_fields([field])
            column = getattr(self.model, field)
            if descending:
                query = query.order_by(column.desc(), self.model.id.desc())
            else:
                query = query.order_by(column.asc(), self.model.id.asc())
        try:
            return [row.to_dict() for row in query.all()]
        except SQLAlchemyError as e:
            logger.error('Listing %s failed: %s', self.kind, e)
            raise PersistenceError() from e

    def create(self, data):
        data = strip_server_fields(data)
        self._check_fields(data)
        now = utcnow()
        row = self.model(**self._coerce_refs(data), created_at=now, updated_at=now)
        db.session.add(row)
        self._commit('create')
        return row.to_dict()

    def update(self, record_id, data):
        data = strip_server_fields(data)
        self._check_fields(data)
        key = _int_key(record_id)
        if key is None:
            return None
        row = _get(self.model, key, self.kind)
        if row is None:
            return None
        for field, value in self._coerce_refs(data).items():
            setattr(row, field, value)
        row.updated_at = utcnow()
        self._commit('update')
        return row.to_dict()

    def delete(self, record_id):
        key = _int_key(record_id)
        if key is None:
            return False
        row = _get(self.model, key, self.kind)
        if row is None:
            return False
        db.session.delete(row)
        self._commit('delete')
        return True

    def count(self, where=None):
        query = self._query(where)
        if query is None:
            return 0
        try:
            return query.count()
        except SQLAlchemyError as e:
            logger.error('Counting %s failed: %s', self.kind, e)
            raise PersistenceError() from e


class SqlSessionStore(SessionStore):

    def load(self, sid):
        record = _get(SessionRecord, sid, 'session')
        if record is None:
            return None
        if as_utc(record.expires_at) <= utcnow():
            self.delete(sid)
            return None
        return json.loads(record.data)

    def save(self, sid, data, expires_at):
        record = _get(SessionRecord, sid, 'session')
        if record is None:
            record = SessionRecord(sid=sid)
            db.session.add(record)
        record.data = json.dumps(data)
        record.expires_at = expires_at
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Could not save session: %s', e)
            raise PersistenceError() from e

    def delete(self, sid):
        record = _get(SessionRecord, sid, 'session')
        if record is None:
            return
        db.session.delete(record)
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Could not delete session: %s', e)
            raise PersistenceError() from e

    def purge_expired(self):
        try:
            result = db.session.execute(
                sa_delete(SessionRecord).where(SessionRecord.expires_at <= utcnow())
            )
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Could not purge sessions: %s', e)
            raise PersistenceError() from e
        return result.rowcount or 0


class SqlStorage(Storage):
    backend = 'sql'

    def __init__(self):
        super().__init__(
            {kind: SqlRepository(kind, model) for kind, model in MODELS.items()},
            SqlSessionStore(),
        )

    @staticmethod
    def init_app(app):
        """Bind SQLAlchemy to the app and create the tables."""
        db.init_app(app)
        with app.app_context():
            db.create_all()
