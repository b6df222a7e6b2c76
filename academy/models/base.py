"""
Shared model helpers
"""

from datetime import datetime, timezone

from academy.extensions import db


def utcnow():
    return datetime.now(timezone.utc)


def as_utc(value):
    """Attach UTC to naive datetimes (SQLite drops tzinfo on the way back)."""
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RecordMixin:
    """Timestamps plus conversion to the plain-dict record the storage layer returns.

    Integer keys are handed out as strings so calling code never depends on
    the relational id type. Columns listed in ``__reference_fields__`` hold
    ids of other tables and are converted the same way.
    """

    __reference_fields__ = ()

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self):
        record = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if column.name == 'id' or column.name in self.__reference_fields__:
                value = str(value) if value is not None else None
            else:
                value = as_utc(value)
            record[column.name] = value
        return record
