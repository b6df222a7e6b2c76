"""
Workflow Services

Visitor submissions (student applications, career applications, contact
messages) and their review by administrators.

Application status is a closed set, and any status may be set from any
other: there is no forward-only ordering and no terminal state. The only
way out is deleting the record.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from academy.errors import NotFoundError, ValidationError
from academy.schemas import (
    ApplicationStatus,
    CareerApplicationCreate,
    ContactMessageCreate,
    StudentApplicationCreate,
)
from academy.services.listings import LISTING_KINDS

logger = logging.getLogger(__name__)

ALL = 'all'


@dataclass(frozen=True)
class SubmissionKind:
    name: str
    repository: str
    label: str
    schema: Type[BaseModel]
    # Field referencing the course/job the submission is about
    subject_field: Optional[str]
    has_status: bool


SUBMISSION_KINDS = {
    'student_application': SubmissionKind(
        'student_application', 'student_applications', 'Application',
        StudentApplicationCreate, subject_field='course_id', has_status=True,
    ),
    'career_application': SubmissionKind(
        'career_application', 'career_applications', 'Career application',
        CareerApplicationCreate, subject_field='job_id', has_status=True,
    ),
    'contact_message': SubmissionKind(
        'contact_message', 'contact_messages', 'Message',
        ContactMessageCreate, subject_field=None, has_status=False,
    ),
}


def submission_kind(kind):
    try:
        return SUBMISSION_KINDS[kind]
    except KeyError:
        raise ValueError(f'Unknown submission kind: {kind}') from None


def _unconstrained(value):
    return value is None or value == '' or value == ALL


def _check_status(value):
    if value not in ApplicationStatus.values():
        raise ValidationError('Invalid status value', allowed_values=ApplicationStatus.values())
    return value


def _parse_read_flag(value):
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ('true', '1', 'read'):
        return True
    if lowered in ('false', '0', 'unread'):
        return False
    raise ValidationError('Invalid isRead filter', allowed_values=['true', 'false', ALL])


# ---------------------------------------------------------------------------
# Public submission
# ---------------------------------------------------------------------------

def submit(storage, kind, payload):
    """Validate and store a visitor submission in its initial state.

    Nothing is written when validation fails.
    """
    meta = submission_kind(kind)
    try:
        data = meta.schema.model_validate(payload or {})
    except SchemaError as e:
        raise ValidationError.from_pydantic(e, f'Invalid {meta.label.lower()} data') from e

    record = data.model_dump()
    if meta.has_status:
        record['status'] = ApplicationStatus.PENDING.value
    else:
        record['is_read'] = False

    created = storage.repository(meta.repository).create(record)
    logger.info('New %s %s', meta.name, created['id'])
    return created


# ---------------------------------------------------------------------------
# Admin review
# ---------------------------------------------------------------------------

def list_submissions(storage, kind, status=None, subject_id=None, is_read=None):
    """Newest-first listing; every given filter must match ('all' = any)."""
    meta = submission_kind(kind)
    where = {}
    if meta.has_status and not _unconstrained(status):
        where['status'] = _check_status(status)
    if meta.subject_field and not _unconstrained(subject_id):
        where[meta.subject_field] = str(subject_id)
    if not meta.has_status and not _unconstrained(is_read):
        where['is_read'] = _parse_read_flag(is_read)
    return storage.repository(meta.repository).list(where=where, order_by='-created_at')


def get_submission(storage, kind, record_id):
    meta = submission_kind(kind)
    record = storage.repository(meta.repository).get_by_id(record_id)
    if record is None:
        raise NotFoundError(f'{meta.label} not found')
    return record


def set_status(storage, kind, record_id, new_status):
    """Move an application to ``new_status`` whatever its current status.

    The value is checked before the record is looked up.
    """
    meta = submission_kind(kind)
    if not meta.has_status:
        raise ValueError(f'{meta.name} has no status')
    _check_status(new_status)

    record = storage.repository(meta.repository).update(record_id, {'status': new_status})
    if record is None:
        raise NotFoundError(f'{meta.label} not found')
    logger.info('%s %s status set to %s', meta.label, record_id, new_status)
    return record


def mark_read(storage, message_id):
    """Mark a contact message read. Marking it again is not an error."""
    record = storage.contact_messages.update(message_id, {'is_read': True})
    if record is None:
        raise NotFoundError('Message not found')
    return record


def delete_entity(storage, kind, record_id):
    """Hard delete; False when there was nothing to delete."""
    if kind in SUBMISSION_KINDS:
        meta = SUBMISSION_KINDS[kind]
    elif kind in LISTING_KINDS:
        meta = LISTING_KINDS[kind]
    else:
        raise ValueError(f'Unknown kind: {kind}')

    deleted = storage.repository(meta.repository).delete(record_id)
    if deleted:
        logger.info('Deleted %s %s', meta.name, record_id)
    return deleted


def dashboard_stats(storage):
    pending = ApplicationStatus.PENDING.value
    return {
        'studentCount': storage.student_applications.count(),
        'courseCount': storage.courses.count({'active': True}),
        'applicationCount': storage.career_applications.count(),
        'unreadMessageCount': storage.contact_messages.count({'is_read': False}),
        'pendingApplicationCount': (
            storage.student_applications.count({'status': pending})
            + storage.career_applications.count({'status': pending})
        ),
    }
