"""
Listing Services

Admin-curated content (courses, categories, jobs, team members,
testimonials). Public reads only ever return rows whose visibility flag is
set; admin reads see everything.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from academy.errors import NotFoundError, ValidationError
from academy.schemas import (
    CategoryCreate, CategoryUpdate,
    CourseCreate, CourseUpdate,
    JobCreate, JobUpdate,
    TeamMemberCreate, TeamMemberUpdate,
    TestimonialCreate, TestimonialUpdate,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingKind:
    name: str
    repository: str
    label: str
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    # Flags an admin may toggle; the first one gates public visibility
    flags: Tuple[str, ...]
    public_order: str
    # Server-owned fields a client cannot set on create
    defaults: Dict[str, Any] = field(default_factory=dict)

    @property
    def public_flag(self):
        return self.flags[0]


LISTING_KINDS = {
    'course': ListingKind(
        'course', 'courses', 'Course', CourseCreate, CourseUpdate,
        flags=('active', 'featured'), public_order='title',
        defaults={'rating': 0, 'review_count': 0},
    ),
    'category': ListingKind(
        'category', 'categories', 'Category', CategoryCreate, CategoryUpdate,
        flags=('active',), public_order='name',
    ),
    'job': ListingKind(
        'job', 'jobs', 'Job', JobCreate, JobUpdate,
        flags=('active',), public_order='-created_at',
    ),
    'team_member': ListingKind(
        'team_member', 'team_members', 'Team member', TeamMemberCreate, TeamMemberUpdate,
        flags=('visible',), public_order='name',
    ),
    'testimonial': ListingKind(
        'testimonial', 'testimonials', 'Testimonial', TestimonialCreate, TestimonialUpdate,
        flags=('visible',), public_order='-created_at',
    ),
}


def listing_kind(kind):
    try:
        return LISTING_KINDS[kind]
    except KeyError:
        raise ValueError(f'Unknown listing kind: {kind}') from None


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------

def list_public(storage, kind, **where):
    meta = listing_kind(kind)
    where[meta.public_flag] = True
    return storage.repository(meta.repository).list(where=where, order_by=meta.public_order)


def featured_courses(storage):
    # active AND featured; featured alone never promotes a hidden course
    return list_public(storage, 'course', featured=True)


def courses_by_category(storage, category_id):
    return list_public(storage, 'course', category_id=str(category_id))


def get_public(storage, kind, record_id):
    meta = listing_kind(kind)
    record = storage.repository(meta.repository).get_by_id(record_id)
    if record is None or not record.get(meta.public_flag):
        raise NotFoundError(f'{meta.label} not found')
    return record


# ---------------------------------------------------------------------------
# Admin operations
# ---------------------------------------------------------------------------

def list_all(storage, kind):
    meta = listing_kind(kind)
    return storage.repository(meta.repository).list(order_by='-created_at')


def get_listing(storage, kind, record_id):
    meta = listing_kind(kind)
    record = storage.repository(meta.repository).get_by_id(record_id)
    if record is None:
        raise NotFoundError(f'{meta.label} not found')
    return record


def create_listing(storage, kind, payload):
    meta = listing_kind(kind)
    try:
        data = meta.create_schema.model_validate(payload or {})
    except SchemaError as e:
        raise ValidationError.from_pydantic(e, f'Invalid {meta.label.lower()} data') from e

    record = storage.repository(meta.repository).create({**meta.defaults, **data.model_dump()})
    logger.info('Created %s %s', meta.name, record['id'])
    return record


def _non_nullable(meta, changes):
    """Fields the client tried to clear although the record needs a value."""
    fields = meta.create_schema.model_fields
    return [
        name for name, value in changes.items()
        if value is None and (fields[name].is_required() or fields[name].default is not None)
    ]


def update_listing(storage, kind, record_id, payload):
    """Partial update; fields absent from the body keep their value."""
    meta = listing_kind(kind)
    try:
        data = meta.update_schema.model_validate(payload or {})
    except SchemaError as e:
        raise ValidationError.from_pydantic(e, f'Invalid {meta.label.lower()} data') from e

    changes = data.model_dump(exclude_unset=True)
    cleared = _non_nullable(meta, changes)
    if cleared:
        raise ValidationError(
            f'Invalid {meta.label.lower()} data',
            errors=[{'field': name, 'message': 'may not be null'} for name in cleared],
        )

    record = storage.repository(meta.repository).update(record_id, changes)
    if record is None:
        raise NotFoundError(f'{meta.label} not found')
    return record


def set_flag(storage, kind, record_id, flag, value):
    """Set one visibility flag. Other flags are left alone."""
    meta = listing_kind(kind)
    if flag not in meta.flags:
        raise ValidationError(f'Invalid flag for {meta.label.lower()}', allowed_values=meta.flags)
    if not isinstance(value, bool):
        raise ValidationError('Flag value must be true or false')

    record = storage.repository(meta.repository).update(record_id, {flag: value})
    if record is None:
        raise NotFoundError(f'{meta.label} not found')
    logger.info('Set %s=%s on %s %s', flag, value, meta.name, record_id)
    return record
