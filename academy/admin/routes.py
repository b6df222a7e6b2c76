"""
Admin Routes
"""

from flask import jsonify, request
from pydantic import ValidationError as SchemaError

from academy.admin import admin_bp
from academy.auth.decorators import require_admin
from academy.errors import NotFoundError, ValidationError
from academy.schemas import FlagUpdate
from academy.serializers import serialize, serialize_many
from academy.services import (
    create_listing,
    dashboard_stats,
    delete_entity,
    get_listing,
    get_submission,
    list_all,
    list_submissions,
    mark_read,
    set_flag,
    set_status,
    update_listing,
)
from academy.storage import get_storage

# URL segment -> listing kind
RESOURCES = {
    'courses': 'course',
    'categories': 'category',
    'jobs': 'job',
    'team': 'team_member',
    'testimonials': 'testimonial',
}
RESOURCE = '<any(' + ', '.join(f"'{r}'" for r in RESOURCES) + '):resource>'

# URL segment -> submission kind
REVIEWS = {
    'applications': 'student_application',
    'career-applications': 'career_application',
}
REVIEW = '<any(' + ', '.join(f"'{r}'" for r in REVIEWS) + '):review>'


def _body():
    body = request.get_json(silent=True)
    if body is None and request.get_data():
        raise ValidationError('Malformed JSON body')
    return body if isinstance(body, dict) else {}


def _deleted(kind, record_id, label):
    if not delete_entity(get_storage(), kind, record_id):
        raise NotFoundError(f'{label} not found')
    return jsonify({'deleted': True, 'id': str(record_id)})


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

@admin_bp.route('/admin/stats')
@require_admin
def stats():
    return jsonify(dashboard_stats(get_storage()))


# -----------------------------------------------------------------------------
# Listings (courses, categories, jobs, team, testimonials)
# -----------------------------------------------------------------------------

@admin_bp.route(f'/{RESOURCE}', methods=['POST'])
@require_admin
def create_resource(resource):
    record = create_listing(get_storage(), RESOURCES[resource], _body())
    return jsonify(serialize(record)), 201


@admin_bp.route(f'/{RESOURCE}/<record_id>', methods=['PATCH'])
@require_admin
def update_resource(resource, record_id):
    record = update_listing(get_storage(), RESOURCES[resource], record_id, _body())
    return jsonify(serialize(record))


@admin_bp.route(f'/{RESOURCE}/<record_id>', methods=['DELETE'])
@require_admin
def delete_resource(resource, record_id):
    kind = RESOURCES[resource]
    return _deleted(kind, record_id, kind.replace('_', ' ').capitalize())


@admin_bp.route(f'/admin/{RESOURCE}')
@require_admin
def list_resources(resource):
    """All rows, hidden ones included."""
    return jsonify(serialize_many(list_all(get_storage(), RESOURCES[resource])))


@admin_bp.route(f'/admin/{RESOURCE}/<record_id>')
@require_admin
def get_resource(resource, record_id):
    return jsonify(serialize(get_listing(get_storage(), RESOURCES[resource], record_id)))


@admin_bp.route(f'/admin/{RESOURCE}/<record_id>/flags', methods=['PATCH'])
@require_admin
def set_resource_flag(resource, record_id):
    """Toggle one of active/visible/featured; body {"flag": ..., "value": bool}."""
    try:
        data = FlagUpdate.model_validate(_body())
    except SchemaError as e:
        raise ValidationError.from_pydantic(e, 'Invalid flag update') from e
    record = set_flag(get_storage(), RESOURCES[resource], record_id, data.flag, data.value)
    return jsonify(serialize(record))


# -----------------------------------------------------------------------------
# Student and career applications
# -----------------------------------------------------------------------------

@admin_bp.route(f'/admin/{REVIEW}')
@require_admin
def list_applications(review):
    kind = REVIEWS[review]
    subject_param = 'courseId' if kind == 'student_application' else 'jobId'
    records = list_submissions(
        get_storage(),
        kind,
        status=request.args.get('status'),
        subject_id=request.args.get(subject_param),
    )
    return jsonify(serialize_many(records))


@admin_bp.route(f'/admin/{REVIEW}/<record_id>')
@require_admin
def get_application(review, record_id):
    return jsonify(serialize(get_submission(get_storage(), REVIEWS[review], record_id)))


@admin_bp.route(f'/admin/{REVIEW}/<record_id>', methods=['PATCH'])
@require_admin
def update_application_status(review, record_id):
    # set_status rejects anything outside the status enumeration
    record = set_status(get_storage(), REVIEWS[review], record_id, _body().get('status'))
    return jsonify(serialize(record))


@admin_bp.route(f'/admin/{REVIEW}/<record_id>', methods=['DELETE'])
@require_admin
def delete_application(review, record_id):
    label = 'Application' if review == 'applications' else 'Career application'
    return _deleted(REVIEWS[review], record_id, label)


# -----------------------------------------------------------------------------
# Contact messages
# -----------------------------------------------------------------------------

@admin_bp.route('/admin/messages')
@require_admin
def list_messages():
    records = list_submissions(get_storage(), 'contact_message', is_read=request.args.get('isRead'))
    return jsonify(serialize_many(records))


@admin_bp.route('/admin/messages/<record_id>')
@require_admin
def get_message(record_id):
    return jsonify(serialize(get_submission(get_storage(), 'contact_message', record_id)))


@admin_bp.route('/admin/messages/<record_id>/read', methods=['PATCH'])
@require_admin
def read_message(record_id):
    return jsonify(serialize(mark_read(get_storage(), record_id)))


@admin_bp.route('/admin/messages/<record_id>', methods=['DELETE'])
@require_admin
def delete_message(record_id):
    return _deleted('contact_message', record_id, 'Message')
