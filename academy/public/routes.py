"""
Public Routes

Reads only return active/visible records. Submissions are stored in their
initial review state.
"""

from flask import jsonify, request

from academy.public import public_bp
from academy.serializers import serialize, serialize_many
from academy.services import (
    courses_by_category,
    featured_courses,
    get_public,
    list_public,
    submit,
)
from academy.storage import get_storage


# -----------------------------------------------------------------------------
# Catalogue
# -----------------------------------------------------------------------------

@public_bp.route('/categories')
def categories():
    return jsonify(serialize_many(list_public(get_storage(), 'category')))


@public_bp.route('/courses')
def courses():
    return jsonify(serialize_many(list_public(get_storage(), 'course')))


@public_bp.route('/courses/featured')
def courses_featured():
    return jsonify(serialize_many(featured_courses(get_storage())))


@public_bp.route('/courses/<course_id>')
def course_detail(course_id):
    return jsonify(serialize(get_public(get_storage(), 'course', course_id)))


@public_bp.route('/courses/category/<category_id>')
def courses_in_category(category_id):
    return jsonify(serialize_many(courses_by_category(get_storage(), category_id)))


@public_bp.route('/testimonials')
def testimonials():
    return jsonify(serialize_many(list_public(get_storage(), 'testimonial')))


@public_bp.route('/team')
def team():
    return jsonify(serialize_many(list_public(get_storage(), 'team_member')))


@public_bp.route('/jobs')
def jobs():
    return jsonify(serialize_many(list_public(get_storage(), 'job')))


@public_bp.route('/jobs/<job_id>')
def job_detail(job_id):
    return jsonify(serialize(get_public(get_storage(), 'job', job_id)))


# -----------------------------------------------------------------------------
# Visitor submissions
# -----------------------------------------------------------------------------

@public_bp.route('/contact', methods=['POST'])
def contact():
    message = submit(get_storage(), 'contact_message', request.get_json(silent=True))
    return jsonify(serialize(message)), 201


@public_bp.route('/apply', methods=['POST'])
def apply():
    """Student application for a course."""
    application = submit(get_storage(), 'student_application', request.get_json(silent=True))
    return jsonify(serialize(application)), 201


@public_bp.route('/careers/apply', methods=['POST'])
def careers_apply():
    application = submit(get_storage(), 'career_application', request.get_json(silent=True))
    return jsonify(serialize(application)), 201
