"""
Services Package

Exports all services for easy importing.
"""

from academy.services.passwords import hash_password, verify_password
from academy.services.accounts import (
    AccountUser,
    authenticate,
    ensure_admin_account,
    load_account,
    public_account,
    register_account,
)
from academy.services.listings import (
    LISTING_KINDS,
    courses_by_category,
    create_listing,
    featured_courses,
    get_listing,
    get_public,
    list_all,
    list_public,
    set_flag,
    update_listing,
)
from academy.services.workflow import (
    SUBMISSION_KINDS,
    dashboard_stats,
    delete_entity,
    get_submission,
    list_submissions,
    mark_read,
    set_status,
    submit,
)

__all__ = [
    'hash_password',
    'verify_password',
    'AccountUser',
    'authenticate',
    'ensure_admin_account',
    'load_account',
    'public_account',
    'register_account',
    'LISTING_KINDS',
    'courses_by_category',
    'create_listing',
    'featured_courses',
    'get_listing',
    'get_public',
    'list_all',
    'list_public',
    'set_flag',
    'update_listing',
    'SUBMISSION_KINDS',
    'dashboard_stats',
    'delete_entity',
    'get_submission',
    'list_submissions',
    'mark_read',
    'set_status',
    'submit',
]
