import itertools

import pytest

from academy.errors import NotFoundError, ValidationError
from academy.schemas import ApplicationStatus
from academy.services import (
    dashboard_stats,
    delete_entity,
    get_submission,
    list_submissions,
    mark_read,
    set_status,
    submit,
)

pytestmark = pytest.mark.usefixtures('app_ctx')

STATUSES = ApplicationStatus.values()


def _apply(storage, course_id=None, name='Aisha', email='aisha@example.com'):
    payload = {'name': name, 'email': email, 'message': 'I would like to join'}
    if course_id is not None:
        payload['courseId'] = course_id
    return submit(storage, 'student_application', payload)


def test_application_starts_pending(storage, course):
    application = _apply(storage, course['id'])
    assert application['status'] == 'pending'
    assert application['course_id'] == course['id']


def test_client_cannot_choose_initial_status(storage):
    application = submit(storage, 'student_application', {
        'name': 'Omar', 'email': 'omar@example.com', 'status': 'accepted',
    })
    assert application['status'] == 'pending'


def test_contact_message_starts_unread(storage):
    message = submit(storage, 'contact_message', {
        'name': 'Yusuf', 'email': 'yusuf@example.com', 'subject': 'Hours', 'message': 'When are you open?',
    })
    assert message['is_read'] is False


def test_invalid_submission_names_fields_and_stores_nothing(storage):
    with pytest.raises(ValidationError) as excinfo:
        submit(storage, 'student_application', {'name': '', 'email': 'not-an-email'})
    assert set(excinfo.value.fields) >= {'name', 'email'}
    assert storage.student_applications.count() == 0


def test_missing_body_is_a_validation_error(storage):
    with pytest.raises(ValidationError):
        submit(storage, 'contact_message', None)
    assert storage.contact_messages.count() == 0


def test_boolean_course_id_is_rejected(storage):
    with pytest.raises(ValidationError) as excinfo:
        _apply(storage, course_id=True)
    assert 'courseId' in excinfo.value.fields or 'course_id' in excinfo.value.fields


@pytest.mark.parametrize('start,target', list(itertools.product(STATUSES, STATUSES)))
def test_any_status_can_follow_any_other(storage, start, target):
    application = _apply(storage)
    set_status(storage, 'student_application', application['id'], start)
    updated = set_status(storage, 'student_application', application['id'], target)
    assert updated['status'] == target


def test_bogus_status_is_rejected_without_mutation(storage):
    application = _apply(storage)
    with pytest.raises(ValidationError) as excinfo:
        set_status(storage, 'student_application', application['id'], 'approved')
    assert excinfo.value.allowed_values == STATUSES
    assert storage.student_applications.get_by_id(application['id'])['status'] == 'pending'


def test_status_is_checked_before_lookup(storage):
    with pytest.raises(ValidationError):
        set_status(storage, 'career_application', '424242', 'approved')
    with pytest.raises(NotFoundError):
        set_status(storage, 'career_application', '424242', 'accepted')


def test_contact_messages_have_no_status(storage):
    with pytest.raises(ValueError):
        set_status(storage, 'contact_message', '1', 'accepted')


def test_mark_read_is_idempotent(storage):
    message = submit(storage, 'contact_message', {
        'name': 'Maryam', 'email': 'maryam@example.com', 'message': 'Hello',
    })
    assert mark_read(storage, message['id'])['is_read'] is True
    assert mark_read(storage, message['id'])['is_read'] is True
    with pytest.raises(NotFoundError):
        mark_read(storage, '987654')


def test_list_filters(storage, course):
    first = _apply(storage, course['id'], name='First')
    second = _apply(storage, name='Second')
    set_status(storage, 'student_application', second['id'], 'reviewed')

    everything = list_submissions(storage, 'student_application')
    assert [a['id'] for a in everything] == [second['id'], first['id']]
    assert list_submissions(storage, 'student_application', status='all') == everything

    reviewed = list_submissions(storage, 'student_application', status='reviewed')
    assert [a['id'] for a in reviewed] == [second['id']]

    for_course = list_submissions(storage, 'student_application', subject_id=course['id'])
    assert [a['id'] for a in for_course] == [first['id']]

    with pytest.raises(ValidationError):
        list_submissions(storage, 'student_application', status='archived')


def test_message_read_filter(storage):
    unread = submit(storage, 'contact_message', {'name': 'A', 'email': 'a@example.com', 'message': 'one'})
    read = submit(storage, 'contact_message', {'name': 'B', 'email': 'b@example.com', 'message': 'two'})
    mark_read(storage, read['id'])

    assert [m['id'] for m in list_submissions(storage, 'contact_message', is_read='false')] == [unread['id']]
    assert [m['id'] for m in list_submissions(storage, 'contact_message', is_read='true')] == [read['id']]
    assert len(list_submissions(storage, 'contact_message', is_read='all')) == 2
    with pytest.raises(ValidationError):
        list_submissions(storage, 'contact_message', is_read='maybe')


def test_get_and_delete_submission(storage, job):
    application = submit(storage, 'career_application', {
        'jobId': job['id'], 'name': 'Bilal', 'email': 'bilal@example.com', 'coverLetter': 'Hire me',
    })
    assert get_submission(storage, 'career_application', application['id'])['cover_letter'] == 'Hire me'

    assert delete_entity(storage, 'career_application', application['id']) is True
    assert delete_entity(storage, 'career_application', application['id']) is False
    with pytest.raises(NotFoundError):
        get_submission(storage, 'career_application', application['id'])


def test_delete_entity_rejects_unknown_kind(storage):
    with pytest.raises(ValueError):
        delete_entity(storage, 'spaceship', '1')


def test_dashboard_stats(storage, course, job):
    storage.courses.create({'title': 'Hidden', 'description': 'x', 'price': 0.0, 'active': False})
    accepted = _apply(storage, course['id'])
    _apply(storage)
    set_status(storage, 'student_application', accepted['id'], 'accepted')
    submit(storage, 'career_application', {'jobId': job['id'], 'name': 'C', 'email': 'c@example.com'})
    submit(storage, 'contact_message', {'name': 'D', 'email': 'd@example.com', 'message': 'hi'})

    assert dashboard_stats(storage) == {
        'studentCount': 2,
        'courseCount': 1,
        'applicationCount': 1,
        'unreadMessageCount': 1,
        'pendingApplicationCount': 2,
    }
