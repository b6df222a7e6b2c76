import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from academy.errors import PersistenceError

HUGE_ID = '99999999999999999999'


def _broken(*args, **kwargs):
    raise PersistenceError()


def test_persistence_failure_is_a_generic_500(client, storage, monkeypatch, caplog):
    monkeypatch.setattr(storage.courses, 'list', _broken)

    r = client.get('/api/courses')
    assert r.status_code == 500
    assert r.get_json() == {'message': 'Internal server error'}
    assert 'GET /api/courses failed' in caplog.text


def test_unexpected_error_hides_detail(client, storage, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError('secret internals')

    monkeypatch.setattr(storage.jobs, 'list', explode)

    r = client.get('/api/jobs')
    assert r.status_code == 500
    body = r.get_json()
    assert body == {'message': 'Internal server error'}
    assert 'detail' not in body


def test_oversized_ids_are_not_found(client, admin_client):
    assert client.get(f'/api/courses/{HUGE_ID}').status_code == 404
    assert client.get(f'/api/jobs/{HUGE_ID}').status_code == 404

    r = admin_client.patch(f'/api/admin/applications/{HUGE_ID}', json={'status': 'accepted'})
    assert r.status_code == 404
    assert admin_client.delete(f'/api/courses/{HUGE_ID}').status_code == 404


def test_oversized_course_reference(client, storage):
    r = client.post('/api/apply', json={'courseId': HUGE_ID, 'name': 'Aisha', 'email': 'aisha@example.com'})
    if storage.backend == 'sql':
        # No INTEGER key can hold it
        assert r.status_code == 400
        assert r.get_json()['errors'][0]['field'] == 'course_id'
    else:
        assert r.status_code == 201
        assert r.get_json()['courseId'] == HUGE_ID


@pytest.mark.usefixtures('app_ctx')
def test_sql_lookup_failures_become_persistence_errors(storage, monkeypatch):
    if storage.backend != 'sql':
        pytest.skip('relational backend only')

    def fail(*args, **kwargs):
        raise SQLAlchemyError('disk I/O error')

    monkeypatch.setattr(Session, 'get', fail)

    with pytest.raises(PersistenceError):
        storage.courses.get_by_id('1')
    with pytest.raises(PersistenceError):
        storage.courses.update('1', {'title': 'Renamed'})
    with pytest.raises(PersistenceError):
        storage.courses.delete('1')
    with pytest.raises(PersistenceError):
        storage.sessions.load('some-session')
    with pytest.raises(PersistenceError):
        storage.sessions.delete('some-session')
