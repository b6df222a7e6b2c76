from datetime import timedelta

import pytest

from academy.models.base import utcnow
from academy.storage import build_storage
from academy.storage.base import KINDS

pytestmark = pytest.mark.usefixtures('app_ctx')


def _category(storage, name, active=True):
    return storage.categories.create({'name': name, 'active': active})


def test_every_kind_has_a_repository(storage):
    for kind in KINDS:
        assert storage.repository(kind) is getattr(storage, kind)
    with pytest.raises(ValueError):
        storage.repository('widgets')


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        build_storage('cassandra')


def test_create_assigns_string_id_and_timestamps(storage):
    before = utcnow()
    record = _category(storage, 'Quran')
    assert isinstance(record['id'], str) and record['id']
    assert record['created_at'] >= before - timedelta(seconds=1)
    assert record['updated_at'] == record['created_at']
    assert storage.categories.get_by_id(record['id'])['name'] == 'Quran'


def test_client_supplied_server_fields_are_ignored(storage):
    stamp = utcnow() - timedelta(days=365)
    record = storage.categories.create({'name': 'Fiqh', 'created_at': stamp, 'id': 'mine'})
    assert record['id'] != 'mine'
    assert record['created_at'] > stamp


def test_update_is_partial_and_touches_updated_at(storage):
    record = _category(storage, 'Arabic')
    updated = storage.categories.update(record['id'], {'description': 'Grammar and morphology'})
    assert updated['name'] == 'Arabic'
    assert updated['description'] == 'Grammar and morphology'
    assert updated['created_at'] == record['created_at']
    assert updated['updated_at'] >= record['updated_at']


def test_missing_ids(storage):
    assert storage.courses.get_by_id('999999') is None
    assert storage.courses.get_by_id('not-an-id') is None
    assert storage.courses.update('999999', {'title': 'x'}) is None
    assert storage.courses.delete('999999') is False


def test_delete(storage):
    record = _category(storage, 'Hadith')
    assert storage.categories.delete(record['id']) is True
    assert storage.categories.get_by_id(record['id']) is None
    assert storage.categories.delete(record['id']) is False


def test_list_where_and_count(storage):
    _category(storage, 'B', active=True)
    _category(storage, 'A', active=True)
    _category(storage, 'C', active=False)

    assert storage.categories.count() == 3
    assert storage.categories.count({'active': True}) == 2
    names = [c['name'] for c in storage.categories.list(where={'active': True}, order_by='name')]
    assert names == ['A', 'B']


def test_descending_order_breaks_ties_newest_first(storage):
    first = _category(storage, 'Same')
    second = _category(storage, 'Same')
    ids = [c['id'] for c in storage.categories.list(order_by='-name')]
    assert ids == [second['id'], first['id']]


def test_reference_fields_come_back_as_strings(storage):
    category = _category(storage, 'Tafsir')
    course = storage.courses.create({
        'title': 'Tafsir I', 'description': 'Intro', 'price': 10.0,
        'category_id': category['id'],
    })
    assert course['category_id'] == category['id']
    found = storage.courses.list(where={'category_id': category['id']})
    assert [c['id'] for c in found] == [course['id']]


def test_find_one(storage):
    _category(storage, 'Seerah')
    assert storage.categories.find_one(name='Seerah')['name'] == 'Seerah'
    assert storage.categories.find_one(name='Nothing') is None


def test_sessions_round_trip_and_expire(storage):
    store = storage.sessions
    store.save('live', {'_user_id': '1'}, utcnow() + timedelta(hours=1))
    store.save('stale', {'_user_id': '2'}, utcnow() - timedelta(seconds=1))

    assert store.load('live') == {'_user_id': '1'}
    assert store.load('stale') is None
    assert store.load('unknown') is None

    store.delete('live')
    store.delete('live')
    assert store.load('live') is None


def test_purge_expired_sessions(storage):
    store = storage.sessions
    store.save('a', {}, utcnow() - timedelta(minutes=5))
    store.save('b', {}, utcnow() - timedelta(minutes=1))
    store.save('c', {'k': 'v'}, utcnow() + timedelta(minutes=5))
    assert store.purge_expired() == 2
    assert store.load('c') == {'k': 'v'}


def test_purge_sessions_command(app, storage):
    storage.sessions.save('old', {}, utcnow() - timedelta(minutes=1))
    result = app.test_cli_runner().invoke(args=['purge-sessions'])
    assert result.exit_code == 0
    assert 'Removed 1 expired session(s)' in result.output
