import pytest

from academy import create_app
from academy.config import TestConfig
from academy.extensions import db
from academy.storage import EXTENSION_KEY

ADMIN_USERNAME = TestConfig.ADMIN_USERNAME
ADMIN_PASSWORD = TestConfig.ADMIN_PASSWORD


def make_config(backend):
    class Config(TestConfig):
        STORAGE_BACKEND = backend
    return Config


@pytest.fixture(params=['sql', 'memory'])
def app(request):
    app = create_app(make_config(request.param))
    yield app
    if request.param == 'sql':
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def storage(app):
    return app.extensions[EXTENSION_KEY]


@pytest.fixture()
def app_ctx(app):
    # Only for tests that call storage/services directly. Requests made while
    # this is pushed would share `g` (and Flask-Login's cached user).
    with app.app_context():
        yield


@pytest.fixture()
def client(app):
    return app.test_client()


def _login(client, username, password):
    return client.post('/api/login', json={'username': username, 'password': password})


@pytest.fixture()
def login():
    return _login


@pytest.fixture()
def admin_client(app):
    c = app.test_client()
    r = _login(c, ADMIN_USERNAME, ADMIN_PASSWORD)
    assert r.status_code == 200
    return c


@pytest.fixture()
def user_client(app):
    c = app.test_client()
    r = c.post('/api/register', json={'username': 'student1', 'password': 'secret123'})
    assert r.status_code == 201
    return c


@pytest.fixture()
def course(app, storage):
    with app.app_context():
        return storage.courses.create({
            'title': 'Tajweed Fundamentals',
            'description': 'Rules of recitation',
            'price': 49.0,
            'featured': False,
            'active': True,
            'rating': 0,
            'review_count': 0,
        })


@pytest.fixture()
def job(app, storage):
    with app.app_context():
        return storage.jobs.create({
            'title': 'Arabic Instructor',
            'description': 'Teach evening classes',
            'requirements': 'Ijazah',
            'active': True,
        })
