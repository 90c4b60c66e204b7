"""
Test fixtures for reports, engagement, analytics and the content cache.

Setup: residents of Pune plus one resident of Mumbai.
- resident (Pune), neighbour (Pune), admin (Pune, ADMIN)
- outsider (Mumbai)
"""
import pytest
from datetime import datetime, timedelta

from wastewatch import create_app
from wastewatch.config import TestingConfig
from wastewatch.extensions import db as _db
from wastewatch.models import User, UserRole
from wastewatch.api.middleware.jwt_utils import create_access_token
from wastewatch.services.report_service import report_service


class WasteWatchTestConfig(TestingConfig):
    """In-memory database, no content provider configured."""
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    SERVER_NAME = 'localhost'
    GEMINI_API_KEY = ''


@pytest.fixture(scope='session')
def app():
    app = create_app(WasteWatchTestConfig)
    yield app


@pytest.fixture(scope='function')
def db(app):
    """Fresh schema for every test."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.rollback()
        _db.drop_all()


def _create_user(db, name, email, state, city, role=UserRole.CITIZEN):
    u = User(name=name, email=email, state=state, city=city, role=role)
    u.set_password('test1234')
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def resident(db):
    return _create_user(db, 'Asha Patil', 'asha@demo.com', 'Maharashtra', 'Pune')


@pytest.fixture
def neighbour(db):
    return _create_user(db, 'Ravi Kulkarni', 'ravi@demo.com', 'Maharashtra', 'Pune')


@pytest.fixture
def outsider(db):
    return _create_user(db, 'Meera Shah', 'meera@demo.com', 'Maharashtra', 'Mumbai')


@pytest.fixture
def admin(db):
    return _create_user(
        db, 'City Admin', 'admin@demo.com', 'Maharashtra', 'Pune', role=UserRole.ADMIN
    )


@pytest.fixture
def make_report(db):
    """Factory: make_report(owner, **fields) through the report service."""
    def _make(owner, **fields):
        data = {
            'title': 'Plastic dump near river',
            'description': 'Bags and bottles piling up on the bank',
            'category': 'plastic',
        }
        data.update(fields)
        return report_service.create_report(owner.id, **data)
    return _make


def _make_auth_header(app, user):
    """Authorization header for a user."""
    with app.app_context():
        token = create_access_token(user.id, user.name, user.state, user.city)
        return {'Authorization': f'Bearer {token}'}


class AuthClient:
    """Test client that sends a bearer token with every request."""

    def __init__(self, app, user):
        self._client = app.test_client()
        self._headers = _make_auth_header(app, user)

    def get(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.get(url, **kw)

    def post(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.post(url, **kw)

    def put(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.put(url, **kw)

    def patch(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.patch(url, **kw)


@pytest.fixture
def client(app, db):
    """Anonymous test client."""
    return app.test_client()


@pytest.fixture
def client_resident(app, db, resident):
    return AuthClient(app, resident)


@pytest.fixture
def client_neighbour(app, db, neighbour):
    return AuthClient(app, neighbour)


@pytest.fixture
def client_admin(app, db, admin):
    return AuthClient(app, admin)


class FakeProvider:
    """Content provider returning canned text and recording calls."""

    def __init__(self, text='[]', error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate(self, city, kind):
        self.calls.append((city, kind))
        if self.error is not None:
            raise self.error
        return self.text


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now=None):
        self.now = now or datetime(2026, 3, 1, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock()
