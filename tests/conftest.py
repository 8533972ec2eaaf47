"""
Pytest configuration and fixtures.
"""

import itertools

import pytest
from bookreviews import create_app
from bookreviews.models import User, Book, Review
from bookreviews.services import AuthService, CurrentSession, MemoryStore, Storage

DEMO_EMAIL = 'demo@bookreviews.com'
DEMO_PASSWORD = 'demo123'

@pytest.fixture
def app(tmp_path):
    """Create and configure a test Flask application."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'test.db'}",
    })
    return app

@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()

@pytest.fixture
def logged_in_client(client):
    """A test client with the demo user signed in."""
    response = client.post('/api/auth/login', json={'email': DEMO_EMAIL, 'password': DEMO_PASSWORD})
    assert response.status_code == 200
    return client

@pytest.fixture
def store():
    return MemoryStore()

@pytest.fixture
def storage(store):
    """Accessor over a fresh in-memory store."""
    return Storage(store)

@pytest.fixture
def session(storage):
    return CurrentSession(storage)

@pytest.fixture
def auth(storage, session):
    return AuthService(storage, session)

_ids = itertools.count(1)

@pytest.fixture
def make_user():
    def factory(**overrides):
        n = next(_ids)
        fields = {
            'id': f'user-{n}',
            'email': f'reader{n}@example.com',
            'password': 'secret',
            'name': f'Reader {n}',
            'created_at': '2024-04-01T10:00:00.000Z',
        }
        fields.update(overrides)
        return User(**fields)
    return factory

@pytest.fixture
def make_book():
    def factory(added_by='demo-user', **overrides):
        n = next(_ids)
        fields = {
            'id': f'book-{n}',
            'title': f'Book {n}',
            'author': 'Some Author',
            'genre': 'Fantasy',
            'description': 'A long enough description of a book that nobody has read yet.',
            'cover_image': 'https://example.com/cover.jpg',
            'added_by': added_by,
            'date_added': '2024-04-02T10:00:00.000Z',
        }
        fields.update(overrides)
        return Book(**fields)
    return factory

@pytest.fixture
def make_review():
    def factory(book_id, user_id='demo-user', rating=4, **overrides):
        n = next(_ids)
        fields = {
            'id': f'review-{n}',
            'book_id': book_id,
            'user_id': user_id,
            'user_name': 'Demo User',
            'rating': rating,
            'review_text': 'Enjoyed it from start to finish.',
            'date': '2024-04-03T10:00:00.000Z',
        }
        fields.update(overrides)
        return Review(**fields)
    return factory
