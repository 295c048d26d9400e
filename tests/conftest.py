import pytest

from libris import create_app
from libris.config import TestingConfig
from libris.extensions import db
from libris.models import Author, Book, Publisher
from libris.repositories.gateway import current_gateway
from libris.services.auth_service import AuthService

PASSWORD = "secret-pass"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(name="Reader", email="reader@example.com", is_admin=False):
        with app.app_context():
            user = AuthService(current_gateway()).register(name, email, PASSWORD, is_admin=is_admin)
            return user.id
    return _make


@pytest.fixture
def login():
    def _login(client, email, password=PASSWORD):
        res = client.post("/users/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.get_data(as_text=True)
        return res
    return _login


@pytest.fixture
def admin_client(app, make_user, login):
    make_user("Admin", "admin@example.com", is_admin=True)
    c = app.test_client()
    login(c, "admin@example.com")
    return c


@pytest.fixture
def author(app):
    with app.app_context():
        row = Author(name="Natsume Soseki")
        db.session.add(row)
        db.session.commit()
        return row.id


@pytest.fixture
def publisher(app):
    with app.app_context():
        row = Publisher(name="Iwanami")
        db.session.add(row)
        db.session.commit()
        return row.id


@pytest.fixture
def add_book(app, author, publisher):
    def _add(isbn, title="Kokoro", year=2020, month=1, author_id=None, publisher_id=None, is_deleted=False):
        with app.app_context():
            db.session.add(Book(
                isbn=isbn,
                title=title,
                author_id=author_id or author,
                publisher_id=publisher_id or publisher,
                publication_year=year,
                publication_month=month,
                is_deleted=is_deleted,
            ))
            db.session.commit()
        return isbn
    return _add
