import pytest

from library_app import create_app
from library_app.config import TestConfig
from library_app.extensions import db
from library_app.services.auth_service import AuthService
from library_app.services.book_service import BookService
from library_app.services.student_service import StudentService
from library_app.utils.auth import Identity


@pytest.fixture
def app(tmp_path):
    # her test için ayrı bir sqlite dosyası; thread'ler aynı dosyayı paylaşır
    db_file = tmp_path / "library_test.db"

    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{db_file}"

    app = create_app(_Config)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(app):
    return Identity(user_id=1, username="admin", role="admin")


@pytest.fixture
def admin_headers(app):
    user = AuthService.register("librarian", "librarian@example.edu", "s3cret-pass", role="admin")
    return {"Authorization": f"Bearer {AuthService.issue_token(user)}"}


@pytest.fixture
def user_headers(app):
    user = AuthService.register("visitor", "visitor@example.edu", "visitor-pass", role="user")
    return {"Authorization": f"Bearer {AuthService.issue_token(user)}"}


@pytest.fixture
def make_book(app):
    counter = {"n": 0}

    def _make(total=3, **overrides):
        counter["n"] += 1
        data = {
            "title": f"Book {counter['n']}",
            "author": "Jane Austen",
            "isbn": f"978000000{counter['n']:04d}",
            "category": "Fiction",
            "total_quantity": total,
        }
        data.update(overrides)
        return BookService.create_book(data)

    return _make


@pytest.fixture
def make_student(app):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "name": f"Student {counter['n']}",
            "roll_number": f"CS-{counter['n']:03d}",
            "email": f"student{counter['n']}@example.edu",
            "course": "Computer Science",
        }
        data.update(overrides)
        return StudentService.create_student(data)

    return _make

