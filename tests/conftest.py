from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from backend.auth import jwt_handler
from backend.auth.passwords import hash_password
from backend.core import config
from backend.database import Database
from backend.main import create_app
from backend.models.course import Course
from backend.models.student import Student
from backend.models.user import Role, User


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'BCRYPT_ROUNDS', 4)


@pytest.fixture
def database():
    db = Database('sqlite://', poolclass=StaticPool)
    db.create_schema()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client


def bearer(token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_headers(database) -> dict[str, str]:
    with database.session() as session:
        admin = User(email='admin@example.com', hashed_password=hash_password('Admin123!'), role=Role.ADMIN.value)
        session.add(admin)
        session.commit()
        token = jwt_handler.create_access_token(user_id=admin.id, role=admin.role, email=admin.email)
    return bearer(token)


@pytest.fixture
def register_student(client):
    def _register(email: str = 'ada@example.com', first_name: str = 'Ada', last_name: str = 'Lovelace') -> dict:
        response = client.post(
            '/api/auth/register',
            json={
                'email': email,
                'password': 'secret1',
                'firstName': first_name,
                'lastName': last_name,
                'birthDate': '2000-01-01',
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def student_headers(register_student) -> dict[str, str]:
    return bearer(register_student()['token'])


@pytest.fixture
def make_course(database):
    def _make(name: str) -> int:
        with database.session() as session:
            course = Course(name=name)
            session.add(course)
            session.commit()
            return course.id

    return _make


@pytest.fixture
def make_student(database):
    def _make(first_name: str = 'Grace', last_name: str = 'Hopper', birth_date: date = date(1990, 12, 9)) -> int:
        with database.session() as session:
            student = Student(first_name=first_name, last_name=last_name, birth_date=birth_date)
            session.add(student)
            session.commit()
            return student.id

    return _make
