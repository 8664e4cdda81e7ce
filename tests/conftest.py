"""Shared fixtures: a fresh in-memory agenda per test and one user per role."""

from datetime import date

import pytest

from agenda import create_app, db
from agenda.models import Center, Classroom, Student, User, Role
from config import TestingConfig


@pytest.fixture
def app(tmp_path):
    """Application bound to its own in-memory database."""

    class Config(TestingConfig):
        DOCUMENTS_DIR = str(tmp_path / "documents")
        BUNDLED_ASSETS_DIR = str(tmp_path / "assets")

    app = create_app(Config)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    """Ids of an admin, a teacher and two tutors."""
    with app.app_context():
        admin = User(name="Admin", email="admin@edai.com", password="admin123", role=Role.ADMIN.value)
        teacher = User(name="Teacher", email="teacher@edai.com", password="teacher123", role=Role.TEACHER.value)
        tutor = User(name="Tutor", email="tutor@edai.com", password="tutor123", role=Role.TUTOR.value)
        other_tutor = User(name="Other Tutor", email="other@edai.com", password="other123", role=Role.TUTOR.value)
        db.session.add_all([admin, teacher, tutor, other_tutor])
        db.session.commit()
        return {
            "admin": admin.id,
            "teacher": teacher.id,
            "tutor": tutor.id,
            "other_tutor": other_tutor.id,
        }


@pytest.fixture
def school(app, users):
    """A center with two classrooms staffed by the teacher and one enrolled student."""
    with app.app_context():
        teacher = db.session.get(User, users["teacher"])
        tutor = db.session.get(User, users["tutor"])
        center = Center(name="EDAI RIO DO POZO", phone="881 934 028", location="Narón")
        babies = Classroom(name="As Tartarugas", course="2025/2026", min_age=0, max_age=1,
                           max_capacity=25, center=center)
        toddlers = Classroom(name="Os Leóns", course="2025/2026", min_age=1, max_age=2,
                             max_capacity=25, center=center)
        babies.staff.append(teacher)
        student = Student(name="Emma", birth_date=date(date.today().year - 1, 8, 27),
                          center=center, classroom=babies, tutor=tutor)
        db.session.add_all([center, babies, toddlers, student])
        db.session.commit()
        return {
            "center": center.id,
            "babies": babies.id,
            "toddlers": toddlers.id,
            "student": student.id,
        }


def login(client, email, password):
    return client.post("/auth/login", json={"email": email, "password": password})


@pytest.fixture
def admin_client(client, users):
    login(client, "admin@edai.com", "admin123")
    return client


@pytest.fixture
def teacher_client(client, users):
    login(client, "teacher@edai.com", "teacher123")
    return client


@pytest.fixture
def tutor_client(client, users):
    login(client, "tutor@edai.com", "tutor123")
    return client
