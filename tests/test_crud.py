"""Tests for the management endpoints: centers, classrooms, users, students and photos."""

from datetime import date

from agenda import db
from agenda.models import Classroom, DailyRecord, Photo, Student, User
from agenda.routes.users import generate_password, PASSWORD_CHARACTERS, PASSWORD_LENGTH


class TestCenters:
    def test_create_and_search(self, admin_client):
        created = admin_client.post("/centers/", json={"name": "EDAI O ALTO", "location": "Narón"})
        assert created.status_code == 201

        centers = admin_client.get("/centers/?search=alto").get_json()["centers"]
        assert [c["name"] for c in centers] == ["EDAI O ALTO"]

    def test_name_required(self, admin_client):
        response = admin_client.post("/centers/", json={"phone": "881 000 000"})

        assert response.status_code == 400
        assert response.get_json()["errors"] == ["name is required"]

    def test_delete_unlinks_classrooms(self, app, admin_client, school):
        assert admin_client.delete(f"/centers/{school['center']}").status_code == 200

        with app.app_context():
            assert db.session.get(Classroom, school["babies"]).center_id is None
            assert db.session.get(Student, school["student"]).center_id is None

    def test_missing_center(self, admin_client):
        assert admin_client.get("/centers/999").status_code == 404


class TestClassrooms:
    def test_create_with_staff(self, admin_client, users):
        response = admin_client.post("/classrooms/", json={
            "name": "Os Osos", "course": "2025/2026", "min_age": 2, "max_age": 3,
            "max_capacity": 20, "staff_ids": [users["teacher"], users["tutor"]],
        })

        assert response.status_code == 201
        assert response.get_json()["classroom"]["staff_ids"] == [users["teacher"]]

    def test_min_age_above_max_age(self, admin_client):
        response = admin_client.post("/classrooms/", json={
            "name": "Backwards", "min_age": 3, "max_age": 1, "max_capacity": 10,
        })

        assert response.status_code == 400
        assert response.get_json()["errors"] == ["min_age cannot be greater than max_age"]

    def test_edit_checks_resulting_range(self, admin_client, school):
        response = admin_client.put(f"/classrooms/{school['babies']}", json={"min_age": 4})

        assert response.status_code == 400

    def test_teacher_sees_staffed_classrooms(self, teacher_client, school):
        classrooms = teacher_client.get("/classrooms/").get_json()["classrooms"]

        assert [c["id"] for c in classrooms] == [school["babies"]]

    def test_enrollment_in_listing(self, admin_client, school):
        classrooms = admin_client.get("/classrooms/").get_json()["classrooms"]

        assert [(c["name"], c["enrollment"]) for c in classrooms] == [("As Tartarugas", 1), ("Os Leóns", 0)]

    def test_delete_unassigns_students(self, app, admin_client, school):
        assert admin_client.delete(f"/classrooms/{school['babies']}").status_code == 200

        with app.app_context():
            student = db.session.get(Student, school["student"])
            assert student is not None
            assert student.classroom_id is None


class TestUsers:
    def test_generate_password(self):
        password = generate_password()

        assert len(password) == PASSWORD_LENGTH
        assert all(ch in PASSWORD_CHARACTERS for ch in password)

    def test_create_with_generated_password(self, app, admin_client):
        response = admin_client.post("/users/", json={
            "name": "Nova Titora", "email": "nova@edai.com", "role": "tutor", "generate_password": True,
        })

        assert response.status_code == 201
        password = response.get_json()["password"]
        with app.app_context():
            assert User.query.filter_by(email="nova@edai.com").one().check_password(password)

    def test_duplicate_email(self, admin_client, users):
        response = admin_client.post("/users/", json={
            "name": "Again", "email": "tutor@edai.com", "password": "x", "role": "tutor",
        })

        assert response.status_code == 400

    def test_invalid_role(self, admin_client):
        response = admin_client.post("/users/", json={
            "name": "Who", "email": "who@edai.com", "password": "x", "role": "janitor",
        })

        assert response.get_json()["errors"] == ["role must be one of: admin, teacher, tutor"]

    def test_cannot_delete_self(self, admin_client, users):
        assert admin_client.delete(f"/users/{users['admin']}").status_code == 400

    def test_delete_teacher_leaves_classroom(self, app, admin_client, school, users):
        assert admin_client.delete(f"/users/{users['teacher']}").status_code == 200

        with app.app_context():
            assert db.session.get(Classroom, school["babies"]).staff == []

    def test_filter_by_role(self, admin_client, users):
        listed = admin_client.get("/users/?role=tutor").get_json()["users"]

        assert {u["email"] for u in listed} == {"tutor@edai.com", "other@edai.com"}


class TestStudentDeletion:
    def test_delete_removes_records(self, app, admin_client, school):
        with app.app_context():
            db.session.add(DailyRecord(student_id=school["student"], date=date(2026, 10, 19)))
            db.session.commit()

        assert admin_client.delete(f"/students/{school['student']}").status_code == 200

        with app.app_context():
            assert db.session.get(Student, school["student"]) is None
            assert DailyRecord.query.count() == 0


class TestPhotos:
    def test_upload_by_name_and_list(self, teacher_client, users):
        response = teacher_client.post("/photos/", json={"image": "foto1.jpg"})

        assert response.status_code == 201
        photos = teacher_client.get("/photos/").get_json()["photos"]
        assert photos[0]["teacher_id"] == users["teacher"]

    def test_tutor_cannot_upload(self, tutor_client):
        assert tutor_client.post("/photos/", json={"image": "foto1.jpg"}).status_code == 403

    def test_teacher_only_deletes_own_photos(self, app, teacher_client, users):
        with app.app_context():
            photo = Photo(image="foto2.jpg", teacher_id=users["admin"])
            db.session.add(photo)
            db.session.commit()
            photo_id = photo.id

        assert teacher_client.delete(f"/photos/{photo_id}").status_code == 403


class TestStudentReferences:
    def test_edit_unknown_classroom_keeps_student_in_place(self, app, admin_client, school):
        response = admin_client.put(f"/students/{school['student']}", json={"classroom_id": 999})

        assert response.status_code == 400
        assert response.get_json()["errors"] == ["classroom_id must reference a classroom"]
        with app.app_context():
            assert db.session.get(Student, school["student"]).classroom_id == school["babies"]

    def test_edit_unknown_center(self, app, admin_client, school):
        response = admin_client.put(f"/students/{school['student']}", json={"center_id": 999, "name": "Renamed"})

        assert response.status_code == 400
        with app.app_context():
            student = db.session.get(Student, school["student"])
            assert student.center_id == school["center"]
            assert student.name == "Emma"

    def test_edit_blank_classroom_unassigns(self, app, admin_client, school):
        response = admin_client.put(f"/students/{school['student']}", json={"classroom_id": None})

        assert response.status_code == 200
        with app.app_context():
            assert db.session.get(Student, school["student"]).classroom_id is None

    def test_create_with_malformed_ids(self, app, admin_client, school, users):
        response = admin_client.post("/students/", json={
            "name": "Xoán", "tutor_id": users["tutor"], "classroom_id": "abc", "center_id": 999,
        })

        assert response.status_code == 400
        assert response.get_json()["errors"] == [
            "center_id must reference a center",
            "classroom_id must reference a classroom",
        ]
        with app.app_context():
            assert Student.query.filter_by(name="Xoán").count() == 0

    def test_create_with_explicit_classroom(self, admin_client, school, users):
        response = admin_client.post("/students/", json={
            "name": "Xoán", "tutor_id": users["tutor"], "classroom_id": school["toddlers"],
        })

        assert response.status_code == 201
        assert response.get_json()["student"]["classroom_id"] == school["toddlers"]

    def test_malformed_tutor(self, admin_client):
        response = admin_client.post("/students/", json={"name": "Xoán", "tutor_id": "nobody"})

        assert response.get_json()["errors"] == ["tutor_id must reference a tutor"]


class TestClassroomReferences:
    def test_create_with_unknown_center(self, admin_client):
        response = admin_client.post("/classrooms/", json={
            "name": "Os Osos", "min_age": 2, "max_age": 3, "max_capacity": 20, "center_id": 999,
        })

        assert response.status_code == 400
        assert response.get_json()["errors"] == ["center_id must reference a center"]

    def test_malformed_staff_ids(self, app, admin_client, school):
        response = admin_client.put(f"/classrooms/{school['babies']}", json={"staff_ids": ["x"]})

        assert response.status_code == 400
        with app.app_context():
            assert len(db.session.get(Classroom, school["babies"]).staff) == 1

    def test_malformed_capacity(self, admin_client, school):
        response = admin_client.put(f"/classrooms/{school['babies']}", json={"max_capacity": "many"})

        assert response.status_code == 400
        assert response.get_json()["errors"] == ["max_capacity must be a whole number"]
