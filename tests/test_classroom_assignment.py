"""Tests for automatic classroom assignment."""

from datetime import date
from types import SimpleNamespace

from agenda import db
from agenda.models import Classroom, Student
from agenda.models.student import age_in_years
from agenda.services.classroom_assignment import assign_classroom, ClassroomAssignmentService

TODAY = date(2026, 10, 19)


def make_classroom(name, min_age, max_age, max_capacity=25, enrollment=0):
    return SimpleNamespace(name=name, min_age=min_age, max_age=max_age,
                           max_capacity=max_capacity, enrollment=enrollment)


def make_student(birth_date):
    return SimpleNamespace(name="Student", birth_date=birth_date)


class TestAgeInYears:
    def test_ignores_month_and_day(self):
        assert age_in_years(date(2024, 12, 31), TODAY) == 2
        assert age_in_years(date(2024, 1, 1), TODAY) == 2

    def test_missing_birth_date(self):
        assert age_in_years(None, TODAY) is None


class TestAssignClassroom:
    def test_full_classroom_is_skipped(self):
        full = make_classroom("A", 1, 2, max_capacity=25, enrollment=25)
        roomy = make_classroom("B", 1, 3, max_capacity=25, enrollment=10)

        result = assign_classroom(make_student(date(2024, 12, 31)), [full, roomy], TODAY)

        assert result is roomy

    def test_name_breaks_ties(self):
        xirafas = make_classroom("As Xirafas", 2, 3)
        osos = make_classroom("Os Osos", 2, 3)
        bolboretas = make_classroom("As Bolboretas", 2, 3)

        result = assign_classroom(make_student(date(2024, 3, 3)), [xirafas, osos, bolboretas], TODAY)

        assert result is bolboretas

    def test_lowest_minimum_age_wins(self):
        older = make_classroom("A", 2, 3)
        younger = make_classroom("Z", 1, 2)

        result = assign_classroom(make_student(date(2024, 3, 3)), [older, younger], TODAY)

        assert result is younger

    def test_no_classroom_fits(self):
        classrooms = [make_classroom("A", 0, 1), make_classroom("B", 4, 5)]

        assert assign_classroom(make_student(date(2023, 5, 5)), classrooms, TODAY) is None

    def test_age_bounds_are_inclusive(self):
        classroom = make_classroom("A", 1, 2)

        assert assign_classroom(make_student(date(2025, 1, 1)), [classroom], TODAY) is classroom
        assert assign_classroom(make_student(date(2024, 1, 1)), [classroom], TODAY) is classroom
        assert assign_classroom(make_student(date(2023, 1, 1)), [classroom], TODAY) is None

    def test_student_without_birth_date_is_not_assigned(self):
        assert assign_classroom(make_student(None), [make_classroom("A", 0, 9)], TODAY) is None

    def test_result_is_always_eligible(self):
        classrooms = [
            make_classroom(name, low, low + span, max_capacity=cap, enrollment=enrolled)
            for name, low, span, cap, enrolled in [
                ("A", 0, 1, 5, 5), ("B", 0, 2, 5, 4), ("C", 1, 1, 1, 0),
                ("D", 2, 0, 3, 3), ("E", 3, 2, 2, 1),
            ]
        ]
        for years in range(0, 7):
            student = make_student(date(TODAY.year - years, 6, 15))
            result = assign_classroom(student, classrooms, TODAY)
            eligible = [c for c in classrooms
                        if c.min_age <= years <= c.max_age and c.enrollment < c.max_capacity]
            if eligible:
                assert result is not None
                assert result.min_age <= years <= result.max_age
                assert result.enrollment < result.max_capacity
            else:
                assert result is None


class TestAutoAssign:
    def test_assigns_within_student_center(self, app, school, users):
        with app.app_context():
            student = Student(name="Abraham", birth_date=date(date.today().year - 2, 8, 27),
                              center_id=school["center"], tutor_id=users["tutor"])
            db.session.add(student)

            classroom = ClassroomAssignmentService.auto_assign(student)
            db.session.commit()

            assert classroom.id == school["toddlers"]
            assert db.session.get(Student, student.id).classroom_id == school["toddlers"]

    def test_counts_current_enrollment(self, app, school, users):
        with app.app_context():
            toddlers = db.session.get(Classroom, school["toddlers"])
            toddlers.max_capacity = 1
            db.session.add(Student(name="Filler", birth_date=date(date.today().year - 2, 1, 1),
                                   classroom=toddlers, center_id=school["center"]))
            db.session.commit()

            student = Student(name="Late", birth_date=date(date.today().year - 2, 3, 3),
                              center_id=school["center"])
            db.session.add(student)

            assert ClassroomAssignmentService.auto_assign(student) is None
            assert student.classroom is None

    def test_without_birth_date_is_a_no_op(self, app, school):
        with app.app_context():
            student = Student(name="Unknown", center_id=school["center"])
            db.session.add(student)

            assert ClassroomAssignmentService.auto_assign(student) is None
            assert student.classroom is None


class TestStudentRoutes:
    def test_create_student_is_auto_assigned(self, admin_client, school, users):
        response = admin_client.post("/students/", json={
            "name": "Daniela",
            "birth_date": f"{date.today().year - 2}-08-27",
            "tutor_id": users["tutor"],
            "center_id": school["center"],
        })

        assert response.status_code == 201
        assert response.get_json()["student"]["classroom_id"] == school["toddlers"]

    def test_create_student_without_match_stays_unassigned(self, admin_client, school, users):
        response = admin_client.post("/students/", json={
            "name": "Big Kid",
            "birth_date": f"{date.today().year - 5}-01-01",
            "tutor_id": users["tutor"],
            "center_id": school["center"],
        })

        assert response.status_code == 201
        assert response.get_json()["student"]["classroom_id"] is None

    def test_create_student_requires_name_and_tutor(self, admin_client, school):
        response = admin_client.post("/students/", json={"birth_date": "2024-01-01"})

        assert response.status_code == 400
        errors = response.get_json()["errors"]
        assert "name is required" in errors
        assert "tutor_id is required" in errors

    def test_reassign_student(self, admin_client, app, school):
        with app.app_context():
            student = db.session.get(Student, school["student"])
            student.birth_date = date(date.today().year - 2, 1, 1)
            db.session.commit()

        response = admin_client.post(f"/students/{school['student']}/assign")

        assert response.status_code == 200
        assert response.get_json()["classroom"]["id"] == school["toddlers"]

    def test_reassign_without_room_keeps_classroom(self, admin_client, app, school):
        with app.app_context():
            student = db.session.get(Student, school["student"])
            student.birth_date = date(date.today().year - 6, 1, 1)
            db.session.commit()

        response = admin_client.post(f"/students/{school['student']}/assign")

        assert response.status_code == 409
        with app.app_context():
            assert db.session.get(Student, school["student"]).classroom_id == school["babies"]

    def test_teacher_sees_students_of_staffed_classrooms(self, teacher_client, school):
        response = teacher_client.get("/students/")

        names = [s["name"] for s in response.get_json()["students"]]
        assert names == ["Emma"]

    def test_other_tutor_cannot_view_student(self, client, school, users):
        client.post("/auth/login", json={"email": "other@edai.com", "password": "other123"})

        assert client.get(f"/students/{school['student']}").status_code == 403
        assert client.get("/students/").get_json()["students"] == []
