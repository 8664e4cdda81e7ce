from flask import current_app
from agenda.models.classroom import Classroom
from agenda.models.student import age_in_years

def assign_classroom(student, classrooms, today=None):
    """Pick the classroom a student should join.

    Classrooms are tried by minimum age, then name. The first one whose age
    range contains the student's age and that still has room wins. Students
    without a birth date are never assigned. Returns None when nothing fits.
    """
    if student.birth_date is None:
        return None
    age = age_in_years(student.birth_date, today)
    for classroom in sorted(classrooms, key=lambda c: (c.min_age, c.name or '')):
        if classroom.min_age <= age <= classroom.max_age and classroom.enrollment < classroom.max_capacity:
            return classroom
    return None


class ClassroomAssignmentService:

    @staticmethod
    def candidate_classrooms(student):
        """Classrooms of the student's center (every classroom when it has none)"""
        query = Classroom.query
        if student.center_id is not None:
            query = query.filter_by(center_id=student.center_id)
        return query.order_by(Classroom.min_age.asc(), Classroom.name.asc()).all()

    @staticmethod
    def auto_assign(student, today=None):
        """Assign the student to the first suitable classroom.

        The student is only modified in the session; committing is up to the
        caller. Returns the classroom, or None when no classroom fits.
        """
        if student.birth_date is None:
            current_app.logger.info(f"Student {student.name} has no birth date; skipping classroom assignment")
            return None

        classroom = assign_classroom(student, ClassroomAssignmentService.candidate_classrooms(student), today)
        if classroom is None:
            current_app.logger.warning(f"No suitable classroom with free capacity for student {student.name}")
            return None

        student.classroom = classroom
        if student.center_id is None:
            student.center_id = classroom.center_id
        current_app.logger.info(f"Student {student.name} assigned to classroom {classroom.name}")
        return classroom
