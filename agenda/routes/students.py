from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from agenda import db
from agenda.models.center import Center
from agenda.models.classroom import Classroom
from agenda.models.student import Student
from agenda.models.user import User, Role
from agenda.services.classroom_assignment import ClassroomAssignmentService
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, check_reference, validation_error, save_error
from agenda.utils.validators import FormValidator, parse_date, parse_bool

bp = Blueprint('students', __name__, url_prefix='/students')

def visible_students():
    """Students the current user is allowed to see"""
    query = Student.query
    if current_user.has_role(Role.TEACHER):
        query = query.join(Classroom).filter(Classroom.staff.any(User.id == current_user.id))
    elif current_user.has_role(Role.TUTOR):
        query = query.filter(Student.tutor_id == current_user.id)
    return query

def can_view(student):
    if current_user.has_role(Role.ADMIN):
        return True
    if current_user.has_role(Role.TUTOR):
        return student.tutor_id == current_user.id
    return student.classroom is not None and current_user in student.classroom.staff

def check_tutor(data, issues):
    tutor_id = data.get('tutor_id')
    if tutor_id in (None, ''):
        return None
    try:
        tutor = db.session.get(User, int(tutor_id))
    except (TypeError, ValueError):
        tutor = None
    if tutor is None or not tutor.has_role(Role.TUTOR):
        issues.append("tutor_id must reference a tutor")
    return tutor

@bp.route('/')
@login_required
def index():
    query = visible_students()
    classroom_id = request.args.get('classroom_id', type=int)
    center_id = request.args.get('center_id', type=int)
    search_query = request.args.get('search', '').strip()
    if classroom_id is not None:
        query = query.filter(Student.classroom_id == classroom_id)
    if center_id is not None:
        query = query.filter(Student.center_id == center_id)
    if search_query:
        query = query.filter(Student.name.ilike(f"%{search_query}%"))
    students = query.order_by(Student.name.asc()).all()
    return jsonify({'students': [s.to_dict() for s in students]})

@bp.route('/<int:student_id>')
@login_required
def view(student_id):
    student = db.get_or_404(Student, student_id)
    if not can_view(student):
        return jsonify({'success': False, 'message': 'Unauthorized access'}), 403
    data = student.to_dict()
    data['classroom'] = student.classroom.to_dict() if student.classroom else None
    data['tutor'] = student.tutor.to_dict() if student.tutor else None
    return jsonify({'student': data})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def create():
    data = get_form_data()
    is_valid, issues = FormValidator(data).require('name', 'tutor_id').check_date('birth_date').validate()
    tutor = center = classroom = None
    if is_valid:
        tutor = check_tutor(data, issues)
        center = check_reference(data, 'center_id', Center, issues)
        classroom = check_reference(data, 'classroom_id', Classroom, issues)
    if issues:
        return validation_error(issues)

    student = Student(
        name=data.get('name').strip(),
        birth_date=parse_date(data.get('birth_date')),
        image=data.get('image'),
        center_id=center.id if center else None,
        tutor=tutor
    )
    db.session.add(student)

    if classroom is not None:
        student.classroom = classroom
    elif parse_bool(data.get('auto_assign', True)):
        ClassroomAssignmentService.auto_assign(student)

    if not commit_changes('creating student'):
        return save_error('An error occurred while creating the student.')

    log_activity(current_user.id, 'create_student', f'Created student: {student.name}', request.remote_addr)
    return jsonify({'success': True, 'student': student.to_dict()}), 201

@bp.route('/<int:student_id>', methods=['PUT'])
@login_required
@role_required(Role.ADMIN)
def edit(student_id):
    student = db.get_or_404(Student, student_id)
    data = get_form_data()
    validator = FormValidator(data).check_date('birth_date')
    if 'name' in data:
        validator.require('name')
    is_valid, issues = validator.validate()
    tutor = center = classroom = None
    if is_valid:
        tutor = check_tutor(data, issues)
        center = check_reference(data, 'center_id', Center, issues)
        classroom = check_reference(data, 'classroom_id', Classroom, issues)
    if issues:
        return validation_error(issues)

    if 'name' in data:
        student.name = data['name'].strip()
    if 'birth_date' in data:
        student.birth_date = parse_date(data['birth_date'])
    if 'image' in data:
        student.image = data['image']
    if 'center_id' in data:
        student.center_id = center.id if center else None
    if tutor is not None:
        student.tutor = tutor
    # A blank classroom_id takes the student out of their classroom
    if 'classroom_id' in data:
        student.classroom = classroom

    if not commit_changes('updating student'):
        return save_error('An error occurred while updating the student.')

    log_activity(current_user.id, 'edit_student', f'Updated student: {student.name}', request.remote_addr)
    return jsonify({'success': True, 'student': student.to_dict()})

@bp.route('/<int:student_id>/assign', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def assign(student_id):
    """Run the automatic classroom assignment again for a student"""
    student = db.get_or_404(Student, student_id)
    student.classroom = None
    classroom = ClassroomAssignmentService.auto_assign(student)
    if classroom is None:
        db.session.rollback()
        return jsonify({'success': False,
                        'message': f'No suitable classroom with free capacity for {student.name}.'}), 409

    if not commit_changes('assigning classroom'):
        return save_error('An error occurred while assigning the classroom.')

    log_activity(current_user.id, 'assign_classroom',
                 f'Assigned {student.name} to classroom {classroom.name}', request.remote_addr)
    return jsonify({'success': True, 'student': student.to_dict(), 'classroom': classroom.to_dict()})

@bp.route('/<int:student_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN)
def delete(student_id):
    student = db.get_or_404(Student, student_id)
    student_name = student.name
    db.session.delete(student)
    if not commit_changes('deleting student'):
        return save_error('An error occurred while deleting the student.')

    current_app.logger.info(f'Student {student_name} deleted with their daily records')
    log_activity(current_user.id, 'delete_student', f'Deleted student: {student_name}', request.remote_addr)
    return jsonify({'success': True, 'message': 'Student has been deleted successfully!'})
