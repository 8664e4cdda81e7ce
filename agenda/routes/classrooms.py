from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.center import Center
from agenda.models.classroom import Classroom
from agenda.models.user import User, Role
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, check_reference, validation_error, save_error
from agenda.utils.validators import FormValidator

bp = Blueprint('classrooms', __name__, url_prefix='/classrooms')

INT_FIELDS = ('min_age', 'max_age', 'max_capacity')

def validate_classroom(data, required):
    """Return (issues, center, staff) for the submitted classroom fields"""
    validator = FormValidator(data).require(*required)
    _, issues = validator.check_non_negative(*INT_FIELDS).check_age_range().validate()
    center = check_reference(data, 'center_id', Center, issues)
    staff = staff_from_ids(data.get('staff_ids'), issues)
    return issues, center, staff

def staff_from_ids(staff_ids, issues):
    """Teachers and admins among the given user ids"""
    if not staff_ids:
        return []
    try:
        ids = [int(i) for i in staff_ids]
    except (TypeError, ValueError):
        issues.append("staff_ids must be a list of user ids")
        return []
    return User.query.filter(User.id.in_(ids),
                             User.role.in_([Role.TEACHER.value, Role.ADMIN.value])).all()

@bp.route('/')
@login_required
def index():
    query = Classroom.query
    center_id = request.args.get('center_id', type=int)
    if center_id is not None:
        query = query.filter_by(center_id=center_id)
    if current_user.has_role(Role.TEACHER):
        query = query.filter(Classroom.staff.any(User.id == current_user.id))
    classrooms = query.order_by(Classroom.min_age.asc(), Classroom.name.asc()).all()
    return jsonify({'classrooms': [c.to_dict() for c in classrooms]})

@bp.route('/<int:classroom_id>')
@login_required
def view(classroom_id):
    classroom = db.get_or_404(Classroom, classroom_id)
    data = classroom.to_dict()
    data['staff'] = [u.to_dict() for u in classroom.staff]
    return jsonify({'classroom': data})

@bp.route('/<int:classroom_id>/students')
@login_required
@role_required(Role.ADMIN, Role.TEACHER)
def students(classroom_id):
    classroom = db.get_or_404(Classroom, classroom_id)
    students = sorted(classroom.students, key=lambda s: s.name)
    return jsonify({'classroom': classroom.to_dict(), 'students': [s.to_dict() for s in students]})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def create():
    data = get_form_data()
    issues, center, staff = validate_classroom(data, required=('name',) + INT_FIELDS)
    if issues:
        return validation_error(issues)

    classroom = Classroom(
        name=data.get('name').strip(),
        course=data.get('course'),
        min_age=int(data.get('min_age')),
        max_age=int(data.get('max_age')),
        max_capacity=int(data.get('max_capacity')),
        image=data.get('image'),
        center_id=center.id if center else None
    )
    classroom.staff = staff
    db.session.add(classroom)
    if not commit_changes('creating classroom'):
        return save_error('An error occurred while creating the classroom.')

    log_activity(current_user.id, 'create_classroom', f'Created classroom: {classroom.name}', request.remote_addr)
    return jsonify({'success': True, 'classroom': classroom.to_dict()}), 201

@bp.route('/<int:classroom_id>', methods=['PUT'])
@login_required
@role_required(Role.ADMIN)
def edit(classroom_id):
    classroom = db.get_or_404(Classroom, classroom_id)
    data = get_form_data()

    # Validate the range the classroom would end up with
    merged = {field: data.get(field, getattr(classroom, field)) for field in INT_FIELDS}
    merged.update({k: v for k, v in data.items() if k not in INT_FIELDS})
    required = [field for field in ('name',) + INT_FIELDS if field in data]
    issues, center, staff = validate_classroom(merged, required)
    if issues:
        return validation_error(issues)

    for field in ('name', 'course', 'image'):
        if field in data:
            setattr(classroom, field, data[field])
    if 'center_id' in data:
        classroom.center_id = center.id if center else None
    for field in INT_FIELDS:
        if field in data:
            setattr(classroom, field, int(data[field]))
    if 'staff_ids' in data:
        classroom.staff = staff

    if not commit_changes('updating classroom'):
        return save_error('An error occurred while updating the classroom.')

    log_activity(current_user.id, 'edit_classroom', f'Updated classroom: {classroom.name}', request.remote_addr)
    return jsonify({'success': True, 'classroom': classroom.to_dict()})

@bp.route('/<int:classroom_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN)
def delete(classroom_id):
    classroom = db.get_or_404(Classroom, classroom_id)
    classroom_name = classroom.name
    student_count = classroom.enrollment

    # Students stay in the agenda without a classroom
    for student in list(classroom.students):
        student.classroom = None
    classroom.staff = []
    db.session.delete(classroom)
    if not commit_changes('deleting classroom'):
        return save_error('An error occurred while deleting the classroom.')

    log_activity(current_user.id, 'delete_classroom',
                 f'Deleted classroom: {classroom_name} (unassigned {student_count} students)', request.remote_addr)
    return jsonify({'success': True, 'message': f'Classroom "{classroom_name}" deleted successfully!'})
