from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.classroom import Classroom
from agenda.models.daily_record import DailyRecord, MEAL_FIELDS
from agenda.models.student import Student
from agenda.models.user import User, Role
from agenda.routes.students import can_view
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, check_reference, validation_error, save_error
from agenda.utils.validators import FormValidator, parse_date, parse_datetime, parse_bool

bp = Blueprint('records', __name__, url_prefix='/records')

SUPPLY_FIELDS = ('wipes_remaining', 'diapers_remaining')
NAP_FIELDS = ('nap_start', 'nap_end')

def visible_records():
    """Teachers see their classrooms' records, tutors their children's"""
    query = DailyRecord.query.join(Student)
    if current_user.has_role(Role.TEACHER):
        query = query.join(Classroom, Student.classroom_id == Classroom.id) \
            .filter(Classroom.staff.any(User.id == current_user.id))
    elif current_user.has_role(Role.TUTOR):
        query = query.filter(Student.tutor_id == current_user.id)
    return query

def apply_record_fields(record, data):
    if 'date' in data:
        record.date = parse_date(data['date'])
    for field in MEAL_FIELDS:
        if field in data:
            setattr(record, field, parse_bool(data[field]))
    for field in SUPPLY_FIELDS:
        if data.get(field) not in (None, ''):
            setattr(record, field, int(data[field]))
    if 'nap' in data or 'nap_start' in data or 'nap_end' in data:
        nap = parse_bool(data.get('nap', record.nap))
        record.set_nap(nap,
                       parse_datetime(data.get('nap_start')) if 'nap_start' in data else record.nap_start,
                       parse_datetime(data.get('nap_end')) if 'nap_end' in data else record.nap_end)
    if 'comments' in data:
        record.comments = data['comments']

@bp.route('/')
@login_required
def index():
    query = visible_records()
    student_id = request.args.get('student_id', type=int)
    day = parse_date(request.args.get('date'))
    if student_id is not None:
        query = query.filter(DailyRecord.student_id == student_id)
    if day is not None:
        query = query.filter(DailyRecord.date == day)
    records = query.order_by(DailyRecord.date.desc(), Student.name.asc()).all()
    return jsonify({'records': [r.to_dict() for r in records]})

@bp.route('/<int:record_id>')
@login_required
def view(record_id):
    record = visible_records().filter(DailyRecord.id == record_id).first_or_404()
    return jsonify({'record': record.to_dict()})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.ADMIN, Role.TEACHER)
def create():
    data = get_form_data()
    is_valid, issues = FormValidator(data).require('student_id', 'date').check_date('date') \
        .check_datetime(*NAP_FIELDS).check_percentage(*SUPPLY_FIELDS).validate()
    student = check_reference(data, 'student_id', Student, issues) if is_valid else None
    if issues:
        return validation_error(issues)
    if not can_view(student):
        return jsonify({'success': False, 'message': 'Unauthorized access'}), 403

    record = DailyRecord(student=student)
    apply_record_fields(record, data)
    db.session.add(record)
    if not commit_changes('saving daily record'):
        return save_error('An error occurred while saving the daily record.')

    log_activity(current_user.id, 'create_record', f'Added daily record for {student.name} on {record.date}', request.remote_addr)
    return jsonify({'success': True, 'record': record.to_dict()}), 201

@bp.route('/<int:record_id>', methods=['PUT'])
@login_required
@role_required(Role.ADMIN, Role.TEACHER)
def edit(record_id):
    record = visible_records().filter(DailyRecord.id == record_id).first_or_404()
    data = get_form_data()
    validator = FormValidator(data).check_date('date').check_datetime(*NAP_FIELDS).check_percentage(*SUPPLY_FIELDS)
    if 'date' in data:
        validator.require('date')
    is_valid, issues = validator.validate()
    if not is_valid:
        return validation_error(issues)

    apply_record_fields(record, data)
    if not commit_changes('updating daily record'):
        return save_error('An error occurred while updating the daily record.')

    log_activity(current_user.id, 'edit_record', f'Updated daily record {record.id}', request.remote_addr)
    return jsonify({'success': True, 'record': record.to_dict()})

@bp.route('/<int:record_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN, Role.TEACHER)
def delete(record_id):
    record = visible_records().filter(DailyRecord.id == record_id).first_or_404()
    db.session.delete(record)
    if not commit_changes('deleting daily record'):
        return save_error('An error occurred while deleting the daily record.')

    log_activity(current_user.id, 'delete_record', f'Deleted daily record {record_id}', request.remote_addr)
    return jsonify({'success': True, 'message': 'Daily record deleted.'})
