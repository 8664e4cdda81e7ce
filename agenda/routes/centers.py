from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.center import Center
from agenda.models.user import Role
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, validation_error, save_error
from agenda.utils.validators import FormValidator

bp = Blueprint('centers', __name__, url_prefix='/centers')

CENTER_FIELDS = ('name', 'phone', 'location', 'description')

@bp.route('/')
@login_required
def index():
    search_query = request.args.get('search', '').strip()
    query = Center.query
    if search_query:
        like = f"%{search_query}%"
        query = query.filter((Center.name.ilike(like)) | (Center.location.ilike(like)))
    centers = query.order_by(Center.name.asc()).all()
    return jsonify({'centers': [c.to_dict() for c in centers]})

@bp.route('/<int:center_id>')
@login_required
def view(center_id):
    center = db.get_or_404(Center, center_id)
    data = center.to_dict()
    data['classrooms'] = [c.to_dict() for c in center.classrooms]
    data['student_count'] = len(center.students)
    return jsonify({'center': data})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def create():
    data = get_form_data()
    is_valid, issues = FormValidator(data).require('name').validate()
    if not is_valid:
        return validation_error(issues)

    center = Center(**{field: data.get(field) for field in CENTER_FIELDS})
    db.session.add(center)
    if not commit_changes('creating center'):
        return save_error('An error occurred while creating the center.')

    log_activity(current_user.id, 'create_center', f'Created center: {center.name}', request.remote_addr)
    return jsonify({'success': True, 'center': center.to_dict()}), 201

@bp.route('/<int:center_id>', methods=['PUT'])
@login_required
@role_required(Role.ADMIN)
def edit(center_id):
    center = db.get_or_404(Center, center_id)
    data = get_form_data()
    if 'name' in data:
        is_valid, issues = FormValidator(data).require('name').validate()
        if not is_valid:
            return validation_error(issues)

    for field in CENTER_FIELDS:
        if field in data:
            setattr(center, field, data[field])
    if not commit_changes('updating center'):
        return save_error('An error occurred while updating the center.')

    log_activity(current_user.id, 'edit_center', f'Updated center: {center.name}', request.remote_addr)
    return jsonify({'success': True, 'center': center.to_dict()})

@bp.route('/<int:center_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN)
def delete(center_id):
    center = db.get_or_404(Center, center_id)
    center_name = center.name

    # Classrooms, students and news stay, unlinked from the center
    db.session.delete(center)
    if not commit_changes('deleting center'):
        return save_error('An error occurred while deleting the center.')

    log_activity(current_user.id, 'delete_center', f'Deleted center: {center_name}', request.remote_addr)
    return jsonify({'success': True, 'message': f'Center "{center_name}" deleted successfully!'})
