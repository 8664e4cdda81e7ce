from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.user import User, Role
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, validation_error, save_error
from agenda.utils.validators import FormValidator, parse_bool
import secrets
import string

bp = Blueprint('users', __name__, url_prefix='/users')

ROLE_VALUES = [role.value for role in Role]
PASSWORD_CHARACTERS = string.ascii_letters + string.digits + "!@#$%^&*()_+[]{}|;:,.<>?/~`-="
PASSWORD_LENGTH = 12

def generate_password():
    return ''.join(secrets.choice(PASSWORD_CHARACTERS) for _ in range(PASSWORD_LENGTH))

@bp.route('/')
@login_required
@role_required(Role.ADMIN)
def index():
    query = User.query
    role = request.args.get('role')
    search_query = request.args.get('search', '').strip()
    if role:
        query = query.filter_by(role=role)
    if search_query:
        like = f"%{search_query}%"
        query = query.filter((User.name.ilike(like)) | (User.email.ilike(like)))
    users = query.order_by(User.name.asc()).all()
    return jsonify({'users': [u.to_dict() for u in users]})

@bp.route('/<int:user_id>')
@login_required
@role_required(Role.ADMIN)
def view(user_id):
    user = db.get_or_404(User, user_id)
    return jsonify({'user': user.to_dict()})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def create():
    data = get_form_data()
    generated = None
    if parse_bool(data.get('generate_password')) and not data.get('password'):
        generated = generate_password()
        data = dict(data, password=generated)

    is_valid, issues = FormValidator(data).require('name', 'email', 'password', 'role') \
        .check_choice('role', ROLE_VALUES).validate()
    if not is_valid:
        return validation_error(issues)

    email = data.get('email').strip()
    if User.query.filter_by(email=email).first():
        return validation_error(['Email already exists. Please use a different email address.'])

    user = User(name=data.get('name').strip(), email=email, password=data.get('password'), role=data.get('role'))
    db.session.add(user)
    if not commit_changes('creating user'):
        return save_error('An error occurred while creating the user.')

    log_activity(current_user.id, 'create_user', f'Created {user.role} account: {user.email}', request.remote_addr)
    response = {'success': True, 'user': user.to_dict()}
    if generated:
        response['password'] = generated
    return jsonify(response), 201

@bp.route('/<int:user_id>', methods=['PUT'])
@login_required
@role_required(Role.ADMIN)
def edit(user_id):
    user = db.get_or_404(User, user_id)
    data = get_form_data()
    validator = FormValidator(data).check_choice('role', ROLE_VALUES)
    for field in ('name', 'email', 'password'):
        if field in data:
            validator.require(field)
    is_valid, issues = validator.validate()
    if not is_valid:
        return validation_error(issues)

    if 'email' in data:
        email = data['email'].strip()
        existing = User.query.filter_by(email=email).first()
        if existing and existing.id != user.id:
            return validation_error(['Email already exists. Please use a different email address.'])
        user.email = email
    if 'name' in data:
        user.name = data['name'].strip()
    if 'password' in data:
        user.password = data['password']
    if data.get('role'):
        user.role = data['role']

    if not commit_changes('updating user'):
        return save_error('An error occurred while updating the user.')

    log_activity(current_user.id, 'edit_user', f'Updated account: {user.email}', request.remote_addr)
    return jsonify({'success': True, 'user': user.to_dict()})

@bp.route('/<int:user_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN)
def delete(user_id):
    user = db.get_or_404(User, user_id)
    if user.id == current_user.id:
        return jsonify({'success': False, 'message': 'You cannot delete your own account.'}), 400

    email = user.email
    # Students and authored news stay, unlinked from the user; photos and messages go
    user.classrooms = []
    db.session.delete(user)
    if not commit_changes('deleting user'):
        return save_error('An error occurred while deleting the user.')

    log_activity(current_user.id, 'delete_user', f'Deleted account: {email}', request.remote_addr)
    return jsonify({'success': True, 'message': f'User {email} deleted successfully!'})
