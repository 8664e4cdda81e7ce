from flask import Blueprint, request, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from agenda.services.auth_service import AuthService, home_view_for
from agenda.utils.activity import log_activity
from agenda.utils.forms import get_form_data, validation_error
from agenda.utils.validators import FormValidator

bp = Blueprint('auth', __name__, url_prefix='/auth')

@bp.route('/login', methods=['POST'])
def login():
    data = get_form_data()
    is_valid, issues = FormValidator(data).require('email', 'password').validate()
    if not is_valid:
        return validation_error(issues)

    email = data.get('email')
    user = AuthService.authenticate(email, data.get('password'))
    if user is None:
        current_app.logger.info(f'Failed login attempt for {email}')
        return jsonify({'success': False, 'message': 'Invalid credentials'}), 401

    login_user(user)
    log_activity(user.id, 'login', f'User logged in successfully: {email}', request.remote_addr)
    return jsonify({
        'success': True,
        'user': user.to_dict(),
        'home': home_view_for(user.role_enum)
    })

@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    log_activity(current_user.id, 'logout', f'User logged out: {current_user.email}', request.remote_addr)
    logout_user()
    return jsonify({'success': True, 'message': 'You have been logged out.'})

@bp.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict(), 'home': home_view_for(current_user.role_enum)})
