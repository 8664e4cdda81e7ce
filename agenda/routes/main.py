from flask import Blueprint, jsonify, send_file, abort
from flask_login import current_user, login_required
from agenda.services.auth_service import home_view_for
from agenda.utils.images import resolve_image_path

bp = Blueprint('main', __name__)

@bp.route('/')
def index():
    if current_user.is_authenticated:
        return jsonify({
            'user': current_user.to_dict(),
            'home': home_view_for(current_user.role_enum)
        })
    return jsonify({'message': 'Agenda Escolar', 'login': '/auth/login'})

@bp.route('/images/<path:filename>')
@login_required
def image(filename):
    """Serve an image from the documents directory or the bundled assets"""
    path = resolve_image_path(filename)
    if path is None:
        abort(404)
    return send_file(path)
