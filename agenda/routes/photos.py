from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.photo import Photo
from agenda.models.user import Role
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, validation_error, save_error
from agenda.utils.images import save_image
from datetime import datetime

bp = Blueprint('photos', __name__, url_prefix='/photos')

@bp.route('/')
@login_required
def index():
    """Gallery, newest first"""
    photos = Photo.query.order_by(Photo.date.desc()).all()
    return jsonify({'photos': [p.to_dict() for p in photos]})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.TEACHER, Role.ADMIN)
def upload():
    if 'image' in request.files and request.files['image'].filename:
        filename = save_image(request.files['image'])
    else:
        filename = (get_form_data().get('image') or '').strip()
    if not filename:
        return validation_error(['image is required'])

    photo = Photo(image=filename, teacher_id=current_user.id, date=datetime.utcnow())
    db.session.add(photo)
    if not commit_changes('saving photo'):
        return save_error('An error occurred while saving the photo.')

    log_activity(current_user.id, 'upload_photo', f'Uploaded photo {filename}', request.remote_addr)
    return jsonify({'success': True, 'photo': photo.to_dict()}), 201

@bp.route('/<int:photo_id>', methods=['DELETE'])
@login_required
@role_required(Role.TEACHER, Role.ADMIN)
def delete(photo_id):
    photo = db.get_or_404(Photo, photo_id)
    if current_user.has_role(Role.TEACHER) and photo.teacher_id != current_user.id:
        return jsonify({'success': False, 'message': 'Unauthorized access'}), 403

    db.session.delete(photo)
    if not commit_changes('deleting photo'):
        return save_error('An error occurred while deleting the photo.')

    log_activity(current_user.id, 'delete_photo', f'Deleted photo {photo_id}', request.remote_addr)
    return jsonify({'success': True, 'message': 'Photo deleted.'})
