from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.center import Center
from agenda.models.news import News
from agenda.models.user import Role
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, check_reference, validation_error, save_error
from agenda.utils.validators import FormValidator, parse_datetime
from datetime import datetime

bp = Blueprint('news', __name__, url_prefix='/news')

@bp.route('/')
@login_required
def index():
    center_id = request.args.get('center_id', type=int)
    return jsonify({'news': [n.to_dict() for n in News.get_latest(center_id)]})

@bp.route('/<int:news_id>')
@login_required
def view(news_id):
    item = db.get_or_404(News, news_id)
    data = item.to_dict()
    data['author'] = item.author.name if item.author else None
    return jsonify({'news': data})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def create():
    data = get_form_data()
    _, issues = FormValidator(data).require('title', 'content').check_datetime('publish_date').validate()
    center = check_reference(data, 'center_id', Center, issues)
    if issues:
        return validation_error(issues)

    item = News(
        title=data['title'].strip(),
        content=data['content'],
        publish_date=parse_datetime(data.get('publish_date')) or datetime.utcnow(),
        author_id=current_user.id,
        center_id=center.id if center else None
    )
    db.session.add(item)
    if not commit_changes('publishing news'):
        return save_error('An error occurred while publishing the news.')

    log_activity(current_user.id, 'create_news', f'Published news: {item.title}', request.remote_addr)
    return jsonify({'success': True, 'news': item.to_dict()}), 201

@bp.route('/<int:news_id>', methods=['PUT'])
@login_required
@role_required(Role.ADMIN)
def edit(news_id):
    item = db.get_or_404(News, news_id)
    data = get_form_data()
    validator = FormValidator(data).check_datetime('publish_date')
    for field in ('title', 'content'):
        if field in data:
            validator.require(field)
    _, issues = validator.validate()
    center = check_reference(data, 'center_id', Center, issues)
    if issues:
        return validation_error(issues)

    if 'title' in data:
        item.title = data['title'].strip()
    if 'content' in data:
        item.content = data['content']
    if 'center_id' in data:
        item.center_id = center.id if center else None
    if data.get('publish_date'):
        item.publish_date = parse_datetime(data['publish_date']) or item.publish_date

    if not commit_changes('updating news'):
        return save_error('An error occurred while updating the news.')

    log_activity(current_user.id, 'edit_news', f'Updated news: {item.title}', request.remote_addr)
    return jsonify({'success': True, 'news': item.to_dict()})

@bp.route('/<int:news_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN)
def delete(news_id):
    item = db.get_or_404(News, news_id)
    title = item.title
    db.session.delete(item)
    if not commit_changes('deleting news'):
        return save_error('An error occurred while deleting the news.')

    log_activity(current_user.id, 'delete_news', f'Deleted news: {title}', request.remote_addr)
    return jsonify({'success': True, 'message': 'News deleted.'})
