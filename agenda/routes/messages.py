from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.user import User
from agenda.services.conversation_service import ConversationService
from agenda.utils.activity import log_activity
from agenda.utils.forms import get_form_data, validation_error
from agenda.utils.validators import FormValidator

bp = Blueprint('messages', __name__, url_prefix='/messages')

@bp.route('/conversations')
@login_required
def conversations():
    """Conversation list of the current user, most recent first"""
    search = request.args.get('search', '').strip() or None
    rows = ConversationService.conversations_for(current_user, search)
    return jsonify({
        'conversations': [
            {
                'user': row['counterpart'].to_dict(),
                'latest_message': row['latest_message'].to_dict(),
                'unread': row['unread']
            }
            for row in rows
        ],
        'unread_count': sum(1 for row in rows if row['unread'])
    })

@bp.route('/recipients')
@login_required
def recipients():
    search = request.args.get('search', '').strip().lower()
    users = ConversationService.available_recipients(current_user)
    if search:
        users = [u for u in users if search in u.name.lower()]
    return jsonify({'users': [u.to_dict() for u in users]})

@bp.route('/thread/<int:user_id>')
@login_required
def thread(user_id):
    other = db.get_or_404(User, user_id)
    messages = ConversationService.thread(current_user, other)
    return jsonify({
        'user': other.to_dict(),
        'messages': [
            dict(m.to_dict(), mine=(m.sender_id == current_user.id))
            for m in messages
        ]
    })

@bp.route('/thread/<int:user_id>/read', methods=['POST'])
@login_required
def mark_thread_as_read(user_id):
    other = db.get_or_404(User, user_id)
    count = ConversationService.mark_thread_as_read(current_user, other)
    return jsonify({'success': True, 'message': f'{count} messages marked as read', 'count': count})

@bp.route('/send', methods=['POST'])
@login_required
def send():
    data = get_form_data()
    is_valid, issues = FormValidator(data).require('recipient_id', 'content').validate()
    if not is_valid:
        return validation_error(issues)

    try:
        recipient = db.session.get(User, int(data['recipient_id']))
    except (TypeError, ValueError):
        recipient = None
    if recipient is None:
        return validation_error(['recipient_id must reference a user'])
    if recipient not in ConversationService.available_recipients(current_user):
        return jsonify({'success': False, 'message': 'You cannot send messages to this user'}), 403

    message, info = ConversationService.send_message(current_user, recipient, data['content'])
    if message is None:
        return jsonify({'success': False, 'message': info}), 500

    log_activity(current_user.id, 'send_message', f'Sent message to {recipient.email}', request.remote_addr)
    return jsonify({'success': True, 'message': message.to_dict()}), 201
