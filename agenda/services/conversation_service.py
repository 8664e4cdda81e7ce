from agenda import db
from agenda.models.message import Message
from agenda.models.user import User, Role
from agenda.services.persistence import commit_changes
from datetime import datetime
from typing import Dict, List, Optional, Tuple

def counterpart_of(message, current_user):
    """The other participant of a message, None if current_user is not part of it"""
    if message.sender == current_user:
        return message.recipient
    if message.recipient == current_user:
        return message.sender
    return None

def latest_by_counterpart(messages, current_user) -> Dict:
    """Keep the most recent message exchanged with each counterpart.

    A message replaces the retained one only when it is strictly newer, so
    equal dates keep whichever was seen first. Undated messages never replace
    a dated one.
    """
    latest = {}
    for message in messages:
        other = counterpart_of(message, current_user)
        if other is None:
            continue
        existing = latest.get(other)
        if existing is not None:
            if message.date is None:
                continue
            if existing.date is not None and message.date <= existing.date:
                continue
        latest[other] = message
    return latest

def sorted_counterparts(latest, search=None) -> List:
    """Counterparts ordered by their latest message, newest first"""
    users = list(latest.keys())
    if search:
        needle = search.lower()
        users = [u for u in users if needle in (u.name or '').lower()]
    return sorted(users, key=lambda u: latest[u].date or datetime.min, reverse=True)

def is_unread(message, current_user) -> bool:
    return not message.read and message.recipient == current_user


class ConversationService:

    @staticmethod
    def messages_for(user):
        return Message.query.filter(
            (Message.sender_id == user.id) | (Message.recipient_id == user.id)
        ).order_by(Message.date.desc()).all()

    @staticmethod
    def conversations_for(user, search=None):
        """One row per counterpart: latest message and unread flag"""
        latest = latest_by_counterpart(ConversationService.messages_for(user), user)
        return [
            {
                'counterpart': other,
                'latest_message': latest[other],
                'unread': is_unread(latest[other], user)
            }
            for other in sorted_counterparts(latest, search)
        ]

    @staticmethod
    def thread(user, other):
        """Messages exchanged between two users, oldest first"""
        return Message.query.filter(
            ((Message.sender_id == user.id) & (Message.recipient_id == other.id)) |
            ((Message.sender_id == other.id) & (Message.recipient_id == user.id))
        ).order_by(Message.date.asc()).all()

    @staticmethod
    def send_message(sender, recipient, content) -> Tuple[Optional[Message], str]:
        if not content or not content.strip():
            return None, "Message content cannot be empty"
        if recipient is None:
            return None, "Recipient not found"

        message = Message(content=content.strip(), date=datetime.utcnow(),
                          sender=sender, recipient=recipient, read=False)
        db.session.add(message)
        if not commit_changes('sending message'):
            return None, "An error occurred while sending the message"
        return message, "Message sent"

    @staticmethod
    def mark_thread_as_read(user, other) -> int:
        """Flag every message received by user from other as read"""
        unread = Message.query.filter_by(sender_id=other.id, recipient_id=user.id, read=False).all()
        for message in unread:
            message.read = True
        if unread and not commit_changes('marking messages as read'):
            return 0
        return len(unread)

    @staticmethod
    def available_recipients(user):
        """Tutors may only write to staff; staff may write to anyone"""
        query = User.query.filter(User.id != user.id)
        if user.has_role(Role.TUTOR):
            query = query.filter(User.role.in_([Role.TEACHER.value, Role.ADMIN.value]))
        return query.order_by(User.name.asc()).all()
