from agenda import db
from datetime import datetime

class Message(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow)
    sender_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    recipient_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    read = db.Column(db.Boolean, default=False, nullable=False)

    # Relationships
    sender = db.relationship('User', foreign_keys=[sender_id],
                             backref=db.backref('sent_messages', lazy=True, cascade='all, delete-orphan'))
    recipient = db.relationship('User', foreign_keys=[recipient_id],
                                backref=db.backref('received_messages', lazy=True, cascade='all, delete-orphan'))

    def to_dict(self):
        return {
            'id': self.id,
            'content': self.content,
            'date': self.date.isoformat() if self.date else None,
            'sender_id': self.sender_id,
            'recipient_id': self.recipient_id,
            'read': self.read
        }

    def __repr__(self):
        return f'<Message {self.id}: {self.sender_id} -> {self.recipient_id}>'
