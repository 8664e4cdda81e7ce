from agenda import db
from datetime import datetime

MEAL_FIELDS = ('breakfast', 'snack', 'first_course', 'second_course', 'dessert')

class DailyRecord(db.Model):
    __tablename__ = 'daily_record'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id', ondelete='CASCADE'), nullable=False)
    date = db.Column(db.Date, nullable=False)

    # Meals eaten
    breakfast = db.Column(db.Boolean, default=False)
    snack = db.Column(db.Boolean, default=False)
    first_course = db.Column(db.Boolean, default=False)
    second_course = db.Column(db.Boolean, default=False)
    dessert = db.Column(db.Boolean, default=False)

    # Supplies left, as a percentage (0-100)
    wipes_remaining = db.Column(db.Integer, default=100)
    diapers_remaining = db.Column(db.Integer, default=100)

    nap = db.Column(db.Boolean, default=False)
    nap_start = db.Column(db.DateTime)
    nap_end = db.Column(db.DateTime)
    comments = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_nap(self, nap, start=None, end=None):
        """Nap times are only kept when the student actually napped"""
        self.nap = bool(nap)
        self.nap_start = start if self.nap else None
        self.nap_end = end if self.nap else None

    def to_dict(self):
        data = {
            'id': self.id,
            'student_id': self.student_id,
            'date': self.date.isoformat() if self.date else None,
            'wipes_remaining': self.wipes_remaining,
            'diapers_remaining': self.diapers_remaining,
            'nap': self.nap,
            'nap_start': self.nap_start.isoformat() if self.nap_start else None,
            'nap_end': self.nap_end.isoformat() if self.nap_end else None,
            'comments': self.comments
        }
        for field in MEAL_FIELDS:
            data[field] = bool(getattr(self, field))
        return data

    def __repr__(self):
        return f'<DailyRecord {self.student_id} {self.date}>'
