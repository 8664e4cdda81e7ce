from agenda import db
from datetime import datetime, date

class Student(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    birth_date = db.Column(db.Date)
    image = db.Column(db.String(256), nullable=True)  # Image filename
    center_id = db.Column(db.Integer, db.ForeignKey('center.id'))
    classroom_id = db.Column(db.Integer, db.ForeignKey('classroom.id'), nullable=True)
    tutor_id = db.Column(db.Integer, db.ForeignKey('user.id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    daily_records = db.relationship('DailyRecord', backref='student', lazy=True,
                                    cascade='all, delete-orphan',
                                    order_by='DailyRecord.date.desc()')

    @property
    def age(self):
        """Age in whole calendar years; month and day are not considered"""
        return age_in_years(self.birth_date)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'birth_date': self.birth_date.isoformat() if self.birth_date else None,
            'age': self.age,
            'image': self.image,
            'center_id': self.center_id,
            'classroom_id': self.classroom_id,
            'tutor_id': self.tutor_id
        }

    def __repr__(self):
        return f'<Student {self.name}>'

def age_in_years(birth_date, today=None):
    if birth_date is None:
        return None
    today = today or date.today()
    return today.year - birth_date.year
