from agenda import db
from datetime import datetime

classroom_staff = db.Table(
    'classroom_staff',
    db.Column('classroom_id', db.Integer, db.ForeignKey('classroom.id'), primary_key=True),
    db.Column('user_id', db.Integer, db.ForeignKey('user.id'), primary_key=True)
)

class Classroom(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    course = db.Column(db.String(20))  # e.g. '2023/2024'
    min_age = db.Column(db.Integer, nullable=False, default=0)
    max_age = db.Column(db.Integer, nullable=False, default=0)
    max_capacity = db.Column(db.Integer, nullable=False, default=0)
    image = db.Column(db.String(256), nullable=True)  # Image filename
    center_id = db.Column(db.Integer, db.ForeignKey('center.id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    students = db.relationship('Student', backref='classroom', lazy=True)
    staff = db.relationship('User', secondary=classroom_staff, lazy='subquery',
                            backref=db.backref('classrooms', lazy=True))

    @property
    def enrollment(self):
        """Number of students currently assigned to the classroom"""
        return len(self.students)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'course': self.course,
            'min_age': self.min_age,
            'max_age': self.max_age,
            'max_capacity': self.max_capacity,
            'enrollment': self.enrollment,
            'image': self.image,
            'center_id': self.center_id,
            'staff_ids': [user.id for user in self.staff]
        }

    def __repr__(self):
        return f'<Classroom {self.name}>'
