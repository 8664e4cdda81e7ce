from agenda import db, login_manager
from flask_login import UserMixin
from datetime import datetime
from enum import Enum

class Role(Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    TUTOR = "tutor"

class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    # Stored and compared as plain text, as the agenda always has
    password = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(20), nullable=False)  # 'admin', 'teacher', 'tutor'
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    students = db.relationship('Student', backref='tutor', lazy=True, foreign_keys='Student.tutor_id')
    news = db.relationship('News', backref='author', lazy=True)
    photos = db.relationship('Photo', backref='teacher', lazy=True, cascade='all, delete-orphan')

    @property
    def role_enum(self):
        return Role(self.role)

    def check_password(self, password):
        return password is not None and self.password == password

    def has_role(self, *roles):
        values = [r.value if isinstance(r, Role) else r for r in roles]
        return self.role in values

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role
        }

    def __repr__(self):
        return f'<User {self.email}>'

@login_manager.user_loader
def load_user(id):
    return db.session.get(User, int(id))
