from agenda import db

class Center(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20))
    location = db.Column(db.String(200))
    description = db.Column(db.Text)
    classrooms = db.relationship('Classroom', backref='center', lazy=True)
    students = db.relationship('Student', backref='center', lazy=True)
    news = db.relationship('News', backref='center', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'location': self.location,
            'description': self.description
        }

    def __repr__(self):
        return f'<Center {self.name}>'
