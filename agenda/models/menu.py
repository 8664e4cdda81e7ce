from agenda import db

class Menu(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, unique=True, nullable=False)
    breakfast = db.Column(db.String(200))
    snack = db.Column(db.String(200))
    first_course = db.Column(db.String(200))
    second_course = db.Column(db.String(200))
    dessert = db.Column(db.String(200))

    @staticmethod
    def for_date(day):
        """Get the menu served on a given day, if any"""
        return Menu.query.filter_by(date=day).first()

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'breakfast': self.breakfast,
            'snack': self.snack,
            'first_course': self.first_course,
            'second_course': self.second_course,
            'dessert': self.dessert
        }

    def __repr__(self):
        return f'<Menu {self.date}>'
