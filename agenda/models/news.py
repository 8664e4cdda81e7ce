from agenda import db
from datetime import datetime

class News(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    publish_date = db.Column(db.DateTime, default=datetime.utcnow)
    author_id = db.Column(db.Integer, db.ForeignKey('user.id'))
    center_id = db.Column(db.Integer, db.ForeignKey('center.id'), nullable=True)  # None: every center

    @staticmethod
    def get_latest(center_id=None):
        """News newest first; network-wide items are always included"""
        query = News.query
        if center_id is not None:
            query = query.filter((News.center_id == center_id) | (News.center_id.is_(None)))
        return query.order_by(News.publish_date.desc()).all()

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'publish_date': self.publish_date.isoformat() if self.publish_date else None,
            'author_id': self.author_id,
            'center_id': self.center_id
        }

    def __repr__(self):
        return f'<News {self.title}>'
