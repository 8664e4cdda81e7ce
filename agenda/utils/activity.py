from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from agenda import db
from agenda.models.user_activity import UserActivity

def log_activity(user_id, activity_type, description, ip_address=None):
    try:
        if user_id:  # Only log if user is authenticated
            activity = UserActivity(user_id=user_id, activity_type=activity_type, description=description, ip_address=ip_address)
            db.session.add(activity)
            db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error logging activity: {str(e)}")
