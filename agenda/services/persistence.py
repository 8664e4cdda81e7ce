from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from agenda import db

def commit_changes(action):
    """Commit the current session.

    On failure the session is rolled back and the error logged; nothing is
    retried. Returns True when the changes were stored.
    """
    try:
        db.session.commit()
        return True
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error {action}: {str(e)}")
        return False
