from functools import wraps
from flask import jsonify
from flask_login import current_user

def role_required(*roles):
    """Restrict a view to users holding one of the given roles"""
    def deco(f):
        @wraps(f)
        def inner(*args, **kwargs):
            if not current_user.is_authenticated or not current_user.has_role(*roles):
                return jsonify({'success': False, 'message': 'Unauthorized access'}), 403
            return f(*args, **kwargs)
        return inner
    return deco
