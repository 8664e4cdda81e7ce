from flask import request, jsonify
from agenda import db

def get_form_data():
    """Submitted fields, from a JSON body or a regular form post"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()

def check_reference(data, field, model, issues):
    """Row an optional id field points to; blank means none.

    Unknown or malformed ids add an issue and return None.
    """
    value = data.get(field)
    if value in (None, ''):
        return None
    try:
        row = db.session.get(model, int(value))
    except (TypeError, ValueError):
        row = None
    if row is None:
        issues.append(f"{field} must reference a {model.__tablename__}")
    return row

def validation_error(issues):
    return jsonify({'success': False, 'errors': issues}), 400

def save_error(message):
    return jsonify({'success': False, 'message': message}), 500
