from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from agenda import db
from agenda.models.menu import Menu
from agenda.models.user import Role
from agenda.services.persistence import commit_changes
from agenda.utils.activity import log_activity
from agenda.utils.decorators import role_required
from agenda.utils.forms import get_form_data, validation_error, save_error
from agenda.utils.validators import FormValidator, parse_date
from datetime import date, MINYEAR, MAXYEAR
import calendar

bp = Blueprint('menus', __name__, url_prefix='/menus')

COURSE_FIELDS = ('breakfast', 'snack', 'first_course', 'second_course', 'dessert')

@bp.route('/')
@login_required
def index():
    """Menus of a month (current month unless year/month are given)"""
    today = date.today()
    year = request.args.get('year', today.year, type=int)
    month = request.args.get('month', today.month, type=int)
    issues = []
    if not MINYEAR <= year <= MAXYEAR:
        issues.append(f'year must be between {MINYEAR} and {MAXYEAR}')
    if not 1 <= month <= 12:
        issues.append('month must be between 1 and 12')
    if issues:
        return validation_error(issues)
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    menus = Menu.query.filter(Menu.date >= first, Menu.date <= last).order_by(Menu.date.asc()).all()
    return jsonify({'menus': [m.to_dict() for m in menus]})

@bp.route('/day/<day>')
@login_required
def for_day(day):
    selected = parse_date(day)
    if selected is None:
        return validation_error(['date must be in YYYY-MM-DD format'])
    menu = Menu.for_date(selected)
    if menu is None:
        return jsonify({'success': False, 'message': 'No menu for the selected day'}), 404
    return jsonify({'menu': menu.to_dict()})

@bp.route('/', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def create():
    data = get_form_data()
    is_valid, issues = FormValidator(data).require('date').check_date('date').validate()
    if not is_valid:
        return validation_error(issues)

    day = parse_date(data['date'])
    if Menu.for_date(day):
        return validation_error([f'A menu for {day.isoformat()} already exists'])

    menu = Menu(date=day, **{field: data.get(field) for field in COURSE_FIELDS})
    db.session.add(menu)
    if not commit_changes('saving menu'):
        return save_error('An error occurred while saving the menu.')

    log_activity(current_user.id, 'create_menu', f'Created menu for {day.isoformat()}', request.remote_addr)
    return jsonify({'success': True, 'menu': menu.to_dict()}), 201

@bp.route('/<int:menu_id>', methods=['PUT'])
@login_required
@role_required(Role.ADMIN)
def edit(menu_id):
    menu = db.get_or_404(Menu, menu_id)
    data = get_form_data()
    validator = FormValidator(data).check_date('date')
    if 'date' in data:
        validator.require('date')
    is_valid, issues = validator.validate()
    if not is_valid:
        return validation_error(issues)

    if 'date' in data:
        day = parse_date(data['date'])
        existing = Menu.for_date(day)
        if existing and existing.id != menu.id:
            return validation_error([f'A menu for {day.isoformat()} already exists'])
        menu.date = day
    for field in COURSE_FIELDS:
        if field in data:
            setattr(menu, field, data[field])

    if not commit_changes('updating menu'):
        return save_error('An error occurred while updating the menu.')

    log_activity(current_user.id, 'edit_menu', f'Updated menu for {menu.date.isoformat()}', request.remote_addr)
    return jsonify({'success': True, 'menu': menu.to_dict()})

@bp.route('/<int:menu_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN)
def delete(menu_id):
    menu = db.get_or_404(Menu, menu_id)
    day = menu.date.isoformat()
    db.session.delete(menu)
    if not commit_changes('deleting menu'):
        return save_error('An error occurred while deleting the menu.')

    log_activity(current_user.id, 'delete_menu', f'Deleted menu for {day}', request.remote_addr)
    return jsonify({'success': True, 'message': f'Menu for {day} deleted.'})
