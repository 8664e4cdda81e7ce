from agenda.models.center import Center
from agenda.models.classroom import Classroom, classroom_staff
from agenda.models.student import Student
from agenda.models.user import User, Role
from agenda.models.daily_record import DailyRecord
from agenda.models.menu import Menu
from agenda.models.news import News
from agenda.models.message import Message
from agenda.models.photo import Photo
from agenda.models.user_activity import UserActivity
