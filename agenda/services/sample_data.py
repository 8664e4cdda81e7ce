from flask import current_app
from agenda import db
from agenda.models import (Center, Classroom, Student, User, Role, DailyRecord, Menu, News,
                           Message, Photo, UserActivity, classroom_staff)
from agenda.services.persistence import commit_changes
from datetime import date, datetime, timedelta
import calendar
import random

BREAKFASTS = [
    "Leche", "Batido", "Zumo de frutas", "Tostadas con mermelada", "Cereales integrales",
    "Bizcocho casero", "Pan con tomate y aceite de oliva", "Porridge con frutas",
    "Croissant integral", "Pan con mantequilla y miel", "Tostadas con queso fresco",
    "Smoothie de frutas", "Magdalenas caseras", "Tortitas de avena con plátano"
]
SNACKS = [
    "Fruta", "Galletas integrales", "Barrita de cereales", "Palitos de zanahoria con hummus",
    "Mini bocadillo de queso", "Yogur bebible", "Crackers integrales con queso fresco",
    "Manzana o pera troceada", "Mini wrap de pavo", "Tomatitos cherry", "Gajos de naranja"
]
FIRST_COURSES = [
    "Puré de verduras", "Sopa de fideos", "Ensalada de pasta", "Crema de calabaza",
    "Arroz con verduras", "Guiso de lentejas suave", "Macarrones con tomate natural",
    "Puré de zanahoria y patata", "Sopa de pollo con fideos", "Cuscús con verduras",
    "Puré de guisantes", "Caldo de verduras con arroz"
]
SECOND_COURSES = [
    "Pollo al horno", "Pescado a la plancha", "Albóndigas de carne", "Tortilla de patatas",
    "Merluza rebozada al horno", "Croquetas de pescado o pollo", "Revuelto de huevo con espinacas",
    "Filete de cerdo a la plancha", "Lomo de salmón al vapor", "Estofado de ternera suave"
]
DESSERTS = [
    "Yogur natural", "Fruta fresca", "Natillas caseras", "Flan de huevo", "Compota de manzana",
    "Macedonia de frutas", "Tarta de queso al horno", "Manzana al horno",
    "Batido de fresas con yogur"
]

FILLER_STUDENTS_PER_CLASSROOM = 24
RECORD_DAYS = 20


class SampleDataService:
    """Demo content for an empty agenda"""

    @staticmethod
    def is_empty():
        return Center.query.count() == 0

    @staticmethod
    def populate_if_empty():
        """Seed the store only when it holds no centers. Returns True if seeded."""
        if not SampleDataService.is_empty():
            current_app.logger.info("Database already contains data; skipping sample data")
            return False
        current_app.logger.info("Database is empty; populating sample data")
        return SampleDataService.populate()

    @staticmethod
    def reset():
        SampleDataService.delete_all_data()
        return SampleDataService.populate()

    @staticmethod
    def delete_all_data():
        # Children before parents
        for model in (UserActivity, Message, Photo, DailyRecord, News, Menu):
            model.query.delete()
        db.session.execute(classroom_staff.delete())
        for model in (Student, Classroom, User, Center):
            model.query.delete()
        commit_changes('deleting all data')
        current_app.logger.info("All data deleted")

    @staticmethod
    def populate(today=None):
        today = today or date.today()

        centers = [
            Center(name="EDAI RIO DO POZO", phone="881 934 028",
                   location="Avda. Gonzalo Navarro, 1 - Narón 15570 (A Coruña)",
                   description="Centro de primer ciclo de Educación Infantil."),
            Center(name="EDAI O ALTO", phone="881 936 079",
                   location="Garda, 2 P-6 Bajo - 15570 Narón (A Coruña)",
                   description="Centro de primer ciclo de Educación Infantil."),
        ]
        db.session.add_all(centers)

        admin = User(name="Administradora General", email="admin@edai.com",
                     password="admin123", role=Role.ADMIN.value)
        teacher = User(name="Profesora General", email="profesora.general@edai.com",
                       password="profesora123", role=Role.TEACHER.value)
        tutor = User(name="Tutora General", email="tutora@edai.com",
                     password="tutora123", role=Role.TUTOR.value)
        family_tutor = User(name="Juan Antonio Sánchez Carrillo", email="jasanchez@edai.com",
                            password="jasanchez123", role=Role.TUTOR.value)
        db.session.add_all([admin, teacher, tutor, family_tutor])

        brackets = [("As Tartarugas", 0, 1), ("Os Leóns", 1, 2), ("Os Osos", 2, 3)]
        classrooms = []
        for center in centers:
            for name, min_age, max_age in brackets:
                image = 'aula' + name.split()[-1].replace('ó', 'o')
                classroom = Classroom(name=name, course=f"{today.year - 1}/{today.year}",
                                      min_age=min_age, max_age=max_age, max_capacity=25,
                                      image=image, center=center)
                classroom.staff.append(admin)
                if center is centers[0]:
                    classroom.staff.append(teacher)
                classrooms.append(classroom)
        db.session.add_all(classrooms)

        family = [("Emma Sánchez Nuñez", 2), ("Abraham Sánchez Nuñez", 1), ("Daniela Sánchez Nuñez", 0)]
        for name, years in family:
            student = Student(name=name, center=centers[0], tutor=family_tutor,
                              image=name.split()[0],
                              birth_date=date(today.year - years, 8, 27))
            db.session.add(student)
            classroom = next(c for c in classrooms
                             if c.center is centers[0] and c.min_age <= years <= c.max_age)
            student.classroom = classroom

        # Fillers never push a classroom past its capacity
        for classroom in classrooms:
            fillers = min(FILLER_STUDENTS_PER_CLASSROOM, classroom.max_capacity - classroom.enrollment)
            for i in range(1, fillers + 1):
                year_of_birth = today.year - random.randint(classroom.min_age, classroom.max_age)
                db.session.add(Student(
                    name=f"Alumno {i} de {classroom.name}",
                    tutor=tutor,
                    classroom=classroom,
                    center=classroom.center,
                    birth_date=date(year_of_birth, 1, random.randint(1, 28))
                ))

        if not commit_changes('saving sample students'):
            return False

        db.session.add(News(title="Nueva Actividad Escolar",
                            content="Se realizará una excursión al parque el próximo viernes.",
                            publish_date=datetime.utcnow(), author=admin, center=centers[0]))

        SampleDataService.add_month_menus(today)
        SampleDataService.add_daily_records(Student.query.all(), today)

        for i in range(1, 5):
            db.session.add(Photo(image=f"foto{i}.jpg", teacher=teacher, date=datetime.utcnow()))

        if not commit_changes('saving sample data'):
            return False
        current_app.logger.info("Sample data populated")
        return True

    @staticmethod
    def add_month_menus(today):
        """A random menu for each day of the current month"""
        days_in_month = calendar.monthrange(today.year, today.month)[1]
        for day in range(1, days_in_month + 1):
            db.session.add(Menu(
                date=date(today.year, today.month, day),
                breakfast=random.choice(BREAKFASTS),
                snack=random.choice(SNACKS),
                first_course=random.choice(FIRST_COURSES),
                second_course=random.choice(SECOND_COURSES),
                dessert=random.choice(DESSERTS)
            ))

    @staticmethod
    def add_daily_records(students, today):
        for student in students:
            for i in range(RECORD_DAYS):
                db.session.add(DailyRecord(
                    student=student,
                    date=today - timedelta(days=i),
                    breakfast=random.choice([True, False]),
                    snack=random.choice([True, False]),
                    first_course=random.choice([True, False]),
                    second_course=random.choice([True, False]),
                    dessert=random.choice([True, False]),
                    wipes_remaining=random.randint(0, 100),
                    diapers_remaining=random.randint(0, 100)
                ))
