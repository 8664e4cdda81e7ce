from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from config import Config

# Lets mysql:// URIs work through PyMySQL when MySQLdb is not installed
import pymysql
pymysql.install_as_MySQLdb()

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Please log in to access this resource.'}), 401

    with app.app_context():
        # Import models and routes here to register with the app
        from agenda.models import (Center, Classroom, Student, User, DailyRecord, Menu,
                                   News, Message, Photo, UserActivity)
        from agenda.routes import (main, auth, centers, classrooms, students, users, records,
                                   menus, news, messages, photos)

        # Register blueprints
        app.register_blueprint(main.bp)
        app.register_blueprint(auth.bp)
        app.register_blueprint(centers.bp)
        app.register_blueprint(classrooms.bp)
        app.register_blueprint(students.bp)
        app.register_blueprint(users.bp)
        app.register_blueprint(records.bp)
        app.register_blueprint(menus.bp)
        app.register_blueprint(news.bp)
        app.register_blueprint(messages.bp)
        app.register_blueprint(photos.bp)

        # Create all database tables (if not already created)
        db.create_all()

        register_error_handlers(app)

        from agenda.commands import register_commands
        register_commands(app)

        if app.config.get('SEED_ON_STARTUP'):
            from agenda.services.sample_data import SampleDataService
            SampleDataService.populate_if_empty()

    return app

def register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(400)
    def bad_request_error(error):
        return jsonify({'success': False, 'message': 'Bad request'}), 400

    @app.errorhandler(403)
    def forbidden_error(error):
        return jsonify({'success': False, 'message': 'Unauthorized access'}), 403

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'success': False, 'message': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Internal server error'}), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        # HTTP exceptions keep their own status code
        if hasattr(e, 'code') and isinstance(e.code, int):
            return jsonify({'success': False, 'message': getattr(e, 'description', str(e))}), e.code

        app.logger.error(f'Unhandled exception: {str(e)}')
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Internal server error'}), 500
