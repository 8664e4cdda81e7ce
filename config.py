import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _default_db_uri() -> str:
    # A MySQL server is only used when explicitly configured; otherwise the
    # agenda lives in a local SQLite file.
    host = os.environ.get('MYSQL_HOST')
    if host:
        user = os.environ.get('MYSQL_USER', 'root')
        password = os.environ.get('MYSQL_PASSWORD', 'root')
        port = os.environ.get('MYSQL_PORT', '3306')
        db = os.environ.get('MYSQL_DB', 'agenda')
        return f"mysql+pymysql://{user}:{password}@{host}:{port}/{db}"
    return 'sqlite:///' + os.path.join(BASE_DIR, 'agenda.db')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'agenda-dev-secret-key'
    # Use DATABASE_URL if present; else MySQL via PyMySQL or the local file
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or _default_db_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Image lookup: user documents first, bundled assets second
    DOCUMENTS_DIR = os.environ.get('AGENDA_DOCUMENTS_DIR', os.path.join(BASE_DIR, 'instance', 'documents'))
    BUNDLED_ASSETS_DIR = os.path.join(BASE_DIR, 'agenda', 'static', 'assets')

    SEED_ON_STARTUP = os.environ.get('AGENDA_SEED_ON_STARTUP', 'false').lower() == 'true'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SEED_ON_STARTUP = False
