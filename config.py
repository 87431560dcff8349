import os
from dotenv import load_dotenv
from urllib.parse import quote_plus

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get(
        'SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Build the SQLALCHEMY_DATABASE_URI:
    # - Prefer DATABASE_URL if provided (full URI)
    # - Otherwise compose from DB_USER, DB_PASSWORD, DB_HOST, DB_PORT and DB_NAME
    # URL-encode user and password to avoid issues with special characters
    _database_url = os.environ.get('DATABASE_URL')
    if _database_url:
        SQLALCHEMY_DATABASE_URI = _database_url
    else:
        DB_USER = os.environ.get('DB_USER', 'root')
        DB_PASSWORD = os.environ.get('DB_PASSWORD', '')
        DB_HOST = os.environ.get('DB_HOST', 'localhost')
        DB_PORT = os.environ.get('DB_PORT', '')
        DB_NAME = os.environ.get('DB_NAME', 'student_medical_system')

        host = f"{DB_HOST}:{DB_PORT}" if DB_PORT else DB_HOST
        user_q = quote_plus(DB_USER)
        pw_q = quote_plus(DB_PASSWORD)
        SQLALCHEMY_DATABASE_URI = f"mysql+pymysql://{user_q}:{pw_q}@{host}/{DB_NAME}"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Replace pooled connections that went stale between requests
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    # SQLite en memoria: Flask-SQLAlchemy comparte una sola conexión (StaticPool)
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}


class ProductionConfig(Config):
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
