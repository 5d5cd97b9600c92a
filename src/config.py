import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    DEBUG = os.getenv("FLASK_DEBUG", "1") == "1"
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///ledgerly.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change_me")

    # "sql" persists through Flask-SQLAlchemy, "memory" keeps records in process
    RECORD_STORE = os.getenv("RECORD_STORE", "sql")
    DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


class TestConfig(Config):
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    RECORD_STORE = "sql"
    LOG_LEVEL = "WARNING"
