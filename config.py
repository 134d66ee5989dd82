import os
from dotenv import load_dotenv, dotenv_values

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def load_credentials(path):
    """
    Reads KEY=VALUE credentials for local development.
    Environment variables always win over the file.
    """
    if not path or not os.path.exists(path):
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v}


_credentials = load_credentials(
    os.getenv("CREDENTIALS_FILE", os.path.join(BASE_DIR, "credentials", "dailyquiz.credentials"))
)


def setting(name, default=None):
    return os.getenv(name) or _credentials.get(name) or default


class Config:
    SECRET_KEY = setting("SECRET_KEY", "dailyquiz-dev")
    SQLALCHEMY_DATABASE_URI = setting("DATABASE_URL", "sqlite:///dailyquiz.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Optional engine options for better PostgreSQL behavior under concurrency
    DB_POOL_SIZE = int(setting("DB_POOL_SIZE", 5))
    DB_MAX_OVERFLOW = int(setting("DB_MAX_OVERFLOW", 10))
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
    }

    BASE_DIR = BASE_DIR
    ADMIN_API_KEY = setting("ADMIN_API_KEY")
    LOG_LEVEL = setting("LOG_LEVEL", "INFO")
