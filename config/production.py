import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktrack_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

WORKDAY_START = os.getenv("WORKDAY_START", "09:00")
RESET_TOKEN_MAX_AGE = int(os.getenv("RESET_TOKEN_MAX_AGE", "3600"))

MAIL = {
    "host": os.getenv("MAIL_HOST", "localhost"),
    "port": int(os.getenv("MAIL_PORT", "587")),
    "user": os.getenv("MAIL_USER", ""),
    "password": os.getenv("MAIL_PASSWORD", ""),
    "from_email": os.getenv("MAIL_FROM", "no-reply@worktrack.local"),
    "starttls": bool(int(os.getenv("MAIL_STARTTLS", "1"))),
    "dry_run": bool(int(os.getenv("MAIL_DRY_RUN", "0"))),
}

DEFAULT_THEME = os.getenv("DEFAULT_THEME", "system")
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")
