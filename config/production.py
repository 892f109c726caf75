import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_worklog"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REPORTS_DEFAULT_PER_PAGE = int(os.getenv("REPORTS_DEFAULT_PER_PAGE", "15"))
REPORTS_MIN_PER_PAGE = int(os.getenv("REPORTS_MIN_PER_PAGE", "3"))
REPORTS_MAX_PER_PAGE = int(os.getenv("REPORTS_MAX_PER_PAGE", "100"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
