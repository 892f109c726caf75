import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_worklog"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Report pagination bounds (per_page is clamped into [MIN, MAX]).
REPORTS_DEFAULT_PER_PAGE = int(os.getenv("REPORTS_DEFAULT_PER_PAGE", "15"))
REPORTS_MIN_PER_PAGE = int(os.getenv("REPORTS_MIN_PER_PAGE", "3"))
REPORTS_MAX_PER_PAGE = int(os.getenv("REPORTS_MAX_PER_PAGE", "100"))

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
