import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tardiness_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# School gate closes at this local time; later arrivals are late.
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "06:30")
HARD_WARNING_THRESHOLD = int(os.getenv("HARD_WARNING_THRESHOLD", "10"))
CANDIDATE_THRESHOLD = int(os.getenv("CANDIDATE_THRESHOLD", "5"))
IMPORT_BATCH_SIZE = int(os.getenv("IMPORT_BATCH_SIZE", "300"))
GRADUATION_PREFIX = os.getenv("GRADUATION_PREFIX", "XII")
