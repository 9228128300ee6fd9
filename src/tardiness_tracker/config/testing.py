import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tardiness_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

LATE_CUTOFF = "06:30"
HARD_WARNING_THRESHOLD = 10
CANDIDATE_THRESHOLD = 5
IMPORT_BATCH_SIZE = 300
GRADUATION_PREFIX = "XII"
