import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# memory | file | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "file")
DATA_DIR = os.getenv("DATA_DIR", "data")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "student_portal"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

AT_RISK_THRESHOLD = int(os.getenv("AT_RISK_THRESHOLD", "75"))

# If enabled, the MySQL backend creates its table on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Seed demo data into empty collections on startup
AUTO_SEED_STORE = bool(int(os.getenv("AUTO_SEED_STORE", "1")))
