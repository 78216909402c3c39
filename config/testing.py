SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
DATA_DIR = None

DB_CONFIG = {}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AT_RISK_THRESHOLD = 75

AUTO_INIT_DB = False
AUTO_SEED_STORE = False
