import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrm_test"),
}

STORE_API_URL = os.getenv("STORE_API_URL", "http://localhost:5001/hrm")
STORE_TIMEOUT = 2.0
LOCAL_CACHE_PATH = os.getenv("LOCAL_CACHE_PATH", ".hrm_cache_test.json")

SYNC_ENABLED = False
SYNC_INTERVAL_SECONDS = 10.0

ENFORCE_COMP_LEAVE_BALANCE = False

AUTO_INIT_DB = False
AUTO_SEED_DB = False
