import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrm_db"),
}

STORE_API_URL = os.getenv("STORE_API_URL", "http://localhost:5001/hrm")
STORE_TIMEOUT = float(os.getenv("STORE_TIMEOUT", "10"))
LOCAL_CACHE_PATH = os.getenv("LOCAL_CACHE_PATH", "/var/cache/hrm/hrm_cache.json")

SYNC_ENABLED = bool(int(os.getenv("SYNC_ENABLED", "1")))
SYNC_INTERVAL_SECONDS = float(os.getenv("SYNC_INTERVAL_SECONDS", "10"))

ENFORCE_COMP_LEAVE_BALANCE = bool(int(os.getenv("ENFORCE_COMP_LEAVE_BALANCE", "0")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
