import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ATTENDANCE_TIMEZONE = "Asia/Kolkata"
SHIFT_START_TIME = "09:00"
SHIFT_END_TIME = "18:00"
EXPECTED_WORK_HOURS = 9.0

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
