import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow"),
}

DEBUG = True

# Apply schema.sql on startup (idempotent: CREATE TABLE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", "Asia/Kolkata")
SHIFT_START_TIME = os.getenv("SHIFT_START_TIME", "09:00")
SHIFT_END_TIME = os.getenv("SHIFT_END_TIME", "18:00")
EXPECTED_WORK_HOURS = float(os.getenv("EXPECTED_WORK_HOURS", "9"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
