import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", "Asia/Kolkata")
SHIFT_START_TIME = os.getenv("SHIFT_START_TIME", "09:00")
SHIFT_END_TIME = os.getenv("SHIFT_END_TIME", "18:00")
EXPECTED_WORK_HOURS = float(os.getenv("EXPECTED_WORK_HOURS", "9"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
