"""Attendance policy defaults.

Shift values here are only fallbacks; the settings module can override them.
"""

DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "18:00"
DEFAULT_EXPECTED_WORK_HOURS = 9.0

# Fixed policy: less than this many worked hours is a half day.
HALF_DAY_THRESHOLD_HOURS = 4.0

DEFAULT_TIMEZONE = "Asia/Kolkata"

AUTO_ABSENT_NOTE = "Auto-marked absent"
LEAVE_NOTE_TEMPLATE = "On {leave_type} leave"
