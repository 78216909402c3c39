"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_AT_RISK_THRESHOLD = 75
DEFAULT_RECENT_ACTIVITY_LIMIT = 10
DEFAULT_COURSE_CREDITS = 3
MIN_PASSWORD_LENGTH = 6

# Attendance percentage above which the admin overview reports a healthy trend.
HEALTHY_ATTENDANCE = 75
WARNING_ATTENDANCE = 50

SYSTEM_MARKER = "system"
UNKNOWN_NAME = "Unknown"
