"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_HOUR = 60

DEFAULT_LATE_THRESHOLD_MINUTES = 0
DEFAULT_STANDARD_HOURS_PER_DAY = 8
DEFAULT_OVERTIME_THRESHOLD_HOURS = 10
DEFAULT_CONSECUTIVE_THRESHOLD = 3

# Severity buckets, expressed as a ratio of observed value to threshold.
SEVERITY_HIGH_RATIO = 2.0
SEVERITY_MEDIUM_RATIO = 1.5

UNKNOWN_STAFF_NAME = "Unknown"

CSV_HEADER = (
    "staffName",
    "date",
    "checkInTime",
    "checkOutTime",
    "shiftDuration",
    "customStatus",
    "isLate",
    "isEarly",
    "hasOvertime",
)
