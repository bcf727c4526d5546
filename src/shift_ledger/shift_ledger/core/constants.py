"""Constants and defaults.

Note: Keep company-policy numbers here to avoid magic numbers spread across code.
"""

# Payroll: flat monthly rate divided by a 30-day month of 540-minute workdays.
STANDARD_DAILY_MINUTES = 540
MONTHLY_DIVISOR_DAYS = 30

# Check-out within this many minutes of planned end is neither early nor overtime.
CHECKOUT_TOLERANCE_MINUTES = 60

# Full-attendance breakage thresholds.
FULL_ATTENDANCE_MAX_LATE_COUNT = 4
FULL_ATTENDANCE_MAX_LATE_MINUTES = 10
FULL_ATTENDANCE_MAX_MAKEUPS = 3

DEFAULT_TX_MAX_RETRIES = 3
DEFAULT_LIST_LIMIT = 200
