"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_WORKDAY_START = time(9, 0)
DEFAULT_LEAVE_HOURS = 8
MAX_LEAVE_HOURS_PER_DAY = 24
WORKING_DAYS_PER_MONTH = 20
DEFAULT_LEAVE_BALANCE = 20
DEFAULT_RESET_TOKEN_MAX_AGE = 60 * 60
MIN_PASSWORD_LENGTH = 6
CHANGE_QUEUE_SIZE = 100
