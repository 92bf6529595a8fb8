"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MAX_SCORE = 100
DEFAULT_WEIGHT = 1
MIN_WEIGHT = 0
MAX_WEIGHT = 10

MIN_SCORE = 0
MAX_SCORE = 100

MIN_LATE_PENALTY = 0
MAX_LATE_PENALTY = 100

DEFAULT_MAX_STUDENTS = 30
MIN_PASSWORD_LENGTH = 6

API_VERSION = "1.0.0"
