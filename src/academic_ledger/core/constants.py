"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DEFAULTER_THRESHOLD = 75.0
DEFAULT_DASHBOARD_PAYMENTS = 6
DEFAULT_RECENT_PAYMENTS = 10

# 1..12 numbering (date.month); the academic cycle opens in May.
ACADEMIC_START_MONTH = 5
MONTHS_PER_CYCLE = 12
