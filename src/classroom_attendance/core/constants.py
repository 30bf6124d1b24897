"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FULL_DAY_HOURS = 8
PERIODS = ("1", "2", "3", "4", "5", "6")
ALL_PERIODS = "all"

SEAT_ROWS = 7
SEAT_COLUMNS = 8

PARTIAL_WEIGHT = 0.5
