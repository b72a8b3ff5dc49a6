"""Utility constants for tcalc.

Time unit constants represent fixed-length durations in seconds.
Months and years have no fixed length and are handled by calendar arithmetic.
"""

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400

MONTHS_PER_YEAR = 12
HOURS_PER_HALF_DAY = 12
