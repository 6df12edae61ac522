"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EXCELLENT_THRESHOLD = 90.0
GOOD_THRESHOLD = 75.0

INTERSTITIAL_COOLDOWN_SECONDS = 30
MAX_INTERSTITIALS_PER_SESSION = 5

CSV_DATE_FORMAT = "%d-%b-%Y"
CSV_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
MISSING_ROLL = "N/A"
