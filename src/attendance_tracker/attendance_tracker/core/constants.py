"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7

# Projection target for "classes needed" (fraction of classes attended).
DEFAULT_TARGET_THRESHOLD = 0.75

# Display banding for the zone badge (whole percentages).
DEFAULT_SAFE_ZONE_MIN = 75
DEFAULT_AVERAGE_ZONE_MIN = 60

MIN_PASSWORD_LENGTH = 6

COLLEGE_YEARS = (1, 2, 3, 4)
SEMESTERS = (1, 2, 3, 4, 5, 6, 7, 8)
