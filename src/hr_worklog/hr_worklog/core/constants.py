"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PER_PAGE = 15
MIN_PER_PAGE = 3
MAX_PER_PAGE = 100

NOTES_MAX_LENGTH = 2000
