"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
DEFAULT_LOG_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Change log descriptions
CHANGE_DATE_FORMAT = "%Y-%m-%d"
