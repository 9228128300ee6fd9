"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LATE_CUTOFF = "06:30"
DEFAULT_HARD_WARNING_THRESHOLD = 10
DEFAULT_CANDIDATE_THRESHOLD = 5
DEFAULT_IMPORT_BATCH_SIZE = 300
DEFAULT_GRADUATION_PREFIX = "XII"

DEFAULT_STUDENT_LIST_LIMIT = 800
IMPORT_PREVIEW_LIMIT = 50
