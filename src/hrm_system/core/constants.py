"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORAGE_KEY = "harp_hrm_data"

DEFAULT_SYNC_INTERVAL_SECONDS = 10
DEFAULT_STORE_TIMEOUT_SECONDS = 10
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_AUDIT_LIMIT = 200

DEFAULT_OVERTIME_MULTIPLIER = 1.0
MAX_TIER_OVERTIME_MULTIPLIER = 1.25
MAX_MONTHLY_HOUR_TARGET = 100

UNKNOWN_ACTOR_NAME = "Unknown"
