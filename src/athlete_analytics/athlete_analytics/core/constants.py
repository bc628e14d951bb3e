"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import datetime, time, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Calendar days are pinned to noon UTC so they map to the same date everywhere.
NOON = time(12, 0)

ALL_DAY = "All Day"

DEFAULT_LEADERBOARD_LIMIT = 10
MAX_PERCENT = 100.0
