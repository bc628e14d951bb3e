import os

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# JSON snapshot of teams/events/check-ins served by the API (optional)
DATA_FILE = os.getenv("DATA_FILE") or None

LEADERBOARD_LIMIT = int(os.getenv("LEADERBOARD_LIMIT", "10"))
