import os

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATA_FILE = os.getenv("DATA_FILE") or None

LEADERBOARD_LIMIT = int(os.getenv("LEADERBOARD_LIMIT", "10"))
