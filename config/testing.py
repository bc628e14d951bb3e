import os

DEBUG = False
TESTING = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

# Tests inject records directly into create_app()
DATA_FILE = None

LEADERBOARD_LIMIT = 10
