"""Application settings."""

import os
from pathlib import Path

# Storage
DATA_SOURCE = os.getenv("MEETUP_DATA_SOURCE", "memory")
DB_PATH = os.getenv("MEETUP_DB_PATH", "meetup.duckdb")

# Logging
LOG_DIR = Path(os.getenv("MEETUP_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("MEETUP_LOG_LEVEL", "INFO")
LOG_FILE_LEVEL = os.getenv("MEETUP_LOG_FILE_LEVEL", "DEBUG")
LOG_RETENTION = os.getenv("MEETUP_LOG_RETENTION", "14 days")

# Sejour overlap windows
MIN_NIGHTS = 2
MIN_PARTICIPANTS = 2
MAX_WINDOWS = 8

# Decision display
TOP_CANDIDATES = 3

# Consensus
BEST_DATES_LIMIT = 5
BEST_DATES_THRESHOLD = 0.6
