"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific paths belong in .env, NOT here
- Import these settings in modules: from config.settings import RETENTION_DAYS
- YAML overrides for the media store live in config/media.yaml (see media/config.py)
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# MEDIA STORAGE CONFIGURATION
# =============================================================================

# Storage Paths
MEDIA_BASE_PATH = Path(
    os.getenv(
        "PADEL_MEDIA_BASE_PATH",
        str(Path.home() / ".padeltech"),
    ),
).expanduser()

# Directory and file names (under MEDIA_BASE_PATH)
VIDEOS_DIRECTORY_NAME = "padeltech_videos"
INDEX_FILE_NAME = "videos_index.json"
INDEX_FORMAT_VERSION = 1

# YAML overrides for MediaConfig
MEDIA_CONFIG_PATH = Path(
    os.getenv("PADEL_MEDIA_CONFIG_PATH", "config/media.yaml"),
)

# Video File Naming: <shot_type>_<media_id><extension>
VIDEO_FILENAME_EXTENSION = ".mp4"
VIDEO_FILENAME_PATTERN = "{shot_type}_{media_id}{extension}"
PARTIAL_FILE_SUFFIX = ".partial"

# Media ID: <epoch_ms>-<hex suffix>
MEDIA_ID_SUFFIX_LENGTH = 8

# Video Retention
RETENTION_DAYS = 30  # Days to keep recorded videos
AUTO_SWEEP_ON_SAVE = True  # Run retention sweep before each new save
SWEEP_BATCH_SIZE = 10  # Entries per batch during sweep

# =============================================================================
# PROGRESS ANALYTICS CONFIGURATION
# =============================================================================

# Score history database
HISTORY_DB_PATH = Path(
    os.getenv(
        "PADEL_HISTORY_DB_PATH",
        str(MEDIA_BASE_PATH / "score_history.db"),
    ),
).expanduser()

# Score bounds (overall and sub-scores)
SCORE_MIN = 0
SCORE_MAX = 100

# Aggregates
RECENT_SCORES_SIZE = 5  # Ring of last N overall scores per (user, shot type)

# Trend policy: first vs last of the most recent TREND_WINDOW samples
TREND_WINDOW = 3
TREND_THRESHOLD = 5  # points; exactly +/-5 stays "stable"

# Period comparison (newest N vs previous N)
PERIOD_COMPARISON_WINDOW = 5
PERIOD_TREND_THRESHOLD_PERCENT = 5.0

# Rounding for reported percentages / averages
IMPROVEMENT_DECIMALS = 2

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("PADEL_LOG_DIR", "/var/log/padeltech")
LOG_MAINTENANCE_FILE = "maintenance.log"
LOG_BACKUP_COUNT = 7
