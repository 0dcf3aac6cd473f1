"""Centralized configuration for Vision Board Assistant."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent
DATA_DIR = Path(os.getenv("VB_DATA_DIR", str(PROJECT_ROOT / "data")))
STORE_FILE = Path(os.getenv("VB_STORE_FILE", str(DATA_DIR / "visionboard_store.json")))

# -----------------------------------------------------------------------------
# Logging
# Override via env: VB_LOG_LEVEL=DEBUG
# -----------------------------------------------------------------------------
LOG_LEVEL_NAME = os.getenv("VB_LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)

# -----------------------------------------------------------------------------
# Board listings
# -----------------------------------------------------------------------------
RECENT_BOARDS_LIMIT = int(os.getenv("VB_RECENT_BOARDS_LIMIT", "5"))
