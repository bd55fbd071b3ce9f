"""
Acompanha - Configuration
=========================
Centralised runtime settings. Loads overrides from the project-level .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

# ── Application ─────────────────────────────────────────────────────────
APP_NAME: str = os.getenv("APP_NAME", "Acompanha Clinical Monitoring API")
APP_VERSION: str = os.getenv("APP_VERSION", "1.0.0")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None

# ── Monitoring windows ──────────────────────────────────────────────────
ALERT_WINDOW_DAYS = int(os.getenv("ALERT_WINDOW_DAYS", "7"))          # trailing window for "recent" check-ins
REPORT_RECENT_CHECKINS = int(os.getenv("REPORT_RECENT_CHECKINS", "4"))  # check-ins averaged in the period summary
