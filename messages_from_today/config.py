"""
Central configuration for Messages from Today.

Paths, credential fallbacks, and logging knobs live here.  Values are read
from environment variables (or a .env file) with sensible defaults.  Per-user
settings (provider, models, prompt, Airtable fields) are persisted separately
by ``messages_from_today.settings.SettingsStore``.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Settings persistence ──────────────────────────────────────────────
SETTINGS_FILE = Path(
    os.getenv(
        "MFT_SETTINGS_FILE",
        str(Path.home() / ".messages_from_today" / "data.json"),
    )
)

# ── Credential fallbacks ──────────────────────────────────────────────
# Used only when the settings file leaves the matching key empty.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
AIRTABLE_API_KEY = os.getenv("AIRTABLE_API_KEY", "")

# ── Airtable ──────────────────────────────────────────────────────────
AIRTABLE_API_BASE = "https://api.airtable.com/v0"
# Seconds before an Airtable request is abandoned
AIRTABLE_TIMEOUT = 30

# ── Logging ───────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
# Blank disables the file handler
LOG_FILE = os.getenv("LOG_FILE", "messages_from_today.log")
