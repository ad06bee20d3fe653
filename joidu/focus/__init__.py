"""Focus Tools - Energy-aware sessions and hyperfocus protection

Philosophy:
    Meet the brain where it is right now.
    ADHD energy follows rhythms, not willpower.
    Breaks are brain maintenance, never a penalty.

Components:
    energy_advisor.py: Recommend a focus-session length
        - Time-of-day buckets with ADHD-informed priors
        - Learns from recent session completions
        - Manual override always wins

    hyperfocus_guard.py: Protect against runaway hyperfocus
        - Escalating break suggestions (25/45/90/120 minutes)
        - Tracks accepted and dismissed breaks
        - Break activities sized to how long you've been going

    companion.py: Drive both from one session lifecycle

    store.py: Persisted key-value store (SQLite or in-memory)
    clock.py: Time source and time-of-day bucketing
    ticker.py: asyncio repeating timer with explicit ownership
    config_models.py: Pydantic models for args/focus.yaml

ADHD Safety Rules:
    1. Suggestions, not commands (except past two hours)
    2. No guilt-inducing language about dismissed breaks
    3. Graceful degradation when stored data is missing or corrupt

Database: data/focus.db
    - kv_store: JSON values keyed by logical name

Configuration: args/focus.yaml
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
ARGS_DIR = PROJECT_ROOT / "args"
CONFIG_PATH = ARGS_DIR / "focus.yaml"
DB_PATH = Path(os.environ.get("JOIDU_DB_PATH", str(PROJECT_ROOT / "data" / "focus.db")))

# Energy levels, lowest first
ENERGY_LEVELS = ["low", "medium", "high"]

# Time-of-day buckets
TIME_BUCKETS = ["morning", "afternoon", "evening", "night"]

# Urgency tiers, mildest first
URGENCY_LEVELS = ["none", "gentle", "strong", "urgent", "emergency"]

# Store keys
ENERGY_PATTERNS_KEY = "user-energy-patterns"
ENERGY_PREFERENCES_KEY = "energy-preferences"
BREAK_HISTORY_KEY = "break-history"
DISMISSAL_HISTORY_KEY = "dismissal-history"
SESSION_HISTORY_KEY = "session-history"

__all__ = [
    "PROJECT_ROOT",
    "ARGS_DIR",
    "CONFIG_PATH",
    "DB_PATH",
    "ENERGY_LEVELS",
    "TIME_BUCKETS",
    "URGENCY_LEVELS",
    "ENERGY_PATTERNS_KEY",
    "ENERGY_PREFERENCES_KEY",
    "BREAK_HISTORY_KEY",
    "DISMISSAL_HISTORY_KEY",
    "SESSION_HISTORY_KEY",
]
