"""
Configuration constants for the headline intelligence engine.
Environment variables override the tunable values at import time.
"""
import os

from utils import get_env_int

# ============================================================
# EXTRACTION
# ============================================================
# Hard cap on instruments attached to one headline
MAX_INSTRUMENTS_PER_HEADLINE = 2

# Distinct weak keywords needed before a theme ETF is inferred.
# Values below 2 are clamped.
WEAK_KEYWORD_MIN_HITS = get_env_int("WEAK_KEYWORD_MIN_HITS", 2, minimum=2)

# ============================================================
# AGGREGATION
# ============================================================
# How many symbols the "mentioned" strip shows
MENTIONED_SYMBOLS_LIMIT = 8

# Polling cadence of the news feed that supplies headlines (seconds)
NEWS_REFRESH_SECONDS = 150

# ============================================================
# RUNTIME
# ============================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = get_env_int("PORT", 5000)
