"""Centralized constants for the erudify domain.

Scheduling and alignment magic numbers live here so every layer imports
from a single source of truth.
"""

from datetime import timedelta

# ---------- Memory model ----------
INITIAL_INTERVAL = timedelta(seconds=5)
EARLY_REVIEW_DIVISOR = 50  # interval grows by interval / 50 when reviewed before due
SPACED_RECALL_MULTIPLIER = 4  # interval grows by interval * 4 when reviewed once due

# ---------- Transcript format ----------
TRANSCRIPT_KEYS = ("Chinese", "Pinyin", "English")

# ---------- Alignment ----------
LOOSE_TONE_MIN_LENGTH = 2
