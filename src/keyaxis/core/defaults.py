"""Centralised default constants for keyaxis.

Every project-wide magic number / string lives here.
Import these instead of hard-coding values in function signatures or CLI options.
"""

from __future__ import annotations

from typing import Final

# ── Event log vocabulary ──
NO_CHANGE: Final[str] = "NoChange"
KEY_SPACE: Final[str] = "Space"
KEY_BACKSPACE: Final[str] = "Backspace"
KEY_SHIFT: Final[str] = "Shift"
SENTENCE_END_KEYS: Final[frozenset[str]] = frozenset({".", "!", "?"})
BOUNDARY_KEYS: Final[frozenset[str]] = frozenset(
    {KEY_SPACE, ".", ",", "!", "?", KEY_SHIFT, KEY_BACKSPACE}
)
MIN_EVENTS_FOR_ANALYSIS: Final[int] = 2

# ── Timing ──
PAUSE_THRESHOLD_MS: Final[float] = 200.0
BURST_BREAK_MS: Final[float] = 2000.0

# ── Revision heuristics ──
# Words removed per deletion event; no exact count is available from a single backspace.
WORD_DELETION_INCREMENT: Final[float] = 0.2

# ── Calibration ──
CALIBRATION_MIN_CHARS: Final[int] = 200
CALIBRATION_SPREAD_EPSILON: Final[float] = 0.001

# ── Scoring ──
NORMALIZE_Z_DIVISOR: Final[float] = 4.0
NORMALIZE_MIDPOINT: Final[float] = 0.5
PASTE_SCORE_CAP: Final[float] = 0.40
SCORE_SCALE: Final[float] = 100.0

# ── Logging ──
# Longer string log arguments are treated as composed text and redacted.
LOG_TEXT_ARG_MAX_CHARS: Final[int] = 40

# ── Reports ──
DEFAULT_REPORT_DIR: Final[str] = "artifacts"
REPORT_ATTRIBUTION: Final[dict[str, str]] = {
    "logging_infrastructure": "FlexKeyLogger by Terry Y. Tian (MIT License)",
    "benchmarks": "Based on Crossley et al. / Vanderbilt EDM 2024",
}
