"""Event stream normalizer: keystroke log -> writing-process metrics.

Walks the event log once and accumulates revision, insertion, paste,
pause-context and burst statistics.  Pauses are inter-keystroke
intervals (IKIs) of at least 200 ms; a *burst* is a run of production
that ends at a deletion or at an IKI of at least 2 s.

All functions are pure.  :func:`extract_metrics` returns ``None`` when
the log is too short to contain a single interval.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Sequence

import numpy as np

from keyaxis.core.defaults import (
    BOUNDARY_KEYS,
    BURST_BREAK_MS,
    KEY_BACKSPACE,
    KEY_SPACE,
    MIN_EVENTS_FOR_ANALYSIS,
    NO_CHANGE,
    PAUSE_THRESHOLD_MS,
    SENTENCE_END_KEYS,
    WORD_DELETION_INCREMENT,
)
from keyaxis.core.numeric import mean_or_zero, median
from keyaxis.core.types import Activity, ExtractedMetrics, KeystrokeLog

logger = logging.getLogger(__name__)


class PauseContext(StrEnum):
    """Where in the text a pause occurred, judged by the preceding key."""

    BEFORE_WORD = "before_word"
    BEFORE_SENTENCE = "before_sentence"
    WITHIN_WORD = "within_word"
    OTHER = "other"


def inter_keystroke_intervals(times_ms: Sequence[float]) -> list[float]:
    """Consecutive timestamp differences (ms); one fewer than *times_ms*."""
    if len(times_ms) < 2:
        return []
    return [float(d) for d in np.diff(np.asarray(times_ms, dtype=np.float64))]


def classify_pause(prev_output: str, curr_output: str, *, first_interval: bool = False) -> PauseContext:
    """Classify a pause by the key typed before it.

    Args:
        prev_output: Key label of the event preceding the pause.
        curr_output: Key label of the event ending the pause.
        first_interval: ``True`` for the interval between the first two
            events, which always counts as a pause before a word.

    Returns:
        The pause context.  ``OTHER`` pauses are counted in the overall
        pause mean only.
    """
    if prev_output == KEY_SPACE or first_interval:
        return PauseContext.BEFORE_WORD
    if prev_output in SENTENCE_END_KEYS:
        return PauseContext.BEFORE_SENTENCE
    if prev_output not in BOUNDARY_KEYS and curr_output not in BOUNDARY_KEYS:
        return PauseContext.WITHIN_WORD
    return PauseContext.OTHER


def is_deletion(activity: str, output: str) -> bool:
    return activity == Activity.REMOVE_CUT or output == KEY_BACKSPACE


def segment_bursts(
    times_ms: Sequence[float],
    breaks: Sequence[bool],
    *,
    burst_break_ms: float = BURST_BREAK_MS,
) -> list[float]:
    """Split the session into production bursts and return their durations.

    A burst closes at event *i* when ``breaks[i]`` is set (a deletion)
    or when the IKI leading to *i* is at least *burst_break_ms*.  The
    closed burst spans from its start to the event just before *i*, and
    the next burst starts at *i*.  Zero-length bursts are dropped.

    Args:
        times_ms: Event timestamps (ms).
        breaks: Per-event flag; ``True`` where the event ends a burst
            regardless of timing.
        burst_break_ms: IKI that ends a burst.

    Returns:
        Burst durations in seconds, in session order.
    """
    if len(times_ms) < 2:
        return []

    bursts: list[float] = []
    burst_start = times_ms[0]
    for i in range(1, len(times_ms)):
        iki = times_ms[i] - times_ms[i - 1]
        if breaks[i] or iki >= burst_break_ms:
            length = (times_ms[i - 1] - burst_start) / 1000.0
            if length > 0:
                bursts.append(length)
            burst_start = times_ms[i]

    trailing = (times_ms[-1] - burst_start) / 1000.0
    if trailing > 0:
        bursts.append(trailing)
    return bursts


def extract_metrics(log: KeystrokeLog) -> ExtractedMetrics | None:
    """Derive writing-process metrics from a keystroke log.

    Args:
        log: The session's event log.  Not modified.

    Returns:
        The extracted metrics, or ``None`` when the log has fewer than
        two events.
    """
    n = log.event_count
    if n < MIN_EVENTS_FOR_ANALYSIS:
        return None

    times = log.event_time_ms
    duration_seconds = (times[-1] - times[0]) / 1000.0
    final_length = len(log.resolved_final_text())

    ikis = inter_keystroke_intervals(times)
    pauses = [iki for iki in ikis if iki >= PAUSE_THRESHOLD_MS]
    pause_time_mean = mean_or_zero(pauses) / 1000.0

    activities = log.activity if log.activity is not None else [Activity.INPUT.value] * n

    paste_events = 0
    paste_characters = 0
    num_insertions = 0
    num_deletions = 0
    num_revisions = 0
    before_words: list[float] = []
    before_sentences: list[float] = []
    within_words = 0
    breaks = [False] * n

    for i in range(1, n):
        activity = activities[i]
        prev_output = log.output[i - 1]
        curr_output = log.output[i]
        iki = ikis[i - 1]

        if activity == Activity.PASTE:
            paste_events += 1
            change = log.text_change[i] if log.text_change is not None else ""
            if change and change != NO_CHANGE:
                paste_characters += len(change)

        if is_deletion(activity, curr_output):
            breaks[i] = True
            num_deletions += 1
            num_revisions += 1

        # Input placed before the end of the previous text, not appended at the tip.
        prev_length = len(log.text_content[i - 1] or "")
        if activity == Activity.INPUT and log.cursor_position[i - 1] < prev_length:
            num_insertions += 1
            num_revisions += 1

        if iki >= PAUSE_THRESHOLD_MS:
            context = classify_pause(prev_output, curr_output, first_interval=i == 1)
            if context is PauseContext.BEFORE_WORD:
                before_words.append(iki)
            elif context is PauseContext.BEFORE_SENTENCE:
                before_sentences.append(iki)
            elif context is PauseContext.WITHIN_WORD:
                within_words += 1

    bursts = segment_bursts(times, breaks)

    total_keystrokes = sum(1 for a in activities if a == Activity.INPUT) if log.activity is not None else n
    total_keystrokes = max(total_keystrokes, 1)
    characters_per_minute = final_length / duration_seconds * 60 if duration_seconds > 0 else 0.0

    metrics = ExtractedMetrics(
        product_process_ratio=final_length / total_keystrokes,
        characters_per_minute=characters_per_minute,
        num_revisions=num_revisions,
        num_deletions=num_deletions,
        total_deletions_words=num_deletions * WORD_DELETION_INCREMENT,
        # one character per non-linear input event
        total_insertions=num_insertions,
        num_insertions=num_insertions,
        paste_events=paste_events,
        paste_characters=paste_characters,
        rburst_length_median=median(bursts),
        burst_count=len(bursts),
        pause_time_mean=pause_time_mean,
        pause_count=len(pauses),
        pause_within_words_count=within_words,
        pause_before_words=mean_or_zero(before_words) / 1000.0,
        pause_before_sentences=mean_or_zero(before_sentences) / 1000.0,
        duration_seconds=duration_seconds,
        final_length=final_length,
        total_events=n,
        total_keystrokes=total_keystrokes,
    )
    logger.debug(
        "Extracted metrics from %d events: %d pauses, %d bursts, %d revisions",
        n, len(pauses), len(bursts), num_revisions,
    )
    return metrics
