"""Personal baseline calibration from the opening slice of a session.

Typing skill moves the fluency metrics independently of the writing
process.  Once the text reaches :data:`CALIBRATION_MIN_CHARS`
characters, the events up to that point are re-analysed and their
typing rate and burst length become the writer's own reference means.
Spreads keep the population's coefficient of variation::

    personal_sd = personal_mean * (benchmark_sd / benchmark_mean)

Until the threshold is reached no baseline exists and callers fall
back to population benchmarks.
"""

from __future__ import annotations

import logging

from keyaxis.core.benchmarks import DEFAULT_BENCHMARKS, BenchmarkTable
from keyaxis.core.defaults import CALIBRATION_MIN_CHARS, MIN_EVENTS_FOR_ANALYSIS
from keyaxis.core.types import CalibrationBaseline, KeystrokeLog, ScoringMode
from keyaxis.features.metrics import extract_metrics

logger = logging.getLogger(__name__)

STATUS_WAITING = "Waiting for input..."
STATUS_NOT_USED = "Not using calibration."
STATUS_COMPLETE = "Calibration complete."


def _final_text_for_gate(log: KeystrokeLog) -> str:
    # An empty final_product does not count; fall back to the last snapshot.
    if log.final_product:
        return log.final_product
    return log.last_snapshot()


def calibration_slice(log: KeystrokeLog, min_chars: int = CALIBRATION_MIN_CHARS) -> KeystrokeLog:
    """Return the prefix of *log* that first reaches *min_chars* characters.

    The prefix includes the first event whose snapshot is at least
    *min_chars* long.  If no snapshot qualifies the whole log is used.
    The slice's ``final_product`` is its own last snapshot.
    """
    stop = log.event_count
    for i, snapshot in enumerate(log.text_content):
        if snapshot and len(snapshot) >= min_chars:
            stop = i + 1
            break

    sliced = log.head(stop)
    return sliced.model_copy(update={"final_product": sliced.last_snapshot()})


def get_calibration_baseline(
    log: KeystrokeLog,
    *,
    benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
    min_chars: int = CALIBRATION_MIN_CHARS,
) -> CalibrationBaseline | None:
    """Derive a personal fluency baseline from the start of *log*.

    Args:
        log: The full session log so far.  Not modified.
        benchmarks: Population table supplying the coefficients of
            variation.
        min_chars: Final text length required before calibrating.

    Returns:
        The baseline, or ``None`` while calibration is not ready (too
        few events, text shorter than *min_chars*, or a zero typing rate
        in the calibration slice).
    """
    if log.event_count < MIN_EVENTS_FOR_ANALYSIS:
        return None
    if len(_final_text_for_gate(log)) < min_chars:
        return None

    sliced = calibration_slice(log, min_chars)
    metrics = extract_metrics(sliced)
    if metrics is None or metrics.characters_per_minute == 0:
        logger.debug("Calibration slice of %d events yields no typing rate", sliced.event_count)
        return None

    cv_rate = benchmarks.coefficient_of_variation("characters_per_minute")
    cv_burst = benchmarks.coefficient_of_variation("rburst_length_median")

    baseline = CalibrationBaseline(
        typing_rate_mean=metrics.characters_per_minute,
        typing_rate_spread=metrics.characters_per_minute * cv_rate,
        burst_length_mean=metrics.rburst_length_median,
        burst_length_spread=metrics.rburst_length_median * cv_burst,
    )
    logger.debug(
        "Calibrated on %d events: %.1f cpm, %.2fs median burst",
        sliced.event_count, baseline.typing_rate_mean, baseline.burst_length_mean,
    )
    return baseline


def calibration_status(
    log: KeystrokeLog,
    baseline: CalibrationBaseline | None,
    mode: ScoringMode,
    *,
    min_chars: int = CALIBRATION_MIN_CHARS,
) -> str:
    """Human-readable calibration state for display next to the scores."""
    if log.event_count < MIN_EVENTS_FOR_ANALYSIS:
        return STATUS_WAITING
    if mode != ScoringMode.CALIBRATED:
        return STATUS_NOT_USED
    if baseline is not None:
        return STATUS_COMPLETE
    return f"Warming up... ({len(log.resolved_final_text())}/{min_chars} chars for baseline)"
