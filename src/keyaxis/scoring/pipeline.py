"""End-to-end analysis of one keystroke log snapshot.

Callers typically re-run :func:`analyze_log` every time the log grows
(e.g. once per keystroke).  Each call starts from scratch; nothing is
cached between calls.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from keyaxis.core.benchmarks import DEFAULT_BENCHMARKS, BenchmarkTable
from keyaxis.core.types import (
    CalibrationBaseline,
    DualAxisScore,
    ExtractedMetrics,
    KeystrokeLog,
    ScoringMode,
)
from keyaxis.core.weights import DEFAULT_WEIGHTS, WeightConfig
from keyaxis.features.calibration import calibration_status, get_calibration_baseline
from keyaxis.features.metrics import extract_metrics
from keyaxis.scoring.dual_axis import calculate_dual_axis

logger = logging.getLogger(__name__)


class AnalysisResult(BaseModel, frozen=True):
    """Everything derived from one log snapshot.

    ``metrics`` and ``score`` are ``None`` while the log holds fewer than
    two events; ``baseline`` is ``None`` in standard mode and while
    calibration is still warming up.
    """

    mode: ScoringMode
    metrics: ExtractedMetrics | None = None
    baseline: CalibrationBaseline | None = None
    score: DualAxisScore | None = None
    calibration_status: str

    @property
    def ready(self) -> bool:
        return self.score is not None


def analyze_log(
    log: KeystrokeLog,
    *,
    weights: WeightConfig = DEFAULT_WEIGHTS,
    mode: ScoringMode = ScoringMode.STANDARD,
    benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
) -> AnalysisResult:
    """Extract metrics, optionally calibrate, and score *log*.

    Args:
        log: Keystroke event log.  Not modified.
        weights: Scorer weight configuration.
        mode: ``CALIBRATED`` requests a personal fluency baseline.
        benchmarks: Population reference table.

    Returns:
        An :class:`AnalysisResult`; never raises for insufficient data.
    """
    mode = ScoringMode(mode)
    metrics = extract_metrics(log)
    if metrics is None:
        return AnalysisResult(
            mode=mode,
            calibration_status=calibration_status(log, None, mode),
        )

    baseline = None
    if mode == ScoringMode.CALIBRATED:
        baseline = get_calibration_baseline(log, benchmarks=benchmarks)

    score = calculate_dual_axis(metrics, weights, baseline, benchmarks=benchmarks)
    logger.debug(
        "Scored %d events (%s): linear=%.1f free_wheeling=%.1f",
        metrics.total_events, mode, score.linearity_score, score.spontaneity_score,
    )
    return AnalysisResult(
        mode=mode,
        metrics=metrics,
        baseline=baseline,
        score=score,
        calibration_status=calibration_status(log, baseline, mode),
    )
