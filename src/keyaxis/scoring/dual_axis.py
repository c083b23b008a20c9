"""Dual-axis scorer: extracted metrics -> Linear and Free-Wheeling scores.

Each raw metric is normalized against its population benchmark (or,
for the two fluency metrics, an optional personal baseline) and the
normalized values are combined in two stages:

1. **Linear** = path shape + revision activity.
2. **Free-Wheeling** = fluency + pause behaviour, plus an additive,
   capped paste contribution.

Both are clamped to ``[0, 1]`` and reported on a 0-100 scale.  The
scorer is pure: no input is validated beyond numeric guards, and
degenerate spreads fall back to documented constants.
"""

from __future__ import annotations

import logging

from keyaxis.core.benchmarks import DEFAULT_BENCHMARKS, BenchmarkTable
from keyaxis.core.defaults import CALIBRATION_SPREAD_EPSILON, PASTE_SCORE_CAP, SCORE_SCALE
from keyaxis.core.numeric import clamp, normalize, normalize_inverted
from keyaxis.core.types import CalibrationBaseline, DualAxisScore, ExtractedMetrics, ScoreComponents
from keyaxis.core.weights import DEFAULT_WEIGHTS, PasteTuning, WeightConfig

logger = logging.getLogger(__name__)


def path_shape_score(metrics: ExtractedMetrics, benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS) -> float:
    b = benchmarks.product_process_ratio
    return normalize(metrics.product_process_ratio, b.mean, b.sd)


def revision_activity_score(
    metrics: ExtractedMetrics,
    weights: WeightConfig = DEFAULT_WEIGHTS,
    benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
) -> float:
    """Weighted sum of inverted revision sub-scores (more revising -> lower).

    ``num_deletions`` has no benchmark of its own and is normalized
    against the ``num_revisions`` distribution.
    """
    w = weights.rev
    b = benchmarks
    return (
        normalize_inverted(metrics.num_revisions, b.num_revisions.mean, b.num_revisions.sd) * w.num_revisions
        + normalize_inverted(metrics.num_deletions, b.num_revisions.mean, b.num_revisions.sd) * w.num_deletions
        + normalize_inverted(
            metrics.total_deletions_words, b.total_deletions_words.mean, b.total_deletions_words.sd
        ) * w.total_deletions_words
        + normalize_inverted(
            metrics.total_insertions, b.total_insertions.mean, b.total_insertions.sd
        ) * w.total_insertions
        + normalize_inverted(metrics.num_insertions, b.num_insertions.mean, b.num_insertions.sd) * w.num_insertions
    )


def _fluency_references(
    benchmarks: BenchmarkTable,
    baseline: CalibrationBaseline | None,
) -> tuple[float, float, float, float]:
    """``(rate_mean, rate_sd, burst_mean, burst_sd)`` for fluency normalization."""
    if baseline is None:
        rate = benchmarks.characters_per_minute
        burst = benchmarks.rburst_length_median
        return rate.mean, rate.sd, burst.mean, burst.sd

    rate_sd = baseline.typing_rate_spread
    burst_sd = baseline.burst_length_spread
    if rate_sd == 0 or burst_sd == 0:
        logger.warning(
            "Zero calibration spread (rate_sd=%s, burst_sd=%s); substituting %s",
            rate_sd, burst_sd, CALIBRATION_SPREAD_EPSILON,
        )
    return (
        baseline.typing_rate_mean,
        rate_sd or CALIBRATION_SPREAD_EPSILON,
        baseline.burst_length_mean,
        burst_sd or CALIBRATION_SPREAD_EPSILON,
    )


def fluency_score(
    metrics: ExtractedMetrics,
    weights: WeightConfig = DEFAULT_WEIGHTS,
    baseline: CalibrationBaseline | None = None,
    benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
) -> float:
    rate_mean, rate_sd, burst_mean, burst_sd = _fluency_references(benchmarks, baseline)
    w = weights.flu
    return (
        normalize(metrics.rburst_length_median, burst_mean, burst_sd) * w.rburst_length_median
        + normalize(metrics.characters_per_minute, rate_mean, rate_sd) * w.characters_per_minute
    )


def pause_behavior_score(
    metrics: ExtractedMetrics,
    weights: WeightConfig = DEFAULT_WEIGHTS,
    benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
) -> float:
    """Weighted sum of inverted pause sub-scores; always population-referenced."""
    w = weights.pb
    b = benchmarks
    return (
        normalize_inverted(metrics.pause_time_mean, b.pause_time_mean.mean, b.pause_time_mean.sd)
        * w.pause_time_mean
        + normalize_inverted(
            metrics.pause_within_words_count, b.pause_within_words_count.mean, b.pause_within_words_count.sd
        ) * w.pause_within_words_count
        + normalize_inverted(metrics.pause_before_words, b.pause_before_words.mean, b.pause_before_words.sd)
        * w.pause_before_words
        + normalize_inverted(
            metrics.pause_before_sentences, b.pause_before_sentences.mean, b.pause_before_sentences.sd
        ) * w.pause_before_sentences
    )


def paste_score(paste_events: int, paste_characters: int, tuning: PasteTuning) -> float:
    """Capped paste contribution, growing with both event count and pasted length."""
    raw = paste_events * tuning.base_jump * (1 + paste_characters * tuning.char_scale)
    return clamp(raw, 0.0, PASTE_SCORE_CAP)


def calculate_dual_axis(
    metrics: ExtractedMetrics,
    weights: WeightConfig = DEFAULT_WEIGHTS,
    baseline: CalibrationBaseline | None = None,
    *,
    benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
) -> DualAxisScore:
    """Combine *metrics* into the Linear and Free-Wheeling scores.

    Args:
        metrics: Output of :func:`~keyaxis.features.metrics.extract_metrics`.
        weights: Group weights, sub-weights and paste tuning.
        baseline: Optional personal baseline; when given, typing rate and
            burst length are normalized against it instead of the
            population benchmarks.
        benchmarks: Population reference table.

    Returns:
        Both scores on a 0-100 scale plus their intermediate components.
    """
    g = weights.groups

    path_shape = path_shape_score(metrics, benchmarks)
    rev_base = revision_activity_score(metrics, weights, benchmarks)
    linearity = path_shape * g.path_shape + rev_base * g.revision_activity

    fluency_base = fluency_score(metrics, weights, baseline, benchmarks)
    pb_base = pause_behavior_score(metrics, weights, benchmarks)
    spontaneity_base = fluency_base * g.fluency + pb_base * g.pause_behavior

    paste = paste_score(metrics.paste_events, metrics.paste_characters, weights.paste)
    spontaneity = clamp(spontaneity_base + paste * g.unconstrained_action, 0.0, 1.0)

    return DualAxisScore(
        linearity_score=clamp(linearity, 0.0, 1.0) * SCORE_SCALE,
        spontaneity_score=spontaneity * SCORE_SCALE,
        components=ScoreComponents(
            path_shape=path_shape,
            rev_base=rev_base,
            fluency_base=fluency_base,
            pb_base=pb_base,
            paste_score=paste,
        ),
    )
