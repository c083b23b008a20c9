"""Tests for end-to-end log analysis across scoring modes."""

from __future__ import annotations

import pytest

from keyaxis.core.types import ScoringMode
from keyaxis.core.weights import DEFAULT_WEIGHTS
from keyaxis.features.calibration import STATUS_COMPLETE, STATUS_NOT_USED, STATUS_WAITING
from keyaxis.scoring.pipeline import AnalysisResult, analyze_log

_TEXT = ("Drafts wander before they settle. " * 10)[:260]


class TestAnalyzeLog:
    def test_short_log_not_scored(self, make_log) -> None:
        result = analyze_log(make_log([0]))
        assert isinstance(result, AnalysisResult)
        assert result.metrics is None
        assert result.score is None
        assert not result.ready
        assert result.calibration_status == STATUS_WAITING

    def test_standard_mode(self, typed_log) -> None:
        result = analyze_log(typed_log(_TEXT))
        assert result.ready
        assert result.mode == ScoringMode.STANDARD
        assert result.baseline is None
        assert result.calibration_status == STATUS_NOT_USED

    def test_calibrated_mode_warming_up(self, typed_log) -> None:
        result = analyze_log(typed_log(_TEXT[:120]), mode=ScoringMode.CALIBRATED)
        assert result.ready
        assert result.baseline is None
        assert result.calibration_status == "Warming up... (120/200 chars for baseline)"

    def test_calibrated_mode_complete(self, typed_log) -> None:
        result = analyze_log(typed_log(_TEXT), mode=ScoringMode.CALIBRATED)
        assert result.baseline is not None
        assert result.calibration_status == STATUS_COMPLETE

    def test_mode_accepts_plain_string(self, typed_log) -> None:
        result = analyze_log(typed_log(_TEXT), mode="calibrated")
        assert result.mode is ScoringMode.CALIBRATED

    def test_uniform_typing_is_its_own_baseline(self, typed_log) -> None:
        # uniform typing: the whole session matches the calibration slice
        result = analyze_log(typed_log(_TEXT[:200]), mode=ScoringMode.CALIBRATED)
        assert result.score is not None
        assert result.score.components.fluency_base == pytest.approx(0.5)

    def test_weights_flow_through(self, typed_log) -> None:
        log = typed_log(_TEXT)
        weights = DEFAULT_WEIGHTS.with_overrides({"groups": {"path_shape": 0.0, "revision_activity": 0.0}})
        result = analyze_log(log, weights=weights)
        assert result.score is not None
        assert result.score.linearity_score == 0.0

    def test_idempotent(self, typed_log) -> None:
        log = typed_log(_TEXT, interval_ms=175)
        first = analyze_log(log, mode=ScoringMode.CALIBRATED)
        second = analyze_log(log, mode=ScoringMode.CALIBRATED)
        assert first.model_dump_json() == second.model_dump_json()
