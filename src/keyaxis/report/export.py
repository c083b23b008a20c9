"""Analysis report: the downloadable JSON summary of one session."""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

from pydantic import BaseModel, Field

from keyaxis.core.defaults import REPORT_ATTRIBUTION
from keyaxis.core.types import (
    CalibrationBaseline,
    DualAxisScore,
    ExtractedMetrics,
    KeystrokeLog,
    ScoringMode,
)
from keyaxis.scoring.pipeline import AnalysisResult


class AnalysisReport(BaseModel, frozen=True):
    """Serializable record of a finished session's analysis."""

    attribution: dict[str, str] = Field(default_factory=lambda: dict(REPORT_ATTRIBUTION))
    generated_at: dt.datetime
    mode: ScoringMode
    final_text: str
    metrics: ExtractedMetrics | None
    analysis: DualAxisScore | None
    calibration: CalibrationBaseline | None = None
    calibration_status: str


def build_report(
    log: KeystrokeLog,
    result: AnalysisResult,
    *,
    generated_at: dt.datetime | None = None,
) -> AnalysisReport:
    """Assemble a report from a log and its :class:`AnalysisResult`."""
    return AnalysisReport(
        generated_at=generated_at or dt.datetime.now(dt.timezone.utc),
        mode=result.mode,
        final_text=log.resolved_final_text(),
        metrics=result.metrics,
        analysis=result.score,
        calibration=result.baseline,
        calibration_status=result.calibration_status,
    )


def default_report_name(generated_at: dt.datetime) -> str:
    return f"analysis_report_{generated_at.date().isoformat()}.json"


def export_report_json(report: AnalysisReport, path: Path) -> Path:
    """Write *report* to a JSON file.

    If *path* is an existing directory, the file is named
    ``analysis_report_<YYYY-MM-DD>.json`` inside it.

    Args:
        report: The report to serialize.
        path: Destination file path or directory.

    Returns:
        The file path that was written.
    """
    if path.is_dir():
        path = path / default_report_name(report.generated_at)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.model_dump(mode="json"), indent=2) + "\n", "utf-8")
    return path
