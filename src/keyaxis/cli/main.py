"""Typer CLI entrypoint and command definitions for keyaxis."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from keyaxis.core.defaults import DEFAULT_REPORT_DIR
from keyaxis.core.types import KeystrokeLog, ScoringMode

app = typer.Typer()


def _load_log_or_exit(path: str) -> KeystrokeLog:
    from keyaxis.adapters.flexkeylogger import load_keylog

    log_path = Path(path)
    if not log_path.exists():
        typer.echo(f"File not found: {log_path}", err=True)
        raise typer.Exit(code=1)
    try:
        return load_keylog(log_path)
    except ValueError as exc:
        typer.echo(f"Invalid keylog {log_path}: {exc}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Writing-process metrics and Linear / Free-Wheeling scores from keystroke logs."""
    from keyaxis.core.logging import install_typed_text_filter

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    install_typed_text_filter()


@app.command("metrics")
def metrics_cmd(
    input: str = typer.Option(..., "--input", help="Path to a keylog (.json or .csv)"),
) -> None:
    """Print the extracted writing-process metrics as JSON."""
    from keyaxis.features.metrics import extract_metrics

    log = _load_log_or_exit(input)
    metrics = extract_metrics(log)
    if metrics is None:
        typer.echo("Not enough data: at least 2 events are required.", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(metrics.model_dump(mode="json"), indent=2))


@app.command("calibrate")
def calibrate_cmd(
    input: str = typer.Option(..., "--input", help="Path to a keylog (.json or .csv)"),
    benchmarks: Optional[str] = typer.Option(None, help="YAML file overriding population benchmarks"),
) -> None:
    """Print the personal calibration baseline, if the session is long enough."""
    from keyaxis.core.benchmarks import DEFAULT_BENCHMARKS, load_benchmarks
    from keyaxis.features.calibration import calibration_status, get_calibration_baseline

    log = _load_log_or_exit(input)
    try:
        table = load_benchmarks(Path(benchmarks)) if benchmarks else DEFAULT_BENCHMARKS
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1)
    baseline = get_calibration_baseline(log, benchmarks=table)
    if baseline is None:
        typer.echo(calibration_status(log, None, ScoringMode.CALIBRATED))
        return
    typer.echo(json.dumps(baseline.model_dump(mode="json"), indent=2))


@app.command("score")
def score_cmd(
    input: str = typer.Option(..., "--input", help="Path to a keylog (.json or .csv)"),
    mode: ScoringMode = typer.Option(ScoringMode.STANDARD, help="Scoring mode"),
    weights: Optional[str] = typer.Option(None, help="YAML weight configuration"),
    benchmarks: Optional[str] = typer.Option(None, help="YAML file overriding population benchmarks"),
    report_dir: Optional[str] = typer.Option(None, help=f"Write a JSON report here (e.g. {DEFAULT_REPORT_DIR})"),
) -> None:
    """Score a keylog on the Linear and Free-Wheeling axes."""
    from keyaxis.core.benchmarks import DEFAULT_BENCHMARKS, load_benchmarks
    from keyaxis.core.weights import DEFAULT_WEIGHTS, load_weights
    from keyaxis.report.export import build_report, export_report_json
    from keyaxis.scoring.pipeline import analyze_log

    log = _load_log_or_exit(input)
    try:
        weight_cfg = load_weights(Path(weights)) if weights else DEFAULT_WEIGHTS
        table = load_benchmarks(Path(benchmarks)) if benchmarks else DEFAULT_BENCHMARKS
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1)

    result = analyze_log(log, weights=weight_cfg, mode=mode, benchmarks=table)
    if result.score is None:
        typer.echo("Not enough data: at least 2 events are required.", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Linear:        {result.score.linearity_score:.1f}")
    typer.echo(f"Free-Wheeling: {result.score.spontaneity_score:.1f}")
    typer.echo(f"Calibration:   {result.calibration_status}")

    if report_dir:
        out = Path(report_dir)
        out.mkdir(parents=True, exist_ok=True)
        report_path = export_report_json(build_report(log, result), out)
        typer.echo(f"Report written to {report_path}")


# -- config -------------------------------------------------------------------
weights_app = typer.Typer()
app.add_typer(weights_app, name="weights")


@weights_app.command("init")
def weights_init_cmd(
    out: str = typer.Option("configs/weights.yaml", "--out", help="Destination YAML path"),
) -> None:
    """Write the default weight configuration as YAML."""
    from keyaxis.core.weights import DEFAULT_WEIGHTS, save_weights

    path = save_weights(DEFAULT_WEIGHTS, Path(out))
    typer.echo(f"Wrote default weights to {path}")


benchmarks_app = typer.Typer()
app.add_typer(benchmarks_app, name="benchmarks")


@benchmarks_app.command("init")
def benchmarks_init_cmd(
    out: str = typer.Option("configs/benchmarks.yaml", "--out", help="Destination YAML path"),
) -> None:
    """Write the default population benchmarks as YAML."""
    from keyaxis.core.benchmarks import DEFAULT_BENCHMARKS, save_benchmarks

    path = save_benchmarks(DEFAULT_BENCHMARKS, Path(out))
    typer.echo(f"Wrote default benchmarks to {path}")


if __name__ == "__main__":
    app()
