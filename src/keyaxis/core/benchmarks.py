"""Population benchmark table: ``(mean, sd)`` reference per raw metric.

The defaults come from the KLiCKe keystroke corpus (Crossley, Tian et
al., EDM 2024); ``characters_per_minute`` is an approximation.

A caller can replace any subset of entries from a YAML file::

    table = load_benchmarks(Path("configs/benchmarks.yaml"))

where the file maps metric names to ``{mean: ..., sd: ...}``.  Entries
not present in the file keep their default values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Benchmark(BaseModel, frozen=True):
    """Population mean and standard deviation for one metric."""

    mean: float
    sd: float = Field(ge=0.0)


class BenchmarkTable(BaseModel, frozen=True, extra="forbid"):
    """One :class:`Benchmark` per scored metric."""

    pause_time_mean: Benchmark = Benchmark(mean=1.646, sd=0.783)
    pause_before_sentences: Benchmark = Benchmark(mean=12.682, sd=29.433)
    pause_before_words: Benchmark = Benchmark(mean=1.398, sd=0.825)
    total_insertions: Benchmark = Benchmark(mean=307.96, sd=344.11)
    num_insertions: Benchmark = Benchmark(mean=32.95, sd=36.005)
    total_deletions_words: Benchmark = Benchmark(mean=115.218, sd=130.943)
    num_revisions: Benchmark = Benchmark(mean=125.95, sd=85.112)
    product_process_ratio: Benchmark = Benchmark(mean=0.824, sd=0.111)
    pause_within_words_count: Benchmark = Benchmark(mean=408.688, sd=245.747)
    rburst_length_median: Benchmark = Benchmark(mean=6.27, sd=6.431)
    characters_per_minute: Benchmark = Benchmark(mean=200.0, sd=75.0)

    def coefficient_of_variation(self, metric: str) -> float:
        """``sd / mean`` for *metric*; 0 when the mean is 0."""
        bench: Benchmark = getattr(self, metric)
        if bench.mean == 0:
            return 0.0
        return bench.sd / bench.mean


DEFAULT_BENCHMARKS = BenchmarkTable()


def benchmarks_from_dict(raw: dict[str, Any] | None) -> BenchmarkTable:
    """Overlay *raw* entries onto the default table and validate."""
    data = DEFAULT_BENCHMARKS.model_dump()
    for name, entry in (raw or {}).items():
        data[name] = entry
    return BenchmarkTable.model_validate(data)


def load_benchmarks(path: Path) -> BenchmarkTable:
    """Load a (possibly partial) benchmark table from a YAML file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError / ValidationError: If the YAML is malformed, names an
            unknown metric, or carries a negative ``sd``.
    """
    raw = yaml.safe_load(path.read_text())
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Benchmark file {path} must contain a mapping, got {type(raw).__name__}")
    table = benchmarks_from_dict(raw)
    logger.debug("Loaded benchmarks from %s (%d overrides)", path, len(raw or {}))
    return table


def save_benchmarks(table: BenchmarkTable, path: Path) -> Path:
    """Serialize *table* to YAML and return *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(table.model_dump(mode="json"), default_flow_style=False, sort_keys=False))
    return path
