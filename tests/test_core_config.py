"""Tests for keyaxis.core.weights and keyaxis.core.benchmarks configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from keyaxis.core.benchmarks import (
    DEFAULT_BENCHMARKS,
    Benchmark,
    BenchmarkTable,
    load_benchmarks,
    save_benchmarks,
)
from keyaxis.core.weights import DEFAULT_WEIGHTS, WeightConfig, load_weights, save_weights


class TestDefaultWeights:
    def test_group_weights(self) -> None:
        g = DEFAULT_WEIGHTS.groups
        assert (g.path_shape, g.revision_activity) == (0.60, 0.40)
        assert (g.fluency, g.pause_behavior, g.unconstrained_action) == (0.50, 0.50, 1.0)

    def test_sub_weights(self) -> None:
        assert list(DEFAULT_WEIGHTS.rev.model_dump().values()) == [0.35, 0.25, 0.20, 0.10, 0.10]
        assert list(DEFAULT_WEIGHTS.flu.model_dump().values()) == [0.5, 0.5]
        assert list(DEFAULT_WEIGHTS.pb.model_dump().values()) == [0.40, 0.30, 0.20, 0.10]

    def test_paste_tuning(self) -> None:
        assert DEFAULT_WEIGHTS.paste.base_jump == 0.12
        assert DEFAULT_WEIGHTS.paste.char_scale == 0.0002


class TestWeightOverrides:
    def test_override_single_weight(self) -> None:
        updated = DEFAULT_WEIGHTS.with_overrides({"groups": {"fluency": 0.7}})
        assert updated.groups.fluency == 0.7
        assert updated.groups.pause_behavior == 0.50
        assert DEFAULT_WEIGHTS.groups.fluency == 0.50

    def test_unknown_group_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown weight group"):
            DEFAULT_WEIGHTS.with_overrides({"bogus": {"x": 1.0}})

    def test_weights_not_normalized(self) -> None:
        updated = DEFAULT_WEIGHTS.with_overrides({"groups": {"path_shape": 5.0}})
        assert updated.groups.path_shape == 5.0

    def test_misspelled_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_WEIGHTS.with_overrides({"groups": {"fluncy": 0.9}})

    def test_slider_alias_accepted(self) -> None:
        updated = DEFAULT_WEIGHTS.with_overrides({"groups": {"pathShape": 0.9}, "paste": {"BASE_JUMP": 0.3}})
        assert updated.groups.path_shape == 0.9
        assert updated.paste.base_jump == 0.3


class TestWeightFiles:
    def test_roundtrip(self, tmp_path) -> None:
        cfg = DEFAULT_WEIGHTS.with_overrides({"pb": {"pause_time_mean": 0.9}})
        path = save_weights(cfg, tmp_path / "configs" / "weights.yaml")
        assert load_weights(path) == cfg

    def test_camel_case_keys(self, tmp_path) -> None:
        path = tmp_path / "weights.yaml"
        path.write_text(
            "groups:\n  pathShape: 0.8\n  unconstrainedAction: 0.5\n"
            "paste:\n  BASE_JUMP: 0.2\n  CHAR_SCALE: 0.001\n"
        )
        cfg = load_weights(path)
        assert cfg.groups.path_shape == 0.8
        assert cfg.groups.unconstrained_action == 0.5
        assert cfg.paste.base_jump == 0.2
        assert cfg.paste.char_scale == 0.001
        assert cfg.rev == DEFAULT_WEIGHTS.rev

    def test_misspelled_yaml_key_rejected(self, tmp_path) -> None:
        path = tmp_path / "weights.yaml"
        path.write_text("groups:\n  path_shap: 1.0\n  revison_activity: 0.0\n")
        with pytest.raises(ValidationError, match="path_shap"):
            load_weights(path)

    def test_unknown_section_rejected(self, tmp_path) -> None:
        path = tmp_path / "weights.yaml"
        path.write_text("grups:\n  fluency: 0.7\n")
        with pytest.raises(ValidationError):
            load_weights(path)

    def test_empty_file_gives_defaults(self, tmp_path) -> None:
        path = tmp_path / "weights.yaml"
        path.write_text("")
        assert load_weights(path) == WeightConfig()

    def test_non_mapping_rejected(self, tmp_path) -> None:
        path = tmp_path / "weights.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            load_weights(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_weights(tmp_path / "nope.yaml")


class TestBenchmarks:
    def test_defaults(self) -> None:
        assert DEFAULT_BENCHMARKS.characters_per_minute == Benchmark(mean=200.0, sd=75.0)
        assert DEFAULT_BENCHMARKS.num_revisions == Benchmark(mean=125.95, sd=85.112)
        assert DEFAULT_BENCHMARKS.rburst_length_median == Benchmark(mean=6.27, sd=6.431)
        assert len(BenchmarkTable.model_fields) == 11

    def test_coefficient_of_variation(self) -> None:
        assert DEFAULT_BENCHMARKS.coefficient_of_variation("characters_per_minute") == pytest.approx(0.375)

    def test_coefficient_of_variation_zero_mean(self) -> None:
        table = BenchmarkTable(characters_per_minute=Benchmark(mean=0.0, sd=10.0))
        assert table.coefficient_of_variation("characters_per_minute") == 0.0

    def test_negative_sd_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Benchmark(mean=1.0, sd=-1.0)

    def test_partial_file_overlays_defaults(self, tmp_path) -> None:
        path = tmp_path / "benchmarks.yaml"
        path.write_text("characters_per_minute:\n  mean: 150\n  sd: 30\n")
        table = load_benchmarks(path)
        assert table.characters_per_minute == Benchmark(mean=150.0, sd=30.0)
        assert table.pause_time_mean == DEFAULT_BENCHMARKS.pause_time_mean

    def test_unknown_metric_rejected(self, tmp_path) -> None:
        path = tmp_path / "benchmarks.yaml"
        path.write_text("words_per_minute:\n  mean: 40\n  sd: 10\n")
        with pytest.raises(ValidationError):
            load_benchmarks(path)

    def test_roundtrip(self, tmp_path) -> None:
        path = save_benchmarks(DEFAULT_BENCHMARKS, tmp_path / "benchmarks.yaml")
        assert load_benchmarks(path) == DEFAULT_BENCHMARKS
