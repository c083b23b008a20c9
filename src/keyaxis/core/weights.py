"""User-adjustable weight configuration for the dual-axis scorer.

Weights are plain non-negative reals.  Nothing here checks that a
group sums to 1: the scorer clamps its outputs, so an unusual weight
set produces a saturated score rather than an error.

Typical flow::

    weights = load_weights(Path("configs/weights.yaml"))
    weights = weights.with_overrides({"groups": {"fluency": 0.7}})

YAML keys may be snake_case or the camelCase names used by the
dashboard sliders (``pathShape``, ``BASE_JUMP``, ...).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class GroupWeights(BaseModel, frozen=True, populate_by_name=True, extra="forbid"):
    """Top-level weights for each sub-score group."""

    path_shape: float = Field(default=0.60, alias="pathShape")
    revision_activity: float = Field(default=0.40, alias="revisionActivity")
    fluency: float = 0.50
    pause_behavior: float = Field(default=0.50, alias="pauseBehavior")
    unconstrained_action: float = Field(
        default=1.0,
        alias="unconstrainedAction",
        description="Multiplier on the additive paste contribution.",
    )


class RevisionWeights(BaseModel, frozen=True, extra="forbid"):
    num_revisions: float = 0.35
    num_deletions: float = 0.25
    total_deletions_words: float = 0.20
    total_insertions: float = 0.10
    num_insertions: float = 0.10


class FluencyWeights(BaseModel, frozen=True, extra="forbid"):
    rburst_length_median: float = 0.5
    characters_per_minute: float = 0.5


class PauseWeights(BaseModel, frozen=True, extra="forbid"):
    pause_time_mean: float = 0.40
    pause_within_words_count: float = 0.30
    pause_before_words: float = 0.20
    pause_before_sentences: float = 0.10


class PasteTuning(BaseModel, frozen=True, populate_by_name=True, extra="forbid"):
    """Constants of the paste contribution term."""

    base_jump: float = Field(default=0.12, alias="BASE_JUMP", description="Contribution per paste event.")
    char_scale: float = Field(
        default=0.0002, alias="CHAR_SCALE", description="Per-character amplification of each paste event."
    )


class WeightConfig(BaseModel, frozen=True, extra="forbid"):
    """Full weight configuration: group weights, per-group sub-weights, paste tuning."""

    groups: GroupWeights = Field(default_factory=GroupWeights)
    rev: RevisionWeights = Field(default_factory=RevisionWeights)
    flu: FluencyWeights = Field(default_factory=FluencyWeights)
    pb: PauseWeights = Field(default_factory=PauseWeights)
    paste: PasteTuning = Field(default_factory=PasteTuning)

    def with_overrides(self, patch: dict[str, dict[str, float]]) -> WeightConfig:
        """Return a new config with *patch* merged in, one group at a time.

        Keys inside a group may be field names or their slider aliases.
        Unknown group names raise ``ValueError`` and unknown keys raise
        ``ValidationError``; the receiver is left untouched.
        """
        data = self.model_dump()
        for group, values in patch.items():
            if group not in data:
                raise ValueError(
                    f"Unknown weight group {group!r}; must be one of {sorted(data)}"
                )
            group_fields = type(self).model_fields[group].annotation.model_fields
            by_alias = {f.alias: name for name, f in group_fields.items() if f.alias}
            merged = dict(data[group])
            merged.update({by_alias.get(key, key): value for key, value in values.items()})
            data[group] = merged
        return WeightConfig.model_validate(data)


DEFAULT_WEIGHTS = WeightConfig()


def load_weights(path: Path) -> WeightConfig:
    """Load a weight configuration from YAML.  Missing entries take defaults.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError / ValidationError: If the YAML is malformed.
    """
    raw: Any = yaml.safe_load(path.read_text())
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Weight file {path} must contain a mapping, got {type(raw).__name__}")
    config = WeightConfig.model_validate(raw)
    logger.debug("Loaded weights from %s", path)
    return config


def save_weights(config: WeightConfig, path: Path) -> Path:
    """Serialize *config* to YAML (snake_case keys) and return *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(config.model_dump(mode="json"), default_flow_style=False, sort_keys=False))
    return path
