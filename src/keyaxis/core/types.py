"""Core data contracts: keystroke event log, extracted metrics, baseline, and scores."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Activity(StrEnum):
    """Activity tags recorded per event by the capture layer.

    The capture layer may emit other tags (e.g. ``Nonproduction``);
    those are carried through unchanged and simply do not match any
    of these members.
    """

    INPUT = "Input"
    REMOVE_CUT = "Remove/Cut"
    PASTE = "Paste"


class ScoringMode(StrEnum):
    """Which distribution the fluency sub-scores are normalized against.

    ``STANDARD``
        Population benchmarks for every metric.

    ``CALIBRATED``
        Typing rate and burst length are normalized against a personal
        baseline taken from the first characters of the session, once
        one is available.
    """

    STANDARD = "standard"
    CALIBRATED = "calibrated"


_LIST_FIELDS = (
    "event_id",
    "event_time_ms",
    "activity",
    "output",
    "text_change",
    "cursor_position",
    "text_content",
)


class KeystrokeLog(BaseModel, frozen=True, populate_by_name=True):
    """An ordered keystroke event log stored as parallel per-event lists.

    Field names are snake_case; the keys produced by FlexKeyLogger
    (``EventID``, ``EventTime``, ``TextContent``, ...) are accepted as
    aliases so a raw capture dump validates directly.

    ``activity`` and ``text_change`` are optional.  Without ``activity``
    every event is treated as ``Input``; without ``text_change`` pasted
    text has no measurable length.

    List lengths are not cross-checked here: a consistent log is the
    producer's responsibility.
    """

    event_id: list[int] = Field(alias="EventID", description="Unique, strictly increasing event ids.")
    event_time_ms: list[float] = Field(alias="EventTime", description="Non-decreasing timestamps (ms).")
    activity: list[str] | None = Field(default=None, alias="Activity", description="Activity tag per event.")
    output: list[str] = Field(alias="Output", description="Logical key label per event.")
    text_change: list[str] | None = Field(
        default=None, alias="TextChange", description="Inserted/removed text, or 'NoChange'."
    )
    cursor_position: list[int] = Field(alias="CursorPosition", description="Cursor index after each event.")
    text_content: list[str] = Field(alias="TextContent", description="Full document text after each event.")
    final_product: str | None = Field(default=None, alias="FinalProduct", description="Final document text.")

    @property
    def event_count(self) -> int:
        return len(self.event_id)

    def last_snapshot(self) -> str:
        return self.text_content[-1] if self.text_content else ""

    def resolved_final_text(self) -> str:
        """Explicit ``final_product`` when present, else the last snapshot, else ``""``."""
        if isinstance(self.final_product, str):
            return self.final_product
        return self.last_snapshot()

    def head(self, stop: int) -> KeystrokeLog:
        """Return a new log holding the first *stop* events of every list field."""
        update = {
            name: getattr(self, name)[:stop]
            for name in _LIST_FIELDS
            if getattr(self, name) is not None
        }
        return self.model_copy(update=update)


class ExtractedMetrics(BaseModel, frozen=True):
    """Writing-process statistics derived from one keystroke log.

    Durations are in seconds, rates per minute, counts are raw counts
    (``total_deletions_words`` is an approximation).
    """

    # -- product / process --
    product_process_ratio: float = Field(description="Final text length per Input keystroke.")
    characters_per_minute: float = Field(description="Final text length per minute of session.")

    # -- revision --
    num_revisions: int = Field(ge=0, description="Deletions plus non-linear insertions.")
    num_deletions: int = Field(ge=0, description="Remove/Cut or Backspace events.")
    total_deletions_words: float = Field(ge=0.0, description="Approximate number of words deleted.")
    total_insertions: int = Field(ge=0, description="Characters inserted before the end of the text.")
    num_insertions: int = Field(ge=0, description="Input events inserted before the end of the text.")

    # -- paste --
    paste_events: int = Field(ge=0, description="Number of Paste events.")
    paste_characters: int = Field(ge=0, description="Characters inserted by Paste events.")

    # -- bursts --
    rburst_length_median: float = Field(ge=0.0, description="Median production burst duration (s).")
    burst_count: int = Field(default=0, ge=0, description="Number of recorded bursts.")

    # -- pauses --
    pause_time_mean: float = Field(ge=0.0, description="Mean pause (IKI >= threshold) duration (s).")
    pause_count: int = Field(default=0, ge=0, description="Number of pauses.")
    pause_within_words_count: int = Field(ge=0, description="Pauses between two non-boundary keys.")
    pause_before_words: float = Field(ge=0.0, description="Mean pause after a Space (s).")
    pause_before_sentences: float = Field(ge=0.0, description="Mean pause after sentence punctuation (s).")

    # -- session --
    duration_seconds: float = Field(description="Last minus first timestamp (s).")
    final_length: int = Field(ge=0, description="Length of the final text.")
    total_events: int = Field(ge=0, description="Number of events in the log.")
    total_keystrokes: int = Field(default=1, ge=1, description="Input events (at least 1).")


class CalibrationBaseline(BaseModel, frozen=True):
    """Personal typing norms derived from the opening slice of a session."""

    typing_rate_mean: float = Field(description="Characters per minute in the calibration slice.")
    typing_rate_spread: float = Field(description="Scaled standard deviation for typing rate.")
    burst_length_mean: float = Field(description="Median burst length (s) in the calibration slice.")
    burst_length_spread: float = Field(description="Scaled standard deviation for burst length.")


class ScoreComponents(BaseModel, frozen=True):
    """Intermediate sub-scores, exposed for inspection and weight tuning."""

    path_shape: float
    rev_base: float
    fluency_base: float
    pb_base: float
    paste_score: float


class DualAxisScore(BaseModel, frozen=True):
    """Linear and Free-Wheeling scores, both in ``[0, 100]``."""

    linearity_score: float = Field(ge=0.0, le=100.0)
    spontaneity_score: float = Field(ge=0.0, le=100.0)
    components: ScoreComponents
