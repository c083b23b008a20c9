"""FlexKeyLogger keylog parsing: JSON dumps and tabular exports.

FlexKeyLogger keeps a session as one object of parallel arrays
(``EventID``, ``EventTime``, ``Output``, ``TextChange``, ``Activity``,
``CursorPosition``, ``TextContent``) plus an optional ``FinalProduct``
string.  Two ingestion paths are provided:

* **JSON** -- :func:`load_keylog_json` reads such an object from disk.
* **Tabular** -- :func:`keylog_from_dataframe` / :func:`load_keylog_csv`
  accept one row per event with the same column names (or their
  snake_case equivalents).

Unknown keys are ignored.  Field lengths are not cross-checked.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Final

import pandas as pd

from keyaxis.core.types import KeystrokeLog

logger = logging.getLogger(__name__)

# snake_case field -> FlexKeyLogger key
_FIELD_ALIASES: Final[dict[str, str]] = {
    name: field.alias
    for name, field in KeystrokeLog.model_fields.items()
    if field.alias is not None
}
_REQUIRED: Final[tuple[str, ...]] = (
    "event_id",
    "event_time_ms",
    "output",
    "cursor_position",
    "text_content",
)
_TEXT_COLUMNS: Final[frozenset[str]] = frozenset(
    key
    for name in ("activity", "output", "text_change", "text_content")
    for key in (name, _FIELD_ALIASES[name])
)


def _canonical_keys(raw: dict[str, Any]) -> dict[str, Any]:
    """Map either key style onto snake_case field names, dropping unknown keys."""
    out: dict[str, Any] = {}
    for name, alias in _FIELD_ALIASES.items():
        if alias in raw:
            out[name] = raw[alias]
        elif name in raw:
            out[name] = raw[name]
    return out


def parse_keylog(raw: dict[str, Any]) -> KeystrokeLog:
    """Validate a raw keylog mapping into a :class:`KeystrokeLog`.

    Args:
        raw: Mapping with FlexKeyLogger or snake_case keys.

    Returns:
        The validated log.

    Raises:
        ValueError: If a required field is missing.
        ValidationError: If a field has the wrong type.
    """
    data = _canonical_keys(raw)
    missing = [_FIELD_ALIASES[name] for name in _REQUIRED if name not in data]
    if missing:
        raise ValueError(f"Keylog is missing required field(s): {', '.join(missing)}")
    return KeystrokeLog.model_validate(data)


def load_keylog_json(path: Path) -> KeystrokeLog:
    """Read a FlexKeyLogger JSON dump.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not a JSON object or lacks required fields.
    """
    raw = json.loads(path.read_text("utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Keylog file {path} must contain a JSON object, got {type(raw).__name__}")
    log = parse_keylog(raw)
    logger.debug("Loaded %d events from %s", log.event_count, path)
    return log


def keylog_from_dataframe(df: pd.DataFrame, *, final_product: str | None = None) -> KeystrokeLog:
    """Build a :class:`KeystrokeLog` from one-row-per-event tabular data.

    Missing ``TextChange`` / ``TextContent`` cells (NaN) become empty
    strings so that the text-length arithmetic stays well defined.

    Args:
        df: Event table in log order.
        final_product: Optional final text; falls back to the last
            snapshot during analysis when omitted.

    Returns:
        The validated log.
    """
    raw: dict[str, Any] = {}
    for column in df.columns:
        series = df[column]
        if column in _TEXT_COLUMNS:
            series = series.fillna("").astype(str)
        raw[str(column)] = series.tolist()
    if final_product is not None:
        raw["FinalProduct"] = final_product
    return parse_keylog(raw)


def load_keylog_csv(path: Path, *, final_product: str | None = None) -> KeystrokeLog:
    """Read a one-row-per-event keylog table from CSV.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If required columns are missing.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    df = pd.read_csv(path, dtype={c: str for c in _TEXT_COLUMNS}, keep_default_na=False)
    log = keylog_from_dataframe(df, final_product=final_product)
    logger.debug("Loaded %d events from %s", log.event_count, path)
    return log


def load_keylog(path: Path) -> KeystrokeLog:
    """Dispatch on suffix: ``.csv`` is tabular, anything else is JSON."""
    if path.suffix.lower() == ".csv":
        return load_keylog_csv(path)
    return load_keylog_json(path)
