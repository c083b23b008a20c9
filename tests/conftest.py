"""Shared fixtures for the keyaxis test suite."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import pytest

from keyaxis.core.types import KeystrokeLog


def _key_label(ch: str) -> str:
    return "Space" if ch == " " else ch


def build_log(
    times: Sequence[float],
    *,
    outputs: Sequence[str] | None = None,
    activities: Sequence[str] | None = None,
    text_changes: Sequence[str] | None = None,
    cursors: Sequence[int] | None = None,
    contents: Sequence[str] | None = None,
    final_product: str | None = None,
    with_activity: bool = True,
) -> KeystrokeLog:
    """Build a log of appended single characters; any field can be overridden."""
    n = len(times)
    letters = [chr(ord("a") + i % 26) for i in range(n)]
    default_contents = ["".join(letters[: i + 1]) for i in range(n)]
    return KeystrokeLog(
        event_id=list(range(1, n + 1)),
        event_time_ms=list(times),
        activity=(list(activities) if activities is not None else ["Input"] * n) if with_activity else None,
        output=list(outputs) if outputs is not None else letters,
        text_change=list(text_changes) if text_changes is not None else letters,
        cursor_position=list(cursors) if cursors is not None else [i + 1 for i in range(n)],
        text_content=list(contents) if contents is not None else default_contents,
        final_product=final_product,
    )


def build_typed_log(text: str, *, interval_ms: float = 100.0, start_ms: float = 0.0) -> KeystrokeLog:
    """Log of *text* typed one character per event at a fixed interval."""
    n = len(text)
    return KeystrokeLog(
        event_id=list(range(1, n + 1)),
        event_time_ms=[start_ms + i * interval_ms for i in range(n)],
        activity=["Input"] * n,
        output=[_key_label(ch) for ch in text],
        text_change=list(text),
        cursor_position=[i + 1 for i in range(n)],
        text_content=[text[: i + 1] for i in range(n)],
    )


@pytest.fixture()
def make_log() -> Callable[..., KeystrokeLog]:
    return build_log


@pytest.fixture()
def typed_log() -> Callable[..., KeystrokeLog]:
    return build_typed_log


@pytest.fixture()
def flexkeylogger_payload() -> dict[str, Any]:
    """A short raw FlexKeyLogger dump: 'hi' typed, one backspace, 'i!' retyped."""
    return {
        "EventID": [0, 1, 2, 3, 4],
        "EventTime": [1000, 1120, 1400, 1650, 1800],
        "Output": ["h", "i", "Backspace", "i", "!"],
        "TextChange": ["h", "i", "i", "i", "!"],
        "Activity": ["Input", "Input", "Remove/Cut", "Input", "Input"],
        "CursorPosition": [1, 2, 1, 2, 3],
        "TextContent": ["h", "hi", "h", "hi", "hi!"],
        "FinalProduct": "hi!",
    }
