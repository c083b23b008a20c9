"""Log redaction for composed text.

A keystroke log carries everything the writer typed, so typed text must
not reach log output at any level.  It can get there two ways:

* as a ``%s`` argument (a snapshot, a final text, a whole
  :class:`~keyaxis.core.types.KeystrokeLog`), or
* inlined into the message as ``TextContent=...`` / ``final_text: ...``.

:class:`TypedTextFilter` handles both.  Arguments are rewritten before
formatting, so the message template stays intact and only the values
change.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Final

from keyaxis.core.defaults import LOG_TEXT_ARG_MAX_CHARS
from keyaxis.core.types import KeystrokeLog

_TEXT_FIELDS: Final[tuple[str, ...]] = ("text_content", "text_change", "final_product")

# Field names, their FlexKeyLogger aliases, and the report's final_text.
_TEXT_KEYS: Final[tuple[str, ...]] = (
    *_TEXT_FIELDS,
    *(KeystrokeLog.model_fields[name].alias for name in _TEXT_FIELDS),
    "final_text",
)

_INLINE_TEXT: Final[re.Pattern[str]] = re.compile(
    r"\b(?P<key>" + "|".join(map(re.escape, _TEXT_KEYS)) + r")\s*[=:]\s*"
    r"(?:\"[^\"]*\"|'[^']*'|\[[^\]]*\]|\S+)",
    re.IGNORECASE,
)


def redact_text_arg(value: Any) -> Any:
    """Return a loggable stand-in for *value* when it may hold typed text.

    A :class:`KeystrokeLog` becomes an event-count summary and a string
    longer than ``LOG_TEXT_ARG_MAX_CHARS`` becomes a length marker.
    Anything else is returned unchanged.
    """
    if isinstance(value, KeystrokeLog):
        return f"<KeystrokeLog: {value.event_count} events>"
    if isinstance(value, str) and len(value) > LOG_TEXT_ARG_MAX_CHARS:
        return f"<{len(value)} chars redacted>"
    return value


def redact_message(message: str) -> str:
    """Blank out inline ``key=value`` text fields in a log message."""
    return _INLINE_TEXT.sub(lambda m: f"{m.group('key')}=<redacted>", message)


class TypedTextFilter(logging.Filter):
    """Rewrite records so composed text is never formatted into output."""

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if isinstance(args, Mapping):
            record.args = {k: redact_text_arg(v) for k, v in args.items()}
        elif args:
            record.args = tuple(redact_text_arg(a) for a in args)
        if isinstance(record.msg, str):
            record.msg = redact_message(record.msg)
        else:
            record.msg = redact_text_arg(record.msg)
        return True


def install_typed_text_filter(
    target: logging.Logger | logging.Handler | None = None,
) -> TypedTextFilter:
    """Attach a :class:`TypedTextFilter` and return it.

    With no *target* the filter goes on every handler of the root logger,
    which covers records propagated from any ``keyaxis.*`` logger.  A
    logger-level filter only sees records logged on that exact logger.
    """
    filt = TypedTextFilter()
    if target is None:
        for handler in logging.getLogger().handlers:
            handler.addFilter(filt)
    else:
        target.addFilter(filt)
    return filt
