from __future__ import annotations

import traceback
from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_entry(
    message: str, include_timestamps: bool, now: Optional[datetime] = None
) -> str:
    """Return the line written for ``message``, without the line terminator."""
    if not include_timestamps:
        return message
    ts = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"[{ts}] {message}"


def format_error(message: str, cause: Optional[BaseException] = None) -> str:
    """
    Build the text logged by ``LogSink.log_error``.

    Layout is ``ERROR: <message>``; with a cause, `` - Exception: <cause>`` is
    appended, and when the cause has been raised (so it carries a traceback)
    the formatted traceback follows on the next lines after ``StackTrace:``.
    """
    if cause is None:
        return f"ERROR: {message}"
    detail = str(cause) or type(cause).__name__
    text = f"ERROR: {message} - Exception: {detail}"
    if cause.__traceback__ is not None:
        trace = "".join(
            traceback.format_exception(type(cause), cause, cause.__traceback__)
        ).rstrip("\n")
        text += f"\nStackTrace: {trace}"
    return text
