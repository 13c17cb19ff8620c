"""Process-wide ``sys.stdout`` handle.

Capturing console output means replacing ``sys.stdout`` for the whole
process. Every swap goes through this module so there is exactly one record of
who installed what, and the exact previous stream can be put back later.
"""

from __future__ import annotations

import sys
import threading
from typing import Any, Optional, TextIO

from loguru import logger

from runlog.core.errors import CaptureStateError

_lock = threading.Lock()
_owner: Optional[object] = None
_installed: Optional[Any] = None


def current_stdout() -> Optional[TextIO]:
    return sys.stdout


def active_owner() -> Optional[object]:
    """Return the object that currently holds stdout, or None."""
    return _owner


def install_stdout(writer: Any, owner: object) -> TextIO:
    """Install ``writer`` as ``sys.stdout`` on behalf of ``owner``.

    Returns the stream that was active before, which the caller must hand back
    to :func:`restore_stdout`.
    """
    global _owner, _installed
    with _lock:
        if _owner is not None:
            raise CaptureStateError(_owner)
        previous = sys.stdout
        sys.stdout = writer
        _owner = owner
        _installed = writer
        return previous


def restore_stdout(previous: TextIO, owner: object) -> None:
    """Put ``previous`` back as ``sys.stdout`` and release the handle."""
    global _owner, _installed
    with _lock:
        if _owner is not owner:
            logger.warning(f"restore_stdout called by {owner!r} which does not hold stdout")
            return
        if sys.stdout is not _installed:
            # Somebody layered their own stream on top of ours; theirs goes too.
            logger.warning(
                f"sys.stdout was replaced while captured ({sys.stdout!r}); restoring original anyway"
            )
        sys.stdout = previous
        _owner = None
        _installed = None
