import os
import sys
from loguru import logger

DIAGNOSTIC_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>runlog</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def diagnostics_level() -> str:
    return (os.environ.get("RUNLOG_LOG_LEVEL") or "INFO").strip().upper()


def config():
    """
    Route runlog's own diagnostics (failed writes, capture warnings) to stderr.

    They must not go to stdout: while capture is active stdout is the
    redirector, and a diagnostic about a failed write would be fed back into
    the log it is complaining about.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=diagnostics_level(),
        colorize=True,
        format=DIAGNOSTIC_FORMAT,
    )
