"""Per-run log file with optional stdout capture."""

from runlog._version import __version__
from runlog.config import LogConfiguration
from runlog.core.errors import (
    CaptureStateError,
    LogDirectoryError,
    LogFileResetError,
    LogSinkError,
)
from runlog.core.sink import LogSink
from runlog.infrastructure.redirector import LineBufferingRedirector

__all__ = [
    "__version__",
    "CaptureStateError",
    "LineBufferingRedirector",
    "LogConfiguration",
    "LogDirectoryError",
    "LogFileResetError",
    "LogSink",
    "LogSinkError",
]
