from __future__ import annotations

import sys
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Iterator, Optional, TextIO

from loguru import logger

from runlog.config import LogConfiguration
from runlog.core.entry import format_entry, format_error
from runlog.core.errors import LogDirectoryError, LogFileResetError
from runlog.infrastructure.console import current_stdout, install_stdout, restore_stdout
from runlog.infrastructure.redirector import LineBufferingRedirector


class LogSink:
    """
    Writes log entries to one file per run, optionally echoing them to the
    console and optionally capturing everything printed to stdout.

    The file is opened, appended to and closed on every call, so nothing is
    lost if the process dies and other processes can tail it between writes.
    All writes go through a single lock.
    """

    def __init__(self, config: Optional[LogConfiguration] = None) -> None:
        self._config = config if config is not None else LogConfiguration()
        directory = self._config.log_directory
        if not directory.is_dir():
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error(f"An exception occurred while creating log directory: {e}")
                raise LogDirectoryError(directory, str(e)) from e

        self._log_path = self._config.log_path
        try:
            # Fresh file per run; nothing is appended across runs.
            self._log_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"An exception occurred while deleting old log: {e}")
            raise LogFileResetError(self._log_path, str(e)) from e

        self._lock = threading.RLock()
        self._redirector: Optional[LineBufferingRedirector] = None
        self._original_stdout: Optional[TextIO] = None

    @property
    def config(self) -> LogConfiguration:
        return self._config

    @property
    def log_path(self) -> Path:
        return self._log_path

    @property
    def is_capturing(self) -> bool:
        return self._redirector is not None

    def log(self, message: str) -> None:
        self._write(message, echo=self._config.write_to_console)

    def log_error(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.log(format_error(message, cause))

    def capture_console_output(self) -> None:
        """Route everything written to ``sys.stdout`` into this log as well."""
        if self._redirector is not None:
            logger.warning("Console output is already captured by this sink; ignoring")
            return
        original = current_stdout()
        if original is None:
            logger.warning("No stdout to capture (sys.stdout is None)")
            return
        redirector = LineBufferingRedirector(
            original,
            self._log_console_line,
            prefix=self._config.console_prefix,
            strip_ansi=self._config.strip_ansi,
        )
        # Recorded before the swap so an echo racing the install goes to the original.
        self._redirector = redirector
        self._original_stdout = original
        try:
            self._original_stdout = install_stdout(redirector, owner=self)
        except Exception:
            self._redirector = None
            self._original_stdout = None
            raise
        logger.debug(f"Console capture started -> {self._log_path}")

    def stop_capture_console_output(self) -> None:
        redirector = self._redirector
        if redirector is None:
            return
        # flush, restore, then close: sys.stdout never points at a closed stream
        try:
            redirector.flush()
        finally:
            try:
                restore_stdout(self._original_stdout, owner=self)
            finally:
                self._redirector = None
                self._original_stdout = None
                redirector.close()
                logger.debug("Console capture stopped")

    @contextmanager
    def capturing(self) -> Iterator["LogSink"]:
        self.capture_console_output()
        try:
            yield self
        finally:
            self.stop_capture_console_output()

    def close(self) -> None:
        self.stop_capture_console_output()

    def __enter__(self) -> "LogSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _log_console_line(self, line: str) -> None:
        # Already on the console verbatim; only the file gets it.
        self._write(line, echo=False)

    def _write(self, message: str, echo: bool) -> None:
        redirector = self._redirector
        # Anything printed while the lock is held (a loguru stdout handler
        # reporting a failed write, say) reaches the console but not the log.
        scope = redirector.passthrough() if redirector is not None else nullcontext()
        with self._lock, scope:
            entry = format_entry(str(message), self._config.include_timestamps)
            try:
                with open(self._log_path, "a", encoding="utf-8") as f:
                    f.write(entry + "\n")
            except OSError as e:
                logger.error(f"Error occurred while writing to log: {e}")
            if echo:
                self._echo(entry)

    def _echo(self, entry: str) -> None:
        # While capturing, sys.stdout is our redirector; echo around it.
        original = self._original_stdout
        target = original if self._redirector is not None and original is not None else sys.stdout
        if target is None:
            return
        try:
            target.write(entry + "\n")
            target.flush()
        except (OSError, ValueError) as e:
            logger.error(f"Error occurred while writing to console: {e}")
