import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_LOG_FILE = "application"
DEFAULT_CONSOLE_PREFIX = "[Console] "
LOG_SUBDIR = "log"


def _as_bool(val: str | None, default: bool) -> bool:
    if val is None:
        return default
    v = val.strip().lower()
    if not v:
        return default
    return v in ("1", "true", "yes", "on")


def _str_to_path(val: str | None) -> Optional[Path]:
    if not val:
        return None
    return Path(val).expanduser()


def base_directory() -> Path:
    """Directory the running program lives in.

    Frozen builds (PyInstaller and friends) resolve to the executable's folder,
    regular runs to the folder of the ``__main__`` script. Interactive sessions
    have neither and fall back to the current working directory.
    """
    if getattr(sys, "frozen", False) or hasattr(sys, "_MEIPASS"):
        return Path(sys.executable).resolve().parent
    main = sys.modules.get("__main__")
    main_file = getattr(main, "__file__", None)
    if main_file:
        return Path(main_file).resolve().parent
    return Path.cwd()


def default_log_directory() -> Path:
    return base_directory() / LOG_SUBDIR


@dataclass(frozen=True)
class LogConfiguration:
    log_directory: Path = field(default_factory=default_log_directory)
    log_file: str = DEFAULT_LOG_FILE
    include_timestamps: bool = True
    write_to_console: bool = True
    console_prefix: str = DEFAULT_CONSOLE_PREFIX
    # Only affects the copy written to the file; the console sees raw output.
    strip_ansi: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_directory", Path(self.log_directory))

    @property
    def log_path(self) -> Path:
        return (self.log_directory / f"{self.log_file}.log").resolve()

    def with_overrides(self, **changes) -> "LogConfiguration":
        """Return a copy with the non-None values of ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "LogConfiguration":
        """Build a configuration from ``RUNLOG_*`` environment variables.

        Empty values are treated as unset so a blank line in ``.env`` does not
        wipe a default.
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))
        env_dir = os.getenv("RUNLOG_DIR")
        env_file = (os.getenv("RUNLOG_FILE") or "").strip()
        prefix = os.getenv("RUNLOG_CONSOLE_PREFIX")
        return cls(
            log_directory=_str_to_path(env_dir.strip() if env_dir else None)
            or default_log_directory(),
            log_file=env_file or DEFAULT_LOG_FILE,
            include_timestamps=_as_bool(os.getenv("RUNLOG_TIMESTAMPS"), True),
            write_to_console=_as_bool(os.getenv("RUNLOG_CONSOLE"), True),
            console_prefix=prefix if prefix else DEFAULT_CONSOLE_PREFIX,
            strip_ansi=_as_bool(os.getenv("RUNLOG_STRIP_ANSI"), True),
        )
