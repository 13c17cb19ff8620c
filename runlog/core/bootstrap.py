from __future__ import annotations

import atexit
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from runlog.config import LogConfiguration
from runlog.core.sink import LogSink
from runlog.utils.logger import config as configure_logger


def init(config: Optional[LogConfiguration] = None, capture: bool = True) -> LogSink:
    """Initialize environment and logging early.

    - Loads .env
    - Configures loguru for diagnostics
    - Creates the run log (fresh file) from ``config`` or the environment
    - Optionally captures stdout into the log
    - Restores stdout at interpreter exit
    """
    load_dotenv(find_dotenv(usecwd=True))
    configure_logger()
    if config is None:
        config = LogConfiguration.from_env(load_env_file=False)
    sink = LogSink(config)
    if capture:
        sink.capture_console_output()
    atexit.register(sink.close)
    logger.debug(f"Run log: {sink.log_path}")
    return sink
