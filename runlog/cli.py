from __future__ import annotations

import argparse
import runpy
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from runlog._version import __version__
from runlog.config import LogConfiguration
from runlog.core.sink import LogSink
from runlog.utils.logger import config as configure_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runlog",
        description="Run a Python script and record everything it prints in a fresh log file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--dir", dest="log_directory", type=Path, help="log directory")
    parser.add_argument("--name", dest="log_file", help="log file base name (without .log)")
    parser.add_argument(
        "--no-timestamps",
        dest="include_timestamps",
        action="store_const",
        const=False,
        help="write entries without the [date time] prefix",
    )
    parser.add_argument(
        "--no-console",
        dest="write_to_console",
        action="store_const",
        const=False,
        help="do not echo log entries to the console",
    )
    parser.add_argument("script", type=Path, help="Python script to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="arguments for the script")
    return parser


def _exit_code(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    # sys.exit("message") prints the message and exits with 1
    print(code, file=sys.stderr)
    return 1


def run_script(script: Path, args: Sequence[str], sink: LogSink) -> int:
    """Run ``script`` as ``__main__`` with stdout captured into ``sink``.

    Returns the exit status the script would have had when run directly.
    """
    saved_argv: List[str] = sys.argv
    sys.argv = [str(script), *args]
    try:
        with sink.capturing():
            runpy.run_path(str(script), run_name="__main__")
    except SystemExit as e:
        return _exit_code(e)
    except Exception as e:
        sink.log_error(f"Uncaught exception in {script}", e)
        return 1
    finally:
        sys.argv = saved_argv
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logger()
    ns = build_parser().parse_args(argv)
    if not ns.script.is_file():
        logger.error(f"Script not found: {ns.script}")
        return 2
    config = LogConfiguration.from_env().with_overrides(
        log_directory=ns.log_directory,
        log_file=ns.log_file,
        include_timestamps=ns.include_timestamps,
        write_to_console=ns.write_to_console,
    )
    with LogSink(config) as sink:
        logger.info(f"Logging run of {ns.script} to {sink.log_path}")
        return run_script(ns.script, ns.args, sink)
