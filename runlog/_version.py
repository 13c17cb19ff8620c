import importlib.metadata as metadata
from pathlib import Path

DIST_NAME = "runlog"
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version of the running code.

    A ``VERSION`` file at the source root wins (source checkouts, frozen
    builds); otherwise the installed distribution metadata is used.
    """
    vfile = Path(__file__).resolve().parents[1] / "VERSION"
    if vfile.exists():
        return vfile.read_text(encoding="utf-8").strip()
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


__version__ = get_version()
