import io
import sys
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


class FakeLog:
    def __init__(self):
        self.debugs = []
        self.infos = []
        self.warnings = []
        self.errors = []

    def debug(self, msg):
        self.debugs.append(str(msg))

    def info(self, msg):
        self.infos.append(str(msg))

    def warning(self, msg):
        self.warnings.append(str(msg))

    def error(self, msg):
        self.errors.append(str(msg))


@pytest.fixture
def fake_log():
    return FakeLog()


@pytest.fixture
def log_config(tmp_path):
    from runlog.config import LogConfiguration

    return LogConfiguration(log_directory=tmp_path / "log", write_to_console=False)


@pytest.fixture
def fake_stdout(monkeypatch):
    buf = io.StringIO()
    monkeypatch.setattr(sys, "stdout", buf)
    return buf


@pytest.fixture(autouse=True)
def release_stdout(monkeypatch):
    # Depends on monkeypatch so this runs before monkeypatch puts pytest's stdout back.
    yield
    from runlog.infrastructure import console

    owner = console.active_owner()
    if owner is not None:
        owner.stop_capture_console_output()


def read_lines(path: Path):
    return path.read_text(encoding="utf-8").splitlines()
