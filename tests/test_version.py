from pathlib import Path

import importlib.metadata as im


def _hide_version_file(monkeypatch):
    orig_exists = Path.exists

    def fake_exists(self):  # type: ignore[no-redef]
        return False if self.name == "VERSION" else orig_exists(self)

    monkeypatch.setattr(Path, "exists", fake_exists, raising=False)


def test_version_file_takes_precedence(monkeypatch):
    orig_exists = Path.exists
    orig_read = Path.read_text

    monkeypatch.setattr(
        Path, "exists", lambda self: self.name == "VERSION" or orig_exists(self)
    )
    monkeypatch.setattr(
        Path,
        "read_text",
        lambda self, *a, **kw: "2.5.0\n" if self.name == "VERSION" else orig_read(self, *a, **kw),
    )
    monkeypatch.setattr(im, "version", lambda name: "9.9.9")

    from runlog import _version as ver

    assert ver.get_version() == "2.5.0"


def test_version_from_distribution_metadata(monkeypatch):
    _hide_version_file(monkeypatch)
    asked = []

    def fake_version(name):
        asked.append(name)
        return "1.4.2"

    monkeypatch.setattr(im, "version", fake_version)

    from runlog import _version as ver

    assert ver.get_version() == "1.4.2"
    assert asked == ["runlog"]


def test_version_defaults_when_not_installed(monkeypatch):
    _hide_version_file(monkeypatch)

    def raise_err(_):
        raise im.PackageNotFoundError("runlog")

    monkeypatch.setattr(im, "version", raise_err)

    from runlog import _version as ver

    assert ver.get_version() == "0.0.0"
