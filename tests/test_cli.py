import sys

import pytest

from runlog import cli

from conftest import read_lines


def _run(tmp_path, body, *script_args):
    script = tmp_path / "job.py"
    script.write_text(body)
    code = cli.main(
        [
            "--dir",
            str(tmp_path / "log"),
            "--name",
            "job",
            "--no-timestamps",
            "--no-console",
            str(script),
            *script_args,
        ]
    )
    return code, tmp_path / "log" / "job.log"


def test_script_output_is_captured(tmp_path, fake_stdout):
    body = "import sys\nprint('hello from job')\nprint(sys.argv[1:])\n"
    code, log = _run(tmp_path, body, "a", "b")
    assert code == 0
    assert read_lines(log) == ["[Console] hello from job", "[Console] ['a', 'b']"]
    assert fake_stdout.getvalue() == "hello from job\n['a', 'b']\n"
    assert sys.stdout is fake_stdout


def test_argv_is_restored(tmp_path, fake_stdout):
    before = list(sys.argv)
    _run(tmp_path, "print('x')\n", "--flag")
    assert sys.argv == before


def test_exit_code_is_propagated(tmp_path, fake_stdout):
    code, log = _run(tmp_path, "import sys\nprint('bye')\nsys.exit(3)\n")
    assert code == 3
    assert read_lines(log) == ["[Console] bye"]


def test_uncaught_exception_is_logged(tmp_path, fake_stdout):
    code, log = _run(tmp_path, "raise ValueError('kaboom')\n")
    assert code == 1
    text = log.read_text(encoding="utf-8")
    assert text.startswith("ERROR: Uncaught exception in")
    assert "Exception: kaboom" in text
    assert sys.stdout is fake_stdout


def test_missing_script(tmp_path):
    assert cli.main(["--dir", str(tmp_path), str(tmp_path / "nope.py")]) == 2


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as ei:
        cli.main(["--version"])
    assert ei.value.code == 0
    assert capsys.readouterr().out.startswith("runlog ")
