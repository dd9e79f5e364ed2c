import sys
import time
from pathlib import Path
from unittest import mock

import pytest

from byedroid.mirror import (
    detect_scrcpy_display,
    launch_scrcpy,
    parse_scrcpy_display,
    scrcpy_path,
)

SCRCPY_LINE = (
    '    mBaseDisplayInfo=DisplayInfo{"scrcpy", displayId 13, displayGroupId 1, FLAG_PRESENTATION}'
)


def _script(path, body):
    path.write_text(f"#!{sys.executable}\n{body}")
    path.chmod(0o755)
    return path


def _wait_for_content(path, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline and not (path.exists() and path.read_text()):
        time.sleep(0.05)
    return path.read_text() if path.exists() else ""


def test_parses_display_id_from_dumpsys_line():
    assert parse_scrcpy_display(SCRCPY_LINE) == 13


def test_ignores_non_scrcpy_displays():
    output = '  mBaseDisplayInfo=DisplayInfo{"Built-in Screen", displayId 0, FLAG_SECURE}\n'
    assert parse_scrcpy_display(output) is None


def test_picks_scrcpy_line_among_others():
    output = "\n".join(
        [
            '  mBaseDisplayInfo=DisplayInfo{"Built-in Screen", displayId 0}',
            SCRCPY_LINE,
        ]
    )
    assert parse_scrcpy_display(output) == 13


def test_detect_scrcpy_display_runs_adb(tmp_path):
    adb = _script(
        tmp_path / "adb",
        "import sys\n"
        "if sys.argv[1:] == ['-s', 'emulator-5554', 'shell', 'dumpsys', 'display']:\n"
        f"    print({SCRCPY_LINE!r})\n",
    )
    assert detect_scrcpy_display(adb, "emulator-5554") == 13


def test_detect_scrcpy_display_missing_adb(tmp_path):
    assert detect_scrcpy_display(tmp_path / "missing-adb", "emulator-5554") is None


def test_scrcpy_path():
    with mock.patch("shutil.which", return_value="/opt/bin/scrcpy"):
        assert scrcpy_path() == Path("/opt/bin/scrcpy")
    with mock.patch("shutil.which", return_value=None):
        assert scrcpy_path() is None


def test_launch_scrcpy_not_found():
    with mock.patch("shutil.which", return_value=None):
        with pytest.raises(RuntimeError, match="scrcpy not found in PATH"):
            launch_scrcpy("emulator-5554", [])


def test_launch_scrcpy_passes_serial_and_args(tmp_path):
    record = tmp_path / "args.txt"
    scrcpy = _script(
        tmp_path / "scrcpy",
        f"import sys\nopen({str(record)!r}, 'w').write(' '.join(sys.argv[1:]))\n",
    )
    with mock.patch("shutil.which", return_value=str(scrcpy)):
        assert scrcpy_path() == Path(scrcpy)
        launch_scrcpy("emulator-5554", ["--new-display"])
    assert _wait_for_content(record) == "-s emulator-5554 --new-display"