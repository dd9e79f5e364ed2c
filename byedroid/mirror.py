"""Launch scrcpy for a device and find scrcpy virtual displays."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

_DISPLAY_ID = "displayId "
_U32_MAX = 0xFFFFFFFF


def launch_scrcpy(serial: str, extra_args: Sequence[str]) -> None:
    """Start scrcpy for the device in its own process group, detached from our streams."""
    scrcpy = shutil.which("scrcpy")
    if scrcpy is None:
        raise RuntimeError("scrcpy not found in PATH")
    options: dict[str, object] = {}
    if os.name == "posix":
        options["process_group"] = 0
    try:
        subprocess.Popen(
            [scrcpy, "-s", serial, *extra_args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            **options,
        )
    except OSError as exc:
        raise RuntimeError(f"failed to spawn scrcpy: {exc}") from exc


def scrcpy_path() -> Path | None:
    """Return the scrcpy executable on PATH, if any."""
    found = shutil.which("scrcpy")
    return Path(found) if found else None


def parse_scrcpy_display(output: str) -> int | None:
    """Find the display ID of a scrcpy virtual display in `dumpsys display` output."""
    for line in output.splitlines():
        if "mBaseDisplayInfo" not in line or "scrcpy" not in line:
            continue
        pos = line.find(_DISPLAY_ID)
        if pos < 0:
            continue
        rest = line[pos + len(_DISPLAY_ID) :]
        digits = ""
        for ch in rest:
            if not ("0" <= ch <= "9"):
                break
            digits += ch
        if digits and int(digits) <= _U32_MAX:
            return int(digits)
    return None


def detect_scrcpy_display(adb_path: str | Path, serial: str) -> int | None:
    """Ask the device for its displays and return an active scrcpy display ID."""
    try:
        out = subprocess.run(
            [str(adb_path), "-s", serial, "shell", "dumpsys", "display"],
            capture_output=True,
            check=False,
        )
    except OSError:
        return None
    return parse_scrcpy_display(out.stdout.decode("utf-8", errors="replace"))