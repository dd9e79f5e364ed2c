"""Gradle / gradlew subprocess runner."""

from __future__ import annotations

import os
import shutil
import subprocess
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO


def find_gradle(project_root: str | Path) -> Path | None:
    """Prefer the project's gradlew wrapper, then a `gradle` on PATH."""
    root = Path(project_root)
    for name in ("gradlew", "gradlew.bat"):
        candidate = root / name
        if candidate.is_file():
            return candidate
    found = shutil.which("gradle")
    return Path(found) if found else None


@dataclass
class GradleSpawn:
    """A running Gradle process and the threads forwarding its output."""

    child: subprocess.Popen[str]
    readers: tuple[threading.Thread, ...] = field(default_factory=tuple)


def _pump(stream: IO[str], sink: Callable[[str], object], prefix: str) -> None:
    try:
        for line in stream:
            try:
                sink(f"{prefix} {line.rstrip()}")
            except Exception:
                break
    finally:
        stream.close()


def spawn_gradle(
    gradle: str | Path,
    project_root: str | Path,
    tasks: Sequence[str],
    android_serial: str | None,
    sink: Callable[[str], object],
) -> GradleSpawn:
    """Run Gradle tasks in the project root, sending tagged output lines to `sink`."""
    env = os.environ.copy()
    if android_serial is not None:
        env["ANDROID_SERIAL"] = android_serial
    try:
        child = subprocess.Popen(
            [str(gradle), *tasks],
            cwd=str(project_root),
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise RuntimeError(f"gradlew/gradle spawn failed: {exc}") from exc

    assert child.stdout is not None and child.stderr is not None
    readers = tuple(
        threading.Thread(target=_pump, args=(stream, sink, prefix), daemon=True)
        for stream, prefix in ((child.stdout, "[stdout]"), (child.stderr, "[stderr]"))
    )
    for reader in readers:
        reader.start()
    return GradleSpawn(child=child, readers=readers)