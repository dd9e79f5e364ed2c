"""Logcat line parsing, filtering and the background logcat reader."""

from __future__ import annotations

import subprocess
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

INITIAL_LOGCAT_TAIL_LINES = "10000"

_LEVEL_COLORS = {
    "D": "cyan",
    "I": "green",
    "W": "yellow",
    "E": "red",
    "V": "blue",
    "F": "red",
}

TAG_COLORS = (
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "light_red",
    "light_green",
    "light_yellow",
    "light_blue",
    "light_magenta",
    "light_cyan",
)


@dataclass
class LogEntry:
    """One parsed logcat line."""

    raw: str
    timestamp: str
    pid: str
    tag: str
    level: str
    message: str
    # First line of a detected crash / ANR block.
    crash_start: bool = False
    is_stack_trace: bool = False
    # Lowercased "tag level message raw", used for filter and exclude matching.
    cached_search_text: str = ""


@dataclass
class CrashEvent:
    """A captured crash or ANR block."""

    timestamp: str
    summary: str
    lines: list[LogEntry] = field(default_factory=list)


def parse_log_line(line: str) -> LogEntry | None:
    """Parse a `logcat -v threadtime` line; return None if it has too few fields."""
    parts = line.split()
    if len(parts) < 6:
        return None

    time, _, fraction = parts[1].partition(".")
    millis = (fraction if "." in parts[1] else "000")[:3].ljust(3, "0")
    timestamp = f"{time}.{millis}"

    pid = parts[2]
    level = parts[4]
    tag_and_message = " ".join(parts[5:])
    pos = tag_and_message.find(": ")
    if pos >= 0:
        tag = tag_and_message[:pos].strip().rstrip(":")
        message = tag_and_message[pos:]
        while message.startswith(": "):
            message = message[2:]
    else:
        tag = tag_and_message
        message = ""

    return LogEntry(
        raw=line,
        timestamp=timestamp,
        pid=pid,
        tag=tag,
        level=level,
        message=message,
        is_stack_trace=looks_like_stack_trace(message) or looks_like_stack_trace(line),
        cached_search_text=f"{tag} {level} {message} {line}".lower(),
    )


def is_crash_start(entry: LogEntry) -> bool:
    """Detect the first line of a Java crash or ANR."""
    message = entry.message.lower()
    raw = entry.raw.lower()
    return any(
        marker in message or marker in raw
        for marker in ("fatal exception", "anr in ", "crash:")
    )


def is_crash_continuation(entry: LogEntry) -> bool:
    """Detect lines that belong to a crash block already in progress."""
    if is_crash_start(entry):
        return False
    return (
        looks_like_stack_trace(entry.message)
        or looks_like_stack_trace(entry.raw)
        or entry.message.lstrip().startswith("at ")
        or "Caused by:" in entry.message
        or "Suppressed:" in entry.message
        or entry.tag in ("AndroidRuntime", "System.err")
    )


def level_style(level: str) -> str:
    """Return the colour name used for a log level."""
    return _LEVEL_COLORS.get(level, "gray")


def tag_color(tag: str, cache: dict[str, int]) -> str:
    """Assign colours to tags in order of first appearance, cycling the palette."""
    index = cache.setdefault(tag, len(cache))
    return TAG_COLORS[index % len(TAG_COLORS)]


@dataclass
class LogcatFilter:
    """Runtime filter applied to parsed log entries."""

    # When true and a PID list is given, only lines from those PIDs pass.
    filter_by_application_ids: bool = False
    tag_substrings: list[str] = field(default_factory=list)
    levels: str | None = None
    content: str | None = None
    # A line is dropped if any of these occurs in tag/message/raw (case-insensitive).
    exclude_substrings: list[str] = field(default_factory=list)

    def allows(self, entry: LogEntry, pids: Sequence[str]) -> bool:
        """Return whether the entry passes every part of the filter."""
        if self.filter_by_application_ids and pids and entry.pid not in pids:
            return False
        if self.tag_substrings:
            tag = entry.tag.lower()
            if not any(t and t.lower() in tag for t in self.tag_substrings):
                return False
        if not matches_level_filter(self.levels, entry.level):
            return False
        haystack = f"{entry.tag} {entry.message} {entry.raw}".lower()
        if self.content and self.content.lower() not in haystack:
            return False
        return not any(e and e.lower() in haystack for e in self.exclude_substrings)


def matches_level_filter(levels: str | None, level: str) -> bool:
    """Check a level against a comma-separated list; empty or None allows all."""
    if not levels:
        return True
    return any(item.strip() == level for item in levels.split(","))


def logcat_reader_args(device: str) -> list[str]:
    """Arguments for following logcat on a device from a bounded tail."""
    return ["-s", device, "logcat", "-T", INITIAL_LOGCAT_TAIL_LINES, "-v", "threadtime"]


def _pump(stream: IO[str], sink: Callable[[str], object], prefix: str, stop_on_error: bool) -> None:
    try:
        for line in stream:
            try:
                sink(prefix + line.rstrip())
            except Exception:
                if stop_on_error:
                    break
    finally:
        stream.close()


def spawn_logcat_reader(
    adb_path: str | Path, device: str, sink: Callable[[str], object]
) -> subprocess.Popen[str]:
    """Start `adb logcat` and feed each output line to `sink` from background threads."""
    child = subprocess.Popen(
        [str(adb_path), *logcat_reader_args(device)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    assert child.stdout is not None and child.stderr is not None
    threading.Thread(
        target=_pump, args=(child.stdout, sink, "", True), daemon=True
    ).start()
    threading.Thread(
        target=_pump, args=(child.stderr, sink, "[adb logcat stderr] ", False), daemon=True
    ).start()
    return child


def matches_any_exclude_with_cached(excludes: Sequence[str], entry: LogEntry) -> bool:
    """Check excludes against the entry's precomputed search text."""
    return any(e and e.lower() in entry.cached_search_text for e in excludes)


def looks_like_stack_trace(line: str) -> bool:
    """Heuristic for stack trace or exception lines."""
    stripped = line.lstrip()
    return (
        stripped.startswith("at ")
        or "Exception" in line
        or "Error:" in line
        or stripped.startswith("Caused by:")
    )