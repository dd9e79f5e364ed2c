"""Text shown in the top info bar and the bottom status line."""

from __future__ import annotations

_TASK_PREFIXES = ("assemble", "install")


def short_task(task: str) -> str:
    """Drop a leading `assemble` or `install` from a Gradle task name."""
    for prefix in _TASK_PREFIXES:
        if task.startswith(prefix):
            return task[len(prefix) :]
    return task


def android_version_label(release: str, sdk: str) -> str:
    """Describe a device's Android release and API level; empty if both are unknown."""
    if release and sdk:
        return f"  Android {release}  API {sdk}"
    if release:
        return f"  Android {release}"
    if sdk:
        return f"  API {sdk}"
    return ""


def line_count_label(count: int) -> str:
    """Show a log line count, in thousands once it reaches 1,000."""
    shown = f"{count // 1000}k" if count >= 1_000 else str(count)
    return f"{shown} lines"


def crash_count_label(count: int) -> str:
    """Describe how many crashes were seen; empty when there were none."""
    if count <= 0:
        return ""
    return f"{count} crash{'' if count == 1 else 'es'}"


def build_action_label(task: str, launch_after_build: bool) -> str:
    """Banner text for a running build or install."""
    action = "INSTALLING" if task.startswith("install") else "BUILDING"
    return f"{action} + LAUNCHING" if launch_after_build else action


def status_text(
    build_task: str | None,
    log_scroll: int,
    new_lines_while_scrolled: int,
    paused: bool,
    device_count: int,
    log_line_count: int,
) -> str:
    """The dim status line, picking the most relevant state to report."""
    if build_task is not None:
        return f"Building: {build_task} …"
    if log_scroll > 0:
        if new_lines_while_scrolled > 0:
            return (
                f"{new_lines_while_scrolled} logs behind  —  End or G to jump to bottom"
            )
        return f"Scrolled ↑{log_scroll}  —  End or G to follow tail"
    if paused:
        return "Logcat PAUSED  —  Space to resume"
    if device_count == 0:
        return "No devices — connect one"
    plural = "" if device_count == 1 else "s"
    return f"{device_count} device{plural}  ·  {log_line_count} log lines"