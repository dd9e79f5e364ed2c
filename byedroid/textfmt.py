"""Text layout helpers for the terminal views: truncation, wrapping, padding, centring."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

ELLIPSIS = "…"
NO_BUILDS_MESSAGE = "No builds yet — use b / i / n"


@dataclass(frozen=True)
class Rect:
    """A rectangular screen area in terminal cells."""

    x: int
    y: int
    width: int
    height: int


def truncate(text: str, limit: int) -> str:
    """Shorten text to at most `limit` characters, ending in an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)] + ELLIPSIS


def word_wrap(msg: str, max_chars: int) -> list[str]:
    """Split a message into chunks of at most `max_chars`, preferring to break at spaces."""
    if max_chars == 0 or len(msg) <= max_chars:
        return [msg]
    lines: list[str] = []
    remaining = msg
    while remaining:
        if len(remaining) <= max_chars:
            lines.append(remaining)
            break
        split_at = remaining[:max_chars].rfind(" ")
        if split_at < 0:
            split_at = max_chars
        lines.append(remaining[:split_at])
        remaining = remaining[split_at:].lstrip(" ")
    return lines


def right_pad(text: str, width: int) -> str:
    """Pad text with spaces to exactly `width` characters, cutting it if longer."""
    if len(text) >= width:
        return text[:width]
    return text.ljust(width)


def centered_rect(width: int, height: int, area: Rect) -> Rect:
    """Return a rect of the given size centred within `area`, clipped to it."""
    return Rect(
        x=area.x + max(area.width - width, 0) // 2,
        y=area.y + max(area.height - height, 0) // 2,
        width=min(width, area.width),
        height=min(height, area.height),
    )


def build_history_summary(durations: Sequence[float]) -> str:
    """Summarise build durations in seconds (oldest first): count, average and last."""
    if not durations:
        return NO_BUILDS_MESSAGE
    count = len(durations)
    average = sum(durations) / count
    last = durations[-1]
    return f"{count} builds  ·  avg {average:.1f}s  ·  last {last:.1f}s"