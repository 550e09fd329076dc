"""
Dashboard renderer - Stat tiles, in-progress cards and achievements.

The in-progress percentage is a fixed placeholder; no per-lesson
progress is tracked.
"""

import html
from dataclasses import dataclass

from readportal.schemas import ProgressSlices


IN_PROGRESS_PLACEHOLDER_PERCENT = 35


@dataclass
class StatTile:
    title: str
    value: int
    color: str


@dataclass
class Achievement:
    title: str
    subtitle: str
    earned: bool


def build_stat_tiles(slices: ProgressSlices) -> list[StatTile]:
    """The three progress overview tiles."""
    return [
        StatTile("Lessons Completed", len(slices.completed), "green"),
        StatTile("In Progress", len(slices.in_progress), "yellow"),
        StatTile("Available Lessons", slices.total_available, "blue"),
    ]


def build_achievements(slices: ProgressSlices) -> list[Achievement]:
    """One achievement per completed lesson, plus the upcoming placeholder."""
    if not slices.completed:
        return []
    achievements = [Achievement(lesson.title, "Completed", True) for lesson in slices.completed]
    achievements.append(Achievement("Reading Pro", "Coming soon", False))
    return achievements


def greeting(username: str | None, fallback: str = "Student") -> str:
    return f"Hello, {username or fallback}!"


def render_progress_bar(percent: int = IN_PROGRESS_PLACEHOLDER_PERCENT) -> str:
    """Render an in-progress bar."""
    percent = max(0, min(100, percent))
    return (
        '<div style="background:#E0E0E0;border-radius:8px;height:8px;">'
        f'<div style="background:#FBC02D;border-radius:8px;height:8px;width:{percent}%;"></div>'
        '</div>'
        f'<div style="font-size:0.75em;color:#888;">{percent}% complete</div>'
    )


def render_achievements(achievements: list[Achievement]) -> str:
    """Render the achievements grid."""
    if not achievements:
        return '<p>Complete lessons to earn achievements!</p>'
    parts = ['<div style="display:flex;flex-wrap:wrap;gap:1em;">']
    for item in achievements:
        opacity = "1" if item.earned else "0.5"
        parts.append(
            f'<div style="text-align:center;opacity:{opacity};">'
            f'<div style="font-size:2em;">🏅</div>'
            f'<div><b>{html.escape(item.title)}</b></div>'
            f'<div style="font-size:0.8em;color:#888;">{html.escape(item.subtitle)}</div>'
            '</div>'
        )
    parts.append('</div>')
    return ''.join(parts)
