"""
Lesson card renderer - Compact lesson cards for dashboards and lists.

Provides:
- Description truncation
- Difficulty badge colours
- Card HTML with badge and uploader attribution
"""

import html
from dataclasses import dataclass
from typing import Optional

from readportal.classroom import lesson_path
from readportal.schemas import Lesson, Role


DESCRIPTION_LIMIT = 60

DIFFICULTY_COLORS = {
    "easy": "green",
    "medium": "yellow",
    "hard": "red",
}
NEUTRAL_COLOR = "gray"

BADGE_STYLES = {
    "green": ("#E8F5E9", "#2E7D32"),
    "yellow": ("#FFF8E1", "#F57F17"),
    "red": ("#FFEBEE", "#C62828"),
    "gray": ("#F5F5F5", "#616161"),
}


def truncate_description(text: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    """First `limit` characters, with an ellipsis only when something was cut."""
    text = text or ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def difficulty_color(difficulty: object) -> str:
    """Badge colour for a difficulty; anything unrecognised is neutral."""
    if not isinstance(difficulty, str):
        difficulty = getattr(difficulty, "value", None)
    if not isinstance(difficulty, str):
        return NEUTRAL_COLOR
    return DIFFICULTY_COLORS.get(difficulty.strip().lower(), NEUTRAL_COLOR)


@dataclass
class LessonCard:
    """Everything a card displays."""
    lesson_id: str
    title: str
    summary: str
    difficulty: str
    badge_color: str
    uploaded_by: str
    href: Optional[str]
    edit_href: Optional[str] = None


def build_lesson_card(lesson: Lesson, role: Optional[Role] = None, can_edit: bool = False) -> LessonCard:
    """Card data for a lesson; links only for roles with a lesson detail route."""
    href = None
    edit_href = None
    if role in (Role.STUDENT, Role.TEACHER):
        href = lesson_path(role, lesson.id)
        if can_edit:
            edit_href = lesson_path(role, lesson.id, "edit")
    return LessonCard(
        lesson_id=lesson.id,
        title=lesson.title,
        summary=truncate_description(lesson.description),
        difficulty=lesson.difficulty,
        badge_color=difficulty_color(lesson.difficulty),
        uploaded_by=lesson.uploaded_by,
        href=href,
        edit_href=edit_href,
    )


def get_card_css() -> str:
    """Get CSS styles for lesson cards."""
    badges = "\n".join(
        f"    .badge-{name} {{ background: {bg}; color: {fg}; }}"
        for name, (bg, fg) in BADGE_STYLES.items()
    )
    return f"""
    <style>
    .lesson-card {{
        background: white;
        border-radius: 12px;
        padding: 1em;
        margin: 0.5em 0;
        box-shadow: 0 1px 3px rgba(0,0,0,0.08);
    }}
    .lesson-card-title {{
        font-weight: 700;
        color: #333;
    }}
    .lesson-card-by {{
        font-size: 0.8em;
        color: #888;
    }}
    .lesson-card-summary {{
        font-size: 0.9em;
        color: #555;
        margin-top: 0.5em;
    }}
    .badge {{
        font-size: 0.75em;
        font-weight: 500;
        padding: 0.1em 0.5em;
        border-radius: 4px;
        float: right;
    }}
{badges}
    </style>
    """


def render_lesson_card(card: LessonCard) -> str:
    """Render a lesson card as HTML."""
    title = html.escape(card.title)

    parts = ['<div class="lesson-card">']
    parts.append(f'<span class="badge badge-{card.badge_color}">{html.escape(card.difficulty)}</span>')
    parts.append(f'<div class="lesson-card-title">{title}</div>')
    parts.append(f'<div class="lesson-card-by">By {html.escape(card.uploaded_by)}</div>')
    parts.append(f'<div class="lesson-card-summary">{html.escape(card.summary)}</div>')
    parts.append('</div>')
    return ''.join(parts)
