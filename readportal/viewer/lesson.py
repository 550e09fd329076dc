"""
Lesson renderer - Lesson detail header, metadata and content.
"""

import html
from datetime import datetime

from readportal.schemas import Lesson


def format_date(value: datetime) -> str:
    """Long US date, e.g. "January 5, 2024"."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def lesson_metadata(lesson: Lesson) -> list[tuple[str, str]]:
    """(label, value) pairs shown under the lesson title."""
    return [
        ("Difficulty", lesson.difficulty),
        ("Created By", lesson.uploaded_by),
        ("Date", format_date(lesson.created_at)),
    ]


def render_lesson_header(lesson: Lesson) -> str:
    """Render title, metadata boxes, description and attachment link."""
    parts = [f'<h1>{html.escape(lesson.title)}</h1>']
    parts.append('<div style="display:flex;gap:1em;flex-wrap:wrap;">')
    for label, value in lesson_metadata(lesson):
        parts.append(
            '<div style="background:#F5F5F5;padding:0.5em 1em;border-radius:8px;">'
            f'<div style="font-size:0.8em;color:#888;">{html.escape(label)}</div>'
            f'<div>{html.escape(value)}</div>'
            '</div>'
        )
    parts.append('</div>')
    parts.append(f'<p>{html.escape(lesson.description)}</p>')
    if lesson.file_path:
        parts.append(f'<p>⬇ <a href="{html.escape(lesson.file_path)}">Download lesson materials</a></p>')
    return ''.join(parts)


def render_lesson_content(lesson: Lesson) -> str:
    """Lesson body as markdown; the content field is authored in markdown."""
    return lesson.content.strip() or "_This lesson has no content yet._"
