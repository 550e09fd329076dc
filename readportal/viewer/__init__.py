"""
ReadPortal Viewer - Rendering helpers for the Streamlit shell.

This module provides:
- Lesson cards with truncated descriptions and difficulty badges
- Dashboard stat tiles and achievements
- Lesson detail header and content
- Quiz option feedback styling
"""

from .cards import (
    DESCRIPTION_LIMIT,
    DIFFICULTY_COLORS,
    NEUTRAL_COLOR,
    LessonCard,
    build_lesson_card,
    difficulty_color,
    get_card_css,
    render_lesson_card,
    truncate_description,
)

from .dashboard import (
    IN_PROGRESS_PLACEHOLDER_PERCENT,
    Achievement,
    StatTile,
    build_achievements,
    build_stat_tiles,
    greeting,
    render_achievements,
    render_progress_bar,
)

from .lesson import (
    format_date,
    lesson_metadata,
    render_lesson_content,
    render_lesson_header,
)

from .quiz import (
    FEEDBACK_STYLES,
    option_label,
    render_question_options,
    render_option,
    render_quiz_score,
)

__all__ = [
    # Cards
    "DESCRIPTION_LIMIT",
    "DIFFICULTY_COLORS",
    "NEUTRAL_COLOR",
    "LessonCard",
    "build_lesson_card",
    "difficulty_color",
    "get_card_css",
    "render_lesson_card",
    "truncate_description",
    # Dashboard
    "IN_PROGRESS_PLACEHOLDER_PERCENT",
    "Achievement",
    "StatTile",
    "build_achievements",
    "build_stat_tiles",
    "greeting",
    "render_achievements",
    "render_progress_bar",
    # Lesson
    "format_date",
    "lesson_metadata",
    "render_lesson_content",
    "render_lesson_header",
    # Quiz
    "FEEDBACK_STYLES",
    "option_label",
    "render_question_options",
    "render_option",
    "render_quiz_score",
]
