"""
Quiz renderer - Option styling for the comprehension check.

Provides:
- CSS classes per feedback state (green correct, red incorrect, neutral)
- Per-question option grid
- Score display
"""

import html
from typing import Optional

from readportal.classroom import Feedback, QuizQuestion, option_feedback


FEEDBACK_STYLES = {
    Feedback.CORRECT: {"background": "#E8F5E9", "border": "#4CAF50"},
    Feedback.INCORRECT: {"background": "#FFEBEE", "border": "#F44336"},
    Feedback.NEUTRAL: {"background": "#FFFFFF", "border": "#E0E0E0"},
}

FEEDBACK_ICONS = {
    Feedback.CORRECT: "✅",
    Feedback.INCORRECT: "❌",
    Feedback.NEUTRAL: "",
}


def option_label(option: str, feedback: Feedback) -> str:
    """Button label with the feedback icon appended."""
    icon = FEEDBACK_ICONS[feedback]
    return f"{option} {icon}" if icon else option


def render_option(option: str, feedback: Feedback) -> str:
    """Render an option as a bordered box in its feedback colour."""
    style = FEEDBACK_STYLES[feedback]
    return (
        f'<div class="quiz-option quiz-option-{feedback.value}" '
        f'style="background:{style["background"]};border:2px solid {style["border"]};'
        f'border-radius:8px;padding:0.6em;">{html.escape(option)}</div>'
    )


def render_quiz_score(score_info: dict) -> str:
    """Render quiz score display."""
    return f"""
    <div style="background:#e8f5e9;border-radius:8px;padding:1em;margin-top:1.5em;text-align:center;">
        <div style="font-size:2em;font-weight:700;color:#388E3C;">{score_info['percent']}%</div>
        <div style="color:#666;font-size:0.9em;">{score_info['correct']} of {score_info['total']} correct</div>
    </div>
    """


def render_question_options(question: QuizQuestion, selected: Optional[str]) -> str:
    """Render every option of a question, coloured against the current answer."""
    parts = ['<div style="display:grid;grid-template-columns:1fr 1fr;gap:0.5em;">']
    for option in question.options:
        parts.append(render_option(option, option_feedback(question.key, option, selected)))
    parts.append('</div>')
    return ''.join(parts)
