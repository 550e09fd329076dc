"""
ReadPortal - Role-gated reading lesson portal

Streamlit application presenting different screens to students,
teachers and guardians, with reading lessons and comprehension checks.

Usage:
    streamlit run app.py
"""

import asyncio
import logging

import streamlit as st

from readportal.config import load_config
from readportal.errors import ConfigError
from readportal.classroom import (
    EditMode,
    LessonCatalog,
    LessonEditor,
    LessonView,
    Navigator,
    Page,
    ProgressAggregator,
    RouteMatch,
    SessionContext,
    SimulatedBackend,
    ViewState,
    landing_path_for,
    lessons_path_for,
)
from readportal.schemas import Difficulty, Role
from readportal.utils import configure_logging
from readportal.viewer import (
    IN_PROGRESS_PLACEHOLDER_PERCENT,
    build_achievements,
    build_lesson_card,
    build_stat_tiles,
    get_card_css,
    greeting,
    option_label,
    render_achievements,
    render_lesson_card,
    render_lesson_content,
    render_lesson_header,
    render_progress_bar,
    render_question_options,
    render_quiz_score,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="ReadPortal",
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "config" not in st.session_state:
        config = load_config()
        configure_logging(config.log_level)
        st.session_state.config = config

    config = st.session_state.config

    if "catalog" not in st.session_state:
        try:
            st.session_state.catalog = LessonCatalog.from_yaml(config.catalog_path)
            st.session_state.catalog_error = None
        except ConfigError as e:
            logger.error(str(e))
            st.session_state.catalog = LessonCatalog()
            st.session_state.catalog_error = str(e)

    if "session" not in st.session_state:
        st.session_state.session = SessionContext()

    if "navigator" not in st.session_state:
        st.session_state.navigator = Navigator(st.session_state.session)

    if "backend" not in st.session_state:
        st.session_state.backend = SimulatedBackend(
            latency=config.remote_delay,
            failure_rate=config.remote_failure_rate,
        )

    if "view" not in st.session_state:
        st.session_state.view = None
        st.session_state.view_path = None


def go(path: str):
    """Navigate and rerun."""
    st.session_state.navigator.navigate(path)
    st.rerun()


# -----------------------------------------------------------------------------
# View lifetime
# -----------------------------------------------------------------------------

def mount_view(match: RouteMatch):
    """
    Return the view object for the current route, creating it on entry.

    Leaving a path closes its view so pending simulated calls are dropped.
    """
    if st.session_state.view_path == match.path and st.session_state.view is not None:
        return st.session_state.view

    unmount_view()

    config = st.session_state.config
    catalog = st.session_state.catalog
    backend = st.session_state.backend

    if match.page == Page.LESSON_DETAIL:
        view = LessonView(
            match.lesson_id,
            catalog,
            match.capabilities,
            backend=backend,
            load_delay=config.load_delay,
        )
    elif match.page in (Page.LESSON_CREATE, Page.LESSON_EDIT):
        mode = EditMode.CREATE if match.page == Page.LESSON_CREATE else EditMode.EDIT
        view = LessonEditor(mode, catalog, match.capabilities, backend=backend, lesson_id=match.lesson_id)
        view.open()
    else:
        return None

    st.session_state.view = view
    st.session_state.view_path = match.path
    return view


def unmount_view():
    view = st.session_state.view
    if view is not None:
        view.close()
    st.session_state.view = None
    st.session_state.view_path = None


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render identity, role navigation and sign-out."""
    st.sidebar.title("📚 ReadPortal")
    session = st.session_state.session
    identity = session.get_current_identity()

    if identity is None:
        st.sidebar.info("Not signed in.")
        if st.sidebar.button("Sign in", use_container_width=True):
            go("/login")
        return

    st.sidebar.markdown(f"**{identity.username}** ({identity.role})")
    role = identity.known_role
    if role is not None:
        if st.sidebar.button("Dashboard", use_container_width=True):
            go(f"/{role.value}")
        if st.sidebar.button("Lessons", use_container_width=True):
            go(lessons_path_for(role))

    st.sidebar.divider()
    if st.sidebar.button("Sign out", use_container_width=True):
        unmount_view()
        session.logout()
        go("/")


# -----------------------------------------------------------------------------
# Public pages
# -----------------------------------------------------------------------------

def render_home():
    st.title("Welcome to ReadPortal")
    st.markdown("Reading lessons for students, with views for teachers and guardians.")
    if st.button("Sign in", type="primary"):
        go("/login")


def render_login(register: bool = False):
    st.title("Create an account" if register else "Sign in")
    with st.form("login"):
        username = st.text_input("Username")
        role = st.selectbox("I am a", [r.value for r in Role])
        submitted = st.form_submit_button("Register" if register else "Sign in", type="primary")

    if submitted:
        if not username.strip():
            st.error("Username is required")
            return
        st.session_state.session.login(username.strip(), role)
        go(landing_path_for(role))

    if not register and st.button("No account? Register"):
        go("/register")


def render_not_found():
    st.title("Page Not Found")
    st.markdown("The page you're looking for doesn't exist.")
    if st.button("Go home"):
        go("/")


# -----------------------------------------------------------------------------
# Dashboards
# -----------------------------------------------------------------------------

def render_lesson_cards(lessons, match: RouteMatch, key: str, with_progress: bool = False):
    """Render cards in a grid with Open (and, for editors, Edit) buttons."""
    st.markdown(get_card_css(), unsafe_allow_html=True)
    columns = st.columns(3)
    for idx, lesson in enumerate(lessons):
        card = build_lesson_card(lesson, match.capabilities.role, match.capabilities.can_edit_lessons)
        with columns[idx % 3]:
            st.markdown(render_lesson_card(card), unsafe_allow_html=True)
            if with_progress:
                st.markdown(render_progress_bar(IN_PROGRESS_PLACEHOLDER_PERCENT), unsafe_allow_html=True)
            if card.href and st.button("Open", key=f"{key}_{card.lesson_id}"):
                go(card.href)
            if card.edit_href and st.button("Edit", key=f"{key}_edit_{card.lesson_id}"):
                go(card.edit_href)


def render_stat_tiles(slices):
    columns = st.columns(3)
    for column, tile in zip(columns, build_stat_tiles(slices)):
        column.metric(tile.title, tile.value)


def render_dashboard(match: RouteMatch):
    caps = match.capabilities
    aggregator = ProgressAggregator(
        st.session_state.catalog,
        recent_count=st.session_state.config.recent_count,
        in_progress_range=st.session_state.config.in_progress_range,
        completed_range=st.session_state.config.completed_range,
    )
    slices = aggregator.aggregate()

    if caps.role == Role.TEACHER:
        st.title(greeting(caps.username, "Teacher"))
        st.markdown(f"**{slices.total_available} lessons** in the catalog")
        if st.button("Create Lesson", type="primary"):
            go("/teacher/lessons/create")
        st.subheader("Recent Lessons")
        render_lesson_cards(slices.recent, match, "recent")
        return

    st.title(greeting(caps.username, "Student" if caps.role == Role.STUDENT else "Guardian"))
    render_stat_tiles(slices)

    st.subheader("Continue Learning")
    if slices.in_progress:
        render_lesson_cards(slices.in_progress, match, "in_progress", with_progress=True)
    else:
        st.info("No lessons in progress. Start a new lesson!")

    if caps.role == Role.STUDENT:
        st.subheader("New Lessons")
        render_lesson_cards(slices.recent, match, "recent")

    st.subheader("🏆 Achievements")
    st.markdown(render_achievements(build_achievements(slices)), unsafe_allow_html=True)


def render_lesson_list(match: RouteMatch):
    caps = match.capabilities
    st.title("Reading Progress" if caps.role == Role.GUARDIAN else "Lessons")
    if caps.can_edit_lessons and st.button("Create Lesson", type="primary"):
        go("/teacher/lessons/create")
    render_lesson_cards(st.session_state.catalog.list_all(), match, "list")


# -----------------------------------------------------------------------------
# Lesson Detail
# -----------------------------------------------------------------------------

def render_lesson_detail(match: RouteMatch):
    view: LessonView = mount_view(match)

    if view.state == ViewState.LOADING:
        with st.spinner("Loading lesson..."):
            asyncio.run(view.load())

    if view.state == ViewState.FAILED:
        st.error(f"Could not load the lesson: {view.error}")
        if st.button("Retry"):
            with st.spinner("Loading lesson..."):
                asyncio.run(view.load())
            st.rerun()
        return

    if view.state == ViewState.NOT_FOUND:
        st.header("Lesson Not Found")
        st.markdown("The lesson you're looking for doesn't exist or has been removed.")
        if st.button("← Go Back"):
            view.go_back(st.session_state.navigator)
            st.rerun()
        return

    lesson = view.lesson
    if st.button("← Back to lessons"):
        go(view.continue_path)

    if view.completed:
        render_completion_section(view)

    st.markdown(render_lesson_header(lesson), unsafe_allow_html=True)
    if view.show_edit_link and st.button("✏️ Edit"):
        go(view.edit_path)

    st.divider()
    st.subheader("📖 Lesson Content")
    st.markdown(render_lesson_content(lesson))

    if view.show_quiz:
        render_quiz_section(view)


def render_quiz_section(view: LessonView):
    """Render the comprehension check with per-option feedback."""
    st.divider()
    st.subheader("Check Your Understanding")

    for question in view.questions:
        st.markdown(f"**{question.prompt}**")
        st.markdown(
            render_question_options(question, view.answer_for(question.key)),
            unsafe_allow_html=True,
        )
        columns = st.columns(2)
        for idx, option in enumerate(question.options):
            feedback = view.feedback(question.key, option)
            with columns[idx % 2]:
                if st.button(
                    option_label(option, feedback),
                    key=f"quiz_{view.lesson_id}_{question.key}_{option}",
                    use_container_width=True,
                    disabled=view.completed,
                ):
                    view.select_answer(question.key, option)
                    st.rerun()

    if not view.completed:
        if st.button("Mark Lesson as Complete", type="primary", use_container_width=True):
            view.mark_complete()
            st.rerun()


def render_completion_section(view: LessonView):
    """Confirmation shown after completion; navigation waits for the user."""
    st.success(f"**Lesson Complete!** {view.completion_message}")
    st.markdown(render_quiz_score(view.score()), unsafe_allow_html=True)
    if st.button("Continue Learning", type="primary"):
        view.confirm_continue(st.session_state.navigator)
        st.rerun()


# -----------------------------------------------------------------------------
# Lesson Edit
# -----------------------------------------------------------------------------

def render_lesson_edit(match: RouteMatch):
    editor: LessonEditor = mount_view(match)
    navigator = st.session_state.navigator

    if st.button("← Back to lessons"):
        go(editor.list_path)

    st.title(editor.heading)
    if editor.error:
        st.error(editor.error)
    if editor.not_found:
        return

    draft = editor.draft
    difficulties = [d.value for d in Difficulty]
    with st.form("lesson_form"):
        title = st.text_input("Lesson Title *", value=draft.title, placeholder="Enter a descriptive title")
        description = st.text_area(
            "Description *", value=draft.description, height=90,
            placeholder="Briefly describe what this lesson is about",
        )
        difficulty = st.selectbox(
            "Difficulty Level", difficulties, index=difficulties.index(draft.difficulty.value),
        )
        content = st.text_area("Lesson Content", value=draft.content, height=240)
        upload = st.file_uploader("Attachment (optional)", type=["pdf", "docx", "ppt", "pptx"])
        saved = st.form_submit_button(
            "Saving..." if editor.is_submitting else "Save Lesson",
            type="primary",
            disabled=editor.is_submitting,
        )

    if saved:
        editor.update(
            title=title,
            description=description,
            difficulty=difficulty,
            content=content,
            file_name=upload.name if upload else None,
        )
        with st.spinner("Saving..."):
            asyncio.run(editor.submit(navigator))
        st.rerun()

    if editor.can_delete:
        st.divider()
        if editor.confirming_delete:
            st.warning("Are you sure you want to delete this lesson? This action cannot be undone.")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Delete", type="primary"):
                    with st.spinner("Deleting..."):
                        asyncio.run(editor.confirm_delete(navigator))
                    st.rerun()
            with col2:
                if st.button("Cancel"):
                    editor.cancel_delete()
                    st.rerun()
        elif st.button("🗑 Delete Lesson", disabled=editor.is_submitting):
            editor.request_delete()
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

PAGE_RENDERERS = {
    Page.HOME: lambda match: render_home(),
    Page.LOGIN: lambda match: render_login(),
    Page.REGISTER: lambda match: render_login(register=True),
    Page.DASHBOARD: render_dashboard,
    Page.LESSON_LIST: render_lesson_list,
    Page.LESSON_DETAIL: render_lesson_detail,
    Page.LESSON_CREATE: render_lesson_edit,
    Page.LESSON_EDIT: render_lesson_edit,
    Page.NOT_FOUND: lambda match: render_not_found(),
}


def main():
    """Main application entry point."""
    init_session_state()

    if st.session_state.catalog_error:
        st.sidebar.error(f"Lesson catalog unavailable: {st.session_state.catalog_error}")

    # Guards are re-evaluated on every run
    match = st.session_state.navigator.resolve()
    if st.session_state.view_path != match.path:
        unmount_view()

    render_sidebar()
    PAGE_RENDERERS[match.page](match)


if __name__ == "__main__":
    main()
