"""
SkillBridge Learning Platform - Streamlit Application

Presentation shell for the learning platform: catalog browsing, mock
enrollment, lesson progress and the AI tutor chat. All state lives in a
LearningSession kept in st.session_state; this module only renders it and
forwards user actions to its named operations.
"""

import asyncio
import logging
import time

import streamlit as st

from app_config import load_config
from conversation_manager import ChatRole
from course_catalog import Category, Course, LearningError, NotFound
from enrollment_engine import CourseState, InsufficientFunds, course_state
from learning_session import LearningSession
from view_navigator import ViewMode

# ----------------------------------
# Logging
# ----------------------------------
CONFIG = load_config()
logging.basicConfig(level=getattr(logging, CONFIG.log_level, logging.INFO))
logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All categories"


class StreamlitApp:
    """Main Streamlit application rendering the active view of a learning session"""

    def __init__(self):
        self._setup_page_config()
        self._initialize_session_state()
        self.session: LearningSession = st.session_state.learning_session

    def _setup_page_config(self):
        """Set up Streamlit page configuration"""
        st.set_page_config(
            page_title="SkillBridge Academy",
            page_icon="⚡",
            layout="wide",
            initial_sidebar_state="expanded",
        )

    def _initialize_session_state(self):
        """Create the learning session once per browser session"""
        if "learning_session" not in st.session_state:
            st.session_state.learning_session = LearningSession.from_config(CONFIG)
        if "notice" not in st.session_state:
            st.session_state.notice = None

    def _notify(self, level: str, message: str):
        """Queue a notice to show after the next rerun"""
        st.session_state.notice = (level, message)

    def _render_notice(self):
        notice = st.session_state.notice
        if not notice:
            return
        level, message = notice
        getattr(st, level)(message)
        st.session_state.notice = None

    def _run_action(self, action, *args):
        """Apply a session action, turning platform errors into notices"""
        try:
            return action(*args)
        except NotFound as e:
            logger.error(f"Data error during {action.__name__}: {e}")
            self._notify("error", "Something went wrong loading that item.")
        except LearningError as e:
            self._notify("warning", str(e))
        return None

    # ----------------------------------
    # Sidebar
    # ----------------------------------

    def render_sidebar(self):
        """Render navigation and account summary"""
        with st.sidebar:
            st.markdown("## ⚡ SkillBridge")
            if st.button("Home", use_container_width=True):
                self.session.go_home()
                st.rerun()

            if not self.session.user.is_logged_in:
                if st.button("Login", type="primary", use_container_width=True):
                    self.session.login()
                    st.rerun()
                return

            st.markdown("---")
            for label, action, mode in (
                ("📊 Dashboard", self.session.open_dashboard, ViewMode.DASHBOARD),
                ("📚 Catalog", self.session.open_catalog, ViewMode.CATALOG),
                ("👤 Profile", self.session.open_profile, ViewMode.PROFILE),
            ):
                active = self.session.view == mode
                if st.button(label, use_container_width=True, type="primary" if active else "secondary"):
                    self._run_action(action)
                    st.rerun()

            st.markdown("---")
            st.metric("Balance", f"${self.session.user.balance:.2f}")
            st.caption(self.session.user.name)
            if st.button("Logout", use_container_width=True):
                self.session.logout()
                st.rerun()

    # ----------------------------------
    # Views
    # ----------------------------------

    def render_landing(self):
        st.title("Bridge the Gap Between Learning and Doing")
        st.markdown(
            "Join 5,000+ students mastering Computer Basics, Microsoft Office, and "
            "Full-Stack Web Development on the world's most intuitive LMS."
        )
        if st.button("Start Learning Now", type="primary"):
            self.session.login()
            st.rerun()

        col1, col2, col3 = st.columns(3)
        col1.markdown("**Track Progress**  \nSee how far you've come in every course.")
        col2.markdown("**AI Tutor**  \nAsk questions about any lesson, any time.")
        col3.markdown("**Simple Payments**  \nUnlock courses straight from your balance.")

    def render_dashboard(self):
        summary = self.session.dashboard_summary()
        st.header(f"Welcome back, {self.session.user.name.split()[0]}!")

        col1, col2, col3 = st.columns(3)
        col1.metric("Enrolled", summary.enrolled_count)
        col2.metric("Completed", summary.completed_count)
        col3.metric("Certificates", summary.certificate_count)

        st.markdown("### 📈 Learning Progress")
        if summary.progress_chart:
            st.bar_chart({bar.label: bar.progress for bar in summary.progress_chart})
        else:
            st.info("Enroll in a course to see your progress here.")
            if st.button("Browse Catalog"):
                self._run_action(self.session.open_catalog)
                st.rerun()

        st.markdown("### ▶️ Continue Learning")
        if not summary.in_progress:
            st.caption("No courses in progress.")
        for course in summary.in_progress:
            col_title, col_btn = st.columns([4, 1])
            col_title.markdown(f"**{course.title}**")
            col_title.progress(course.progress / 100, text=f"{course.progress}% complete")
            if col_btn.button("Continue", key=f"continue_{course.id}"):
                self._run_action(self.session.open_course, course.id)
                st.rerun()

    def render_catalog(self):
        st.header("📚 Course Catalog")
        col_search, col_category = st.columns([3, 1])
        query = col_search.text_input("Search courses...", key="catalog_query")
        categories = [ALL_CATEGORIES] + [c.value for c in self.session.catalog.categories()]
        selected = col_category.selectbox("Category", categories, key="catalog_category")
        category = None if selected == ALL_CATEGORIES else Category(selected)

        courses = self.session.catalog.search(query, category)
        if not courses:
            st.info("No courses match your search.")
            return

        columns = st.columns(2)
        for idx, course in enumerate(courses):
            with columns[idx % 2]:
                self._render_course_card(course)

    def _render_course_card(self, course: Course):
        with st.container(border=True):
            st.image(course.thumbnail, use_container_width=True)
            st.caption(course.category.value)
            st.markdown(f"### {course.title}")
            st.markdown(course.description)
            st.markdown(f"**${course.price:.2f}** · {len(course.lessons)} lessons")
            label = "Continue" if course.enrolled else "View Details"
            if st.button(label, key=f"open_{course.id}"):
                self._run_action(self.session.open_course, course.id)
                st.rerun()

    def render_course_detail(self):
        course = self.session.selected_course
        if course is None:
            st.error("Selected course not found.")
            return

        back_label = "Dashboard" if course.enrolled else "Catalog"
        if st.button(f"← Back to {back_label}"):
            self._run_action(self.session.leave_course)
            st.rerun()

        st.caption(course.category.value)
        st.header(course.title)
        st.markdown(course.description)

        col_main, col_lessons = st.columns([2, 1])
        with col_main:
            self._render_lesson_content(course)
            if course.enrolled:
                self._render_tutor_chat(course)
        with col_lessons:
            self._render_lesson_list(course)

    def _render_lesson_content(self, course: Course):
        lesson = self.session.selected_lesson
        if lesson is not None:
            st.markdown(f"### {lesson.title}")
            st.caption(lesson.duration)
            st.markdown(lesson.content)
        elif course.enrolled:
            st.info("Select a lesson to start learning.")

        if course.enrolled:
            state = course_state(course)
            st.progress(course.progress / 100, text=f"{course.progress}% complete")
            if state == CourseState.COMPLETE:
                st.success("🏆 Course complete!")
            return

        st.warning("🔒 This course is locked. Preview the first lesson or enroll to unlock everything.")
        pending = self.session.engine.is_pending(course.id)
        if st.button(f"💳 Enroll Now · ${course.price:.2f}", type="primary", disabled=pending):
            self._enroll(course)

    def _enroll(self, course: Course):
        try:
            with st.spinner("Processing..."):
                receipt = asyncio.run(self.session.enroll(course.id))
        except InsufficientFunds:
            self._notify("error", "Insufficient balance! Please add funds.")
        except LearningError as e:
            logger.error(f"Enrollment failed: {e}")
            self._notify("error", str(e))
        else:
            if receipt.charged:
                self._notify("success", f"Successfully enrolled in {receipt.course_title}!")
        st.rerun()

    def _render_lesson_list(self, course: Course):
        st.markdown("### Course Content")
        viewable = {lesson.id for lesson in self.session.catalog.viewable_lessons(course)}
        for idx, lesson in enumerate(course.lessons):
            marker = "✅" if lesson.completed else f"{idx + 1}."
            locked = lesson.id not in viewable
            col_open, col_done = st.columns([4, 1])
            if col_open.button(
                f"{marker} {lesson.title} ({lesson.duration})" + (" 🔒" if locked else ""),
                key=f"lesson_{lesson.id}",
                disabled=locked,
                use_container_width=True,
            ):
                self._run_action(self.session.select_lesson, lesson.id)
                st.rerun()
            if course.enrolled and col_done.button(
                "↺" if lesson.completed else "✓",
                key=f"toggle_{lesson.id}",
                help="Mark incomplete" if lesson.completed else "Mark complete",
            ):
                self._run_action(self.session.toggle_lesson, course.id, lesson.id)
                st.rerun()

    def _render_tutor_chat(self, course: Course):
        """Render the AI tutor transcript and input"""
        st.markdown("---")
        st.markdown("### 💬 AI Tutor")
        turns = self.session.conversation.turns
        if not turns:
            st.caption(f"Ask anything about {course.title}.")
        else:
            summary = self.session.conversation.get_context_summary()
            st.caption(f"Questions asked this session: {summary['questions_asked']}")
        for turn in turns:
            with st.chat_message("user" if turn.role == ChatRole.USER else "assistant"):
                st.markdown(turn.text)

        waiting = self.session.conversation.is_waiting
        if prompt := st.chat_input("Type your question...", disabled=waiting):
            with st.spinner("Tutor is thinking..."):
                t0 = time.time()
                asyncio.run(self.session.ask_tutor(prompt))
                logger.info(f"Tutor reply in {time.time() - t0:.1f}s")
            st.rerun()

    def render_profile(self):
        user = self.session.user
        st.header("👤 Profile")
        col_avatar, col_info = st.columns([1, 3])
        col_avatar.image(user.avatar, width=100)
        col_info.markdown(f"**{user.name}**  \n{user.email}")
        col_info.metric("Balance", f"${user.balance:.2f}")

        st.markdown("### Enrolled Courses")
        enrolled = self.session.catalog.enrolled_courses()
        if not enrolled:
            st.caption("You have not enrolled in any courses yet.")
        for course in enrolled:
            st.markdown(f"- {course.title}: {course.progress}%")

    def run(self):
        """Main application entry point"""
        self.render_sidebar()
        self._render_notice()

        views = {
            ViewMode.LANDING: self.render_landing,
            ViewMode.DASHBOARD: self.render_dashboard,
            ViewMode.CATALOG: self.render_catalog,
            ViewMode.COURSE_DETAIL: self.render_course_detail,
            ViewMode.PROFILE: self.render_profile,
        }
        views[self.session.view]()

        st.markdown("---")
        st.markdown(
            f"""
        <div style='text-align: center; color: gray;'>
            <small>© {time.strftime('%Y')} SkillBridge Academy. All rights reserved.</small>
        </div>
        """,
            unsafe_allow_html=True,
        )


# Application entry point
if __name__ == "__main__":
    app = StreamlitApp()
    app.run()
