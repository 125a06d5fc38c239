"""
Learning Session

The per-learner state aggregate. Presentation code holds one
``LearningSession`` and changes state only through its named operations.
"""

import logging
from typing import Optional

from app_config import AppConfig
from conversation_manager import ConversationManager
from course_catalog import CatalogStore, Course, Lesson
from dashboard_stats import DashboardSummary, summarize
from enrollment_engine import CourseLocked, EnrollmentEngine, EnrollmentReceipt
from tutor_gateway import TutorGateway
from user_profile import InMemoryRecordStore, User, UserAccount, UserRecordStore, default_user, read_saved_user
from view_navigator import NavigationError, Navigator, ViewMode

logger = logging.getLogger(__name__)


class LearningSession:
    """Owns the user, catalog overlay, transcript and current view for one learner"""

    def __init__(
        self,
        tutor_gateway: TutorGateway,
        catalog: Optional[CatalogStore] = None,
        account: Optional[UserAccount] = None,
        record_store: Optional[UserRecordStore] = None,
        payment_delay: Optional[float] = None,
    ):
        self.catalog = catalog if catalog is not None else CatalogStore()
        self.account = account if account is not None else UserAccount()
        self.tutor_gateway = tutor_gateway
        self.conversation = ConversationManager()
        self.navigator = Navigator(self.account)
        if payment_delay is None:
            self.engine = EnrollmentEngine(self.catalog, self.account)
        else:
            self.engine = EnrollmentEngine(self.catalog, self.account, payment_delay=payment_delay)
        self.selected_lesson_id: Optional[str] = None

        self.record_store = record_store if record_store is not None else InMemoryRecordStore()
        read_saved_user(self.record_store)

    @classmethod
    def from_config(cls, config: AppConfig, record_store: Optional[UserRecordStore] = None) -> "LearningSession":
        gateway = TutorGateway.from_api_key(
            config.google_ai_api_key,
            model_name=config.tutor_model,
            timeout=config.tutor_timeout_seconds,
        )
        return cls(
            tutor_gateway=gateway,
            account=UserAccount(default_user(balance=config.starting_balance)),
            record_store=record_store,
            payment_delay=config.payment_delay_seconds,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def user(self) -> User:
        return self.account.user

    @property
    def view(self) -> ViewMode:
        return self.navigator.mode

    @property
    def selected_course(self) -> Optional[Course]:
        if self.navigator.course_id is None:
            return None
        return self.catalog.get_course(self.navigator.course_id)

    @property
    def selected_lesson(self) -> Optional[Lesson]:
        course = self.selected_course
        if course is None or self.selected_lesson_id is None:
            return None
        return self.catalog.get_lesson(course.id, self.selected_lesson_id)

    def dashboard_summary(self) -> DashboardSummary:
        return summarize(self.catalog)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def login(self) -> ViewMode:
        return self.navigator.login()

    def logout(self) -> ViewMode:
        self.selected_lesson_id = None
        return self.navigator.logout()

    def go_home(self) -> ViewMode:
        return self.navigator.go_home()

    def open_dashboard(self) -> ViewMode:
        return self.navigator.open_dashboard()

    def open_catalog(self) -> ViewMode:
        return self.navigator.open_catalog()

    def open_profile(self) -> ViewMode:
        return self.navigator.open_profile()

    def open_course(self, course_id: str) -> ViewMode:
        self.catalog.get_course(course_id)
        mode = self.navigator.open_course(course_id)
        self.selected_lesson_id = None
        return mode

    def leave_course(self) -> ViewMode:
        course = self.selected_course
        enrolled = course.enrolled if course is not None else False
        self.selected_lesson_id = None
        return self.navigator.leave_course(enrolled)

    def select_lesson(self, lesson_id: str) -> Lesson:
        """Open a lesson of the selected course; locked courses allow only the preview"""
        course = self.selected_course
        if course is None:
            raise NavigationError("open a lesson", self.navigator.mode)
        lesson = self.catalog.get_lesson(course.id, lesson_id)
        if lesson_id not in {l.id for l in CatalogStore.viewable_lessons(course)}:
            logger.warning(f"Lesson {lesson_id} of course {course.id} is locked")
            raise CourseLocked(course.id)
        self.selected_lesson_id = lesson_id
        return lesson

    # ------------------------------------------------------------------
    # State machine operations
    # ------------------------------------------------------------------

    async def enroll(self, course_id: str) -> EnrollmentReceipt:
        return await self.engine.enroll(course_id)

    def toggle_lesson(self, course_id: str, lesson_id: str) -> Course:
        return self.engine.toggle_lesson(course_id, lesson_id)

    async def ask_tutor(self, question: str) -> Optional[str]:
        """Send a question about the selected course and record both turns.

        Returns the tutor's reply, or None when nothing was sent (blank input,
        no course selected, or a reply still outstanding).
        """
        course = self.selected_course
        if not question or not question.strip() or course is None:
            return None
        if not self.conversation.begin_waiting():
            return None

        self.conversation.add_user_turn(question)
        try:
            reply = await self.tutor_gateway.ask(course.title, question)
            self.conversation.add_tutor_turn(reply)
        finally:
            self.conversation.end_waiting()
        return reply
