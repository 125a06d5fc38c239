"""
Enrollment Engine Module

State machine governing what a learner may pay for and mark complete:
Locked -> Enrolled (in progress) -> Enrolled (complete), with progress
recomputed from lesson completion on every toggle.

Enrollment simulates a payment step with an asyncio delay. Once the delay
starts it is not cancellable; the enrollment commits when it ends.
"""

import asyncio
import logging
import math
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Set

from course_catalog import CatalogStore, Course, LearningError, LessonNotFound, with_lesson_toggled
from user_profile import UserAccount

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_DELAY_SECONDS = 1.5


class InsufficientFunds(LearningError):
    def __init__(self, course_id: str, price: Decimal, balance: Decimal):
        super().__init__(f"Insufficient balance! Course costs ${price:.2f} but only ${balance:.2f} is available.")
        self.course_id = course_id
        self.price = price
        self.balance = balance


class CourseLocked(LearningError):
    def __init__(self, course_id: str, action: str = "access this lesson"):
        super().__init__(f"Enroll in course {course_id} to {action}.")
        self.course_id = course_id


class CourseState(str, Enum):
    LOCKED = "locked"
    IN_PROGRESS = "enrolled-in-progress"
    COMPLETE = "enrolled-complete"


class EnrollmentOutcome(str, Enum):
    ENROLLED = "enrolled"
    ALREADY_ENROLLED = "already_enrolled"
    IN_FLIGHT = "in_flight"


@dataclass(frozen=True)
class EnrollmentReceipt:
    """Confirmation returned by every enroll request"""
    course_id: str
    course_title: str
    outcome: EnrollmentOutcome
    amount_charged: Decimal
    balance: Decimal

    @property
    def charged(self) -> bool:
        return self.outcome == EnrollmentOutcome.ENROLLED


def compute_progress(course: Course) -> int:
    """Percentage of lessons completed, rounded half up; 0 for an empty course"""
    total = len(course.lessons)
    if total == 0:
        return 0
    return int(math.floor(100 * course.completed_count / total + 0.5))


def course_state(course: Course) -> CourseState:
    if not course.enrolled:
        return CourseState.LOCKED
    if course.progress >= 100:
        return CourseState.COMPLETE
    return CourseState.IN_PROGRESS


class EnrollmentEngine:
    """Applies enroll and lesson-toggle transitions to the catalog and account"""

    def __init__(
        self,
        catalog: CatalogStore,
        account: UserAccount,
        payment_delay: float = DEFAULT_PAYMENT_DELAY_SECONDS,
    ):
        self.catalog = catalog
        self.account = account
        self.payment_delay = payment_delay
        self._pending: Set[str] = set()

    def is_pending(self, course_id: str) -> bool:
        return course_id in self._pending

    def _receipt(self, course: Course, outcome: EnrollmentOutcome) -> EnrollmentReceipt:
        return EnrollmentReceipt(
            course_id=course.id,
            course_title=course.title,
            outcome=outcome,
            amount_charged=Decimal("0.00"),
            balance=self.account.balance,
        )

    def _check_funds(self, course: Course) -> None:
        balance = self.account.balance
        if balance < course.price:
            logger.warning(f"Enrollment in {course.id} rejected: price {course.price} exceeds balance {balance}")
            raise InsufficientFunds(course.id, course.price, balance)

    async def enroll(self, course_id: str) -> EnrollmentReceipt:
        """Charge the course price and unlock the course.

        Raises ``CourseNotFound`` for an unknown id and ``InsufficientFunds``
        when the balance cannot cover the price. Repeated requests while a
        payment is pending, or after enrollment, are no-ops.
        """
        course = self.catalog.get_course(course_id)
        if course.enrolled:
            return self._receipt(course, EnrollmentOutcome.ALREADY_ENROLLED)
        if course_id in self._pending:
            logger.info(f"Enrollment in {course_id} already processing; ignoring duplicate request")
            return self._receipt(course, EnrollmentOutcome.IN_FLIGHT)

        self._check_funds(course)

        self._pending.add(course_id)
        try:
            logger.info(f"Processing payment of {course.price} for course {course_id}")
            await asyncio.sleep(self.payment_delay)

            # Balance may have moved while the payment was pending.
            course = self.catalog.get_course(course_id)
            self._check_funds(course)
            new_balance = self.account.balance - course.price
            self.catalog.replace_course(replace(course, enrolled=True))
            self.account.set_balance(new_balance)
        finally:
            self._pending.discard(course_id)

        logger.info(f"Enrolled in {course.title}; balance now {new_balance}")
        return EnrollmentReceipt(
            course_id=course.id,
            course_title=course.title,
            outcome=EnrollmentOutcome.ENROLLED,
            amount_charged=course.price,
            balance=new_balance,
        )

    def toggle_lesson(self, course_id: str, lesson_id: str) -> Course:
        """Flip a lesson's completion flag and return the updated course"""
        course = self.catalog.get_course(course_id)
        if course.lesson_index(lesson_id) < 0:
            logger.error(f"Toggle of unknown lesson {lesson_id!r} in course {course_id!r}")
            raise LessonNotFound(course_id, lesson_id)
        if not course.enrolled:
            logger.warning(f"Toggle of lesson {lesson_id} rejected: course {course_id} is locked")
            raise CourseLocked(course_id, "track lesson progress")

        toggled = with_lesson_toggled(course, lesson_id)
        updated = replace(toggled, progress=compute_progress(toggled))
        self.catalog.replace_course(updated)

        if course_state(course) != course_state(updated):
            logger.info(f"Course {course_id} moved from {course_state(course).value} to {course_state(updated).value}")
        return updated
