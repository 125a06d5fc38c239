"""
Course Catalog Module

Holds the seeded course catalog for the SkillBridge learning platform and the
per-session overlay of enrollment and lesson progress.
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class LearningError(Exception):
    """Base class for every error raised by the learning platform"""


class NotFound(LearningError):
    """An operation referenced an identifier that is not in the catalog"""


class CourseNotFound(NotFound):
    def __init__(self, course_id: str):
        super().__init__(f"Course not found: {course_id}")
        self.course_id = course_id


class LessonNotFound(NotFound):
    def __init__(self, course_id: str, lesson_id: str):
        super().__init__(f"Lesson {lesson_id} not found in course {course_id}")
        self.course_id = course_id
        self.lesson_id = lesson_id


class Category(str, Enum):
    COMPUTER_PACKAGES = "Computer Packages"
    WEB_DEVELOPMENT = "Web Development"


@dataclass(frozen=True)
class Lesson:
    """Data class representing a single lesson"""
    id: str
    title: str
    duration: str
    content: str
    completed: bool = False


@dataclass(frozen=True)
class Course:
    """Data class representing a course and the learner's progress in it"""
    id: str
    title: str
    category: Category
    description: str
    price: Decimal
    thumbnail: str
    lessons: Tuple[Lesson, ...] = field(default_factory=tuple)
    enrolled: bool = False
    progress: int = 0

    @property
    def preview_lesson(self) -> Optional[Lesson]:
        return self.lessons[0] if self.lessons else None

    @property
    def completed_count(self) -> int:
        return sum(1 for lesson in self.lessons if lesson.completed)

    def lesson_index(self, lesson_id: str) -> int:
        """Position of a lesson in the course, or -1 when absent"""
        for idx, lesson in enumerate(self.lessons):
            if lesson.id == lesson_id:
                return idx
        return -1


def _load_course_definitions() -> List[Course]:
    """Seed catalog, in display order"""
    return [
        Course(
            id="1",
            title="Microsoft Office Essentials",
            category=Category.COMPUTER_PACKAGES,
            description="Master Word, Excel, and PowerPoint for professional productivity.",
            price=Decimal("15.00"),
            thumbnail="https://picsum.photos/seed/office/400/250",
            lessons=(
                Lesson("l1", "Introduction to Word", "15m",
                       "Learning the ribbon, formatting text, and paragraph styles."),
                Lesson("l2", "Excel Formulas 101", "25m",
                       "Basic sum, average, and cell referencing."),
                Lesson("l3", "Designing Powerful Slides", "20m",
                       "Animations, transitions, and layout principles."),
            ),
        ),
        Course(
            id="2",
            title="Modern Web Design with HTML & CSS",
            category=Category.WEB_DEVELOPMENT,
            description="Learn to build responsive, beautiful websites from scratch.",
            price=Decimal("25.00"),
            thumbnail="https://picsum.photos/seed/web/400/250",
            lessons=(
                Lesson("l4", "Semantic HTML5", "12m",
                       "Structural tags like header, main, section, and article."),
                Lesson("l5", "CSS Box Model", "30m",
                       "Margin, padding, border, and content sizing."),
                Lesson("l6", "Flexbox & Grid", "45m",
                       "Modern layout techniques for responsive design."),
            ),
        ),
        Course(
            id="3",
            title="JavaScript Fundamentals",
            category=Category.WEB_DEVELOPMENT,
            description="The core programming language that powers the web.",
            price=Decimal("30.00"),
            thumbnail="https://picsum.photos/seed/js/400/250",
            lessons=(
                Lesson("l7", "Variables & Types", "20m",
                       "Let, const, strings, numbers, and booleans."),
                Lesson("l8", "Functions & Scope", "35m",
                       "Arrow functions, closures, and local variables."),
            ),
        ),
        Course(
            id="4",
            title="PC Hardware & OS Basics",
            category=Category.COMPUTER_PACKAGES,
            description="Understand how computers work and how to navigate Windows/Linux.",
            price=Decimal("10.00"),
            thumbnail="https://picsum.photos/seed/pc/400/250",
            lessons=(
                Lesson("l9", "Inside the Box", "15m",
                       "CPU, RAM, Motherboard, and Storage."),
                Lesson("l10", "File Management", "10m",
                       "Folders, file paths, and compression."),
            ),
        ),
    ]


class CatalogStore:
    """Read access to the course catalog plus whole-record replacement.

    Course identity is fixed at construction. Mutations go through
    ``replace_course`` with a new ``Course`` value, so a reader holding a
    course never sees it change underneath it.
    """

    def __init__(self, courses: Optional[List[Course]] = None):
        seed = courses if courses is not None else _load_course_definitions()
        self._courses: Dict[str, Course] = {}
        for course in seed:
            if course.id in self._courses:
                raise ValueError(f"Duplicate course id in catalog seed: {course.id}")
            self._courses[course.id] = course
        logger.info(f"Catalog seeded with {len(self._courses)} courses")

    def courses(self) -> List[Course]:
        """All courses in seed order"""
        return list(self._courses.values())

    def get_course(self, course_id: str) -> Course:
        course = self._courses.get(course_id)
        if course is None:
            logger.error(f"Lookup of unknown course id {course_id!r}")
            raise CourseNotFound(course_id)
        return course

    def get_lesson(self, course_id: str, lesson_id: str) -> Lesson:
        course = self.get_course(course_id)
        idx = course.lesson_index(lesson_id)
        if idx < 0:
            logger.error(f"Lookup of unknown lesson {lesson_id!r} in course {course_id!r}")
            raise LessonNotFound(course_id, lesson_id)
        return course.lessons[idx]

    def replace_course(self, course: Course) -> None:
        """Swap in a new value for an existing course"""
        if course.id not in self._courses:
            logger.error(f"Attempt to replace unknown course id {course.id!r}")
            raise CourseNotFound(course.id)
        self._courses[course.id] = course

    def enrolled_courses(self) -> List[Course]:
        return [course for course in self._courses.values() if course.enrolled]

    def categories(self) -> List[Category]:
        """Categories present in the catalog, in first-seen order"""
        seen: List[Category] = []
        for course in self._courses.values():
            if course.category not in seen:
                seen.append(course.category)
        return seen

    def search(self, query: str = "", category: Optional[Category] = None) -> List[Course]:
        """Filter courses by a case-insensitive text match and optional category"""
        needle = query.strip().lower()
        results = []
        for course in self._courses.values():
            if category is not None and course.category != category:
                continue
            if needle and needle not in course.title.lower() and needle not in course.description.lower():
                continue
            results.append(course)
        return results

    @staticmethod
    def viewable_lessons(course: Course) -> List[Lesson]:
        """Lessons the learner may open: all once enrolled, otherwise the preview"""
        if course.enrolled:
            return list(course.lessons)
        preview = course.preview_lesson
        return [preview] if preview is not None else []


def with_lesson_toggled(course: Course, lesson_id: str) -> Course:
    """Return a copy of ``course`` with one lesson's completion flag flipped"""
    lessons = tuple(
        replace(lesson, completed=not lesson.completed) if lesson.id == lesson_id else lesson
        for lesson in course.lessons
    )
    return replace(course, lessons=lessons)
