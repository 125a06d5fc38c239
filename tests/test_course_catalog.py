"""
Tests for the course catalog store
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from course_catalog import (
    CatalogStore,
    Category,
    Course,
    CourseNotFound,
    LessonNotFound,
    NotFound,
    with_lesson_toggled,
)


def test_seed_catalog_order_and_prices(catalog):
    courses = catalog.courses()
    assert [c.id for c in courses] == ["1", "2", "3", "4"]
    assert catalog.get_course("2").price == Decimal("25.00")
    assert all(not c.enrolled and c.progress == 0 for c in courses)


def test_lessons_keep_their_order(catalog):
    js = catalog.get_course("3")
    assert js.title == "JavaScript Fundamentals"
    assert [lesson.id for lesson in js.lessons] == ["l7", "l8"]
    assert js.preview_lesson.id == "l7"


def test_unknown_ids_raise_not_found(catalog):
    with pytest.raises(CourseNotFound):
        catalog.get_course("99")
    with pytest.raises(LessonNotFound):
        catalog.get_lesson("3", "l1")


def test_not_found_errors_share_a_base(catalog):
    with pytest.raises(NotFound):
        catalog.get_course("missing")


def test_replace_course_swaps_whole_record(catalog):
    before = catalog.get_course("1")
    catalog.replace_course(replace(before, enrolled=True))

    assert catalog.get_course("1").enrolled is True
    # readers holding the old value are unaffected
    assert before.enrolled is False


def test_replace_rejects_courses_outside_the_seed(catalog):
    stray = Course("77", "Stray", Category.WEB_DEVELOPMENT, "", Decimal("1"), "")
    with pytest.raises(CourseNotFound):
        catalog.replace_course(stray)


def test_duplicate_seed_ids_are_rejected():
    course = Course("1", "A", Category.WEB_DEVELOPMENT, "", Decimal("1"), "")
    with pytest.raises(ValueError):
        CatalogStore([course, course])


def test_search_matches_title_and_description(catalog):
    assert [c.id for c in catalog.search("excel")] == ["1"]
    assert [c.id for c in catalog.search("WEB")] == ["2", "3"]
    assert len(catalog.search("   ")) == 4


def test_search_filters_by_category(catalog):
    found = catalog.search("", Category.COMPUTER_PACKAGES)
    assert [c.id for c in found] == ["1", "4"]
    assert catalog.search("javascript", Category.COMPUTER_PACKAGES) == []


def test_categories_in_first_seen_order(catalog):
    assert catalog.categories() == [Category.COMPUTER_PACKAGES, Category.WEB_DEVELOPMENT]


def test_viewable_lessons_preview_only_until_enrolled(catalog):
    course = catalog.get_course("2")
    assert [l.id for l in CatalogStore.viewable_lessons(course)] == ["l4"]
    assert len(CatalogStore.viewable_lessons(replace(course, enrolled=True))) == 3


def test_with_lesson_toggled_returns_new_value(catalog):
    course = catalog.get_course("3")
    toggled = with_lesson_toggled(course, "l8")
    assert [l.completed for l in toggled.lessons] == [False, True]
    assert [l.completed for l in course.lessons] == [False, False]


def test_locked_course_without_lessons_has_nothing_viewable():
    empty = Course("e", "Empty", Category.WEB_DEVELOPMENT, "", Decimal("5"), "")
    assert empty.preview_lesson is None
    assert CatalogStore.viewable_lessons(empty) == []
