"""
Tests for view mode transitions
"""

import pytest

from user_profile import UserAccount
from view_navigator import NavigationError, Navigator, ViewMode


def test_starts_on_landing():
    assert Navigator().mode == ViewMode.LANDING


def test_login_and_logout_route():
    nav = Navigator()
    assert nav.login() == ViewMode.DASHBOARD
    assert nav.open_profile() == ViewMode.PROFILE
    assert nav.logout() == ViewMode.LANDING
    assert nav.logged_in is False


def test_logged_out_views_are_rejected():
    nav = Navigator()
    for action in (nav.open_dashboard, nav.open_catalog, nav.open_profile):
        with pytest.raises(NavigationError):
            action()
    assert nav.mode == ViewMode.LANDING


def test_go_home_depends_on_login():
    nav = Navigator()
    assert nav.go_home() == ViewMode.LANDING
    nav.login()
    nav.open_catalog()
    assert nav.go_home() == ViewMode.DASHBOARD


def test_open_course_only_from_dashboard_or_catalog():
    nav = Navigator()
    nav.login()
    nav.open_profile()
    with pytest.raises(NavigationError):
        nav.open_course("1")
    assert nav.mode == ViewMode.PROFILE

    nav.open_catalog()
    assert nav.open_course("1") == ViewMode.COURSE_DETAIL
    assert nav.course_id == "1"


@pytest.mark.parametrize("enrolled, expected", [(True, ViewMode.DASHBOARD), (False, ViewMode.CATALOG)])
def test_leave_course_destination(enrolled, expected):
    nav = Navigator()
    nav.login()
    nav.open_course("2")
    assert nav.leave_course(enrolled) == expected
    assert nav.course_id is None


def test_leave_course_outside_detail_view():
    nav = Navigator()
    nav.login()
    with pytest.raises(NavigationError):
        nav.leave_course(True)


def test_login_state_comes_from_the_account():
    account = UserAccount()
    nav = Navigator(account)

    nav.login()
    assert account.is_logged_in is True

    account.set_logged_in(False)
    assert nav.logged_in is False
    with pytest.raises(NavigationError):
        nav.open_catalog()
    assert nav.go_home() == ViewMode.LANDING
