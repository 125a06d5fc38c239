"""
View Navigator Module

Tracks which screen of the platform is active. The mode only changes through
the named navigation actions below.
"""

import logging
from enum import Enum
from typing import Optional

from course_catalog import LearningError
from user_profile import UserAccount

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    LANDING = "landing"
    DASHBOARD = "dashboard"
    CATALOG = "course-catalog"
    COURSE_DETAIL = "course-detail"
    PROFILE = "profile"


class NavigationError(LearningError):
    def __init__(self, action: str, mode: ViewMode):
        super().__init__(f"Cannot {action} from the {mode.value} view")
        self.action = action
        self.mode = mode


class Navigator:
    """Current view mode plus the allowed transitions between modes.

    Login state is read from the ``UserAccount``; login and logout update the
    account record and move the view in one step.
    """

    def __init__(self, account: Optional[UserAccount] = None, mode: ViewMode = ViewMode.LANDING):
        self.account = account if account is not None else UserAccount()
        self.mode = mode
        self.course_id: Optional[str] = None

    @property
    def logged_in(self) -> bool:
        return self.account.is_logged_in

    def _move(self, target: ViewMode) -> ViewMode:
        if target != self.mode:
            logger.debug(f"View {self.mode.value} -> {target.value}")
        self.mode = target
        if target != ViewMode.COURSE_DETAIL:
            self.course_id = None
        return self.mode

    def _require_login(self, action: str):
        if not self.logged_in:
            logger.warning(f"Navigation '{action}' rejected: not logged in")
            raise NavigationError(action, self.mode)

    def login(self) -> ViewMode:
        self.account.set_logged_in(True)
        return self._move(ViewMode.DASHBOARD)

    def logout(self) -> ViewMode:
        self.account.set_logged_in(False)
        return self._move(ViewMode.LANDING)

    def go_home(self) -> ViewMode:
        return self._move(ViewMode.DASHBOARD if self.logged_in else ViewMode.LANDING)

    def open_dashboard(self) -> ViewMode:
        self._require_login("open the dashboard")
        return self._move(ViewMode.DASHBOARD)

    def open_catalog(self) -> ViewMode:
        self._require_login("open the catalog")
        return self._move(ViewMode.CATALOG)

    def open_profile(self) -> ViewMode:
        self._require_login("open the profile")
        return self._move(ViewMode.PROFILE)

    def open_course(self, course_id: str) -> ViewMode:
        self._require_login("open a course")
        if self.mode not in (ViewMode.DASHBOARD, ViewMode.CATALOG):
            raise NavigationError("open a course", self.mode)
        self._move(ViewMode.COURSE_DETAIL)
        self.course_id = course_id
        return self.mode

    def leave_course(self, enrolled: bool) -> ViewMode:
        """Back out of a course: to the dashboard if enrolled, else the catalog"""
        if self.mode != ViewMode.COURSE_DETAIL:
            raise NavigationError("leave a course", self.mode)
        return self._move(ViewMode.DASHBOARD if enrolled else ViewMode.CATALOG)
