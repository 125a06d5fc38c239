"""
User Profile Module

The single learner record for a session, the holder that the rest of the
platform reads and replaces it through, and a key/value store interface for
saved user records.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

SAVED_USER_KEY = "skillbridge_user"
DEFAULT_BALANCE = Decimal("150.00")


@dataclass(frozen=True)
class User:
    """Data class representing the learner"""
    name: str
    email: str
    avatar: str
    is_logged_in: bool = False
    balance: Decimal = DEFAULT_BALANCE


def default_user(balance: Decimal = DEFAULT_BALANCE) -> User:
    return User(
        name="Alex Student",
        email="alex@example.com",
        avatar="https://picsum.photos/seed/student/100/100",
        balance=balance,
    )


class UserAccount:
    """Holds the current ``User`` value; every change installs a new record"""

    def __init__(self, user: Optional[User] = None):
        self._user = user if user is not None else default_user()
        if self._user.balance < 0:
            raise ValueError("User balance cannot be negative")

    @property
    def user(self) -> User:
        return self._user

    @property
    def balance(self) -> Decimal:
        return self._user.balance

    @property
    def is_logged_in(self) -> bool:
        return self._user.is_logged_in

    def set_logged_in(self, logged_in: bool) -> User:
        self._user = replace(self._user, is_logged_in=logged_in)
        return self._user

    def set_balance(self, balance: Decimal) -> User:
        if balance < 0:
            raise ValueError(f"Refusing to set negative balance {balance}")
        self._user = replace(self._user, balance=balance)
        return self._user


class UserRecordStore(Protocol):
    """Key/value store for serialized user records"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, blob: str) -> None:
        ...


class InMemoryRecordStore:
    """Dict-backed ``UserRecordStore`` that lives only as long as the session"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, blob: str) -> None:
        self._data[key] = blob


def read_saved_user(store: UserRecordStore) -> Optional[str]:
    """Read the saved user blob, if any.

    The blob is returned for inspection only; callers do not apply it to the
    running session.
    """
    blob = store.get(SAVED_USER_KEY)
    if blob is not None:
        logger.info("Found saved user record; leaving session user unchanged")
    return blob
