"""
Tests for the learner record and user record store
"""

from decimal import Decimal

import pytest

from user_profile import (
    SAVED_USER_KEY,
    InMemoryRecordStore,
    UserAccount,
    default_user,
    read_saved_user,
)


def test_default_user():
    user = default_user()
    assert user.name == "Alex Student"
    assert user.balance == Decimal("150.00")
    assert user.is_logged_in is False


def test_account_replaces_record_on_change():
    account = UserAccount()
    before = account.user
    account.set_logged_in(True)

    assert account.is_logged_in is True
    assert before.is_logged_in is False


def test_negative_balance_refused():
    account = UserAccount()
    with pytest.raises(ValueError):
        account.set_balance(Decimal("-0.01"))
    assert account.balance == Decimal("150.00")
    with pytest.raises(ValueError):
        UserAccount(default_user(balance=Decimal("-1")))


def test_record_store_round_trip():
    store = InMemoryRecordStore()
    assert read_saved_user(store) is None
    store.set(SAVED_USER_KEY, "{}")
    assert read_saved_user(store) == "{}"
