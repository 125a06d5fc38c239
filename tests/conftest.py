"""
Shared fixtures for the SkillBridge test suite
"""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from course_catalog import CatalogStore
from enrollment_engine import EnrollmentEngine
from learning_session import LearningSession
from tutor_gateway import TutorGateway
from user_profile import UserAccount, default_user


@pytest.fixture
def catalog():
    return CatalogStore()


@pytest.fixture
def account():
    return UserAccount(default_user(balance=Decimal("150.00")))


@pytest.fixture
def engine(catalog, account):
    return EnrollmentEngine(catalog, account, payment_delay=0)


@pytest.fixture
def genai_model():
    """Stand-in for a google.generativeai GenerativeModel"""
    model = MagicMock()
    model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text="A variable stores a value."))
    return model


@pytest.fixture
def gateway(genai_model):
    return TutorGateway(genai_model=genai_model, timeout=5)


@pytest.fixture
def session(gateway, catalog, account):
    learning_session = LearningSession(
        tutor_gateway=gateway,
        catalog=catalog,
        account=account,
        payment_delay=0,
    )
    learning_session.login()
    return learning_session
