"""
Shared fixtures for the Lifecycle Engine tests.
"""

import pytest

from lifecycle_engine.config import CONFIG_ENV_VAR, STATE_DIR_ENV_VAR
from lifecycle_engine.lifecycle import LifecycleEngine


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """Keep a developer's config file out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(STATE_DIR_ENV_VAR, raising=False)


@pytest.fixture
def engine():
    """Engine with in-memory stores and no audit journal."""
    return LifecycleEngine()


@pytest.fixture
def onboarding_data():
    """Complete onboarding request for a new starter."""
    return {
        "name": "Alice",
        "email": "a@x.com",
        "date_of_joining": "2024-01-01",
        "department": "Eng",
        "designation": "SWE",
        "manager": "Bob",
        "work_location": "Remote",
        "contact_phone": "555-0100",
        "employment_type": "Full-time",
        "initiated_by": "HR1",
    }


@pytest.fixture
def onboarding_id(engine, onboarding_data):
    """ID of a freshly initiated onboarding record."""
    return engine.onboarding.initiate(**onboarding_data)["employeeId"]


@pytest.fixture
def offboarding_data():
    """Offboarding request for a resigning employee."""
    return {
        "employee_id": "EMP001",
        "employee_name": "Carol",
        "last_working_day": "2024-06-30",
        "department": "Finance",
        "reason": "Resignation",
        "manager": "Dave",
        "initiated_by": "HR2",
    }


@pytest.fixture
def offboarding_id(engine, offboarding_data):
    """ID of a freshly initiated offboarding record."""
    engine.offboarding.initiate(**offboarding_data)
    return offboarding_data["employee_id"]
