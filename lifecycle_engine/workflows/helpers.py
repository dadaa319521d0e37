"""
Workflow Helper Functions for the Lifecycle Engine.

Identifier generation and employee data validation.
"""

import logging
import random
import time
from typing import Callable, List

from pydantic.alias_generators import to_camel

from ..models import Employee

logger = logging.getLogger(__name__)


def generate_employee_id() -> str:
    """Generate an identifier of the form EMP-<epoch millis>-<0..999>."""
    return f"EMP-{int(time.time() * 1000)}-{random.randint(0, 999)}"


def generate_unique_employee_id(exists: Callable[[str], bool], max_attempts: int = 100) -> str:
    """
    Generate an employee ID that is not already taken.

    Args:
        exists: Predicate telling whether an ID is in use
        max_attempts: Attempts before giving up

    Returns:
        A fresh employee ID
    """
    for _ in range(max_attempts):
        employee_id = generate_employee_id()
        if not exists(employee_id):
            return employee_id
    raise RuntimeError(f"Could not generate a unique employee ID after {max_attempts} attempts")


def find_missing_fields(employee: Employee) -> List[str]:
    """
    List the required employee fields that are empty.

    Args:
        employee: Employee to check

    Returns:
        camelCase names of missing fields (empty if complete)
    """
    missing = []
    for field in Employee.REQUIRED_FIELDS:
        value = getattr(employee, field)
        if not value or not str(value).strip():
            missing.append(to_camel(field))
    return missing


def find_invalid_fields(employee: Employee) -> List[str]:
    """List fields that are present but malformed."""
    invalid = []
    # Basic email validation - just check for @ symbol
    if employee.email and "@" not in employee.email:
        invalid.append("email")
    return invalid
