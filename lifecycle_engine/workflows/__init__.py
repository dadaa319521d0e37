"""
Workflows Package for the Lifecycle Engine.

This package provides the onboarding and offboarding workflows that move
employee records through approval, checklists and completion.
"""

from .base_workflow import BaseLifecycleWorkflow, reports_errors
from .helpers import (
    find_invalid_fields,
    find_missing_fields,
    generate_employee_id,
    generate_unique_employee_id,
)
from .offboarding import OffboardingWorkflow
from .onboarding import OnboardingWorkflow

__all__ = [
    "BaseLifecycleWorkflow",
    "OnboardingWorkflow",
    "OffboardingWorkflow",
    "reports_errors",
    "find_missing_fields",
    "find_invalid_fields",
    "generate_employee_id",
    "generate_unique_employee_id",
]
