"""
Employee Lifecycle Engine

Onboarding and offboarding workflow state engine for HR operations.

This engine tracks each employee's lifecycle record through role approvals,
system provisioning, compliance checks and finance steps, and only lets a
record complete once every requirement has been met.
"""

__version__ = "1.0.0"
__author__ = "Lifecycle Engine Team"
__email__ = "team@example.com"

from .lifecycle import LifecycleEngine
from .tools import ToolDispatcher
from .workflows.onboarding import OnboardingWorkflow
from .workflows.offboarding import OffboardingWorkflow

__all__ = [
    "LifecycleEngine",
    "ToolDispatcher",
    "OnboardingWorkflow",
    "OffboardingWorkflow",
]
