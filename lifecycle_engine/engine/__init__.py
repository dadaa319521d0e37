"""
Workflow State Engine Package.

Record storage, approval gating, checklist tracking, completion gating
and read-only queries shared by the onboarding and offboarding workflows.
"""

from .approval_gate import ApprovalGate
from .checklists import ChecklistTracker
from .completion_gate import CompletionGate
from .query_service import RecordQueryService
from .record_store import InMemoryRecordRepository, JsonFileRecordRepository, RecordRepository

__all__ = [
    "ApprovalGate",
    "ChecklistTracker",
    "CompletionGate",
    "RecordQueryService",
    "RecordRepository",
    "InMemoryRecordRepository",
    "JsonFileRecordRepository",
]
