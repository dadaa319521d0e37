"""
Base Workflow Classes for the Lifecycle Engine.

This module provides the shared shape of the onboarding and offboarding
workflows: record loading and saving, approvals, checklist updates and
completion, with engine errors reported as structured results.
"""

import functools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..audit import AuditLogger, AuditTrail
from ..engine import ApprovalGate, ChecklistTracker, CompletionGate, RecordRepository
from ..exceptions import InvalidStateError, LifecycleEngineError, RecordNotFoundError
from ..models import LifecycleRecord, WorkflowKind

logger = logging.getLogger(__name__)


def reports_errors(method: Callable[..., Dict[str, Any]]) -> Callable[..., Dict[str, Any]]:
    """Turn engine errors raised by a workflow operation into failure results."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs) -> Dict[str, Any]:
        try:
            return method(self, *args, **kwargs)
        except LifecycleEngineError as e:
            logger.warning(f"{self.__class__.__name__}.{method.__name__} failed: {e}")
            return e.to_result()

    return wrapper


class BaseLifecycleWorkflow(ABC):
    """
    Abstract base class for lifecycle workflows.

    Every mutating operation loads one record, applies one change, appends
    exactly one audit entry and writes the record back. Completed records
    accept no further changes.
    """

    kind: WorkflowKind
    not_found_message: str = "Employee not found"
    approved_next_steps: Sequence[str] = ()

    def __init__(self, repository: RecordRepository, audit_logger: Optional[AuditLogger] = None):
        """
        Initialize the workflow.

        Args:
            repository: Store holding this workflow's records
            audit_logger: Optional journal mirroring every audit entry
        """
        self.repository = repository
        self.audit = AuditTrail(self.kind, audit_logger)
        self.approval_gate = ApprovalGate(self.audit, self.approved_next_steps)
        self.system_tracker, self.compliance_tracker, self.finance_tracker = self._build_trackers()
        self.completion_gate = CompletionGate(self.audit, self.trackers)

        logger.info(f"Initialized {self.__class__.__name__}")

    @abstractmethod
    def _build_trackers(self) -> Tuple[ChecklistTracker, ChecklistTracker, ChecklistTracker]:
        """Return the (systems, compliance, finance) trackers for this workflow."""

    @abstractmethod
    def _notifications(self, record: LifecycleRecord) -> List[str]:
        """Notification descriptions returned on completion."""

    @property
    def trackers(self) -> List[ChecklistTracker]:
        return [self.system_tracker, self.compliance_tracker, self.finance_tracker]

    @property
    def label(self) -> str:
        return self.kind.value.capitalize()

    @reports_errors
    def approve(
        self,
        employee_id: str,
        approver_role: str,
        approver_name: str,
        approved: bool,
        comments: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Record an approval decision.

        Args:
            employee_id: Employee ID
            approver_role: 'hr' or 'manager'
            approver_name: Name of approver
            approved: Approval decision
            comments: Optional approval comments

        Returns:
            Result with the resulting status and next steps
        """
        record = self._load_active(employee_id)
        audited = len(record.audit_trail)
        status = self.approval_gate.record_approval(record, approver_role, approver_name, approved, comments)
        self._save(record, audited)

        decision = "approved" if approved else "rejected"
        return {
            "success": True,
            "employeeId": employee_id,
            "approverRole": approver_role,
            "approved": approved,
            "status": status.value,
            "message": f"{approver_role.upper()} {decision} {self.kind.value} for {record.display_name}",
            "nextSteps": self.approval_gate.next_steps(record),
        }

    @reports_errors
    def complete(self, employee_id: str, completed_by: str) -> Dict[str, Any]:
        """
        Finalize the process if every precondition holds.

        Args:
            employee_id: Employee ID
            completed_by: HR person completing the process

        Returns:
            Completion result with notifications, or a failure carrying the
            checklist of unmet preconditions
        """
        record = self._load(employee_id)
        audited = len(record.audit_trail)
        entry = self.completion_gate.complete(record, completed_by)
        self._save(record, audited)

        logger.info(f"{self.label} completed for {employee_id} by {completed_by}")
        return {
            "success": True,
            "employeeId": employee_id,
            "status": record.status.value,
            "message": f"{self.label} completed successfully for {record.display_name}",
            "completionDate": entry.date.isoformat(),
            "notifications": self._notifications(record),
        }

    def _apply_systems(
        self, employee_id: str, systems: Iterable[str]
    ) -> Tuple[LifecycleRecord, List[str], List[str]]:
        record = self._load_active(employee_id)
        audited = len(record.audit_trail)
        applied, ignored = self.system_tracker.apply_flags(record, systems)
        self._save(record, audited)
        return record, applied, ignored

    def _apply_updates(
        self, employee_id: str, tracker: ChecklistTracker, updates: Mapping[str, Optional[bool]]
    ) -> LifecycleRecord:
        record = self._load_active(employee_id)
        audited = len(record.audit_trail)
        tracker.apply_updates(record, updates)
        self._save(record, audited)
        return record

    def _load(self, employee_id: str) -> LifecycleRecord:
        record = self.repository.get(employee_id)
        if record is None:
            raise RecordNotFoundError(self.not_found_message, employee_id=employee_id)
        return record

    def _load_active(self, employee_id: str) -> LifecycleRecord:
        """Load a record that can still be changed."""
        record = self._load(employee_id)
        if record.is_completed:
            raise InvalidStateError(f"{self.label} already completed for {record.display_name}")
        return record

    def _create(self, record: LifecycleRecord):
        """Store a new record, then journal its audit trail."""
        self.repository.create(record.employee_id, record)
        self.audit.journal(record, record.audit_trail)

    def _save(self, record: LifecycleRecord, audited: int):
        """Write the record back, then journal the entries appended since it was loaded."""
        self.repository.put(record.employee_id, record)
        self.audit.journal(record, record.audit_trail[audited:])
