"""
Completion Gate for the Lifecycle Engine.

The only path to the terminal Completed status. Either every precondition
holds and the record is completed, or nothing about the record changes.
"""

import logging
from typing import Dict, Sequence

from ..audit import AuditTrail
from ..exceptions import InvalidStateError
from ..models import AuditEntry, LifecycleRecord, WorkflowStatus
from .checklists import ChecklistTracker

logger = logging.getLogger(__name__)


class CompletionGate:
    """All-or-nothing validator for the terminal transition."""

    def __init__(self, audit: AuditTrail, trackers: Sequence[ChecklistTracker]):
        self.audit = audit
        self.trackers = list(trackers)

    @property
    def label(self) -> str:
        return self.audit.kind.value.capitalize()

    def evaluate(self, record: LifecycleRecord) -> Dict[str, bool]:
        """
        Check every precondition without touching the record.

        Returns:
            Checklist of precondition name -> satisfied
        """
        checklist = {"approvals": record.approvals.all_approved()}
        for tracker in self.trackers:
            checklist[tracker.name] = tracker.all_set(record)
        return checklist

    def complete(self, record: LifecycleRecord, completed_by: str) -> AuditEntry:
        """
        Move the record to Completed.

        Args:
            record: Record to complete
            completed_by: Person completing the process

        Returns:
            The completion audit entry

        Raises:
            InvalidStateError: If the record is already completed or any
                precondition fails. The record is left untouched.
        """
        if record.is_completed:
            raise InvalidStateError(f"{self.label} already completed for {record.display_name}")

        checklist = self.evaluate(record)
        if not all(checklist.values()):
            missing = [name for name, satisfied in checklist.items() if not satisfied]
            logger.warning(f"Cannot complete {self.audit.kind.value} for {record.employee_id}: missing {missing}")
            raise InvalidStateError(
                f"Cannot complete {self.audit.kind.value} - requirements not met",
                checklist=checklist,
            )

        record.status = WorkflowStatus.COMPLETED
        return self.audit.record(
            record,
            action=f"{self.label} Completed",
            actor=completed_by,
            details=f"{self.label} process completed for {record.display_name}",
        )
