"""
Audit Trail for lifecycle records.

Every state-mutating operation appends exactly one entry through
``AuditTrail.record``. Entries reach the journal only through
``AuditTrail.journal``, which workflows call once the record is stored.
"""

import logging
from typing import Iterable, Optional

from ..models import AuditEntry, LifecycleRecord, WorkflowKind
from .audit_logger import AuditLogger

logger = logging.getLogger(__name__)


class AuditTrail:
    """Appends audit entries to records and mirrors stored ones to the journal."""

    def __init__(self, kind: WorkflowKind, audit_logger: Optional[AuditLogger] = None):
        self.kind = kind
        self.audit_logger = audit_logger

    def record(self, record: LifecycleRecord, action: str, actor: str, details: str) -> AuditEntry:
        """
        Append an entry to the record's audit trail.

        Args:
            record: Record the action was taken against
            action: Short action name
            actor: Person or system that acted
            details: Human-readable summary

        Returns:
            The appended AuditEntry
        """
        entry = AuditEntry(action=action, actor=actor, details=details)
        record.audit_trail.append(entry)

        logger.info(f"[{self.kind.value}:{record.employee_id}] {action} by {actor}")
        return entry

    def journal(self, record: LifecycleRecord, entries: Iterable[AuditEntry]) -> None:
        """
        Mirror entries of a stored record to the audit journal.

        The stored record is the source of truth. A journal write failure
        is logged and does not undo or fail the operation.
        """
        if not self.audit_logger:
            return

        for entry in entries:
            try:
                self.audit_logger.log_event(self.kind, record.employee_id, entry)
            except OSError:
                logger.exception(
                    f"Audit journal missed '{entry.action}' for {self.kind.value} record {record.employee_id}"
                )
