"""
Approval Gate for the Lifecycle Engine.

Records a named approver's decision for one of the workflow's two fixed
roles and derives the record's aggregate status from both slots.
"""

import logging
from typing import List, Optional, Sequence

from ..audit import AuditTrail
from ..exceptions import InvalidApprovalRoleError
from ..models import ApprovalSlot, LifecycleRecord, WorkflowStatus, utc_now

logger = logging.getLogger(__name__)

PENDING_NEXT_STEPS = ["Pending other approvals"]


class ApprovalGate:
    """
    Converts two independent role decisions into an aggregate status.

    Both roles approved -> Approved. A rejection -> Pending Approval, no
    matter what the other role decided. A lone approval leaves the status
    alone.
    """

    def __init__(self, audit: AuditTrail, approved_next_steps: Sequence[str]):
        """
        Initialize the gate.

        Args:
            audit: Audit trail used to record each decision
            approved_next_steps: Steps reported once both roles have approved
        """
        self.audit = audit
        self.approved_next_steps = list(approved_next_steps)

    def record_approval(
        self,
        record: LifecycleRecord,
        role: str,
        approver_name: str,
        approved: bool,
        comments: Optional[str] = None,
    ) -> WorkflowStatus:
        """
        Apply one approval decision to the record.

        Args:
            record: Onboarding or offboarding record to update
            role: Approver role, one of the record's fixed roles
            approver_name: Name of the person deciding
            approved: The decision
            comments: Optional comment stored as the audit details

        Returns:
            The record's status after the decision

        Raises:
            InvalidApprovalRoleError: If the role is not valid for this workflow
        """
        approvals = record.approvals
        if role not in approvals.ROLES:
            raise InvalidApprovalRoleError(
                f"Invalid approver role '{role}'; expected one of: {', '.join(approvals.ROLES)}"
            )

        approvals.set_slot(role, ApprovalSlot(approved=approved, approver=approver_name, date=utc_now()))

        decision = "Approved" if approved else "Rejected"
        self.audit.record(
            record,
            action=f"{role.upper()} {decision}",
            actor=approver_name,
            details=comments or f"{role} {decision.lower()} {self.audit.kind.value}",
        )

        if approvals.all_approved():
            record.status = WorkflowStatus.APPROVED
        elif not approved:
            record.status = WorkflowStatus.PENDING_APPROVAL

        logger.info(
            f"{role} {decision.lower()} {self.audit.kind.value} for {record.employee_id}; "
            f"status is now {record.status.value}"
        )
        return record.status

    def next_steps(self, record: LifecycleRecord) -> List[str]:
        """Steps to take next, given the record's approval slots."""
        if record.approvals.all_approved():
            return list(self.approved_next_steps)
        return list(PENDING_NEXT_STEPS)
