"""
Query Layer for the Lifecycle Engine.

Read-only projections over the onboarding and offboarding record stores.
Nothing here writes to a store or appends to an audit trail.
"""

import logging
from typing import Any, Dict, List

from ..models import OffboardingRecord, OnboardingRecord, WorkflowKind
from .record_store import RecordRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGES = {
    WorkflowKind.ONBOARDING: "Employee not found",
    WorkflowKind.OFFBOARDING: "Offboarding record not found",
}

APPROVAL_LIST_TYPES = ("onboarding", "offboarding", "all")


class RecordQueryService:
    """Status lookups, pending-approval listing and employee lookup."""

    def __init__(
        self,
        onboarding_store: RecordRepository[OnboardingRecord],
        offboarding_store: RecordRepository[OffboardingRecord],
    ):
        self.stores = {
            WorkflowKind.ONBOARDING: onboarding_store,
            WorkflowKind.OFFBOARDING: offboarding_store,
        }

    def get_status(self, kind: WorkflowKind, employee_id: str) -> Dict[str, Any]:
        """
        Full snapshot of one record.

        Args:
            kind: Which store to look in
            employee_id: Employee ID

        Returns:
            Record snapshot with ``success: True``, or a not-found failure
        """
        record = self.stores[kind].get(employee_id)
        if record is None:
            logger.warning(f"Status requested for unknown {kind.value} record {employee_id}")
            return {"success": False, "error": NOT_FOUND_MESSAGES[kind]}

        return {"success": True, **record.to_dict()}

    def list_pending_approvals(self, approval_type: str = "all") -> Dict[str, Any]:
        """
        List records where at least one role has not approved yet.

        Args:
            approval_type: 'onboarding', 'offboarding' or 'all'

        Returns:
            Pending records per kind plus the total count
        """
        if approval_type not in APPROVAL_LIST_TYPES:
            return {
                "success": False,
                "error": f"Invalid type '{approval_type}'; expected one of: {', '.join(APPROVAL_LIST_TYPES)}",
            }

        pending_onboarding: List[Dict[str, Any]] = []
        pending_offboarding: List[Dict[str, Any]] = []

        if approval_type in ("onboarding", "all"):
            for record in self.stores[WorkflowKind.ONBOARDING].get_all():
                if not record.approvals.all_approved():
                    pending_onboarding.append({
                        "employeeId": record.employee_id,
                        "employeeName": record.employee.name,
                        "type": WorkflowKind.ONBOARDING.value,
                        "status": record.status.value,
                        "pendingApprovals": record.approvals.pending(),
                    })

        if approval_type in ("offboarding", "all"):
            for record in self.stores[WorkflowKind.OFFBOARDING].get_all():
                if not record.approvals.all_approved():
                    pending_offboarding.append({
                        "employeeId": record.employee_id,
                        "employeeName": record.employee_name,
                        "type": WorkflowKind.OFFBOARDING.value,
                        "status": record.status.value,
                        "lastWorkingDay": record.last_working_day,
                        "pendingApprovals": record.approvals.pending(),
                    })

        return {
            "success": True,
            "pendingOnboarding": pending_onboarding,
            "pendingOffboarding": pending_offboarding,
            "totalPending": len(pending_onboarding) + len(pending_offboarding),
        }

    def get_employee_details(self, employee_id: str) -> Dict[str, Any]:
        """
        Look an employee up across both stores.

        The onboarding store is checked first, so an ID present in both
        always resolves to onboarding data.
        """
        onboarding = self.stores[WorkflowKind.ONBOARDING].get(employee_id)
        if onboarding is not None:
            return {
                "success": True,
                "source": WorkflowKind.ONBOARDING.value,
                "employee": onboarding.employee.model_dump(by_alias=True, mode="json"),
                "status": onboarding.status.value,
            }

        offboarding = self.stores[WorkflowKind.OFFBOARDING].get(employee_id)
        if offboarding is not None:
            return {
                "success": True,
                "source": WorkflowKind.OFFBOARDING.value,
                "employeeId": offboarding.employee_id,
                "employeeName": offboarding.employee_name,
                "department": offboarding.department,
                "lastWorkingDay": offboarding.last_working_day,
                "status": offboarding.status.value,
            }

        return {"success": False, "error": "Employee not found"}
