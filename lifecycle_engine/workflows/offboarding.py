"""
Offboarding Workflow for the Lifecycle Engine.

Handles departing employees (resignation, termination, contract end):
manager and HR approval, system deprovisioning, exit compliance, final
payroll, and completion.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..engine import ChecklistTracker
from ..exceptions import DuplicateIdError
from ..models import OffboardingRecord, WorkflowKind, WorkflowStatus
from .base_workflow import BaseLifecycleWorkflow, reports_errors

logger = logging.getLogger(__name__)


class OffboardingWorkflow(BaseLifecycleWorkflow):
    """
    Workflow for processing an employee's exit.

    The employee ID is supplied by the caller; initiating twice for the
    same ID is refused.
    """

    kind = WorkflowKind.OFFBOARDING
    not_found_message = "Offboarding record not found"
    approved_next_steps = ("System Deprovisioning", "Compliance Checks", "Final Payroll")

    def _build_trackers(self) -> Tuple[ChecklistTracker, ChecklistTracker, ChecklistTracker]:
        deprovisioning = ChecklistTracker(
            name="systemDeprovisioning",
            attribute="system_deprovisioning",
            audit=self.audit,
            action="Systems Deprovisioned",
            actor="IT System",
            verb="Deprovisioned",
            status_on_apply=WorkflowStatus.IN_PROGRESS,
        )
        compliance = ChecklistTracker(
            name="compliance",
            attribute="compliance",
            audit=self.audit,
            action="Compliance Check",
            actor="Compliance System",
            labels={
                "exitFormSubmitted": "Exit Form",
                "assetsReturned": "Assets",
                "clearanceCertificate": "Clearance",
            },
        )
        final_payroll = ChecklistTracker(
            name="finalPayroll",
            attribute="final_payroll",
            audit=self.audit,
            action="Final Payroll Processing",
            actor="Finance System",
            labels={"processed": "Final Payroll", "benefitsTerminated": "Benefits Terminated"},
        )
        return deprovisioning, compliance, final_payroll

    @reports_errors
    def initiate(
        self,
        employee_id: str,
        employee_name: str,
        last_working_day: str,
        department: str,
        reason: str,
        manager: str,
        initiated_by: str,
    ) -> Dict[str, Any]:
        """
        Start offboarding for an employee.

        Returns:
            Result with the initial status, or a failure if a record already
            exists for this employee
        """
        if self.repository.exists(employee_id):
            raise DuplicateIdError(employee_id)

        record = OffboardingRecord(
            employee_id=employee_id,
            employee_name=employee_name,
            last_working_day=last_working_day,
            department=department,
            reason=reason,
            manager=manager,
            initiated_by=initiated_by,
        )
        self.audit.record(
            record,
            action="Offboarding Initiated",
            actor=initiated_by,
            details=f"Offboarding started for {employee_name}. Reason: {reason}",
        )
        self._create(record)

        logger.info(f"Initiated offboarding for {employee_name} ({employee_id})")
        return {
            "success": True,
            "employeeId": employee_id,
            "status": record.status.value,
            "message": f"Offboarding process initiated for {employee_name}",
            "lastWorkingDay": last_working_day,
            "nextSteps": ["Manager Approval", "HR Approval"],
        }

    @reports_errors
    def deprovision_systems(self, employee_id: str, systems: Sequence[str]) -> Dict[str, Any]:
        """
        Mark IT access as revoked and move the record to In Progress.

        Unknown system names are ignored.
        """
        record, applied, ignored = self._apply_systems(employee_id, systems)
        return {
            "success": True,
            "employeeId": employee_id,
            "deprovisionedSystems": applied,
            "ignoredSystems": ignored,
            "systemStatus": record.system_deprovisioning.to_dict(),
            "status": record.status.value,
            "message": f"Systems deprovisioned for {record.display_name}",
        }

    @reports_errors
    def process_final_payroll(
        self,
        employee_id: str,
        process_final_payroll: Optional[bool] = None,
        terminate_benefits: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Record final payroll processing and benefits termination."""
        record = self._apply_updates(
            employee_id,
            self.finance_tracker,
            {"processed": process_final_payroll, "benefitsTerminated": terminate_benefits},
        )
        return {
            "success": True,
            "employeeId": employee_id,
            "finalPayroll": record.final_payroll.to_dict(),
            "message": f"Final payroll processing completed for {record.display_name}",
        }

    @reports_errors
    def check_compliance(
        self,
        employee_id: str,
        exit_form_submitted: Optional[bool] = None,
        assets_returned: Optional[bool] = None,
        clearance_certificate: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Record exit form, asset return and clearance certificate status."""
        record = self._apply_updates(
            employee_id,
            self.compliance_tracker,
            {
                "exitFormSubmitted": exit_form_submitted,
                "assetsReturned": assets_returned,
                "clearanceCertificate": clearance_certificate,
            },
        )
        all_compliant = record.compliance.all_set()
        return {
            "success": True,
            "employeeId": employee_id,
            "compliance": record.compliance.to_dict(),
            "allCompliant": all_compliant,
            "message": "All compliance checks passed" if all_compliant else "Compliance checks incomplete",
        }

    def _notifications(self, record: OffboardingRecord) -> List[str]:
        return [
            "Employee notified",
            f"Manager {record.manager} notified",
            "HR team notified",
        ]
