"""
Onboarding Workflow for the Lifecycle Engine.

Handles new employees: data capture, HR and manager approval, system
provisioning, compliance checks, payroll and benefits enrollment, and
completion.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..engine import ChecklistTracker
from ..models import Employee, OnboardingRecord, WorkflowKind, WorkflowStatus
from .base_workflow import BaseLifecycleWorkflow, reports_errors
from .helpers import find_invalid_fields, find_missing_fields, generate_unique_employee_id

logger = logging.getLogger(__name__)


class OnboardingWorkflow(BaseLifecycleWorkflow):
    """
    Workflow for bringing a new employee on board.

    Identifiers are generated here at initiation; callers use the returned
    ``employeeId`` for every later step.
    """

    kind = WorkflowKind.ONBOARDING
    not_found_message = "Employee not found"
    approved_next_steps = ("System Provisioning", "Compliance Checks", "Finance Enrollment")

    def _build_trackers(self) -> Tuple[ChecklistTracker, ChecklistTracker, ChecklistTracker]:
        provisioning = ChecklistTracker(
            name="systemProvisioning",
            attribute="system_provisioning",
            audit=self.audit,
            action="Systems Provisioned",
            actor="IT System",
            verb="Provisioned",
            status_on_apply=WorkflowStatus.IN_PROGRESS,
        )
        compliance = ChecklistTracker(
            name="compliance",
            attribute="compliance",
            audit=self.audit,
            action="Compliance Check",
            actor="Compliance System",
            labels={"ndaSigned": "NDA", "idVerified": "ID", "backgroundCheck": "Background"},
        )
        finance = ChecklistTracker(
            name="financeEnrollment",
            attribute="finance_enrollment",
            audit=self.audit,
            action="Finance Enrollment",
            actor="Finance System",
            labels={"payroll": "Payroll", "benefits": "Benefits"},
        )
        return provisioning, compliance, finance

    @reports_errors
    def initiate(
        self,
        name: str,
        email: str,
        date_of_joining: str,
        department: str,
        designation: str,
        manager: str,
        work_location: str,
        contact_phone: str,
        employment_type: str,
        initiated_by: str,
        project_assignment: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Start onboarding for a new employee.

        Returns:
            Result with the generated employeeId and the captured employee data
        """
        employee_id = generate_unique_employee_id(self.repository.exists)
        employee = Employee(
            id=employee_id,
            name=name,
            email=email,
            date_of_joining=date_of_joining,
            department=department,
            designation=designation,
            manager=manager,
            work_location=work_location,
            contact_phone=contact_phone,
            employment_type=employment_type,
            project_assignment=project_assignment,
        )
        record = OnboardingRecord(employee_id=employee_id, employee=employee, initiated_by=initiated_by)
        self.audit.record(
            record,
            action="Onboarding Initiated",
            actor=initiated_by,
            details=f"Onboarding started for {name}",
        )
        self._create(record)

        logger.info(f"Initiated onboarding for {name} as {employee_id}")
        return {
            "success": True,
            "employeeId": employee_id,
            "status": record.status.value,
            "message": f"Onboarding process initiated for {name}",
            "nextSteps": ["HR Approval", "Manager Approval"],
            "employee": employee.model_dump(by_alias=True, mode="json"),
        }

    @reports_errors
    def validate_data(self, employee_id: str) -> Dict[str, Any]:
        """Check that every required employee field is present and well formed."""
        record = self._load(employee_id)
        missing_fields = find_missing_fields(record.employee)
        invalid_fields = find_invalid_fields(record.employee)
        is_valid = not missing_fields and not invalid_fields

        if is_valid:
            message = "All required fields are complete"
        elif missing_fields:
            message = "Missing required fields"
        else:
            message = "Invalid field values"

        return {
            "success": True,
            "employeeId": employee_id,
            "isValid": is_valid,
            "missingFields": missing_fields,
            "invalidFields": invalid_fields,
            "message": message,
        }

    @reports_errors
    def provision_systems(self, employee_id: str, systems: Sequence[str]) -> Dict[str, Any]:
        """
        Mark IT systems as provisioned and move the record to In Progress.

        Unknown system names are ignored.
        """
        record, applied, ignored = self._apply_systems(employee_id, systems)
        return {
            "success": True,
            "employeeId": employee_id,
            "provisionedSystems": applied,
            "ignoredSystems": ignored,
            "systemStatus": record.system_provisioning.to_dict(),
            "status": record.status.value,
            "message": f"Systems provisioned for {record.display_name}",
        }

    @reports_errors
    def enroll_benefits(
        self,
        employee_id: str,
        enroll_payroll: Optional[bool] = None,
        enroll_benefits: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Record payroll and benefits enrollment."""
        record = self._apply_updates(
            employee_id,
            self.finance_tracker,
            {"payroll": enroll_payroll, "benefits": enroll_benefits},
        )
        return {
            "success": True,
            "employeeId": employee_id,
            "financeEnrollment": record.finance_enrollment.to_dict(),
            "message": f"Finance enrollment completed for {record.display_name}",
        }

    @reports_errors
    def check_compliance(
        self,
        employee_id: str,
        nda_signed: Optional[bool] = None,
        id_verified: Optional[bool] = None,
        background_check: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Record NDA, ID verification and background check results."""
        record = self._apply_updates(
            employee_id,
            self.compliance_tracker,
            {"ndaSigned": nda_signed, "idVerified": id_verified, "backgroundCheck": background_check},
        )
        all_compliant = record.compliance.all_set()
        return {
            "success": True,
            "employeeId": employee_id,
            "compliance": record.compliance.to_dict(),
            "allCompliant": all_compliant,
            "message": "All compliance checks passed" if all_compliant else "Compliance checks incomplete",
        }

    def _notifications(self, record: OnboardingRecord) -> List[str]:
        return [
            f"Email sent to {record.employee.email}",
            f"Manager {record.employee.manager} notified",
            "HR team notified",
        ]
