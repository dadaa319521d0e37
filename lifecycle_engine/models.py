"""
Core data models for the Lifecycle Engine.

This module defines the Pydantic models for onboarding and offboarding
records, their approval slots, checklist trackers, and audit entries.
Attributes are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class WorkflowKind(str, Enum):
    """The two lifecycle workflows handled by the engine."""
    ONBOARDING = "onboarding"
    OFFBOARDING = "offboarding"


class WorkflowStatus(str, Enum):
    """Progression of a lifecycle record."""
    INITIATED = "Initiated"
    PENDING_APPROVAL = "Pending Approval"
    APPROVED = "Approved"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuditEntry(CamelModel):
    """Immutable record of one action taken against a lifecycle record."""
    model_config = ConfigDict(frozen=True)

    date: datetime = Field(default_factory=utc_now)
    action: str = Field(..., description="What happened, e.g. 'HR Approved'")
    actor: str = Field(..., description="Person or system that acted")
    details: str = Field("", description="Human-readable summary")


class ApprovalSlot(CamelModel):
    """One role's approval decision. Unset until the role decides."""
    approved: bool = False
    approver: Optional[str] = None
    date: Optional[datetime] = None


class RoleApprovals(CamelModel):
    """Approval slots keyed by the workflow's fixed roles."""
    ROLES: ClassVar[Tuple[str, ...]] = ()

    def slot(self, role: str) -> ApprovalSlot:
        return getattr(self, role)

    def set_slot(self, role: str, slot: ApprovalSlot) -> None:
        if role not in self.ROLES:
            raise ValueError(f"Unknown approval role: {role}")
        setattr(self, role, slot)

    def all_approved(self) -> bool:
        return all(self.slot(role).approved for role in self.ROLES)

    def pending(self) -> Dict[str, bool]:
        """Map of role -> True when that role has not approved yet."""
        return {role: not self.slot(role).approved for role in self.ROLES}


class OnboardingApprovals(RoleApprovals):
    ROLES: ClassVar[Tuple[str, ...]] = ("hr", "manager")

    hr: ApprovalSlot = Field(default_factory=ApprovalSlot)
    manager: ApprovalSlot = Field(default_factory=ApprovalSlot)


class OffboardingApprovals(RoleApprovals):
    ROLES: ClassVar[Tuple[str, ...]] = ("manager", "hr")

    manager: ApprovalSlot = Field(default_factory=ApprovalSlot)
    hr: ApprovalSlot = Field(default_factory=ApprovalSlot)


class ChecklistModel(CamelModel):
    """
    A fixed set of named boolean sub-tasks.

    ``FLAGS`` maps each wire-level flag name to its attribute. Only names in
    this mapping can ever be set; anything else is rejected by ``set_flag``.
    """
    FLAGS: ClassVar[Dict[str, str]] = {}

    def set_flag(self, flag: str) -> bool:
        """Set a known flag true. Returns False for names outside the vocabulary."""
        attribute = self.FLAGS.get(flag)
        if attribute is None:
            return False
        setattr(self, attribute, True)
        return True

    def all_set(self) -> bool:
        return all(getattr(self, attribute) for attribute in self.FLAGS.values())

    def count_set(self) -> int:
        return sum(1 for attribute in self.FLAGS.values() if getattr(self, attribute))

    def to_dict(self) -> Dict[str, bool]:
        return {flag: getattr(self, attribute) for flag, attribute in self.FLAGS.items()}


class SystemChecklist(ChecklistModel):
    """IT systems touched by provisioning or deprovisioning."""
    FLAGS: ClassVar[Dict[str, str]] = {
        "hrms": "hrms",
        "email": "email",
        "network": "network",
        "projectTools": "project_tools",
    }

    hrms: bool = False
    email: bool = False
    network: bool = False
    project_tools: bool = False


class OnboardingCompliance(ChecklistModel):
    FLAGS: ClassVar[Dict[str, str]] = {
        "ndaSigned": "nda_signed",
        "idVerified": "id_verified",
        "backgroundCheck": "background_check",
    }

    nda_signed: bool = False
    id_verified: bool = False
    background_check: bool = False


class FinanceEnrollment(ChecklistModel):
    FLAGS: ClassVar[Dict[str, str]] = {
        "payroll": "payroll",
        "benefits": "benefits",
    }

    payroll: bool = False
    benefits: bool = False


class OffboardingCompliance(ChecklistModel):
    FLAGS: ClassVar[Dict[str, str]] = {
        "exitFormSubmitted": "exit_form_submitted",
        "assetsReturned": "assets_returned",
        "clearanceCertificate": "clearance_certificate",
    }

    exit_form_submitted: bool = False
    assets_returned: bool = False
    clearance_certificate: bool = False


class FinalPayroll(ChecklistModel):
    FLAGS: ClassVar[Dict[str, str]] = {
        "processed": "processed",
        "benefitsTerminated": "benefits_terminated",
    }

    processed: bool = False
    benefits_terminated: bool = False


class Employee(CamelModel):
    """Employee master data captured at onboarding."""
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = (
        "name",
        "email",
        "date_of_joining",
        "department",
        "designation",
        "manager",
        "work_location",
        "contact_phone",
        "employment_type",
    )

    id: str = Field(..., description="Generated employee identifier")
    name: str = Field(..., description="Full name of the employee")
    email: str = Field(..., description="Primary email address")
    date_of_joining: str = Field(..., description="Date of joining (YYYY-MM-DD)")
    department: str = Field(..., description="Department or business unit")
    designation: str = Field(..., description="Job title or role")
    manager: str = Field(..., description="Manager or supervisor name")
    work_location: str = Field(..., description="Work location")
    contact_phone: str = Field(..., description="Contact phone number")
    employment_type: str = Field(..., description="Full-time, Contractor, etc.")
    project_assignment: Optional[str] = Field(None, description="Initial project, if any")


class LifecycleRecord(CamelModel):
    """Fields shared by onboarding and offboarding records."""
    employee_id: str
    status: WorkflowStatus = WorkflowStatus.INITIATED
    initiated_by: str
    initiated_date: datetime = Field(default_factory=utc_now)
    audit_trail: List[AuditEntry] = Field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.status == WorkflowStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        return self.model_dump(by_alias=True, mode="json")


class OnboardingRecord(LifecycleRecord):
    employee: Employee
    approvals: OnboardingApprovals = Field(default_factory=OnboardingApprovals)
    system_provisioning: SystemChecklist = Field(default_factory=SystemChecklist)
    compliance: OnboardingCompliance = Field(default_factory=OnboardingCompliance)
    finance_enrollment: FinanceEnrollment = Field(default_factory=FinanceEnrollment)

    @property
    def display_name(self) -> str:
        return self.employee.name


class OffboardingRecord(LifecycleRecord):
    employee_name: str
    last_working_day: str
    department: str
    reason: str
    manager: str
    approvals: OffboardingApprovals = Field(default_factory=OffboardingApprovals)
    system_deprovisioning: SystemChecklist = Field(default_factory=SystemChecklist)
    compliance: OffboardingCompliance = Field(default_factory=OffboardingCompliance)
    final_payroll: FinalPayroll = Field(default_factory=FinalPayroll)

    @property
    def display_name(self) -> str:
        return self.employee_name
