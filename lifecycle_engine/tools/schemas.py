"""
Tool argument models.

Each tool's arguments are validated against one of these models before the
engine is called. Their JSON schemas are published as the tools'
``inputSchema``. Attribute names match the workflow method parameters.
"""

from typing import List, Literal, Optional

from pydantic import Field

from ..models import CamelModel

ApproverRole = Literal["hr", "manager"]


class EmployeeIdArgs(CamelModel):
    employee_id: str = Field(..., description="Employee ID")


class InitiateOnboardingArgs(CamelModel):
    name: str = Field(..., description="Employee full name")
    email: str = Field(..., description="Employee email address")
    date_of_joining: str = Field(..., description="Date of joining (YYYY-MM-DD)")
    department: str = Field(..., description="Department/Business Unit")
    designation: str = Field(..., description="Job title/role")
    manager: str = Field(..., description="Manager/Supervisor name")
    work_location: str = Field(..., description="Work location")
    contact_phone: str = Field(..., description="Contact phone number")
    employment_type: str = Field(..., description="Employment type (Full-time, Contractor, etc.)")
    project_assignment: Optional[str] = Field(None, description="Project assignment (optional)")
    initiated_by: str = Field(..., description="HR or Hiring Manager initiating the process")


class ApprovalArgs(EmployeeIdArgs):
    approver_role: ApproverRole = Field(..., description="Role of approver")
    approver_name: str = Field(..., description="Name of approver")
    approved: bool = Field(..., description="Approval decision")
    comments: Optional[str] = Field(None, description="Approval comments")


class SystemsArgs(EmployeeIdArgs):
    systems: List[str] = Field(
        ..., description="Systems to update: hrms, email, network, projectTools (others are ignored)"
    )


class EnrollBenefitsArgs(EmployeeIdArgs):
    enroll_payroll: Optional[bool] = Field(None, description="Enroll in payroll")
    enroll_benefits: Optional[bool] = Field(None, description="Enroll in benefits")


class OnboardingComplianceArgs(EmployeeIdArgs):
    nda_signed: Optional[bool] = Field(None, description="NDA signed")
    id_verified: Optional[bool] = Field(None, description="ID verified")
    background_check: Optional[bool] = Field(None, description="Background check completed")


class CompleteArgs(EmployeeIdArgs):
    completed_by: str = Field(..., description="HR person completing the process")


class InitiateOffboardingArgs(EmployeeIdArgs):
    employee_name: str = Field(..., description="Employee name")
    last_working_day: str = Field(..., description="Last working day (YYYY-MM-DD)")
    department: str = Field(..., description="Department")
    reason: str = Field(..., description="Reason for offboarding")
    manager: str = Field(..., description="Manager name")
    initiated_by: str = Field(..., description="HR or Manager initiating")


class FinalPayrollArgs(EmployeeIdArgs):
    process_final_payroll: Optional[bool] = Field(None, description="Process final payroll")
    terminate_benefits: Optional[bool] = Field(None, description="Terminate benefits")


class OffboardingComplianceArgs(EmployeeIdArgs):
    exit_form_submitted: Optional[bool] = Field(None, description="Exit form submitted")
    assets_returned: Optional[bool] = Field(None, description="Company assets returned")
    clearance_certificate: Optional[bool] = Field(None, description="Clearance certificate issued")


class PendingApprovalsArgs(CamelModel):
    approval_type: Literal["onboarding", "offboarding", "all"] = Field(
        ..., alias="type", description="Type of approvals to list"
    )
