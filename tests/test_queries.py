"""
Tests for the read-only query service.
"""

from lifecycle_engine.models import WorkflowKind


class TestGetStatus:

    def test_onboarding_snapshot(self, engine, onboarding_id):
        result = engine.queries.get_status(WorkflowKind.ONBOARDING, onboarding_id)

        assert result["success"] is True
        assert result["employeeId"] == onboarding_id
        assert result["status"] == "Initiated"
        assert result["employee"]["name"] == "Alice"
        assert result["approvals"]["hr"] == {"approved": False, "approver": None, "date": None}
        assert result["systemProvisioning"] == {
            "hrms": False, "email": False, "network": False, "projectTools": False,
        }
        assert len(result["auditTrail"]) == 1

    def test_offboarding_snapshot(self, engine, offboarding_id):
        result = engine.queries.get_status(WorkflowKind.OFFBOARDING, offboarding_id)

        assert result["employeeName"] == "Carol"
        assert result["finalPayroll"] == {"processed": False, "benefitsTerminated": False}

    def test_not_found_messages(self, engine):
        assert engine.queries.get_status(WorkflowKind.ONBOARDING, "x") == {
            "success": False, "error": "Employee not found",
        }
        assert engine.queries.get_status(WorkflowKind.OFFBOARDING, "x") == {
            "success": False, "error": "Offboarding record not found",
        }


class TestListPendingApprovals:

    def test_new_record_is_pending_for_both_roles(self, engine, onboarding_id):
        result = engine.queries.list_pending_approvals("all")

        assert result["totalPending"] == 1
        entry = result["pendingOnboarding"][0]
        assert entry["employeeId"] == onboarding_id
        assert entry["employeeName"] == "Alice"
        assert entry["type"] == "onboarding"
        assert entry["pendingApprovals"] == {"hr": True, "manager": True}

    def test_partially_approved_offboarding(self, engine, offboarding_id):
        engine.offboarding.approve(offboarding_id, "manager", "Dave", True)

        result = engine.queries.list_pending_approvals("offboarding")

        assert result["pendingOnboarding"] == []
        entry = result["pendingOffboarding"][0]
        assert entry["lastWorkingDay"] == "2024-06-30"
        assert entry["pendingApprovals"] == {"manager": False, "hr": True}

    def test_fully_approved_records_are_not_listed(self, engine, onboarding_id, offboarding_id):
        engine.onboarding.approve(onboarding_id, "hr", "HR1", True)
        engine.onboarding.approve(onboarding_id, "manager", "Bob", True)

        result = engine.queries.list_pending_approvals("all")

        assert result["pendingOnboarding"] == []
        assert len(result["pendingOffboarding"]) == 1
        assert result["totalPending"] == 1

    def test_type_filter(self, engine, onboarding_id, offboarding_id):
        result = engine.queries.list_pending_approvals("onboarding")

        assert len(result["pendingOnboarding"]) == 1
        assert result["pendingOffboarding"] == []

    def test_invalid_type(self, engine):
        result = engine.queries.list_pending_approvals("everything")

        assert result["success"] is False
        assert "Invalid type" in result["error"]


class TestGetEmployeeDetails:

    def test_onboarding_source(self, engine, onboarding_id):
        result = engine.queries.get_employee_details(onboarding_id)

        assert result["source"] == "onboarding"
        assert result["employee"]["email"] == "a@x.com"

    def test_offboarding_source(self, engine, offboarding_id):
        result = engine.queries.get_employee_details(offboarding_id)

        assert result["source"] == "offboarding"
        assert result["employeeName"] == "Carol"
        assert result["department"] == "Finance"

    def test_onboarding_wins_on_collision(self, engine, onboarding_id, offboarding_data):
        offboarding_data["employee_id"] = onboarding_id
        engine.offboarding.initiate(**offboarding_data)

        result = engine.queries.get_employee_details(onboarding_id)

        assert result["source"] == "onboarding"
        assert result["employee"]["name"] == "Alice"

    def test_not_found(self, engine):
        assert engine.queries.get_employee_details("ghost") == {"success": False, "error": "Employee not found"}
