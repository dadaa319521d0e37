"""
Tests for the tool dispatcher.
"""

import json
from unittest.mock import patch

import pytest

from lifecycle_engine.exceptions import ToolArgumentError, UnknownToolError
from lifecycle_engine.tools import ToolDispatcher

TOOL_NAMES = [
    "initiate_onboarding",
    "validate_onboarding_data",
    "approve_onboarding",
    "provision_systems",
    "enroll_benefits",
    "check_onboarding_compliance",
    "complete_onboarding",
    "initiate_offboarding",
    "approve_offboarding",
    "deprovision_systems",
    "process_final_payroll",
    "check_offboarding_compliance",
    "complete_offboarding",
    "get_onboarding_status",
    "get_offboarding_status",
    "list_pending_approvals",
    "get_employee_details",
]

ONBOARDING_ARGS = {
    "name": "Alice",
    "email": "a@x.com",
    "dateOfJoining": "2024-01-01",
    "department": "Eng",
    "designation": "SWE",
    "manager": "Bob",
    "workLocation": "Remote",
    "contactPhone": "555-0100",
    "employmentType": "Full-time",
    "initiatedBy": "HR1",
}


@pytest.fixture
def dispatcher(engine):
    return ToolDispatcher(engine)


class TestToolListing:

    def test_every_tool_is_listed(self, dispatcher):
        assert [tool["name"] for tool in dispatcher.list_tools()] == TOOL_NAMES

    def test_input_schema_uses_wire_names(self, dispatcher):
        tools = {tool["name"]: tool for tool in dispatcher.list_tools()}

        approve = tools["approve_onboarding"]["inputSchema"]
        assert approve["type"] == "object"
        assert set(approve["required"]) == {"employeeId", "approverRole", "approverName", "approved"}
        assert "comments" in approve["properties"]

        assert tools["list_pending_approvals"]["inputSchema"]["required"] == ["type"]
        assert "projectAssignment" not in tools["initiate_onboarding"]["inputSchema"]["required"]


class TestCallTool:

    def test_full_onboarding_through_tools(self, dispatcher):
        employee_id = dispatcher.call_tool("initiate_onboarding", ONBOARDING_ARGS)["employeeId"]
        for role, name in (("hr", "HR1"), ("manager", "Bob")):
            dispatcher.call_tool("approve_onboarding", {
                "employeeId": employee_id, "approverRole": role, "approverName": name, "approved": True,
            })
        dispatcher.call_tool("provision_systems", {
            "employeeId": employee_id, "systems": ["hrms", "email", "network", "projectTools"],
        })
        dispatcher.call_tool("check_onboarding_compliance", {
            "employeeId": employee_id, "ndaSigned": True, "idVerified": True, "backgroundCheck": True,
        })
        dispatcher.call_tool("enroll_benefits", {
            "employeeId": employee_id, "enrollPayroll": True, "enrollBenefits": True,
        })

        result = dispatcher.call_tool("complete_onboarding", {"employeeId": employee_id, "completedBy": "HR1"})

        assert result["success"] is True
        status = dispatcher.call_tool("get_onboarding_status", {"employeeId": employee_id})
        assert status["status"] == "Completed"

    def test_offboarding_tools(self, dispatcher):
        dispatcher.call_tool("initiate_offboarding", {
            "employeeId": "EMP001",
            "employeeName": "Carol",
            "lastWorkingDay": "2024-06-30",
            "department": "Finance",
            "reason": "Resignation",
            "manager": "Dave",
            "initiatedBy": "HR2",
        })

        result = dispatcher.call_tool("process_final_payroll", {"employeeId": "EMP001", "processFinalPayroll": True})

        assert result["finalPayroll"] == {"processed": True, "benefitsTerminated": False}

    def test_list_pending_approvals_type_argument(self, dispatcher):
        dispatcher.call_tool("initiate_onboarding", ONBOARDING_ARGS)

        result = dispatcher.call_tool("list_pending_approvals", {"type": "onboarding"})

        assert result["totalPending"] == 1

    def test_unknown_tool(self, dispatcher):
        with pytest.raises(UnknownToolError):
            dispatcher.call_tool("fire_employee", {})

    def test_missing_argument(self, dispatcher):
        with pytest.raises(ToolArgumentError, match="employeeId"):
            dispatcher.call_tool("get_onboarding_status", {})

    def test_invalid_role(self, dispatcher):
        with pytest.raises(ToolArgumentError):
            dispatcher.call_tool("approve_offboarding", {
                "employeeId": "EMP001", "approverRole": "ceo", "approverName": "Zed", "approved": True,
            })


class TestDispatch:

    def test_unknown_tool_is_reported(self, dispatcher):
        assert dispatcher.dispatch("fire_employee") == {"success": False, "error": "Unknown tool: fire_employee"}

    def test_invalid_arguments_are_reported(self, dispatcher):
        result = dispatcher.dispatch("list_pending_approvals", {"type": "everything"})

        assert result["success"] is False
        assert result["error"].startswith("Invalid arguments for list_pending_approvals")

    def test_engine_failure_passes_through(self, dispatcher):
        result = dispatcher.dispatch("get_offboarding_status", {"employeeId": "EMP404"})

        assert result == {"success": False, "error": "Offboarding record not found"}

    def test_internal_fault_becomes_generic_error(self, dispatcher):
        with patch.object(dispatcher.engine.queries, "get_employee_details", side_effect=RuntimeError("boom")):
            result = dispatcher.dispatch("get_employee_details", {"employeeId": "EMP001"})

        assert result == {"success": False, "error": "Internal error: boom"}

    def test_content_envelope(self, dispatcher):
        envelope = dispatcher.dispatch_as_content("initiate_onboarding", ONBOARDING_ARGS)

        assert len(envelope["content"]) == 1
        assert envelope["content"][0]["type"] == "text"
        payload = json.loads(envelope["content"][0]["text"])
        assert payload["success"] is True
        assert payload["status"] == "Initiated"
