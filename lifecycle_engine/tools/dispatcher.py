"""
Tool Dispatcher for the Lifecycle Engine.

Maps tool names to engine operations, validates named arguments against
each tool's argument model, and returns the engine's plain result.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from ..exceptions import LifecycleEngineError, ToolArgumentError, UnknownToolError
from ..lifecycle import LifecycleEngine
from ..models import WorkflowKind
from . import schemas

logger = logging.getLogger(__name__)

Handler = Callable[[LifecycleEngine, Any], Dict[str, Any]]


class ToolDefinition:
    """A named engine operation with its argument schema."""

    def __init__(self, name: str, description: str, arguments_model: Type[BaseModel], handler: Handler):
        self.name = name
        self.description = description
        self.arguments_model = arguments_model
        self.handler = handler

    def input_schema(self) -> Dict[str, Any]:
        schema = self.arguments_model.model_json_schema(by_alias=True)
        return {
            "type": "object",
            "properties": schema.get("properties", {}),
            "required": schema.get("required", []),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


def _build_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            "initiate_onboarding",
            "Start the onboarding process for a new employee. Creates employee record and initiates workflow.",
            schemas.InitiateOnboardingArgs,
            lambda engine, args: engine.onboarding.initiate(**args.model_dump()),
        ),
        ToolDefinition(
            "validate_onboarding_data",
            "Validate that all required employee data fields are complete and correct.",
            schemas.EmployeeIdArgs,
            lambda engine, args: engine.onboarding.validate_data(args.employee_id),
        ),
        ToolDefinition(
            "approve_onboarding",
            "HR or Manager approval of onboarding request.",
            schemas.ApprovalArgs,
            lambda engine, args: engine.onboarding.approve(**args.model_dump()),
        ),
        ToolDefinition(
            "provision_systems",
            "Trigger IT system provisioning (email, network, project management tools).",
            schemas.SystemsArgs,
            lambda engine, args: engine.onboarding.provision_systems(**args.model_dump()),
        ),
        ToolDefinition(
            "enroll_benefits",
            "Finance integration for payroll and benefits enrollment.",
            schemas.EnrollBenefitsArgs,
            lambda engine, args: engine.onboarding.enroll_benefits(**args.model_dump()),
        ),
        ToolDefinition(
            "check_onboarding_compliance",
            "Verify mandatory documentation (NDA, ID verification, background check).",
            schemas.OnboardingComplianceArgs,
            lambda engine, args: engine.onboarding.check_compliance(**args.model_dump()),
        ),
        ToolDefinition(
            "complete_onboarding",
            "Finalize onboarding process and send completion notifications.",
            schemas.CompleteArgs,
            lambda engine, args: engine.onboarding.complete(**args.model_dump()),
        ),
        ToolDefinition(
            "initiate_offboarding",
            "Start the offboarding process for an employee (resignation, termination, contract end).",
            schemas.InitiateOffboardingArgs,
            lambda engine, args: engine.offboarding.initiate(**args.model_dump()),
        ),
        ToolDefinition(
            "approve_offboarding",
            "Manager or HR approval of offboarding request.",
            schemas.ApprovalArgs,
            lambda engine, args: engine.offboarding.approve(**args.model_dump()),
        ),
        ToolDefinition(
            "deprovision_systems",
            "Deactivate user accounts and revoke access rights.",
            schemas.SystemsArgs,
            lambda engine, args: engine.offboarding.deprovision_systems(**args.model_dump()),
        ),
        ToolDefinition(
            "process_final_payroll",
            "Finance integration for final payroll processing and benefits termination.",
            schemas.FinalPayrollArgs,
            lambda engine, args: engine.offboarding.process_final_payroll(**args.model_dump()),
        ),
        ToolDefinition(
            "check_offboarding_compliance",
            "Verify exit forms submission and asset return.",
            schemas.OffboardingComplianceArgs,
            lambda engine, args: engine.offboarding.check_compliance(**args.model_dump()),
        ),
        ToolDefinition(
            "complete_offboarding",
            "Finalize offboarding process and send completion notifications.",
            schemas.CompleteArgs,
            lambda engine, args: engine.offboarding.complete(**args.model_dump()),
        ),
        ToolDefinition(
            "get_onboarding_status",
            "Check the current status of an onboarding process.",
            schemas.EmployeeIdArgs,
            lambda engine, args: engine.queries.get_status(WorkflowKind.ONBOARDING, args.employee_id),
        ),
        ToolDefinition(
            "get_offboarding_status",
            "Check the current status of an offboarding process.",
            schemas.EmployeeIdArgs,
            lambda engine, args: engine.queries.get_status(WorkflowKind.OFFBOARDING, args.employee_id),
        ),
        ToolDefinition(
            "list_pending_approvals",
            "Get all pending onboarding/offboarding approvals.",
            schemas.PendingApprovalsArgs,
            lambda engine, args: engine.queries.list_pending_approvals(args.approval_type),
        ),
        ToolDefinition(
            "get_employee_details",
            "Retrieve employee information from onboarding or offboarding records.",
            schemas.EmployeeIdArgs,
            lambda engine, args: engine.queries.get_employee_details(args.employee_id),
        ),
    ]


class ToolDispatcher:
    """
    Routes tool calls to the engine.

    ``call_tool`` raises dispatch errors (unknown tool, bad arguments) for
    transports that map them to their own status codes. ``dispatch`` never
    raises and always returns a result dict.
    """

    def __init__(self, engine: Optional[LifecycleEngine] = None):
        self.engine = engine or LifecycleEngine()
        self.tools: Dict[str, ToolDefinition] = {tool.name: tool for tool in _build_tools()}

        logger.info(f"Initialized ToolDispatcher with {len(self.tools)} tools")

    def list_tools(self) -> List[Dict[str, Any]]:
        return [tool.to_dict() for tool in self.tools.values()]

    def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Validate arguments and invoke a tool.

        Args:
            name: Tool name
            arguments: Named arguments (camelCase keys)

        Returns:
            The engine's result

        Raises:
            UnknownToolError: If no tool has this name
            ToolArgumentError: If the arguments fail validation
        """
        tool = self.tools.get(name)
        if tool is None:
            raise UnknownToolError(name)

        try:
            args = tool.arguments_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            raise ToolArgumentError(f"Invalid arguments for {name}: {format_validation_error(e)}") from e

        logger.debug(f"Calling tool {name}")
        return tool.handler(self.engine, args)

    def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Invoke a tool, reporting every failure as a result instead of raising."""
        try:
            return self.call_tool(name, arguments)
        except LifecycleEngineError as e:
            logger.warning(f"Tool {name} rejected: {e}")
            return e.to_result()
        except Exception as e:
            logger.exception(f"Internal error while running tool {name}")
            return {"success": False, "error": f"Internal error: {e}"}

    def dispatch_as_content(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Invoke a tool and wrap the result in a text content envelope."""
        result = self.dispatch(name, arguments)
        return {"content": [{"type": "text", "text": json.dumps(result, indent=2)}]}


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
        for err in error.errors()
    )
