"""
Exception types for the Lifecycle Engine.

Workflow operations raise these internally and translate them into
structured ``{"success": False, "error": ...}`` results at their public
boundary. The tool dispatcher raises the dispatch-level ones to its callers.
"""

from typing import Any, Dict, Optional


class LifecycleEngineError(Exception):
    """Base class for all engine errors."""

    def to_result(self) -> Dict[str, Any]:
        """Render the error as a structured failure result."""
        return {"success": False, "error": str(self)}


class RecordNotFoundError(LifecycleEngineError):
    """The employee identifier is absent from the relevant record store."""

    def __init__(self, message: str, employee_id: Optional[str] = None):
        super().__init__(message)
        self.employee_id = employee_id


class DuplicateIdError(LifecycleEngineError):
    """A record with the same employee identifier already exists."""

    def __init__(self, employee_id: str):
        super().__init__(f"Record already exists for employee {employee_id}")
        self.employee_id = employee_id


class InvalidApprovalRoleError(LifecycleEngineError):
    """The approver role is not one of the workflow's fixed roles."""


class InvalidStateError(LifecycleEngineError):
    """
    The record is not in a state that allows the requested operation.

    Completion failures carry the checklist of preconditions so callers can
    report which ones are still outstanding.
    """

    def __init__(self, message: str, checklist: Optional[Dict[str, bool]] = None):
        super().__init__(message)
        self.checklist = checklist

    def to_result(self) -> Dict[str, Any]:
        result = super().to_result()
        if self.checklist is not None:
            result["checklist"] = dict(self.checklist)
            result["missingRequirements"] = [
                name for name, satisfied in self.checklist.items() if not satisfied
            ]
        return result


class UnknownToolError(LifecycleEngineError):
    """The dispatcher does not recognize the requested tool name."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ToolArgumentError(LifecycleEngineError):
    """Tool arguments failed schema validation."""


class StorageError(LifecycleEngineError):
    """A record store could not persist a change."""


class ConfigurationError(LifecycleEngineError):
    """Configuration file could not be read or parsed."""
