"""
Tools Package.

Exposes engine operations as named tools with declared argument schemas.
"""

from .dispatcher import ToolDefinition, ToolDispatcher, format_validation_error

__all__ = ["ToolDefinition", "ToolDispatcher", "format_validation_error"]
