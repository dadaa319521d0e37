"""
Audit Package.

Exports AuditTrail and AuditLogger.
"""

from .audit_logger import AuditLogger
from .audit_trail import AuditTrail

__all__ = ["AuditLogger", "AuditTrail"]
