"""
Audit Logging Module.

Mirrors audit entries from lifecycle records to daily JSON-lines files so
that actions can be reviewed across employees without loading every record.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..models import AuditEntry, WorkflowKind

logger = logging.getLogger(__name__)


class AuditLogger:
    """
    Append-only journal of audit entries.

    Entries are written once and never rewritten. The record's own
    ``auditTrail`` remains the source of truth; this journal is a copy.
    """

    def __init__(self, audit_dir: Union[str, Path] = "audit_logs"):
        """
        Initialize the audit logger.

        Args:
            audit_dir: Directory to store audit logs
        """
        self.audit_dir = Path(audit_dir)
        self.audit_dir.mkdir(parents=True, exist_ok=True)

    def log_event(self, kind: WorkflowKind, employee_id: str, entry: AuditEntry) -> None:
        """
        Append one audit entry to today's journal file.

        Args:
            kind: Workflow the entry belongs to
            employee_id: Employee the entry belongs to
            entry: The audit entry to journal
        """
        date_str = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        log_file = self.audit_dir / f"audit_{date_str}.jsonl"

        data = {
            "kind": kind.value,
            "employeeId": employee_id,
            **entry.model_dump(by_alias=True, mode="json"),
        }

        try:
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(data) + "\n")
        except OSError as e:
            logger.error(f"Failed to log audit event for {employee_id}: {e}")
            raise

        logger.debug(f"Journaled '{entry.action}' for {kind.value} record {employee_id}")

    def get_events(
        self,
        employee_id: Optional[str] = None,
        kind: Optional[WorkflowKind] = None,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """
        Retrieve journaled entries, most recent first.

        Args:
            employee_id: Filter by employee ID
            kind: Filter by workflow kind
            limit: Maximum number of entries to return

        Returns:
            List of journal entries as dicts
        """
        results: List[Dict[str, Any]] = []

        for log_file in sorted(self.audit_dir.glob("audit_*.jsonl"), reverse=True):
            if len(results) >= limit:
                break

            with open(log_file, encoding="utf-8") as f:
                lines = f.readlines()

            for line in reversed(lines):
                if len(results) >= limit:
                    break

                try:
                    data = json.loads(line)
                except ValueError as e:
                    logger.warning(f"Skipping unreadable audit line in {log_file}: {e}")
                    continue

                if employee_id and data.get("employeeId") != employee_id:
                    continue
                if kind and data.get("kind") != kind.value:
                    continue

                results.append(data)

        return results
