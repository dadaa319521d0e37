"""
Checklist Trackers for the Lifecycle Engine.

A tracker owns one checklist attribute of a record (system provisioning,
compliance, finance) and knows how to flip its flags, describe the result
in the audit trail, and report whether every flag is set.

Flags are monotone: trackers only ever set flags to True.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..audit import AuditTrail
from ..models import ChecklistModel, LifecycleRecord, WorkflowStatus

logger = logging.getLogger(__name__)


class ChecklistTracker:
    """One named checklist on a lifecycle record."""

    def __init__(
        self,
        name: str,
        attribute: str,
        audit: AuditTrail,
        action: str,
        actor: str,
        labels: Optional[Dict[str, str]] = None,
        verb: Optional[str] = None,
        status_on_apply: Optional[WorkflowStatus] = None,
    ):
        """
        Initialize the tracker.

        Args:
            name: Wire name of the checklist (e.g. 'systemProvisioning')
            attribute: Record attribute holding the checklist model
            audit: Audit trail used to record every apply call
            action: Audit action name
            actor: Conceptual system performing the work
            labels: Display labels per flag for the audit details
            verb: Prefix for the requested flag names in the audit details
            status_on_apply: Status forced onto the record after flags are applied
        """
        self.name = name
        self.attribute = attribute
        self.audit = audit
        self.action = action
        self.actor = actor
        self.labels = labels or {}
        self.verb = verb
        self.status_on_apply = status_on_apply

    def checklist(self, record: LifecycleRecord) -> ChecklistModel:
        return getattr(record, self.attribute)

    def all_set(self, record: LifecycleRecord) -> bool:
        return self.checklist(record).all_set()

    def state(self, record: LifecycleRecord) -> Dict[str, bool]:
        return self.checklist(record).to_dict()

    def apply_flags(self, record: LifecycleRecord, names: Iterable[str]) -> Tuple[List[str], List[str]]:
        """
        Set each named flag that belongs to this checklist.

        Names outside the checklist's vocabulary are filtered out and
        ignored rather than failing the call.

        Returns:
            (applied, ignored) flag names, de-duplicated, in request order
        """
        checklist = self.checklist(record)
        applied: List[str] = []
        ignored: List[str] = []

        for name in names:
            if name in applied or name in ignored:
                continue
            if checklist.set_flag(name):
                applied.append(name)
            else:
                ignored.append(name)

        if ignored:
            logger.warning(f"Ignoring unknown {self.name} flags for {record.employee_id}: {ignored}")

        self._finish(record, requested=applied)
        return applied, ignored

    def apply_updates(self, record: LifecycleRecord, updates: Mapping[str, Optional[bool]]) -> List[str]:
        """
        Apply optional per-flag booleans.

        Only flags present with a True value are applied; None and False
        leave the flag as it is.

        Returns:
            Flag names that were applied
        """
        checklist = self.checklist(record)
        applied = [flag for flag, value in updates.items() if value and checklist.set_flag(flag)]

        self._finish(record)
        return applied

    def _finish(self, record: LifecycleRecord, requested: Optional[List[str]] = None):
        summary = ", ".join(
            f"{self.labels.get(flag, flag)}: {value}" for flag, value in self.state(record).items()
        )
        if self.verb is not None:
            summary = f"{self.verb}: {', '.join(requested or []) or 'none'}. {summary}"

        self.audit.record(record, action=self.action, actor=self.actor, details=summary)

        if self.status_on_apply is not None:
            record.status = self.status_on_apply
