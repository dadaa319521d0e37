"""
Lifecycle Engine facade.

Wires the record stores, audit journal, workflows and query service
together from a configuration dictionary.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .audit import AuditLogger
from .engine import (
    InMemoryRecordRepository,
    JsonFileRecordRepository,
    RecordQueryService,
    RecordRepository,
)
from .models import OffboardingRecord, OnboardingRecord
from .workflows import OffboardingWorkflow, OnboardingWorkflow

logger = logging.getLogger(__name__)


class LifecycleEngine:
    """Onboarding and offboarding workflows over one pair of record stores."""

    def __init__(
        self,
        onboarding_store: Optional[RecordRepository[OnboardingRecord]] = None,
        offboarding_store: Optional[RecordRepository[OffboardingRecord]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the engine.

        Args:
            onboarding_store: Store for onboarding records (in-memory if None)
            offboarding_store: Store for offboarding records (in-memory if None)
            audit_logger: Optional journal for audit entries
        """
        self.onboarding_store = onboarding_store if onboarding_store is not None else InMemoryRecordRepository()
        self.offboarding_store = offboarding_store if offboarding_store is not None else InMemoryRecordRepository()
        self.audit_logger = audit_logger

        self.onboarding = OnboardingWorkflow(self.onboarding_store, audit_logger)
        self.offboarding = OffboardingWorkflow(self.offboarding_store, audit_logger)
        self.queries = RecordQueryService(self.onboarding_store, self.offboarding_store)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "LifecycleEngine":
        """
        Build an engine from a configuration dictionary.

        ``state_dir`` selects JSON file stores, ``audit_dir`` enables the
        audit journal; both default to off.
        """
        config = config or {}
        state_dir = config.get("state_dir")
        audit_dir = config.get("audit_dir")

        if state_dir:
            state_path = Path(state_dir)
            onboarding_store = JsonFileRecordRepository(state_path / "onboarding.json", OnboardingRecord)
            offboarding_store = JsonFileRecordRepository(state_path / "offboarding.json", OffboardingRecord)
        else:
            onboarding_store = InMemoryRecordRepository()
            offboarding_store = InMemoryRecordRepository()

        audit_logger = AuditLogger(audit_dir) if audit_dir else None

        logger.info(
            f"Lifecycle engine using {'persistent' if state_dir else 'in-memory'} storage"
            f"{', audit journal at ' + str(audit_dir) if audit_dir else ''}"
        )
        return cls(onboarding_store, offboarding_store, audit_logger)
