"""
Record Store for the Lifecycle Engine.

Keyed storage of onboarding and offboarding records by employee ID.
Each workflow kind gets its own repository; workflows receive the
repository they operate on rather than reaching for global state.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Generic, List, Optional, Type, TypeVar, Union

from ..exceptions import DuplicateIdError, StorageError
from ..models import LifecycleRecord

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=LifecycleRecord)


class RecordRepository(ABC, Generic[R]):
    """
    Repository interface for lifecycle records.

    Records handed out by ``get`` are copies: a caller mutates its copy and
    writes it back with ``put``. Concurrent writers are not detected; the
    last ``put`` wins.
    """

    @abstractmethod
    def get(self, employee_id: str) -> Optional[R]:
        """
        Get the record for an employee.

        Args:
            employee_id: Employee ID to look up

        Returns:
            A copy of the record if found, None otherwise
        """

    @abstractmethod
    def put(self, employee_id: str, record: R) -> None:
        """Insert or replace the record for an employee."""

    @abstractmethod
    def get_all(self) -> List[R]:
        """Get copies of all records, in insertion order."""

    def exists(self, employee_id: str) -> bool:
        return self.get(employee_id) is not None

    def create(self, employee_id: str, record: R) -> None:
        """
        Insert a new record.

        Raises:
            DuplicateIdError: If a record with this ID already exists
        """
        if self.exists(employee_id):
            raise DuplicateIdError(employee_id)
        self.put(employee_id, record)

    def __len__(self) -> int:
        return len(self.get_all())


class InMemoryRecordRepository(RecordRepository[R]):
    """Dictionary-backed repository. No I/O."""

    def __init__(self):
        self.records: Dict[str, R] = {}

    def get(self, employee_id: str) -> Optional[R]:
        record = self.records.get(employee_id)
        return record.model_copy(deep=True) if record is not None else None

    def put(self, employee_id: str, record: R) -> None:
        self.records[employee_id] = record.model_copy(deep=True)

    def get_all(self) -> List[R]:
        return [record.model_copy(deep=True) for record in self.records.values()]

    def __len__(self) -> int:
        return len(self.records)


class JsonFileRecordRepository(InMemoryRecordRepository[R]):
    """
    Repository that mirrors its contents to a JSON file.

    The whole snapshot is rewritten after every ``put`` through a temporary
    file and loaded once at construction.
    """

    def __init__(self, storage_path: Union[str, Path], record_type: Type[R]):
        """
        Initialize the repository.

        Args:
            storage_path: JSON file holding the records
            record_type: Record model used to load stored entries
        """
        super().__init__()
        self.storage_path = Path(storage_path)
        self.record_type = record_type

        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._load_state()

        logger.info(
            f"Initialized {record_type.__name__} store at {self.storage_path} "
            f"with {len(self.records)} records"
        )

    def put(self, employee_id: str, record: R) -> None:
        """
        Insert or replace a record and persist the snapshot.

        Raises:
            StorageError: If the snapshot cannot be written. The store is
                left as it was before the call.
        """
        records = dict(self.records)
        records[employee_id] = record.model_copy(deep=True)
        self._save_state(records)
        self.records = records

    def _save_state(self, records: Dict[str, R]):
        """Atomically replace the JSON file with a snapshot of ``records``."""
        state_data = {
            "records": {
                emp_id: record.model_dump(by_alias=True, mode="json")
                for emp_id, record in records.items()
            },
            "last_updated": datetime.now(timezone.utc).isoformat(),
        }

        tmp_path = self.storage_path.with_name(f"{self.storage_path.name}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(state_data, f, indent=2)
            os.replace(tmp_path, self.storage_path)
        except OSError as e:
            logger.error(f"Failed to save state to {self.storage_path}: {e}")
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Could not save records to {self.storage_path}: {e}") from e

    def _load_state(self):
        """Load state from the JSON file, starting empty if it is unreadable."""
        if not self.storage_path.exists():
            return

        try:
            with open(self.storage_path, encoding="utf-8") as f:
                state_data = json.load(f)

            for emp_id, record_data in state_data.get("records", {}).items():
                self.records[emp_id] = self.record_type.model_validate(record_data)

            logger.info(f"Loaded {len(self.records)} records from {self.storage_path}")

        except (OSError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(f"Failed to load state from {self.storage_path}: {e}")
            self.records = {}
