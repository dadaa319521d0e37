"""
Tests for the record repositories.
"""

import json

import pytest

from lifecycle_engine.engine import InMemoryRecordRepository, JsonFileRecordRepository
from lifecycle_engine.exceptions import DuplicateIdError, StorageError
from lifecycle_engine.lifecycle import LifecycleEngine
from lifecycle_engine.models import OffboardingRecord, WorkflowStatus


@pytest.fixture
def record():
    return OffboardingRecord(
        employee_id="EMP001",
        employee_name="Carol",
        last_working_day="2024-06-30",
        department="Finance",
        reason="Resignation",
        manager="Dave",
        initiated_by="HR2",
    )


class TestInMemoryRecordRepository:

    def test_get_missing(self):
        assert InMemoryRecordRepository().get("nobody") is None

    def test_get_returns_a_copy(self, record):
        store = InMemoryRecordRepository()
        store.put("EMP001", record)

        copy = store.get("EMP001")
        copy.status = WorkflowStatus.COMPLETED
        copy.compliance.assets_returned = True

        stored = store.get("EMP001")
        assert stored.status == WorkflowStatus.INITIATED
        assert stored.compliance.assets_returned is False

    def test_put_stores_a_copy(self, record):
        store = InMemoryRecordRepository()
        store.put("EMP001", record)
        record.reason = "Changed after put"

        assert store.get("EMP001").reason == "Resignation"

    def test_last_write_wins(self, record):
        store = InMemoryRecordRepository()
        store.put("EMP001", record)
        store.put("EMP001", record.model_copy(update={"reason": "Contract end"}))

        assert store.get("EMP001").reason == "Contract end"
        assert len(store) == 1

    def test_create_refuses_duplicates(self, record):
        store = InMemoryRecordRepository()
        store.create("EMP001", record)

        with pytest.raises(DuplicateIdError):
            store.create("EMP001", record)

    def test_get_all_in_insertion_order(self, record):
        store = InMemoryRecordRepository()
        for emp_id in ("B", "A", "C"):
            store.put(emp_id, record.model_copy(update={"employee_id": emp_id}))

        assert [r.employee_id for r in store.get_all()] == ["B", "A", "C"]
        assert store.exists("A")
        assert not store.exists("D")


class TestJsonFileRecordRepository:

    def test_records_survive_reload(self, tmp_path, record):
        path = tmp_path / "offboarding.json"
        JsonFileRecordRepository(path, OffboardingRecord).put("EMP001", record)

        reloaded = JsonFileRecordRepository(path, OffboardingRecord)

        assert reloaded.get("EMP001") == record

    def test_file_layout(self, tmp_path, record):
        path = tmp_path / "offboarding.json"
        JsonFileRecordRepository(path, OffboardingRecord).put("EMP001", record)

        data = json.loads(path.read_text())

        assert "last_updated" in data
        assert data["records"]["EMP001"]["employeeName"] == "Carol"
        assert data["records"]["EMP001"]["finalPayroll"] == {"processed": False, "benefitsTerminated": False}

    def test_unreadable_file_starts_empty(self, tmp_path):
        path = tmp_path / "offboarding.json"
        path.write_text("{not json")

        store = JsonFileRecordRepository(path, OffboardingRecord)

        assert len(store) == 0

    def test_engine_state_persists_between_instances(self, tmp_path, onboarding_data):
        config = {"state_dir": str(tmp_path / "state")}

        first = LifecycleEngine.from_config(config)
        employee_id = first.onboarding.initiate(**onboarding_data)["employeeId"]
        first.onboarding.approve(employee_id, "hr", "HR1", True)

        second = LifecycleEngine.from_config(config)
        record = second.onboarding_store.get(employee_id)

        assert isinstance(second.onboarding_store, JsonFileRecordRepository)
        assert record.approvals.hr.approved is True
        assert len(record.audit_trail) == 2

    def test_failed_write_keeps_previous_snapshot(self, tmp_path, record, monkeypatch):
        path = tmp_path / "offboarding.json"
        store = JsonFileRecordRepository(path, OffboardingRecord)
        store.put("EMP001", record)
        before = path.read_text()

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("lifecycle_engine.engine.record_store.os.replace", failing_replace)

        with pytest.raises(StorageError):
            store.put("EMP001", record.model_copy(update={"reason": "Contract end"}))

        assert path.read_text() == before
        assert not (tmp_path / "offboarding.json.tmp").exists()
        assert store.get("EMP001").reason == "Resignation"
        assert JsonFileRecordRepository(path, OffboardingRecord).get("EMP001") == record
