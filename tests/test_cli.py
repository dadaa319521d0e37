"""
Tests for the lifecyclectl command line interface.
"""

import json
import os
from unittest.mock import MagicMock

import click
import pytest
from click.testing import CliRunner

from lifecycle_engine.cli.lifecyclectl import DEFAULT_STATE_DIR, cli, parse_arguments
from lifecycle_engine.config import CONFIG_ENV_VAR, STATE_DIR_ENV_VAR, load_config
from lifecycle_engine.engine import JsonFileRecordRepository
from lifecycle_engine.models import OffboardingRecord

OFFBOARDING_ARGS = {
    "employeeId": "EMP001",
    "employeeName": "Carol",
    "lastWorkingDay": "2024-06-30",
    "department": "Finance",
    "reason": "Resignation",
    "manager": "Dave",
    "initiatedBy": "HR2",
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def state_dir(tmp_path):
    return str(tmp_path / "state")


def invoke(runner, state_dir, *args):
    return runner.invoke(cli, ["--state-dir", state_dir, *args], obj={})


def stored_offboarding(state_dir):
    return JsonFileRecordRepository(f"{state_dir}/offboarding.json", OffboardingRecord).get("EMP001")


class TestParseArguments:

    def test_values_are_decoded_as_json_when_possible(self):
        arguments = parse_arguments(("approved=true", 'systems=["email","hrms"]', "approverName=Dave Smith"))

        assert arguments == {"approved": True, "systems": ["email", "hrms"], "approverName": "Dave Smith"}

    def test_rejects_pairs_without_equals(self):
        with pytest.raises(click.BadParameter):
            parse_arguments(("approved",))


class TestCallCommand:

    def test_initiate_and_approve(self, runner, state_dir):
        result = invoke(runner, state_dir, "call", "initiate_offboarding", "--json", json.dumps(OFFBOARDING_ARGS))
        assert result.exit_code == 0, result.output

        result = invoke(
            runner, state_dir, "call", "approve_offboarding",
            "-a", "employeeId=EMP001", "-a", "approverRole=manager",
            "-a", "approverName=Dave", "-a", "approved=true",
        )
        assert result.exit_code == 0, result.output

        record = stored_offboarding(state_dir)
        assert record.approvals.manager.approved is True
        assert len(record.audit_trail) == 2

    def test_failure_exits_non_zero(self, runner, state_dir):
        result = invoke(runner, state_dir, "call", "get_offboarding_status", "-a", "employeeId=EMP404")
        assert result.exit_code == 1

    def test_unknown_tool_exits_non_zero(self, runner, state_dir):
        result = invoke(runner, state_dir, "call", "fire_employee")
        assert result.exit_code == 1

    def test_invalid_json(self, runner, state_dir):
        result = invoke(runner, state_dir, "call", "get_offboarding_status", "--json", "{oops")
        assert result.exit_code == 2


class TestInspectionCommands:

    def test_tools(self, runner, state_dir):
        result = invoke(runner, state_dir, "tools")
        assert result.exit_code == 0

    def test_pending_when_empty(self, runner, state_dir):
        result = invoke(runner, state_dir, "pending")

        assert result.exit_code == 0
        assert "No pending approvals" in result.output

    def test_status_and_audit_trail(self, runner, state_dir):
        invoke(runner, state_dir, "call", "initiate_offboarding", "--json", json.dumps(OFFBOARDING_ARGS))

        status = invoke(runner, state_dir, "status", "EMP001", "--kind", "offboarding")
        assert status.exit_code == 0
        assert "Initiated" in status.output

        trail = invoke(runner, state_dir, "audit-trail", "EMP001", "--kind", "offboarding")
        assert trail.exit_code == 0

        pending = invoke(runner, state_dir, "pending", "--type", "offboarding")
        assert pending.exit_code == 0
        assert "EMP001" in pending.output

    def test_status_unknown_employee(self, runner, state_dir):
        result = invoke(runner, state_dir, "status", "EMP404")
        assert result.exit_code == 1

    def test_pending_names_only_the_roles_still_waiting(self, runner, state_dir):
        invoke(runner, state_dir, "call", "initiate_offboarding", "--json", json.dumps(OFFBOARDING_ARGS))
        invoke(
            runner, state_dir, "call", "approve_offboarding",
            "-a", "employeeId=EMP001", "-a", "approverRole=manager",
            "-a", "approverName=Dave", "-a", "approved=true",
        )

        result = invoke(runner, state_dir, "pending", "--type", "offboarding")

        assert result.exit_code == 0
        row = next(line for line in result.output.splitlines() if "EMP001" in line)
        assert row.rstrip(" │|").endswith("hr")
        assert "manager" not in row


class TestServeCommand:

    @pytest.fixture
    def start_server(self, monkeypatch):
        # Registered first so monkeypatch restores the variables serve exports
        monkeypatch.setenv(CONFIG_ENV_VAR, "")
        monkeypatch.setenv(STATE_DIR_ENV_VAR, "")
        server = MagicMock()
        monkeypatch.setattr("lifecycle_engine.api.server.start_server", server)
        return server

    def test_state_dir_reaches_the_server_process(self, runner, state_dir, start_server):
        result = invoke(runner, state_dir, "serve", "--port", "9001")

        assert result.exit_code == 0, result.output
        start_server.assert_called_once_with(host="127.0.0.1", port=9001, reload=False)
        assert os.environ[STATE_DIR_ENV_VAR] == state_dir
        assert load_config()["state_dir"] == state_dir

    def test_default_state_dir_is_used_without_option(self, runner, start_server):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["serve"], obj={})

        assert result.exit_code == 0, result.output
        assert os.environ[STATE_DIR_ENV_VAR] == DEFAULT_STATE_DIR
