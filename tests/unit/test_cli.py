import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from player_catalog.apps import cli as cli_module


def test_sync_prints_results_per_club():
    fake = AsyncMock(return_value={"5": {"success": True, "insertedPlayers": 5}, "27": {"success": True}})
    with patch.object(cli_module, "cmd_sync", fake), patch.object(cli_module, "_setup_logging"):
        result = CliRunner().invoke(cli_module.cli, ["sync", "--club-id", "5", "--club-id", "27", "--overwrite"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"5": {"success": True, "insertedPlayers": 5}, "27": {"success": True}}
    _, club_ids, overwrite = fake.await_args.args
    assert club_ids == ["5", "27"]
    assert overwrite is True


def test_sync_failure_exits_non_zero():
    fake = AsyncMock(side_effect=RuntimeError("provider down"))
    with patch.object(cli_module, "cmd_sync", fake), patch.object(cli_module, "_setup_logging"):
        result = CliRunner().invoke(cli_module.cli, ["sync", "--club-id", "5"])
    assert result.exit_code == 1


def test_sync_requires_club_id():
    result = CliRunner().invoke(cli_module.cli, ["sync"])
    assert result.exit_code != 0
    assert "--club-id" in result.output
