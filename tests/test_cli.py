"""Tests for the CLI."""

import json
from unittest.mock import MagicMock, patch

import pytest
import redis
from typer.testing import CliRunner

from splitsmith.ab.keys import nprospects_key, selection_key
from splitsmith.cli import app
from splitsmith.store.adapters import RedisStore, register_store

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path, connection):
    path = tmp_path / "splitsmith.yaml"
    path.write_text(
        "connection:\n"
        f"  backend: {connection.backend}\n"
        f"  key_prefix: {connection.key_prefix}\n"
    )
    return path


def invoke(config_file, *args, **kwargs):
    return runner.invoke(app, ["--config", str(config_file), *args], **kwargs)


class TestCli:
    """Test CLI commands against an in-memory store."""

    def test_keys(self, config_file, config, store):
        store.hincrby(nprospects_key(config, "signup"), "A", 1)
        store.set(selection_key(config, "signup", "p1"), "A")

        result = invoke(config_file, "keys", "signup")

        assert result.exit_code == 0
        assert result.stdout.splitlines() == sorted(
            [nprospects_key(config, "signup"), selection_key(config, "signup", "p1")]
        )

    def test_delete_confirmed(self, config_file, config, store):
        store.hincrby(nprospects_key(config, "signup"), "A", 1)

        result = invoke(config_file, "delete", "signup", "--yes")

        assert result.exit_code == 0
        assert "Deleted 1 key(s)" in result.stdout
        assert not store.exists(nprospects_key(config, "signup"))

    def test_delete_aborted(self, config_file, config, store):
        store.hincrby(nprospects_key(config, "signup"), "A", 1)

        result = invoke(config_file, "delete", "signup", input="n\n")

        assert result.exit_code == 1
        assert store.exists(nprospects_key(config, "signup"))

    def test_rename(self, config_file, config, store):
        store.hincrby(nprospects_key(config, "old"), "A", 1)

        result = invoke(config_file, "rename", "old", "new")

        assert result.exit_code == 0
        assert store.hgetall(nprospects_key(config, "new")) == {"A": "1"}

    def test_rename_conflict(self, config_file, config, store):
        store.hincrby(nprospects_key(config, "old"), "A", 1)
        store.hincrby(nprospects_key(config, "new"), "B", 1)

        result = invoke(config_file, "rename", "old", "new")

        assert result.exit_code == 1
        assert nprospects_key(config, "old") in result.output

    def test_report(self, config_file, config, store):
        store.hincrby(nprospects_key(config, "signup"), "A", 2)

        result = invoke(config_file, "report", "signup", "title")

        assert result.exit_code == 0
        reports = json.loads(result.stdout)
        assert [r["test_id"] for r in reports] == ["signup", "title"]
        assert reports[0]["forms"][0]["form_id"] == "A"
        assert reports[0]["total_prospects"] == 2

    def test_report_to_mlflow(self, config_file, config, store):
        with patch("splitsmith.io.mlflow_ab.mlflow") as mock_mlflow:
            result = invoke(config_file, "report", "signup", "--mlflow")

        assert result.exit_code == 0
        mock_mlflow.log_dict.assert_called_once()

    def test_store_unavailable(self, config_file, connection, store):
        client = MagicMock()
        client.scan_iter.side_effect = redis.exceptions.ConnectionError("down")
        register_store(connection, RedisStore(client=client))

        result = invoke(config_file, "keys", "signup")

        assert result.exit_code == 2
        assert "Error" in result.output

    def test_verbose_logs_operations(self, config_file, config, store, reset_logging):
        store.hincrby(nprospects_key(config, "signup"), "A", 1)

        result = invoke(config_file, "--verbose", "delete", "signup", "--yes")

        assert result.exit_code == 0
        assert "INFO splitsmith.admin: Deleted 1 key(s) of test 'signup'" in result.output
