"""
Tests for the stackdock CLI.

Uses Click's CliRunner against an isolated data directory with a simulated
gateway that answers instantly.
"""
import json

import pytest
from click.testing import CliRunner

from stackdock.cli import cli
from stackdock.managers.storage_manager import StorageManager


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, data_dir):
    """Invoke the CLI with instant, always-successful remote calls."""

    def _invoke(*args, failure_rate="0", input=None):
        return runner.invoke(
            cli,
            [
                "--data-dir", str(data_dir),
                "--failure-rate", failure_rate,
                "--min-delay", "0",
                "--max-delay", "0",
                *args,
            ],
            input=input,
        )

    return _invoke


def stored(data_dir):
    return StorageManager(data_dir).load()


def test_help_lists_groups(runner):
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for name in ("init", "status", "stack", "card"):
        assert name in result.output


def test_init_seeds_demo_data(invoke, data_dir):
    result = invoke("init")
    assert result.exit_code == 0
    assert "3 stacks, 5 cards" in result.output
    assert len(stored(data_dir).stacks) == 3


def test_init_force_reseeds(invoke, data_dir):
    invoke("stack", "add", "Extra")
    result = invoke("init", "--force", input="y\n")
    assert result.exit_code == 0
    assert "Extra" not in {s.name for s in stored(data_dir).stacks}


def test_stack_add_and_list(invoke, data_dir):
    result = invoke("stack", "add", "Reading")
    assert result.exit_code == 0
    assert "Stack 'Reading' created" in result.output

    result = invoke("stack", "list")
    assert "Reading (0 cards)" in result.output
    assert "Shopping (2 cards)" in result.output


def test_stack_add_blank_name_fails(invoke):
    result = invoke("stack", "add", "  ")
    assert result.exit_code != 0
    assert "Name must not be empty" in result.output


def test_failed_operation_reports_rollback(invoke, data_dir):
    invoke("init")
    result = invoke("stack", "add", "Doomed", failure_rate="1")
    assert result.exit_code != 0
    assert "Failed to create stack. Please try again." in result.output
    assert "rolled back" in result.output
    assert "Doomed" not in {s.name for s in stored(data_dir).stacks}


def test_stack_rename_by_name(invoke, data_dir):
    result = invoke("stack", "rename", "shopping", "Wishlist")
    assert result.exit_code == 0
    assert "Wishlist" in {s.name for s in stored(data_dir).stacks}


def test_stack_delete_cascades(invoke, data_dir):
    result = invoke("stack", "delete", "Shopping", "--yes")
    assert result.exit_code == 0
    snapshot = stored(data_dir)
    assert "Shopping" not in {s.name for s in snapshot.stacks}
    assert len(snapshot.cards) == 3


def test_unknown_stack_is_an_error(invoke):
    result = invoke("stack", "rename", "Nope", "Other")
    assert result.exit_code != 0
    assert "Stack 'Nope' not found." in result.output


def test_card_add_list_edit_move_delete(invoke, data_dir):
    result = invoke("card", "add", "Reading List", "Dune", "--desc", "Desert planet")
    assert result.exit_code == 0

    result = invoke("card", "list", "Reading List")
    assert "Dune" in result.output
    assert "Desert planet" in result.output

    result = invoke("card", "edit", "dune", "--name", "Dune Messiah")
    assert result.exit_code == 0
    assert "Card 'Dune Messiah' updated." in result.output

    result = invoke("card", "move", "Dune Messiah", "Shopping")
    assert result.exit_code == 0
    snapshot = stored(data_dir)
    shopping = next(s for s in snapshot.stacks if s.name == "Shopping")
    card = next(c for c in snapshot.cards if c.name == "Dune Messiah")
    assert card.stack_id == shopping.id

    result = invoke("card", "delete", "Dune Messiah")
    assert result.exit_code == 0
    assert "Dune Messiah" not in {c.name for c in stored(data_dir).cards}


def test_card_edit_requires_a_change(invoke):
    result = invoke("card", "edit", "Mechanical Keyboard")
    assert result.exit_code != 0
    assert "Nothing to change" in result.output


def test_status_json(invoke):
    result = invoke("status", "--json")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert len(data["stacks"]) == 3


def test_status_with_sync(invoke):
    result = invoke("status", "--sync")
    assert result.exit_code == 0
    assert "Sync: idle" in result.output
    assert "- Shopping: 2 cards" in result.output


def test_status_reports_failed_sync(invoke):
    invoke("init")
    result = invoke("status", "--sync", failure_rate="1")
    assert result.exit_code == 1
    assert "Sync: error (Failed to sync data. Please try again.)" in result.output
    assert "- Shopping: 2 cards" in result.output


def test_invalid_delay_options_are_reported(runner, data_dir):
    result = runner.invoke(
        cli, ["--data-dir", str(data_dir), "--min-delay", "2", "--max-delay", "1", "status"]
    )
    assert result.exit_code != 0
    assert "Invalid gateway settings" in result.output


def test_init_writes_default_config(invoke, data_dir):
    result = invoke("init")
    assert result.exit_code == 0
    config = json.loads((data_dir / "config.json").read_text())
    assert config["failure_rate"] == 0.1
    assert config["theme"] == "dark"
