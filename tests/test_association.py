"""Tests for association management commands."""

import pytest

from ledgerimport.cli.main import cli


@pytest.fixture
def run(cli_runner, temp_db):
    def invoke(*args, input=None):
        return cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "association", *args, "--company", "1"], input=input
        )

    return invoke


@pytest.fixture
def stored(temp_db):
    temp_db.upsert_association(1, "BOLT.EU", "6256")
    temp_db.upsert_association(1, "CARREFOUR", "601")
    temp_db.upsert_association(1, "UBER", "6251")
    # Drop cached rows; commands write through their own session
    temp_db.disconnect()
    return temp_db


def test_list_associations(run, stored):
    """Test listing associations."""
    result = run("list")

    assert result.exit_code == 0
    assert "Associations (3):" in result.output
    assert "CARREFOUR" in result.output


def test_list_search(run, stored):
    """Test searching associations."""
    result = run("list", "--search", "bolt")

    assert result.exit_code == 0
    assert "Associations (1):" in result.output
    assert "UBER" not in result.output


def test_list_empty(run):
    """Test listing without associations."""
    result = run("list")

    assert result.exit_code == 0
    assert "No associations found." in result.output


def test_set_association(run, temp_db):
    """Test mapping a label to an account."""
    result = run("set", "BOLT.EU", "6256")

    assert result.exit_code == 0
    assert "'BOLT.EU' -> 6256" in result.output
    assert temp_db.get_association(1, "BOLT.EU").account_number == "6256"


def test_set_empty_account(run):
    """Test that an empty account is refused."""
    result = run("set", "BOLT.EU", " ")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_rename(run, stored):
    """Test renaming a label."""
    result = run("rename", "CARREFOUR", "CARREFOUR MARKET")

    assert result.exit_code == 0
    assert "Renamed 'CARREFOUR' to 'CARREFOUR MARKET'" in result.output
    assert stored.get_association(1, "CARREFOUR") is None
    assert stored.get_association(1, "CARREFOUR MARKET").account_number == "601"


def test_rename_missing(run, stored):
    """Test renaming an unknown label."""
    result = run("rename", "MISSING", "OTHER")

    assert result.exit_code == 1
    assert "No association for label 'MISSING'" in result.output


def test_reassign(run, stored):
    """Test pointing several labels at one account."""
    result = run("reassign", "BOLT.EU", "UBER", "--account", "6257")

    assert result.exit_code == 0
    assert "2 associations now point to 6257" in result.output
    assert {a.label: a.account_number for a in stored.find_associations(1)} == {
        "BOLT.EU": "6257",
        "CARREFOUR": "601",
        "UBER": "6257",
    }


def test_delete_with_yes(run, stored):
    """Test deleting without a prompt."""
    result = run("delete", "UBER", "--yes")

    assert result.exit_code == 0
    assert "Deleted association for 'UBER'" in result.output
    assert stored.get_association(1, "UBER") is None


def test_delete_cancelled(run, stored):
    """Test answering no at the delete prompt."""
    result = run("delete", "UBER", input="n\n")

    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    assert stored.get_association(1, "UBER") is not None


def test_delete_missing(run, stored):
    """Test deleting an unknown label."""
    result = run("delete", "MISSING", "--yes")

    assert result.exit_code == 1
    assert "Error:" in result.output
