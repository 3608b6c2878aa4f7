"""Tests for the jsondb command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from jsondb.cli import cli
from jsondb.storage.io import METADATA_DIR, METADATA_FILE


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in ["JSONDB_DIRECTORY", "JSONDB_PRETTY", "JSONDB_LOG_LEVEL"]:
        monkeypatch.delenv(key, raising=False)
    return CliRunner()


class TestCreate:
    def test_text_output(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["create", "--name", "Shop_2024", "--directory", str(tmp_path)])
        assert result.exit_code == 0
        assert f"Created an empty database inside: {tmp_path / 'Shop_2024'}" in result.output
        assert (tmp_path / "Shop_2024" / METADATA_DIR / METADATA_FILE).is_file()

    def test_json_output(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["create", "-n", "Shop_2024", "-d", str(tmp_path), "--json"])
        assert result.exit_code == 0
        output = json.loads(result.stdout)
        assert output == {"status": 0, "data": {"path": str(tmp_path / "Shop_2024")}}

    def test_defaults_to_current_directory(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["create", "-n", "Here"])
        assert result.exit_code == 0
        assert (tmp_path / "Here").is_dir()

    def test_configured_directory(self, runner: CliRunner, tmp_path: Path, monkeypatch):
        target = tmp_path / "dbs"
        target.mkdir()
        monkeypatch.setenv("JSONDB_DIRECTORY", str(target))
        result = runner.invoke(cli, ["create", "-n", "There"])
        assert result.exit_code == 0
        assert (target / "There").is_dir()

    def test_duplicate_fails(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["create", "-n", "Shop_2024", "-d", str(tmp_path)])
        result = runner.invoke(cli, ["create", "-n", "Shop_2024", "-d", str(tmp_path), "--json"])
        assert result.exit_code == 1
        output = json.loads(result.stdout)
        assert output["status"] == -1
        assert "data" not in output
        assert output["error"]["cause"].startswith("Library error: Directory already exists")

    def test_invalid_name_text(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["create", "-n", "bad name", "-d", str(tmp_path)])
        assert result.exit_code == 1
        assert "Database name contains forbidden characters" in result.output

    def test_missing_directory_is_io_error(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["create", "-n", "db", "-d", str(tmp_path / "nope"), "-j"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"]["cause"].startswith("I/O error:")


class TestOpen:
    def test_json_output(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["create", "-n", "Shop_2024", "-d", str(tmp_path)])
        result = runner.invoke(cli, ["open", str(tmp_path / "Shop_2024"), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["name"] == "Shop_2024"
        assert data["path"] == str((tmp_path / "Shop_2024").resolve())
        assert data["created"] == data["modified"]

    def test_text_output(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["create", "-n", "Shop_2024", "-d", str(tmp_path)])
        result = runner.invoke(cli, ["open", str(tmp_path / "Shop_2024")])
        assert result.exit_code == 0
        assert "Database : Shop_2024" in result.output

    def test_not_a_database(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["open", str(tmp_path), "--json"])
        assert result.exit_code == 1
        assert "corrupted" in json.loads(result.stdout)["error"]["cause"]

    def test_metadata_missing_field(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["create", "-n", "Shop_2024", "-d", str(tmp_path)])
        metadata_file = tmp_path / "Shop_2024" / METADATA_DIR / METADATA_FILE
        metadata_file.write_text('{"name": "Shop_2024"}', encoding="utf-8")
        result = runner.invoke(cli, ["open", str(tmp_path / "Shop_2024"), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"]["cause"].startswith("Serde error:")

    def test_corrupted_metadata_text(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["create", "-n", "Shop_2024", "-d", str(tmp_path)])
        (tmp_path / "Shop_2024" / METADATA_DIR / METADATA_FILE).write_text("{", encoding="utf-8")
        result = runner.invoke(cli, ["open", str(tmp_path / "Shop_2024")])
        assert result.exit_code == 1
        assert result.output.startswith("Serde error:")

    def test_unexpected_error_is_not_reported_as_failure(
        self, runner: CliRunner, tmp_path: Path, monkeypatch
    ):
        def broken_open(*args, **kwargs):
            raise TypeError("bug")

        monkeypatch.setattr("jsondb.cli.Database.open", broken_open)
        result = runner.invoke(cli, ["open", str(tmp_path), "--json"])
        assert isinstance(result.exception, TypeError)
        assert result.stdout == ""
