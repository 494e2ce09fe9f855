"""
Test Suite for the command line and configuration

Tests:
1. migrate command exit codes
2. inspect command output
3. Settings overrides and validation
"""

import json

import pytest
from click.testing import CliRunner
from pydantic import ValidationError

from ldp_migrate.cli import cli
from ldp_migrate.config import MigrationSettings

PREFIXES = "@prefix ldp: <http://www.w3.org/ns/ldp#> .\n"


@pytest.fixture
def runner():
    return CliRunner()


def test_migrate_command(runner, tmp_path):
    source = tmp_path / "in"
    source.mkdir()
    (source / "rest.ttl").write_text(PREFIXES + "<http://localhost/rest> a ldp:Container .\n")

    result = runner.invoke(cli, ["migrate", str(source), str(tmp_path / "out")])

    assert result.exit_code == 0, result.output
    assert "Migration Summary" in result.output
    assert (tmp_path / "out" / "rest.ttl.headers").exists()


def test_migrate_command_fails_on_bad_file(runner, tmp_path):
    source = tmp_path / "in"
    source.mkdir()
    (source / "broken.ttl").write_text("<<<")

    result = runner.invoke(cli, ["migrate", str(source), str(tmp_path / "out"), "--workers", "2"])

    assert result.exit_code == 1
    assert "failed" in result.output


def test_migrate_command_rejects_bad_workers(runner, tmp_path):
    source = tmp_path / "in"
    source.mkdir()

    result = runner.invoke(cli, ["migrate", str(source), str(tmp_path / "out"), "--workers", "0"])

    assert result.exit_code == 1
    assert "aborted" in result.output


def test_inspect_json(runner, tmp_path):
    description = tmp_path / "res.ttl"
    description.write_text(PREFIXES + "<http://localhost/rest/bin> a ldp:NonRDFSource .\n")

    result = runner.invoke(cli, ["inspect", str(description), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"Link": ['<http://www.w3.org/ns/ldp#NonRDFSource>; rel="type"']}
    assert not (tmp_path / "res.ttl.headers").exists()


def test_inspect_table(runner, tmp_path):
    description = tmp_path / "res.ttl"
    description.write_text(PREFIXES + "<http://localhost/rest> a ldp:Container .\n")

    result = runner.invoke(cli, ["inspect", str(description)])

    assert result.exit_code == 0, result.output
    assert "would rewrite" in result.output
    assert "res.ttl.headers" in result.output


def test_info(runner):
    result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Description extension" in result.output


def test_with_overrides_ignores_none(tmp_path):
    base = MigrationSettings(max_workers=3)

    updated = base.with_overrides(input_dir=tmp_path, max_workers=None, description_extension="n3")

    assert updated.input_dir == tmp_path
    assert updated.max_workers == 3
    assert updated.description_extension == ".n3"
    assert base.input_dir is None


def test_workers_must_be_positive():
    with pytest.raises(ValidationError):
        MigrationSettings(max_workers=0)


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("MIGRATE_INPUT_DIR", str(tmp_path))
    monkeypatch.setenv("MIGRATE_MAX_WORKERS", "8")

    settings = MigrationSettings()

    assert settings.input_dir == tmp_path
    assert settings.max_workers == 8
