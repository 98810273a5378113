from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from wirebox import __version__
from wirebox.cli.main import app

runner = CliRunner()


def write_registry(tmp_path, rows, name="registry.json"):
    path = tmp_path / name
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


VALID_ROWS = [
    {
        "DeveloperName": "Ordered",
        "Implementation_Type": "collections.OrderedDict",
        "Service_Lifetime": "Singleton",
        "Active": True,
    },
    {
        "DeveloperName": "Hidden",
        "Implementation_Type": "nowhere.Missing",
        "Service_Lifetime": "Transient",
        "Active": False,
    },
]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_show_active_rows(tmp_path):
    path = write_registry(tmp_path, VALID_ROWS)

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 0
    assert "Ordered" in result.output
    assert "Hidden" not in result.output


def test_show_all_rows(tmp_path):
    path = write_registry(tmp_path, VALID_ROWS)

    result = runner.invoke(app, ["show", str(path), "--all"])

    assert result.exit_code == 0
    assert "Hidden" in result.output


def test_validate_valid_registry(tmp_path):
    path = write_registry(tmp_path, VALID_ROWS)

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 0
    assert "valid: 1 active of 2 row(s)" in result.output


def test_validate_unresolved_implementation(tmp_path):
    rows = [{**VALID_ROWS[1], "Active": True}]
    path = write_registry(tmp_path, rows)

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 2
    assert "INVALID" in result.output
    assert "nowhere.Missing" in result.output


def test_validate_duplicate_keys(tmp_path):
    rows = [VALID_ROWS[0], {**VALID_ROWS[0], "Service_Lifetime": "Scoped"}]
    path = write_registry(tmp_path, rows)

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 2
    assert "'Ordered' is registered as Singleton and again as Scoped" in result.output


@pytest.mark.parametrize(
    "name, content",
    [("registry.json", "{not json"), ("registry.ini", "[]")],
)
def test_unreadable_registry(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Cannot read registry" in result.output


def test_invalid_rows_are_reported(tmp_path):
    path = write_registry(tmp_path, [{"DeveloperName": "Ordered"}])

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 1
    assert "validation error" in result.output


def test_schema():
    result = runner.invoke(app, ["schema"])

    assert result.exit_code == 0
    schema = json.loads(result.output)
    assert "DeveloperName" in schema["properties"]
