"""Tests for the command line interface."""

import json

from click.testing import CliRunner

from workflowlens.cli import cli

DEPLOY = """\
on:
  workflow_dispatch:
    inputs:
      version:
        type: string
        description: Version to ship
        default: "1.0"
      env:
        type: environment
jobs:
  deploy:
    runs-on: ubuntu-latest
  smoke:
    runs-on: [macos]
"""


def test_list_text(repo_dir, write_workflow, roster_file):
    write_workflow("deploy.yml", DEPLOY)
    result = CliRunner().invoke(
        cli, ["list", "--root", str(repo_dir), "--agents", str(roster_file), "--workflow", "deploy.yml"]
    )

    assert result.exit_code == 0, result.output
    # mac-1 advertises macos but is not available
    assert "deploy.yml: no matching runner: macos" in result.output
    assert "DISPATCH INPUTS: deploy.yml" in result.output
    assert result.output.index("version (string") < result.output.index("env (environment")


def test_list_json(repo_dir, write_workflow, roster_file):
    write_workflow("deploy.yml", DEPLOY)
    write_workflow("broken.yml", "jobs: [unclosed")
    result = CliRunner().invoke(
        cli,
        ["list", "--root", str(repo_dir), "--agents", str(roster_file), "--workflow", "deploy.yml", "--json"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [w["name"] for w in data["workflows"]] == ["broken.yml", "deploy.yml"]
    assert data["workflows"][0]["error"].startswith("invalid workflow")
    assert [i["name"] for i in data["dispatch_inputs"]] == ["version", "env"]
    assert data["dispatch_inputs"][0]["default"] == "1.0"


def test_list_disabled_workflow(repo_dir, write_workflow, roster_file):
    write_workflow("deploy.yml", DEPLOY)
    result = CliRunner().invoke(
        cli,
        [
            "list", "--root", str(repo_dir), "--agents", str(roster_file),
            "--workflow", "deploy.yml", "--disabled", "deploy.yml",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "deploy.yml is disabled" in result.output
    assert "DISPATCH INPUTS" not in result.output


def test_list_requires_roster(repo_dir):
    result = CliRunner().invoke(cli, ["list", "--root", str(repo_dir), "--agents", "", "--api", ""])
    assert result.exit_code == 1


def test_list_bad_roster(repo_dir, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("agents: 3\n")
    result = CliRunner().invoke(cli, ["list", "--root", str(repo_dir), "--agents", str(bad)])
    assert result.exit_code == 1


def test_inputs_command(write_workflow):
    path = write_workflow("deploy.yml", DEPLOY)
    result = CliRunner().invoke(cli, ["inputs", str(path), "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data[0] == {
        "name": "version",
        "type": "string",
        "default": "1.0",
        "description": "Version to ship",
        "required": False,
        "options": [],
    }
    assert data[1]["name"] == "env"


def test_inputs_command_without_dispatch(write_workflow):
    path = write_workflow("ci.yml", "on: push\njobs:\n  a:\n    runs-on: linux\n")
    result = CliRunner().invoke(cli, ["inputs", str(path)])
    assert result.exit_code == 0
    assert "no manual dispatch inputs" in result.output


def test_inputs_command_invalid_workflow(write_workflow):
    path = write_workflow("broken.yml", "jobs: [unclosed")
    result = CliRunner().invoke(cli, ["inputs", str(path)])
    assert result.exit_code == 1
