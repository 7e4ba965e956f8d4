#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for the alfredkit command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import ANY, MagicMock, patch

from click.testing import CliRunner
import pytest
import requests

from alfredkit.cli import main as cli_main
from alfredkit.config import AlfredKitRuntimeConfig
from alfredkit.exceptions import ReleaseError
from alfredkit.updater import Updater

DOCUMENT = {
    "rerun": 1.5,
    "variables": {"fruit": "banana"},
    "items": [
        {"title": "Item 1"},
        {
            "title": "Desktop",
            "arg": "~/Desktop",
            "type": "file",
            "icon": {"type": "fileicon", "path": "~/Desktop"},
            "mods": {"cmd": {"subtitle": "Reveal", "arg": "reveal", "icon": {"path": "cmd.png"}}},
            "variables": {"k": "v"},
        },
    ],
}


class TestCliGroup:
    """Test the top-level group."""

    def test_help(self) -> None:
        result = CliRunner().invoke(cli_main, ["--help"])
        assert result.exit_code == 0
        for command in ("render", "env", "update"):
            assert command in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli_main, ["--version"])
        assert result.exit_code == 0
        assert "alfredkit version" in result.output


class TestRenderCommand:
    """Test the render command."""

    def test_json_from_stdin(self) -> None:
        result = CliRunner().invoke(cli_main, ["render"], input=json.dumps(DOCUMENT))
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == DOCUMENT

    def test_json_from_file_with_indent(self, tmp_path: Path) -> None:
        source = tmp_path / "items.json"
        source.write_text(json.dumps(DOCUMENT), encoding="utf-8")

        result = CliRunner().invoke(cli_main, ["render", str(source), "--indent", "2"])

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("{\n")
        assert json.loads(result.stdout) == DOCUMENT

    def test_xml(self) -> None:
        result = CliRunner().invoke(cli_main, ["render", "--format", "xml"], input=json.dumps(DOCUMENT))

        assert result.exit_code == 0, result.output
        assert result.stdout == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<items>\n"
            "    <item>\n"
            "        <title>Item 1</title>\n"
            "    </item>\n"
            '    <item arg="~/Desktop" type="file">\n'
            "        <title>Desktop</title>\n"
            '        <icon type="fileicon">~/Desktop</icon>\n'
            '        <mod key="cmd" subtitle="Reveal" arg="reveal"/>\n'
            "    </item>\n"
            "</items>\n"
        )

    def test_invalid_document(self) -> None:
        result = CliRunner().invoke(cli_main, ["render"], input='{"items": [{"subtitle": "no title"}]}')
        assert result.exit_code != 0
        assert "Cannot read script filter document" in result.output

    def test_invalid_rerun(self) -> None:
        result = CliRunner().invoke(cli_main, ["render"], input='{"rerun": 9, "items": []}')
        assert result.exit_code != 0
        assert "rerun" in result.output

    @pytest.mark.parametrize(
        "document",
        [
            '{"items": [{"title": "a", "subtitle": 5}]}',
            '{"rerun": "soon", "items": []}',
            '{"variables": [1], "items": []}',
        ],
    )
    @pytest.mark.parametrize("output_format", ["json", "xml"])
    def test_wrongly_typed_document(self, document: str, output_format: str) -> None:
        result = CliRunner().invoke(cli_main, ["render", "--format", output_format], input=document)
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Cannot read script filter document" in result.output

    def test_unknown_format(self) -> None:
        result = CliRunner().invoke(cli_main, ["render", "--format", "yaml"], input="{}")
        assert result.exit_code == 2


class TestEnvCommand:
    """Test the env command."""

    def test_outside_workflow(self) -> None:
        result = CliRunner().invoke(cli_main, ["env"])
        assert result.exit_code == 0, result.output
        assert "Not running inside an Alfred workflow" in result.output
        assert "workflow_uid" in result.output

    def test_inside_workflow(self, workflow_env: Path) -> None:
        result = CliRunner().invoke(cli_main, ["env"])
        assert result.exit_code == 0, result.output
        assert "Not running inside" not in result.output
        assert "workflow.B0AC54EC-601C" in result.output

    def test_json(self, workflow_env: Path) -> None:
        result = CliRunner().invoke(cli_main, ["env", "--json"])
        assert result.exit_code == 0, result.output
        info = json.loads(result.stdout)
        assert info["workflow_uid"] == "workflow.B0AC54EC-601C"
        assert info["workflow_cache"] == str(workflow_env / "cache")
        assert info["debug"] is False
        assert info["theme"] is None


class TestUpdateCommands:
    """Test the update check and download commands."""

    def test_check_up_to_date(self, workflow_env: Path, fake_releaser) -> None:
        updater = Updater(fake_releaser)
        with patch.object(Updater, "gh", return_value=updater) as mock_gh:
            result = CliRunner().invoke(cli_main, ["update", "check", "owner/wf"])

        assert result.exit_code == 0, result.output
        mock_gh.assert_called_once_with("owner/wf", config=ANY)
        assert isinstance(mock_gh.call_args.kwargs["config"], AlfredKitRuntimeConfig)
        assert json.loads(result.stdout) == {
            "items": [{"title": "This workflow is up to date", "subtitle": "Version 0.10.5", "valid": False}]
        }

    def test_check_update_ready(self, workflow_env: Path, fake_releaser) -> None:
        updater = Updater(fake_releaser)
        updater.update_ready()
        updater.set_interval(-1)
        with patch.object(Updater, "gh", return_value=updater):
            result = CliRunner().invoke(cli_main, ["update", "check", "owner/wf"])

        assert result.exit_code == 0, result.output
        (item,) = json.loads(result.stdout)["items"]
        assert item["title"] == "A new version of this workflow is available"
        assert item["arg"] == "owner/wf"
        assert item["variables"] == {"update_ready": "yes"}

    def test_check_release_error(self, workflow_env: Path, fake_releaser) -> None:
        updater = Updater(fake_releaser)
        updater.update_ready()
        updater.set_interval(-1)
        fake_releaser.error = ReleaseError("rate limited")
        with patch.object(Updater, "gh", return_value=updater):
            result = CliRunner().invoke(cli_main, ["update", "check", "owner/wf"])

        assert result.exit_code != 0
        assert "Update check failed" in result.output

    def test_check_outside_workflow(self) -> None:
        result = CliRunner().invoke(cli_main, ["update", "check", "owner/wf"])
        assert result.exit_code != 0
        assert "alfred_workflow_data" in result.output

    def test_download(self, workflow_env: Path, fake_releaser) -> None:
        session = MagicMock(spec=requests.Session)
        session.get.return_value.__enter__.return_value.iter_content.return_value = [b"zip"]
        updater = Updater(fake_releaser, session=session)
        with patch.object(Updater, "gh", return_value=updater):
            result = CliRunner().invoke(cli_main, ["update", "download", "owner/wf"])

        assert result.exit_code == 0, result.output
        path = workflow_env / "cache" / "latest_release_workflow.B0AC54EC-601C.alfredworkflow"
        assert str(path) in result.stdout
        assert path.read_bytes() == b"zip"

    def test_download_failure(self, workflow_env: Path, fake_releaser) -> None:
        session = MagicMock(spec=requests.Session)
        session.get.side_effect = requests.Timeout("timed out")
        updater = Updater(fake_releaser, session=session)
        with patch.object(Updater, "gh", return_value=updater):
            result = CliRunner().invoke(cli_main, ["update", "download", "owner/wf"])

        assert result.exit_code != 0
        assert "Download failed" in result.output


# 🎩📋🔚
