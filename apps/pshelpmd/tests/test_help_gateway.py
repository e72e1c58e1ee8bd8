"""Tests for the PowerShell help gateway."""

from __future__ import annotations

import json
import subprocess
from typing import Any

import pytest

import pshelpmd.help_gateway as help_gateway
from pshelpmd.errors import HelpLookupError, ModuleLookupError
from pshelpmd.help_gateway import (
    PowerShellHelpSource,
    parse_command_names,
    parse_help_payload,
    quote_powershell_literal,
)
from pshelpmd.models import AvailableHelp, UnavailableHelp
from test_helpers import make_help_payload


def _fake_run(
    monkeypatch: pytest.MonkeyPatch,
    *,
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> list[list[str]]:
    calls: list[list[str]] = []

    def _run(command: list[str], **_: Any) -> subprocess.CompletedProcess[str]:
        calls.append(command)
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)

    monkeypatch.setattr(help_gateway.subprocess, "run", _run)
    return calls


def test_parse_help_payload_string_means_unavailable() -> None:
    lookup = parse_help_payload(json.dumps("Bare.ps1 [[-Path] <Object>]"))

    assert isinstance(lookup, UnavailableHelp)
    assert lookup.diagnostic == "Bare.ps1 [[-Path] <Object>]"


def test_parse_help_payload_object_means_available() -> None:
    lookup = parse_help_payload(json.dumps(make_help_payload()))

    assert isinstance(lookup, AvailableHelp)
    assert lookup.raw.synopsis == "Gets a thing."
    assert lookup.raw.examples is not None
    assert lookup.raw.examples.example[0].code == "Get-Thing -Name demo"


def test_parse_help_payload_rejects_invalid_json() -> None:
    with pytest.raises(HelpLookupError, match="Invalid help JSON"):
        parse_help_payload("not json")


def test_parse_help_payload_rejects_unexpected_structure() -> None:
    with pytest.raises(HelpLookupError, match="Unexpected help structure"):
        parse_help_payload(json.dumps({"Examples": {"Example": [{"code": {"a": 1}}]}}))


def test_parse_command_names_accepts_single_name() -> None:
    assert parse_command_names('"Get-Thing"') == ["Get-Thing"]
    assert parse_command_names('["Get-A","Set-B"]') == ["Get-A", "Set-B"]


def test_get_help_runs_pwsh_with_quoted_identifier(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls = _fake_run(monkeypatch, stdout=json.dumps(make_help_payload()))

    lookup = PowerShellHelpSource(executable="pwsh-preview").get_help(
        "C:\\Scripts\\It's.ps1"
    )

    assert isinstance(lookup, AvailableHelp)
    (command,) = calls
    assert command[:4] == ["pwsh-preview", "-NoProfile", "-NonInteractive", "-Command"]
    assert "Get-Help -Name 'C:\\Scripts\\It''s.ps1' -Full" in command[4]


def test_get_help_reports_non_zero_exit(monkeypatch: pytest.MonkeyPatch) -> None:
    _fake_run(monkeypatch, stderr="Get-Help : not found", returncode=1)

    with pytest.raises(HelpLookupError, match="not found"):
        PowerShellHelpSource().get_help("Get-Missing")


def test_get_help_reports_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise(*_: Any, **__: Any) -> None:
        raise FileNotFoundError("pwsh")

    monkeypatch.setattr(help_gateway.subprocess, "run", _raise)

    with pytest.raises(HelpLookupError, match="could not start pwsh"):
        PowerShellHelpSource().get_help("Get-Thing")


def test_list_module_commands_keeps_powershell_order(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls = _fake_run(monkeypatch, stdout='["Set-B","Get-A"]\n')

    names = PowerShellHelpSource().list_module_commands("Tools")

    assert names == ["Set-B", "Get-A"]
    assert "Import-Module -Name 'Tools'" in calls[0][4]


def test_list_module_commands_failure_is_module_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _fake_run(monkeypatch, stderr="module not loaded", returncode=1)

    with pytest.raises(ModuleLookupError, match="module not loaded"):
        PowerShellHelpSource().list_module_commands("Nope")


def test_list_module_commands_rejects_empty_module(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _fake_run(monkeypatch, stdout="[]")

    with pytest.raises(ModuleLookupError, match="exports no commands"):
        PowerShellHelpSource().list_module_commands("Empty")


def test_quote_powershell_literal_doubles_quotes() -> None:
    assert quote_powershell_literal("plain") == "'plain'"
    assert quote_powershell_literal("it's") == "'it''s'"
