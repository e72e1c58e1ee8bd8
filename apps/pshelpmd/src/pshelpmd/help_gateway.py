"""PowerShell help lookups and module command listing."""

from __future__ import annotations

import json
import subprocess
from typing import Protocol

from pydantic import ValidationError

from .constants import DEFAULT_PWSH_EXECUTABLE
from .errors import HelpLookupError, ModuleLookupError
from .models import AvailableHelp, HelpLookup, UnavailableHelp
from .raw_help import RawHelp

_SCRIPT_PREAMBLE = "\n".join(
    (
        "$ErrorActionPreference = 'Stop'",
        "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8",
    )
)

# Projects Get-Help output onto the payload shape described by RawHelp.
# A plain string from Get-Help means the item carries no structured help.
_HELP_SCRIPT_TEMPLATE = """\
$help = Get-Help -Name {name} -Full
if ($help -is [string]) {{
    ConvertTo-Json -InputObject $help -Compress
    return
}}
function Get-Texts($items) {{
    @($items | Where-Object {{ $_ }} | ForEach-Object {{ @{{ Text = [string]$_.Text }} }})
}}
$payload = [ordered]@{{
    Name = [string]$help.Name
    Synopsis = $help.Synopsis
    Syntax = if ($help.Syntax) {{ $help.Syntax | Out-String -Width 4096 }} else {{ $null }}
    Description = if ($help.Description) {{ Get-Texts $help.Description }} else {{ $null }}
    Examples = if ($help.Examples) {{
        @{{ Example = @($help.Examples.Example | ForEach-Object {{
            @{{ title = $_.title; code = $_.code; remarks = Get-Texts $_.remarks }}
        }}) }}
    }} else {{ $null }}
    Parameters = if ($help.Parameters -and $help.Parameters.Parameter) {{
        @{{ Parameter = @($help.Parameters.Parameter | ForEach-Object {{
            @{{
                name = $_.name
                description = Get-Texts $_.description
                type = @{{ name = $_.type.name }}
                required = $_.required
                defaultValue = $_.defaultValue
                parameterValue = $_.parameterValue
                position = $_.position
                pipelineInput = $_.pipelineInput
            }}
        }}) }}
    }} else {{ $null }}
    relatedLinks = if ($help.relatedLinks) {{
        @{{ navigationLink = @($help.relatedLinks.navigationLink | ForEach-Object {{
            @{{ linkText = $_.linkText; uri = $_.uri }}
        }}) }}
    }} else {{ $null }}
}}
ConvertTo-Json -InputObject $payload -Depth 8 -Compress
"""

_MODULE_COMMANDS_SCRIPT_TEMPLATE = """\
Import-Module -Name {name}
$names = @(Get-Command -Module {name} | ForEach-Object {{ $_.Name }})
ConvertTo-Json -InputObject $names -Compress
"""


class HelpSource(Protocol):
    """Collaborator that yields raw help for scripts and module commands."""

    def get_help(self, identifier: str) -> HelpLookup:
        ...

    def list_module_commands(self, module_name: str) -> list[str]:
        ...


class PowerShellHelpSource:
    """HelpSource backed by a ``pwsh`` subprocess per lookup."""

    def __init__(self, executable: str = DEFAULT_PWSH_EXECUTABLE) -> None:
        self._executable = executable

    def get_help(self, identifier: str) -> HelpLookup:
        script = _HELP_SCRIPT_TEMPLATE.format(name=quote_powershell_literal(identifier))
        try:
            stdout = self._run(script)
        except _PowerShellFailure as exc:
            raise HelpLookupError(f"Get-Help failed for {identifier}: {exc}") from exc
        return parse_help_payload(stdout)

    def list_module_commands(self, module_name: str) -> list[str]:
        script = _MODULE_COMMANDS_SCRIPT_TEMPLATE.format(
            name=quote_powershell_literal(module_name)
        )
        try:
            stdout = self._run(script)
        except _PowerShellFailure as exc:
            raise ModuleLookupError(
                f"Failed to list commands of module {module_name}: {exc}"
            ) from exc

        names = parse_command_names(stdout)
        if not names:
            raise ModuleLookupError(f"Module exports no commands: {module_name}")
        return names

    def _run(self, script: str) -> str:
        command = [
            self._executable,
            "-NoProfile",
            "-NonInteractive",
            "-Command",
            f"{_SCRIPT_PREAMBLE}\n{script}",
        ]
        try:
            completed = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
            )
        except OSError as exc:
            raise _PowerShellFailure(
                f"could not start {self._executable}: {exc}"
            ) from exc

        if completed.returncode != 0:
            stderr = completed.stderr.strip() or "(no error output)"
            raise _PowerShellFailure(f"exit code {completed.returncode}: {stderr}")
        return completed.stdout


class _PowerShellFailure(Exception):
    pass


def parse_help_payload(payload_text: str) -> HelpLookup:
    """Map the JSON printed by the help script onto the lookup variant."""
    try:
        payload = json.loads(payload_text)
    except json.JSONDecodeError as exc:
        raise HelpLookupError(f"Invalid help JSON: {exc}") from exc

    if payload is None:
        return UnavailableHelp(diagnostic="")
    if isinstance(payload, str):
        return UnavailableHelp(diagnostic=payload)
    if not isinstance(payload, dict):
        raise HelpLookupError("Help JSON must be a string or an object.")

    try:
        raw = RawHelp.model_validate(payload)
    except ValidationError as exc:
        raise HelpLookupError(f"Unexpected help structure: {exc}") from exc
    return AvailableHelp(raw=raw)


def parse_command_names(payload_text: str) -> list[str]:
    try:
        payload = json.loads(payload_text) if payload_text.strip() else []
    except json.JSONDecodeError as exc:
        raise ModuleLookupError(f"Invalid command list JSON: {exc}") from exc

    if isinstance(payload, str):
        payload = [payload]
    if not isinstance(payload, list) or not all(isinstance(n, str) for n in payload):
        raise ModuleLookupError("Command list JSON must be a list of strings.")
    return payload


def quote_powershell_literal(value: str) -> str:
    """Return ``value`` as a single-quoted PowerShell string literal."""
    escaped = value
    # PowerShell also accepts typographic single quotes as delimiters.
    for quote in ("'", "‘", "’", "‚", "‛"):
        escaped = escaped.replace(quote, quote * 2)
    return f"'{escaped}'"
