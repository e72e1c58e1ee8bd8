"""Shared builders for pshelpmd tests."""

from __future__ import annotations

from typing import Any

from pshelpmd.errors import ModuleLookupError
from pshelpmd.models import AvailableHelp, HelpLookup, UnavailableHelp
from pshelpmd.raw_help import RawHelp


def make_help_payload(
    *,
    name: str = "Get-Thing",
    synopsis: str | None = "Gets a thing.",
    syntax: str | None = "Get-Thing [-Name] <String> [<CommonParameters>]",
    omit: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Build a help payload shaped like the PowerShell gateway output.

    Keys listed in ``omit`` are sent as JSON null.
    """
    payload: dict[str, Any] = {
        "Name": name,
        "Synopsis": synopsis,
        "Syntax": syntax,
        "Description": [{"Text": f"{name} does the thing."}],
        "Examples": {
            "Example": [
                {
                    "title": "-------------------------- EXAMPLE 1 --------------------------",
                    "code": f"{name} -Name demo",
                    "remarks": [{"Text": "Gets the demo thing."}, {"Text": ""}],
                }
            ]
        },
        "Parameters": {
            "Parameter": [
                {
                    "name": "Name",
                    "description": [{"Text": "Name of the thing."}],
                    "type": {"name": "String"},
                    "required": "true",
                    "defaultValue": "",
                    "parameterValue": "String",
                    "position": "1",
                    "pipelineInput": "false",
                }
            ]
        },
        "relatedLinks": {
            "navigationLink": [
                {"linkText": "about_Things", "uri": ""},
                {"linkText": "", "uri": "https://example.com/things"},
            ]
        },
    }
    for key in omit:
        payload[key] = None
    return payload


def available(payload: dict[str, Any]) -> AvailableHelp:
    return AvailableHelp(raw=RawHelp.model_validate(payload))


def unavailable(diagnostic: str = "Bare.ps1") -> UnavailableHelp:
    return UnavailableHelp(diagnostic=diagnostic)


class FakeHelpSource:
    """In-memory HelpSource keyed by item identifier."""

    def __init__(
        self,
        helps: dict[str, HelpLookup | Exception] | None = None,
        modules: dict[str, list[str]] | None = None,
    ) -> None:
        self.helps = helps or {}
        self.modules = modules or {}
        self.requested: list[str] = []

    def get_help(self, identifier: str) -> HelpLookup:
        self.requested.append(identifier)
        value = self.helps[identifier]
        if isinstance(value, Exception):
            raise value
        return value

    def list_module_commands(self, module_name: str) -> list[str]:
        if module_name not in self.modules:
            raise ModuleLookupError(f"Module not found: {module_name}")
        return list(self.modules[module_name])
