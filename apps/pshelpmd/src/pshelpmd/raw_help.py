"""Pydantic models of the help payload emitted by the PowerShell gateway.

The payload mirrors the property names of ``Get-Help -Full`` output. PowerShell
collapses single-element arrays to scalars when serializing, so every list
field also accepts a lone object.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _coerce_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _coerce_text_list(value: Any) -> Any:
    if isinstance(value, str):
        return [{"Text": value}]
    return _coerce_list(value)


def _coerce_optional_text_list(value: Any) -> Any:
    if value is None:
        return None
    return _coerce_text_list(value)


def _coerce_type_name(value: Any) -> Any:
    if isinstance(value, str):
        return {"name": value}
    return value


TextValue = Annotated[str | None, BeforeValidator(_coerce_text)]


class _RawModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RawText(_RawModel):
    text: TextValue = Field(default=None, alias="Text")


TextList = Annotated[list[RawText], BeforeValidator(_coerce_text_list)]


class RawExample(_RawModel):
    title: TextValue = None
    code: TextValue = None
    remarks: TextList = []


class RawExamples(_RawModel):
    example: Annotated[list[RawExample], BeforeValidator(_coerce_list)] = Field(
        default=[], alias="Example"
    )


class RawTypeName(_RawModel):
    name: TextValue = None


class RawParameter(_RawModel):
    name: TextValue = None
    description: TextList = []
    type: Annotated[RawTypeName | None, BeforeValidator(_coerce_type_name)] = None
    required: TextValue = None
    default_value: TextValue = Field(default=None, alias="defaultValue")
    parameter_value: TextValue = Field(default=None, alias="parameterValue")
    position: TextValue = None
    pipeline_input: TextValue = Field(default=None, alias="pipelineInput")


class RawParameters(_RawModel):
    parameter: Annotated[list[RawParameter], BeforeValidator(_coerce_list)] = Field(
        default=[], alias="Parameter"
    )


class RawNavigationLink(_RawModel):
    link_text: TextValue = Field(default=None, alias="linkText")
    uri: TextValue = None


class RawRelatedLinks(_RawModel):
    navigation_link: Annotated[
        list[RawNavigationLink], BeforeValidator(_coerce_list)
    ] = Field(default=[], alias="navigationLink")


class RawHelp(_RawModel):
    name: TextValue = Field(default=None, alias="Name")
    synopsis: TextValue = Field(default=None, alias="Synopsis")
    syntax: TextValue = Field(default=None, alias="Syntax")
    description: Annotated[
        list[RawText] | None, BeforeValidator(_coerce_optional_text_list)
    ] = Field(default=None, alias="Description")
    examples: RawExamples | None = Field(default=None, alias="Examples")
    parameters: RawParameters | None = Field(default=None, alias="Parameters")
    related_links: RawRelatedLinks | None = Field(default=None, alias="relatedLinks")
