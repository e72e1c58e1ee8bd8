"""Normalization of raw help lookups into help records."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import PurePath

from .constants import (
    PARAMETER_ATTRIBUTE_ORDER,
    SECTION_DESCRIPTION,
    SECTION_EXAMPLES,
    SECTION_PARAMETERS,
    SECTION_POLICY,
    SECTION_RELATED_LINKS,
    SECTION_SYNOPSIS,
    SECTION_SYNTAX,
)
from .logging_utils import log_event
from .models import (
    AdaptedHelp,
    HelpExample,
    HelpLink,
    HelpLookup,
    HelpParameter,
    HelpRecord,
    UnavailableHelp,
)
from .raw_help import RawExample, RawHelp, RawParameter, RawText

_PATH_SEPARATOR_PATTERN = r"[\\/]+"
_DIAGNOSTIC_EXCERPT_LENGTH = 80


def adapt_help(
    name: str,
    lookup: HelpLookup,
    *,
    source_folder: PurePath | None = None,
) -> AdaptedHelp:
    """Turn one raw lookup into a record plus the warnings it raised.

    Every absent section is reported; only absent mandatory sections make the
    result non-renderable.
    """
    if isinstance(lookup, UnavailableHelp):
        excerpt = _diagnostic_excerpt(lookup.diagnostic)
        log_event(
            "help_unavailable",
            level=logging.WARNING,
            item=name,
            diagnostic=excerpt,
        )
        message = "No help found."
        if excerpt:
            message = f"No help found (got: {excerpt})."
        return AdaptedHelp(
            record=HelpRecord(name=name, is_unavailable=True),
            warnings=(message,),
            missing_mandatory=(),
        )

    record = build_help_record(name, lookup.raw, source_folder=source_folder)
    presence = section_presence(record)

    warnings: list[str] = []
    missing_mandatory: list[str] = []
    for section, mandatory in SECTION_POLICY:
        if presence[section]:
            continue
        log_event(
            "help_section_missing",
            level=logging.WARNING,
            item=name,
            section=section,
            mandatory=mandatory,
        )
        if mandatory:
            missing_mandatory.append(section)
            warnings.append(f"Missing mandatory section '{section}'; no page generated.")
        else:
            warnings.append(f"Missing optional section '{section}'.")

    return AdaptedHelp(
        record=record,
        warnings=tuple(warnings),
        missing_mandatory=tuple(missing_mandatory),
    )


def build_help_record(
    name: str, raw: RawHelp, *, source_folder: PurePath | None = None
) -> HelpRecord:
    examples = tuple(_build_example(example) for example in _examples_of(raw))
    parameters = tuple(
        _build_parameter(parameter)
        for parameter in _parameters_of(raw)
        if _clean_text(parameter.name) is not None
    )
    related_links = tuple(
        HelpLink(link_text=_clean_text(link.link_text), uri=_clean_text(link.uri))
        for link in (raw.related_links.navigation_link if raw.related_links else [])
    )
    return HelpRecord(
        name=name,
        synopsis=_clean_text(raw.synopsis),
        syntax_lines=split_syntax_lines(raw.syntax, source_folder),
        description_text=join_texts(raw.description),
        examples=examples,
        parameters=parameters,
        related_links=related_links,
    )


def section_presence(record: HelpRecord) -> dict[str, bool]:
    return {
        SECTION_SYNOPSIS: record.synopsis is not None,
        SECTION_SYNTAX: bool(record.syntax_lines),
        SECTION_DESCRIPTION: record.description_text is not None,
        SECTION_EXAMPLES: bool(record.examples),
        SECTION_PARAMETERS: bool(record.parameters),
        SECTION_RELATED_LINKS: any(
            link.link_text is not None or link.uri is not None
            for link in record.related_links
        ),
    }


def split_syntax_lines(
    syntax_text: str | None, source_folder: PurePath | None = None
) -> tuple[str, ...]:
    """One entry per non-blank line, with the source folder prefix removed."""
    if not syntax_text:
        return ()

    prefix_pattern = (
        _source_folder_prefix_pattern(source_folder)
        if source_folder is not None
        else None
    )
    lines: list[str] = []
    for raw_line in syntax_text.splitlines():
        line = raw_line.strip()
        if line == "":
            continue
        if prefix_pattern is not None:
            line = prefix_pattern.sub("", line)
        lines.append(line)
    return tuple(lines)


def join_texts(texts: Iterable[RawText] | None) -> str | None:
    if texts is None:
        return None
    parts = [text.text.rstrip() for text in texts if text.text and text.text.strip()]
    if not parts:
        return None
    return "\n".join(parts).strip("\r\n")


def _source_folder_prefix_pattern(source_folder: PurePath) -> re.Pattern[str] | None:
    folder_text = str(source_folder).rstrip("\\/")
    if folder_text == "":
        # Filesystem root: syntax lines keep their paths.
        return None
    segments = re.split(_PATH_SEPARATOR_PATTERN, folder_text)
    body = _PATH_SEPARATOR_PATTERN.join(re.escape(segment) for segment in segments)
    # Windows paths compare case-insensitively.
    return re.compile(body + _PATH_SEPARATOR_PATTERN, flags=re.IGNORECASE)


def _examples_of(raw: RawHelp) -> list[RawExample]:
    if raw.examples is None:
        return []
    return raw.examples.example


def _parameters_of(raw: RawHelp) -> list[RawParameter]:
    if raw.parameters is None:
        return []
    return raw.parameters.parameter


def _build_example(example: RawExample) -> HelpExample:
    return HelpExample(
        title=example.title or "",
        code=example.code or "",
        remarks_text=join_texts(example.remarks),
    )


def _build_parameter(parameter: RawParameter) -> HelpParameter:
    raw_attributes = {
        "Required": parameter.required,
        "DefaultValue": parameter.default_value,
        "ParameterValue": parameter.parameter_value,
        "Position": parameter.position,
        "PipelineInput": parameter.pipeline_input,
    }
    return HelpParameter(
        name=(parameter.name or "").strip(),
        description_text=join_texts(parameter.description),
        type_name=_clean_text(parameter.type.name) if parameter.type else None,
        attributes={
            key: _clean_text(raw_attributes[key]) for key in PARAMETER_ATTRIBUTE_ORDER
        },
    )


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _diagnostic_excerpt(diagnostic: str) -> str:
    for line in diagnostic.splitlines():
        stripped = line.strip()
        if stripped:
            if len(stripped) > _DIAGNOSTIC_EXCERPT_LENGTH:
                return stripped[: _DIAGNOSTIC_EXCERPT_LENGTH - 3] + "..."
            return stripped
    return ""
