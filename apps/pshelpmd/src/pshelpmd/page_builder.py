"""Per-item Markdown page composition and writing."""

from __future__ import annotations

import re
from pathlib import Path

from .constants import CODE_LANGUAGE, PARAMETER_ATTRIBUTE_ORDER
from .errors import PageWriteError
from .fs_gateway import remove_if_exists
from .markdown import bullet, code_block, heading, inline_code, table
from .models import HelpExample, HelpLink, HelpParameter, HelpRecord, NamingConfig

_SEPARATOR_RUN_RE = re.compile(r"^\s*-{3,}\s*|\s*-{3,}\s*$")
_EXAMPLE_MARKER_RE = re.compile(r"^(?:BEISPIEL|EXAMPLE)\b", flags=re.IGNORECASE)
_WHITESPACE_RUN_RE = re.compile(r"\s+")


def build_page(record: HelpRecord) -> str:
    """Render a complete page for one help record.

    Blocks are separated by a blank line; the page ends with a single newline.
    """
    blocks: list[str] = [heading(1, record.name)]
    if record.synopsis:
        blocks.append(record.synopsis)

    blocks.append(heading(2, "Syntax"))
    blocks.extend(code_block(CODE_LANGUAGE, line) for line in record.syntax_lines)

    blocks.append(heading(2, "Description"))
    if record.description_text:
        blocks.append(record.description_text)

    blocks.append(heading(2, "Examples"))
    for position, example in enumerate(record.examples, start=1):
        blocks.extend(_example_blocks(example, position))

    blocks.append(heading(2, "Parameters"))
    for parameter in record.parameters:
        blocks.extend(_parameter_blocks(parameter))

    blocks.append(heading(2, "Related Links"))
    link_lines = _related_link_lines(record.related_links)
    if link_lines:
        blocks.append("\n".join(link_lines))

    return "\n\n".join(blocks) + "\n"


def write_page(record: HelpRecord, output_dir: Path, naming: NamingConfig) -> Path:
    page_path = output_dir / naming.page_file_name(record.name)
    content = build_page(record)
    try:
        remove_if_exists(page_path)
        page_path.write_text(content, encoding="utf-8", newline="\n")
    except OSError as exc:
        raise PageWriteError(f"Failed to write page: {page_path}") from exc
    return page_path


def clean_example_title(title: str, position: int) -> str:
    """Strip the surrounding dash separators and normalize a leading marker.

    ``---------- BEISPIEL 1 ----------`` becomes ``Example 1``.
    """
    cleaned = _SEPARATOR_RUN_RE.sub("", title)
    cleaned = _WHITESPACE_RUN_RE.sub(" ", cleaned).strip()
    cleaned = _EXAMPLE_MARKER_RE.sub("Example", cleaned, count=1)
    if cleaned == "":
        return f"Example {position}"
    return cleaned


def parameter_table_rows(parameter: HelpParameter) -> list[tuple[str, str]]:
    rows = [("Type", parameter.type_name or "")]
    for key in PARAMETER_ATTRIBUTE_ORDER:
        value = parameter.attributes.get(key)
        if value is not None:
            rows.append((key, value))
    return rows


def _example_blocks(example: HelpExample, position: int) -> list[str]:
    blocks = [
        heading(3, clean_example_title(example.title, position)),
        code_block(CODE_LANGUAGE, example.code),
    ]
    if example.remarks_text and example.remarks_text.strip():
        blocks.append(example.remarks_text.strip())
    return blocks


def _parameter_blocks(parameter: HelpParameter) -> list[str]:
    blocks = [heading(3, inline_code(f"-{parameter.name}"))]
    if parameter.description_text and parameter.description_text.strip():
        blocks.append(parameter.description_text.strip())
    blocks.append(table(parameter_table_rows(parameter)))
    return blocks


def _related_link_lines(links: tuple[HelpLink, ...]) -> list[str]:
    # Link texts first, then URIs.
    values = [link.link_text for link in links] + [link.uri for link in links]
    return [bullet(value.strip()) for value in values if value and value.strip()]
