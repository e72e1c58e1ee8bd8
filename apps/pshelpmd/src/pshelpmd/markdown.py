"""Markdown rendering primitives.

All functions are pure and return strings without trailing newlines; callers
join blocks with blank lines.
"""

from __future__ import annotations

from collections.abc import Sequence

_TABLE_SEPARATOR_ROW = "| --- | --- |"


def heading(level: int, text: str) -> str:
    if level < 1 or level > 6:
        raise ValueError(f"Heading level must be between 1 and 6: {level}")
    return f"{'#' * level} {text}"


def code_block(language: str, code: str) -> str:
    body = code.rstrip("\r\n")
    return "\n".join((f"```{language}", body, "```"))


def table(rows: Sequence[tuple[str, str]]) -> str:
    """Render a two-column pipe table.

    The first row is the header row and is followed by the separator row.
    """
    if not rows:
        return ""

    lines = [_table_row(*rows[0]), _TABLE_SEPARATOR_ROW]
    lines.extend(_table_row(left, right) for left, right in rows[1:])
    return "\n".join(lines)


def bullet(text: str) -> str:
    return f"* {text}"


def inline_code(text: str) -> str:
    return f"`{text}`"


def link(text: str, target: str) -> str:
    return f"[{text}]({target})"


def _table_row(left: str, right: str) -> str:
    return f"| {_table_cell(left)} | {_table_cell(right)} |"


def _table_cell(value: str) -> str:
    flattened = " ".join(value.split())
    return flattened.replace("|", "\\|")
