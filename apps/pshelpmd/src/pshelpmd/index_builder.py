"""Index page creation and entry appending."""

from __future__ import annotations

from pathlib import Path

from .constants import FOLDER_INDEX_TITLE
from .errors import PageWriteError
from .markdown import heading, inline_code, link
from .models import HelpRecord, NamingConfig


def folder_index_title() -> str:
    return FOLDER_INDEX_TITLE


def module_index_title(module_name: str) -> str:
    return f"{inline_code(module_name)} Module"


def start_index(index_path: Path, title: str) -> None:
    """Create or truncate the index and write its single top-level heading."""
    _write(index_path, f"{heading(1, title)}\n\n", mode="w")


def append_index_entry(index_path: Path, record: HelpRecord, naming: NamingConfig) -> None:
    # Reopened per entry so an interrupted run leaves a consistent index.
    entry_heading = heading(2, link(record.name, naming.page_file_name(record.name)))
    lines = [entry_heading, ""]
    if record.synopsis:
        lines.extend([record.synopsis, ""])
    _write(index_path, "\n".join(lines) + "\n", mode="a")


def _write(index_path: Path, text: str, *, mode: str) -> None:
    try:
        with open(index_path, mode, encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError as exc:
        raise PageWriteError(f"Failed to write index: {index_path}") from exc
