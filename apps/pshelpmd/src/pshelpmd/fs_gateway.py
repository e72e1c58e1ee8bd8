"""Filesystem enumeration and file replacement helpers."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .constants import SCRIPT_EXTENSION
from .errors import StartupValidationError


def list_script_files(folder_abs: Path) -> list[Path]:
    """Return the script files directly inside ``folder_abs``, sorted by name."""
    if not folder_abs.is_dir():
        raise StartupValidationError(f"Script folder does not exist: {folder_abs}")

    try:
        children = sorted(folder_abs.iterdir(), key=lambda p: p.name.casefold())
    except OSError as exc:
        raise StartupValidationError(f"Failed to read directory: {folder_abs}") from exc

    return [
        child_abs
        for child_abs in children
        if child_abs.suffix.lower() == SCRIPT_EXTENSION and child_abs.is_file()
    ]


def remove_if_exists(path: Path) -> None:
    """Unlink a file if present, clearing the read-only bit on Windows if needed."""
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except PermissionError:
        if os.name == "nt":
            os.chmod(path, stat.S_IWRITE)
            path.unlink()
        else:
            raise
