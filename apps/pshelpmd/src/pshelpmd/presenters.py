"""User-facing text rendering."""

from __future__ import annotations

from .constants import APP_NAME, ERROR_PREFIX, WARNING_PREFIX
from .models import BatchResult, Diagnostic, ResolvedPaths


def render_app_banner() -> str:
    return APP_NAME


def render_loaded_parameters(*, resolved_paths: ResolvedPaths) -> list[str]:
    if resolved_paths.source_folder_abs is not None:
        source_line = f"Script folder: {resolved_paths.source_folder_abs}"
    else:
        source_line = f"Module: {resolved_paths.module_name}"
    return [
        "Loaded parameters:",
        source_line,
        f"Output folder: {resolved_paths.output_dir_abs}",
        f"Index file: {resolved_paths.index_path}",
    ]


def render_error(message: str) -> str:
    return f"{ERROR_PREFIX} {message}"


def render_warning(message: str) -> str:
    return f"{WARNING_PREFIX} {message}"


def render_diagnostic_lines(diagnostics: list[Diagnostic]) -> list[str]:
    return [
        render_warning(f"{diagnostic.item_name}: {diagnostic.message}")
        for diagnostic in diagnostics
    ]


def render_summary(result: BatchResult) -> str:
    return (
        f"Generated {result.page_count} page(s) from {result.total_items} item(s); "
        f"skipped {result.skipped_count}. Index: {result.index_path.name}"
    )
