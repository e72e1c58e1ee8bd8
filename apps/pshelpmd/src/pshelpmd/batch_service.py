"""Batch workflow orchestration."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from .constants import DEFAULT_INDEX_FILE_NAME
from .errors import HelpLookupError, StartupValidationError
from .fs_gateway import list_script_files
from .help_adapter import adapt_help
from .help_gateway import HelpSource
from .index_builder import (
    append_index_entry,
    folder_index_title,
    module_index_title,
    start_index,
)
from .logging_utils import log_event
from .models import (
    BatchItem,
    BatchResult,
    BatchSource,
    Diagnostic,
    ModuleSource,
    NamingConfig,
    ScriptFolderSource,
)
from .page_builder import write_page


def run_batch(
    *,
    source: BatchSource,
    output_dir: Path,
    help_source: HelpSource,
    naming: NamingConfig | None = None,
    index_file_name: str = DEFAULT_INDEX_FILE_NAME,
    on_progress: Callable[[int, int, str], None] | None = None,
) -> BatchResult:
    """Generate one page per documented item plus the shared index.

    Setup problems raise before anything is written. Per-item problems are
    collected as diagnostics and never stop the batch.
    """
    effective_naming = naming if naming is not None else NamingConfig()
    if not output_dir.is_dir():
        raise StartupValidationError(f"Output folder does not exist: {output_dir}")

    items = enumerate_items(source=source, help_source=help_source)
    index_path = output_dir / index_file_name
    source_folder = source.folder_abs if isinstance(source, ScriptFolderSource) else None

    started = time.monotonic()
    log_event(
        "batch_start",
        mode=source.kind,
        source=source_folder if source_folder is not None else _module_name(source),
        output_dir=output_dir,
        index_file=index_path,
        item_count=len(items),
    )

    start_index(index_path, _index_title(source))
    result = BatchResult(index_path=index_path, total_items=len(items))

    for position, item in enumerate(items, start=1):
        if on_progress is not None:
            on_progress(position, len(items), item.name)
        log_event("item_start", index=position, total=len(items), item=item.name)
        _process_item(
            item=item,
            help_source=help_source,
            output_dir=output_dir,
            index_path=index_path,
            naming=effective_naming,
            source_folder=source_folder,
            result=result,
        )

    log_event(
        "batch_stop",
        pages_written=result.page_count,
        items_skipped=result.skipped_count,
        diagnostics=len(result.diagnostics),
        elapsed_ms=round((time.monotonic() - started) * 1000),
    )
    return result


def enumerate_items(*, source: BatchSource, help_source: HelpSource) -> list[BatchItem]:
    if isinstance(source, ScriptFolderSource):
        return [
            BatchItem(name=script_abs.stem, identifier=str(script_abs))
            for script_abs in list_script_files(source.folder_abs)
        ]
    return [
        BatchItem(name=command_name, identifier=command_name)
        for command_name in help_source.list_module_commands(source.module_name)
    ]


def _process_item(
    *,
    item: BatchItem,
    help_source: HelpSource,
    output_dir: Path,
    index_path: Path,
    naming: NamingConfig,
    source_folder: Path | None,
    result: BatchResult,
) -> None:
    page_file_name = naming.page_file_name(item.name)
    # Matched case-insensitively, as on Windows file systems.
    if page_file_name.casefold() == index_path.name.casefold():
        message = (
            f"Page file name '{page_file_name}' collides with the index file; "
            "no page generated."
        )
        log_event(
            "item_skipped",
            level=logging.WARNING,
            item=item.name,
            reason="page name collides with index",
        )
        result.diagnostics.append(Diagnostic(item_name=item.name, message=message))
        result.skipped_items.append(item.name)
        return

    try:
        lookup = help_source.get_help(item.identifier)
    except HelpLookupError as exc:
        log_event(
            "help_lookup_error",
            level=logging.WARNING,
            item=item.name,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        result.diagnostics.append(Diagnostic(item_name=item.name, message=str(exc)))
        result.skipped_items.append(item.name)
        return

    adapted = adapt_help(item.name, lookup, source_folder=source_folder)
    result.diagnostics.extend(
        Diagnostic(item_name=item.name, message=warning) for warning in adapted.warnings
    )
    if not adapted.renderable:
        reason = (
            "help unavailable"
            if adapted.record.is_unavailable
            else f"missing {', '.join(adapted.missing_mandatory)}"
        )
        log_event("item_skipped", level=logging.WARNING, item=item.name, reason=reason)
        result.skipped_items.append(item.name)
        return

    page_path = write_page(adapted.record, output_dir, naming)
    append_index_entry(index_path, adapted.record, naming)
    result.pages_written.append(page_path)
    log_event("page_written", item=item.name, page_file=page_path)


def _index_title(source: BatchSource) -> str:
    if isinstance(source, ModuleSource):
        return module_index_title(source.module_name)
    return folder_index_title()


def _module_name(source: BatchSource) -> str | None:
    return source.module_name if isinstance(source, ModuleSource) else None
