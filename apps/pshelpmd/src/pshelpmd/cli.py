"""CLI entry and startup wiring."""

from __future__ import annotations

import argparse
from pathlib import Path

from .batch_service import run_batch
from .constants import DEFAULT_INDEX_FILE_NAME, DEFAULT_PWSH_EXECUTABLE
from .errors import PshelpmdError
from .help_gateway import HelpSource, PowerShellHelpSource
from .logging_utils import setup_logging
from .models import BatchSource, ModuleSource, NamingConfig, ScriptFolderSource
from .path_mapping import resolve_startup_paths
from .presenters import (
    render_app_banner,
    render_diagnostic_lines,
    render_error,
    render_loaded_parameters,
    render_summary,
)
from .progress import ConsoleProgressReporter


def main(argv: list[str] | None = None, help_source: HelpSource | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    app_root_abs = Path(__file__).resolve().parent
    setup_logging(args.log_file)
    progress = ConsoleProgressReporter()

    try:
        resolved_paths = resolve_startup_paths(
            folder_arg_raw=args.folder,
            module_arg_raw=args.module,
            output_arg_raw=args.output,
            index_name_raw=args.index_name,
            app_root_abs=app_root_abs,
        )
        print(render_app_banner())
        print()
        for line in render_loaded_parameters(resolved_paths=resolved_paths):
            print(line)
        print()

        source: BatchSource
        if resolved_paths.source_folder_abs is not None:
            source = ScriptFolderSource(folder_abs=resolved_paths.source_folder_abs)
        else:
            source = ModuleSource(module_name=resolved_paths.module_name or "")

        result = run_batch(
            source=source,
            output_dir=resolved_paths.output_dir_abs,
            help_source=(
                help_source
                if help_source is not None
                else PowerShellHelpSource(executable=args.pwsh)
            ),
            naming=NamingConfig(prefix=args.prefix),
            index_file_name=resolved_paths.index_file_name,
            on_progress=progress.report_item,
        )
    except PshelpmdError as exc:
        progress.close_open_line()
        print(render_error(str(exc)))
        return 1

    progress.close_open_line()
    if result.diagnostics:
        print()
        for line in render_diagnostic_lines(result.diagnostics):
            print(line)
    print()
    print(render_summary(result))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pshelpmd",
        description="Generate Markdown reference pages from PowerShell help.",
    )
    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument(
        "--folder",
        help="Folder of .ps1 scripts (absolute, or mapped with ~ / @).",
    )
    source_group.add_argument(
        "--module",
        help="Name of the module whose exported commands are documented.",
    )
    parser.add_argument(
        "--output",
        required=True,
        help="Existing output folder (absolute, or mapped with ~ / @).",
    )
    parser.add_argument(
        "--index-name",
        default=DEFAULT_INDEX_FILE_NAME,
        help=f"Index file name inside the output folder (default: {DEFAULT_INDEX_FILE_NAME}).",
    )
    parser.add_argument(
        "--prefix",
        default="",
        help="Prefix prepended to every page file name (default: none).",
    )
    parser.add_argument(
        "--pwsh",
        default=DEFAULT_PWSH_EXECUTABLE,
        help=f"PowerShell executable used for help lookups (default: {DEFAULT_PWSH_EXECUTABLE}).",
    )
    parser.add_argument(
        "--log-file",
        required=False,
        help="Optional path of a structured log file.",
    )
    return parser
