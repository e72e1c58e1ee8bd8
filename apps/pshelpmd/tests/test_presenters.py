from __future__ import annotations

from pathlib import Path

import pytest

from pshelpmd.models import BatchResult, Diagnostic, ResolvedPaths
from pshelpmd.presenters import (
    render_diagnostic_lines,
    render_loaded_parameters,
    render_summary,
)
from pshelpmd.progress import ConsoleProgressReporter


def test_render_diagnostic_lines_prefix_item_name() -> None:
    lines = render_diagnostic_lines(
        [Diagnostic(item_name="Get-Beta", message="Missing optional section 'Parameters'.")]
    )

    assert lines == ["WARNING: Get-Beta: Missing optional section 'Parameters'."]


def test_render_loaded_parameters_shows_full_index_path(tmp_path: Path) -> None:
    resolved_paths = ResolvedPaths(
        folder_arg_raw=None,
        source_folder_abs=None,
        module_name="Tools",
        output_arg_raw=str(tmp_path),
        output_dir_abs=tmp_path,
        index_file_name="README.md",
    )

    assert render_loaded_parameters(resolved_paths=resolved_paths) == [
        "Loaded parameters:",
        "Module: Tools",
        f"Output folder: {tmp_path}",
        f"Index file: {tmp_path / 'README.md'}",
    ]


def test_render_summary_counts_pages_and_skips(tmp_path: Path) -> None:
    result = BatchResult(
        index_path=tmp_path / "index.md",
        total_items=3,
        pages_written=[tmp_path / "A.md", tmp_path / "B.md"],
        skipped_items=["C"],
    )

    assert render_summary(result) == (
        "Generated 2 page(s) from 3 item(s); skipped 1. Index: index.md"
    )


def test_progress_reporter_rewrites_line_in_place(
    capsys: pytest.CaptureFixture[str],
) -> None:
    progress = ConsoleProgressReporter()

    progress.report_item(1, 12, "Get-LongCommandName")
    progress.report_item(2, 12, "Get-A")
    progress.close_open_line()

    out = capsys.readouterr().out
    assert out.startswith("\rProcessing  1 / 12: Get-LongCommandName")
    assert "\rProcessing  2 / 12: Get-A" in out
    assert out.endswith("\n")
