from __future__ import annotations

from pathlib import Path

import pytest

import pshelpmd.cli as cli
from test_helpers import FakeHelpSource, available, make_help_payload, unavailable


def test_main_folder_mode_writes_pages_and_reports_warnings(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    scripts_dir = tmp_path / "scripts"
    output_dir = tmp_path / "docs"
    scripts_dir.mkdir()
    output_dir.mkdir()
    (scripts_dir / "Bare.ps1").write_text("", encoding="utf-8")
    (scripts_dir / "Good.ps1").write_text("", encoding="utf-8")
    help_source = FakeHelpSource(
        helps={
            str(scripts_dir.resolve() / "Bare.ps1"): unavailable("Bare.ps1"),
            str(scripts_dir.resolve() / "Good.ps1"): available(
                make_help_payload(name="Good")
            ),
        }
    )

    exit_code = cli.main(
        ["--folder", str(scripts_dir), "--output", str(output_dir)],
        help_source=help_source,
    )

    captured = capsys.readouterr()
    assert exit_code == 0
    assert (output_dir / "Good.md").is_file()
    assert not (output_dir / "Bare.md").exists()
    assert "WARNING: Bare: No help found" in captured.out
    assert "Generated 1 page(s) from 2 item(s); skipped 1. Index: index.md" in captured.out


def test_main_reports_missing_output_as_error(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = cli.main(
        ["--module", "Tools", "--output", str(tmp_path / "missing")],
        help_source=FakeHelpSource(modules={"Tools": []}),
    )

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "ERROR: --output does not exist" in captured.out


def test_main_reports_unknown_module_as_error(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = cli.main(
        ["--module", "Nope", "--output", str(tmp_path)],
        help_source=FakeHelpSource(),
    )

    assert exit_code == 1
    assert "ERROR: Module not found: Nope" in capsys.readouterr().out


def test_main_rejects_folder_and_module_together(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(
            ["--folder", str(tmp_path), "--module", "Tools", "--output", str(tmp_path)]
        )


def test_main_writes_structured_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    output_dir = tmp_path / "docs"
    output_dir.mkdir()
    help_source = FakeHelpSource(
        helps={"Get-Alpha": available(make_help_payload(name="Get-Alpha"))},
        modules={"Tools": ["Get-Alpha"]},
    )

    exit_code = cli.main(
        [
            "--module",
            "Tools",
            "--output",
            str(output_dir),
            "--log-file",
            str(log_file),
        ],
        help_source=help_source,
    )

    assert exit_code == 0
    log_text = log_file.read_text(encoding="utf-8")
    assert "=== batch_start ===" in log_text
    assert "=== page_written ===" in log_text
    assert "item: Get-Alpha" in log_text
