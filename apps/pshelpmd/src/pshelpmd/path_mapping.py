"""Path mapping and startup validation."""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path

from .errors import PathMappingError, StartupValidationError
from .models import ResolvedPaths

_WINDOWS_DRIVE_RELATIVE_RE = re.compile(r"^[A-Za-z]:[^/\\]")
_PATH_SEPARATOR_CHARS = ("/", "\\")


def resolve_startup_paths(
    *,
    folder_arg_raw: str | None,
    module_arg_raw: str | None,
    output_arg_raw: str,
    index_name_raw: str,
    app_root_abs: Path,
) -> ResolvedPaths:
    if not app_root_abs.is_absolute():
        raise StartupValidationError("App root must be an absolute path.")
    if (folder_arg_raw is None) == (module_arg_raw is None):
        raise StartupValidationError("Exactly one of --folder or --module is required.")

    source_folder_abs = (
        map_path_argument(
            raw_path=folder_arg_raw,
            app_root_abs=app_root_abs,
            argument_name="--folder",
        )
        if folder_arg_raw is not None
        else None
    )
    module_name = _validate_module_name(module_arg_raw)
    output_dir_abs = map_path_argument(
        raw_path=output_arg_raw,
        app_root_abs=app_root_abs,
        argument_name="--output",
    )

    _validate_source_folder(source_folder_abs)
    _validate_output(output_dir_abs)
    index_file_name = _validate_index_name(index_name_raw)

    return ResolvedPaths(
        folder_arg_raw=folder_arg_raw,
        source_folder_abs=source_folder_abs,
        module_name=module_name,
        output_arg_raw=output_arg_raw,
        output_dir_abs=output_dir_abs,
        index_file_name=index_file_name,
    )


def map_path_argument(
    *,
    raw_path: str | None,
    app_root_abs: Path,
    argument_name: str,
) -> Path:
    if raw_path is None:
        raise PathMappingError(f"{argument_name} path is missing.")

    normalized_input = unicodedata.normalize("NFC", raw_path)
    if "\0" in normalized_input:
        raise PathMappingError(f"{argument_name} contains NUL (\\0).")
    if _is_windows_rooted_not_fully_qualified(normalized_input):
        raise PathMappingError(
            f"{argument_name} uses an unsupported Windows rooted-not-qualified path."
        )

    mapped = _map_special_prefixes(normalized_input, app_root_abs, argument_name)
    if not mapped.is_absolute():
        raise PathMappingError(
            f"{argument_name} must be absolute or start with '~' or '@'."
        )

    return mapped.resolve(strict=False)


def _map_special_prefixes(path_text: str, app_root_abs: Path, argument_name: str) -> Path:
    if path_text.startswith("~"):
        try:
            return Path(path_text).expanduser()
        except RuntimeError as exc:
            raise PathMappingError(
                f"Failed to expand user home in path for {argument_name}: {path_text}"
            ) from exc
    if path_text.startswith("@"):
        return _map_app_root_path(path_text, app_root_abs)
    return Path(path_text)


def _map_app_root_path(path_text: str, app_root_abs: Path) -> Path:
    remainder = path_text[1:].lstrip("/\\")
    if remainder == "":
        return app_root_abs

    segments = [segment for segment in re.split(r"[\\/]+", remainder) if segment]
    return app_root_abs.joinpath(*segments)


def _is_windows_rooted_not_fully_qualified(path_text: str) -> bool:
    if path_text.startswith("\\") and not path_text.startswith("\\\\"):
        return True
    return _WINDOWS_DRIVE_RELATIVE_RE.match(path_text) is not None


def _validate_source_folder(source_folder_abs: Path | None) -> None:
    if source_folder_abs is None:
        return
    if not source_folder_abs.exists():
        raise StartupValidationError(f"--folder does not exist: {source_folder_abs}")
    if not source_folder_abs.is_dir():
        raise StartupValidationError(f"--folder must be a directory: {source_folder_abs}")


def _validate_output(output_dir_abs: Path) -> None:
    if not output_dir_abs.exists():
        raise StartupValidationError(f"--output does not exist: {output_dir_abs}")
    if not output_dir_abs.is_dir():
        raise StartupValidationError(f"--output must be a directory: {output_dir_abs}")


def _validate_module_name(module_arg_raw: str | None) -> str | None:
    if module_arg_raw is None:
        return None
    module_name = module_arg_raw.strip()
    if module_name == "":
        raise StartupValidationError("--module must not be empty.")
    return module_name


def _validate_index_name(index_name_raw: str) -> str:
    index_name = index_name_raw.strip()
    if index_name in ("", ".", ".."):
        raise StartupValidationError("--index-name must be a file name.")
    if any(separator in index_name for separator in _PATH_SEPARATOR_CHARS):
        raise StartupValidationError(
            f"--index-name must not contain path separators: {index_name}"
        )
    return index_name
