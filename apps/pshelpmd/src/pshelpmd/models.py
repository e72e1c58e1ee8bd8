"""Dataclasses shared across pshelpmd layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, TypeAlias

from .constants import PAGE_SUFFIX
from .raw_help import RawHelp


@dataclass(frozen=True)
class ResolvedPaths:
    folder_arg_raw: str | None
    source_folder_abs: Path | None
    module_name: str | None
    output_arg_raw: str
    output_dir_abs: Path
    index_file_name: str

    @property
    def index_path(self) -> Path:
        return self.output_dir_abs / self.index_file_name


@dataclass(frozen=True)
class NamingConfig:
    """Page file naming: ``<prefix><item name><suffix>``."""

    prefix: str = ""
    suffix: str = PAGE_SUFFIX

    def page_file_name(self, item_name: str) -> str:
        return f"{self.prefix}{item_name}{self.suffix}"


@dataclass(slots=True, frozen=True)
class AvailableHelp:
    """Structured help was found for the item."""

    raw: RawHelp
    kind: Literal["available"] = "available"


@dataclass(slots=True, frozen=True)
class UnavailableHelp:
    """The help lookup produced only fallback text."""

    diagnostic: str
    kind: Literal["unavailable"] = "unavailable"


HelpLookup: TypeAlias = AvailableHelp | UnavailableHelp


@dataclass(frozen=True)
class HelpExample:
    title: str
    code: str
    remarks_text: str | None


@dataclass(frozen=True)
class HelpParameter:
    name: str
    description_text: str | None
    type_name: str | None
    # Keys follow PARAMETER_ATTRIBUTE_ORDER; a None value means "not present".
    attributes: dict[str, str | None]


@dataclass(frozen=True)
class HelpLink:
    link_text: str | None
    uri: str | None


@dataclass(frozen=True)
class HelpRecord:
    name: str
    synopsis: str | None = None
    syntax_lines: tuple[str, ...] = ()
    description_text: str | None = None
    examples: tuple[HelpExample, ...] = ()
    parameters: tuple[HelpParameter, ...] = ()
    related_links: tuple[HelpLink, ...] = ()
    is_unavailable: bool = False


@dataclass(frozen=True)
class AdaptedHelp:
    record: HelpRecord
    warnings: tuple[str, ...]
    missing_mandatory: tuple[str, ...]

    @property
    def renderable(self) -> bool:
        return not self.record.is_unavailable and not self.missing_mandatory


@dataclass(frozen=True)
class ScriptFolderSource:
    folder_abs: Path
    kind: Literal["folder"] = "folder"


@dataclass(frozen=True)
class ModuleSource:
    module_name: str
    kind: Literal["module"] = "module"


BatchSource: TypeAlias = ScriptFolderSource | ModuleSource


@dataclass(frozen=True)
class BatchItem:
    name: str
    # File path in folder mode, command name in module mode.
    identifier: str


@dataclass(frozen=True)
class Diagnostic:
    item_name: str
    message: str


@dataclass
class BatchResult:
    index_path: Path
    total_items: int = 0
    pages_written: list[Path] = field(default_factory=list)
    skipped_items: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages_written)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_items)
