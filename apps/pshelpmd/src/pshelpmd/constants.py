"""Literal constants used by pshelpmd."""

APP_NAME = "pshelpmd"

SCRIPT_EXTENSION = ".ps1"
PAGE_SUFFIX = ".md"
DEFAULT_INDEX_FILE_NAME = "index.md"
DEFAULT_PWSH_EXECUTABLE = "pwsh"

FOLDER_INDEX_TITLE = "PowerShell Scripts"
CODE_LANGUAGE = "powershell"

SECTION_SYNOPSIS = "Synopsis"
SECTION_SYNTAX = "Syntax"
SECTION_DESCRIPTION = "Description"
SECTION_EXAMPLES = "Examples"
SECTION_PARAMETERS = "Parameters"
SECTION_RELATED_LINKS = "RelatedLinks"

# Section name -> mandatory. Missing mandatory sections skip the item.
SECTION_POLICY: tuple[tuple[str, bool], ...] = (
    (SECTION_SYNOPSIS, True),
    (SECTION_SYNTAX, True),
    (SECTION_DESCRIPTION, True),
    (SECTION_EXAMPLES, True),
    (SECTION_PARAMETERS, False),
    (SECTION_RELATED_LINKS, False),
)

# Row order of the parameter attribute table (after the Type row).
PARAMETER_ATTRIBUTE_ORDER = (
    "Required",
    "DefaultValue",
    "ParameterValue",
    "Position",
    "PipelineInput",
)

WARNING_PREFIX = "WARNING:"
ERROR_PREFIX = "ERROR:"
