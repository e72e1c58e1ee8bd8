"""Typed exceptions for pshelpmd."""


class PshelpmdError(Exception):
    """Base exception for pshelpmd failures."""


class PathMappingError(PshelpmdError):
    """Raised when a path argument cannot be safely mapped."""


class StartupValidationError(PshelpmdError):
    """Raised when startup arguments are invalid."""


class ModuleLookupError(PshelpmdError):
    """Raised when a module cannot be loaded or lists no commands."""


class HelpLookupError(PshelpmdError):
    """Raised when raw help for one item cannot be obtained or parsed."""


class PageWriteError(PshelpmdError):
    """Raised when a page or the index file cannot be written."""
