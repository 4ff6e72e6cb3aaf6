"""exports-cleanup custom exceptions."""


class ExportsCleanupError(Exception):
    """Base exception for exports-cleanup errors."""


class RootNotFoundError(ExportsCleanupError):
    """Scan root does not exist or is not a directory."""


class SourceReadError(ExportsCleanupError):
    """Error reading a source file."""


class ExportNotFoundError(ExportsCleanupError):
    """No export with the requested name was found."""
