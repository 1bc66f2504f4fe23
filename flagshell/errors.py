"""
Error kinds raised by flagshell.

Fatal editor errors short-circuit an edit session.  Document errors are
recoverable and never leave the retry controller.
"""


class FlagShellError(Exception):
    """Base class for all flagshell errors."""


class ConfigError(FlagShellError):
    """Raised when a config file exists but cannot be parsed."""


class EditorNotFoundError(FlagShellError):
    """Raised when the configured editor is not on the search path."""


class EditorSpawnError(FlagShellError):
    """Raised when the editor process cannot be started."""


class EditorWaitError(FlagShellError):
    """Raised when waiting for the editor process fails."""


class DocumentReadError(FlagShellError):
    """Raised when the scratch file cannot be read back."""


class InvalidDocumentError(FlagShellError):
    """Raised when a document does not parse as JSON."""


class EditAborted(FlagShellError):
    """Raised when the user declines to keep editing."""


class CleanupError(FlagShellError):
    """Raised internally when a scratch file cannot be removed."""


class ApiError(FlagShellError):
    """Raised when a REST call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PatchApplyError(FlagShellError):
    """Raised when a patch operation does not fit the document."""
