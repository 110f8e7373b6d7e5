"""
Exception hierarchy for JSX Splitter.

Every stage of an extraction fails fast with exactly one of these. The
message of the exception is the single human-readable string shown to the
user by the top-level handlers.
"""


class SplitterError(Exception):
    """Base exception for extraction failures."""
    pass


class EmptySelection(SplitterError):
    """Raised when no text is selected."""

    def __init__(self, message: str = "No code selected"):
        super().__init__(message)


class InvalidSelection(SplitterError):
    """Raised when the selection, or the document without it, does not parse."""
    pass


class InvalidName(SplitterError):
    """Raised when the component name is empty, cancelled or malformed."""
    pass


class NameCollision(SplitterError):
    """Raised when the target component file already exists."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"{filename} already exists in the current folder")


class NoWorkspace(SplitterError):
    """Raised when no writable workspace root is bound to the session."""

    def __init__(self, message: str = "You must add a working environment (workspace folder)"):
        super().__init__(message)


class InternalAnalysisFailure(SplitterError):
    """Raised when the analysis oracle fails on input that passed validation."""
    pass


class FileWriteFailure(SplitterError):
    """Raised when the component file cannot be written."""
    pass
