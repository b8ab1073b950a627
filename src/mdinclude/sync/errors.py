"""
Errors raised while synchronizing include blocks.

Every error is fatal for the document being processed: nothing is written
unless the whole pass succeeds.
"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class IncludeSyncError(Exception):
    """Base class for all synchronization failures."""

    def __init__(self, path: PathLike, message: str):
        self.path = Path(path)
        super().__init__(message)


class MissingInputError(IncludeSyncError):
    """The document to process does not exist or cannot be read."""

    def __init__(self, path: PathLike, reason: Optional[str] = None):
        message = f"Cannot read document '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class MissingReferenceError(IncludeSyncError):
    """A file named by an include marker does not exist or cannot be read."""

    def __init__(self, path: PathLike, document: Optional[PathLike] = None, line_number: Optional[int] = None, reason: Optional[str] = None):
        self.document = Path(document) if document is not None else None
        self.line_number = line_number

        message = f"Cannot read included file '{path}'"
        if self.document is not None and line_number is not None:
            message = f"{message} (referenced from {self.document}:{line_number})"
        elif line_number is not None:
            message = f"{message} (referenced on line {line_number})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class WriteFailureError(IncludeSyncError):
    """The rewritten document could not be moved into place."""

    def __init__(self, path: PathLike, reason: Optional[str] = None):
        message = f"Failed to write document '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class MalformedMarkerError(MissingReferenceError):
    """A line carries the include marker prefix but names no file."""

    def __init__(self, marker: str, document: Optional[PathLike] = None, line_number: Optional[int] = None):
        self.marker = marker
        self.document = Path(document) if document is not None else None
        self.line_number = line_number

        message = f"Malformed include marker '{marker}'"
        if self.document is not None and line_number is not None:
            message = f"{message} in {self.document}:{line_number}"
        elif line_number is not None:
            message = f"{message} on line {line_number}"
        IncludeSyncError.__init__(self, document if document is not None else marker, f"{message}: expected '<!-- INCLUDE-RUST: path -->'")
