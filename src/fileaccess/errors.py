"""Error taxonomy for home storage and temp artifact resolution."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported by the file access service."""

    CONFIGURATION_UNAVAILABLE = "configuration_unavailable"
    INSUFFICIENT_RIGHTS = "insufficient_rights"
    DIRECTORY_CREATION_FAILED = "directory_creation_failed"
    TEMP_DIRECTORY_CREATION_FAILED = "temp_directory_creation_failed"
    PATH_CONFLICT = "path_conflict"


class FileAccessError(Exception):
    """Base class for every failure raised by the file access layer."""

    kind: ErrorKind

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationUnavailable(FileAccessError):
    """No configuration service is registered."""

    kind = ErrorKind.CONFIGURATION_UNAVAILABLE


class InsufficientRights(FileAccessError, PermissionError):
    """The resolved file cannot be read, written or created."""

    kind = ErrorKind.INSUFFICIENT_RIGHTS


class DirectoryCreationFailed(FileAccessError, OSError):
    kind = ErrorKind.DIRECTORY_CREATION_FAILED


class TempDirectoryCreationFailed(FileAccessError, OSError):
    """Raised when a temp directory cannot take over a temp file's name.

    ``stage`` is ``"delete"`` when the placeholder file could not be removed
    and ``"mkdir"`` when the directory could not be created afterwards.
    """

    kind = ErrorKind.TEMP_DIRECTORY_CREATION_FAILED

    def __init__(self, message: str, *, stage: str, path: Optional[Path] = None) -> None:
        super().__init__(message, path=path)
        self.stage = stage


class PathConflict(FileAccessError, FileExistsError):
    """A non-directory occupies the location of a requested directory."""

    kind = ErrorKind.PATH_CONFLICT
