"""Accessibility probing for files beneath the home storage root."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..errors import DirectoryCreationFailed, PathConflict
from .paths import ensure_trailing_separator

logger = logging.getLogger(__name__)


class ProbeStatus(str, Enum):
    """Outcome of resolving a file beneath a directory."""

    ACCESSIBLE = "accessible"
    CREATABLE = "creatable"
    DENIED = "denied"


@dataclass(frozen=True)
class FileHandle:
    """A path plus its accessibility at the moment it was resolved.

    Nothing is locked: permissions may change as soon as the handle is
    returned.
    """

    path: Path
    exists: bool
    readable: bool
    writable: bool
    status: ProbeStatus

    @property
    def usable(self) -> bool:
        return self.status is not ProbeStatus.DENIED


def ensure_directory(directory: Path) -> Path:
    """Create ``directory`` and missing parents; an existing directory is fine."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except FileExistsError as exc:
        raise PathConflict(
            f"Could not create directory because a file exists with this name: {directory}",
            path=directory,
        ) from exc
    except OSError as exc:
        logger.debug("Could not create directory %s: %s", directory, exc)
        raise DirectoryCreationFailed(f"Could not create directory: {directory}", path=directory) from exc
    return directory


def probe_accessible_file(home_dir: str, name: str) -> FileHandle:
    """Resolve ``name`` under ``home_dir``, creating ``home_dir`` when absent.

    An existing file that can be read or written is returned as
    ``ACCESSIBLE`` without touching the directory. Otherwise the directory is
    created if missing and the handle is ``CREATABLE``, unless the directory
    exists but cannot be written, which yields ``DENIED``.
    """
    home_dir = ensure_trailing_separator(home_dir.strip())
    candidate = Path(home_dir + name)

    exists = candidate.exists()
    readable = os.access(candidate, os.R_OK)
    writable = os.access(candidate, os.W_OK)
    if readable or writable:
        return FileHandle(candidate, exists, readable, writable, ProbeStatus.ACCESSIBLE)

    home = Path(home_dir)
    if not home.exists():
        logger.debug("Creating home directory : %s", home)
        ensure_directory(home)
        logger.debug("Home directory created : %s", home)
    elif not (home.is_dir() and os.access(home, os.W_OK)):
        logger.debug("Home directory %s is not writable", home)
        return FileHandle(candidate, exists, False, False, ProbeStatus.DENIED)

    return FileHandle(candidate, exists, False, False, ProbeStatus.CREATABLE)


__all__ = ["FileHandle", "ProbeStatus", "ensure_directory", "probe_accessible_file"]
