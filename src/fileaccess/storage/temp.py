"""Temp file and directory allocation with a fixed naming convention."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..errors import TempDirectoryCreationFailed

logger = logging.getLogger(__name__)

TEMP_FILE_PREFIX = "SIPCOMM"
TEMP_FILE_SUFFIX = "TEMP"


class TempAllocator:
    """Allocate uniquely named scratch files and directories.

    Uniqueness comes from :func:`tempfile.mkstemp`, which creates the file
    exclusively. Do not store unencrypted sensitive data in temp artifacts.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self.base_dir = base_dir

    def get_temporary_file(self) -> Path:
        fd, name = tempfile.mkstemp(
            prefix=TEMP_FILE_PREFIX,
            suffix=TEMP_FILE_SUFFIX,
            dir=self.base_dir,
        )
        os.close(fd)
        logger.debug("Created temporary file %s", name)
        return Path(name)

    def get_temporary_directory(self) -> Path:
        """Turn a freshly allocated temp file into a directory of the same name."""
        path = self.get_temporary_file()

        try:
            path.unlink()
        except OSError as exc:
            raise TempDirectoryCreationFailed(
                "Could not create temporary directory, because: could not delete temporary file.",
                stage="delete",
                path=path,
            ) from exc

        try:
            path.mkdir(parents=True)
        except OSError as exc:
            raise TempDirectoryCreationFailed(
                "Could not create temporary directory",
                stage="mkdir",
                path=path,
            ) from exc

        logger.debug("Created temporary directory %s", path)
        return path


__all__ = ["TEMP_FILE_PREFIX", "TEMP_FILE_SUFFIX", "TempAllocator"]
