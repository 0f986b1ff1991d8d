"""Per-user persistent storage and scratch space resolution."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Optional, Sequence, Union

from .config import ConfigurationService
from .errors import ConfigurationUnavailable, InsufficientRights, PathConflict
from .storage.files import FileHandle, ProbeStatus, ensure_directory, probe_accessible_file
from .storage.paths import resolve_home_path
from .storage.temp import TempAllocator

logger = logging.getLogger(__name__)


class FileAccessService:
    """Thread-safe access to the user's home storage root and temp artifacts.

    Files and directories returned here are not secure: they usually live in
    the user's home directory but may sit in a shared location. Do not store
    unencrypted sensitive information in them.
    """

    def __init__(
        self,
        configuration: Optional[ConfigurationService] = None,
        *,
        temp_allocator: Optional[TempAllocator] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._configuration = configuration
        self._temp = temp_allocator or TempAllocator()

    # ---------------------------------------------------------- registration
    def set_configuration_service(self, configuration: ConfigurationService) -> None:
        with self._lock:
            self._configuration = configuration
            logger.debug("New configuration service registered.")

    def unset_configuration_service(self, configuration: ConfigurationService) -> bool:
        """Clear the link only if ``configuration`` is the registered one."""
        with self._lock:
            if self._configuration is not configuration:
                return False
            self._configuration = None
            logger.debug("Configuration service unregistered.")
            return True

    @property
    def configured(self) -> bool:
        with self._lock:
            return self._configuration is not None

    # ------------------------------------------------------------------ utils
    def _home_path(self) -> str:
        with self._lock:
            if self._configuration is None:
                raise ConfigurationUnavailable("No configuration service is registered.")
            return resolve_home_path(self._configuration)

    # ------------------------------------------------------------------- API
    def get_temporary_file(self) -> Path:
        """Create a new temp file; its content is not guaranteed after close."""
        return self._temp.get_temporary_file()

    def get_temporary_directory(self) -> Path:
        return self._temp.get_temporary_directory()

    def get_private_persistent_file(self, file_name: str) -> FileHandle:
        """Return a file in the home root that can be read, written or created.

        The file itself may not exist yet.
        """
        logger.debug("Resolving private persistent file %s", file_name)
        handle = probe_accessible_file(self._home_path(), file_name)
        if handle.status is ProbeStatus.DENIED:
            raise InsufficientRights(
                "Insufficient rights to access this file in current user's home directory: "
                f"{handle.path}",
                path=handle.path,
            )
        return handle

    def get_private_persistent_directory(self, dir_name: Union[str, Sequence[str]]) -> Path:
        """Return a directory in the home root, creating it when absent.

        ``dir_name`` is a single name or a sequence of segments joined in order.
        """
        if not isinstance(dir_name, str):
            dir_name = os.sep.join(dir_name)

        directory = Path(self._home_path() + dir_name)
        if directory.exists():
            if not directory.is_dir():
                raise PathConflict(
                    f"Could not create directory because a file exists with this name: {directory}",
                    path=directory,
                )
            return directory

        logger.debug("Creating private persistent directory %s", directory)
        return ensure_directory(directory)


__all__ = ["FileAccessService"]
