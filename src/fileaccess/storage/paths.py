"""Home root composition from configuration-supplied fragments."""

from __future__ import annotations

import os

from ..config import ConfigurationService


def ensure_trailing_separator(fragment: str, sep: str = os.sep) -> str:
    """Append ``sep`` unless ``fragment`` already ends with it.

    Repeated trailing separators are left as they are.
    """
    if fragment.endswith(sep):
        return fragment
    return fragment + sep


def resolve_home_path(configuration: ConfigurationService, sep: str = os.sep) -> str:
    """Return ``<home location>/<home dir name>/`` as a plain string.

    No filesystem access happens here. The result is kept as a string so the
    fragments are composed verbatim.
    """
    location = ensure_trailing_separator(configuration.sc_home_dir_location(), sep)
    name = ensure_trailing_separator(configuration.sc_home_dir_name(), sep)
    return location + name


__all__ = ["ensure_trailing_separator", "resolve_home_path"]
