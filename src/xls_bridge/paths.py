"""File path resolution against a project folder."""

from __future__ import annotations

import time
from pathlib import Path

from .exceptions import InvalidPathError


def project_folder(folder: str | Path | None) -> Path | None:
    """Resolve a project folder; relative folders live under the home directory."""
    if not folder:
        return None
    path = Path(folder).expanduser()
    if path.is_absolute():
        return path
    # "/Downloads"-style folders are absolute already; "Downloads" is not
    return Path.home() / path


def resolve_path(
    path: str | Path | None,
    base_dir: str | Path | None = None,
    reading: bool = True,
    suffix: str = ".xlsx",
) -> Path:
    """Return an absolute path, creating its parent directories.

    Args:
        path: Target file. Relative paths are joined onto ``base_dir`` (or
            the working directory).
        base_dir: Folder relative paths are resolved against.
        reading: In read mode a missing path is an error; in write mode a
            ``temp_<milliseconds>`` file name is synthesized.
        suffix: Extension of synthesized file names.

    Raises:
        InvalidPathError: If no path was given in read mode.
    """
    base = Path(base_dir) if base_dir else Path.cwd()

    if not path or not str(path).strip():
        if reading:
            raise InvalidPathError()
        path = base / f"temp_{int(time.time() * 1000)}{suffix}"

    resolved = Path(path).expanduser()
    if not resolved.is_absolute():
        resolved = base / resolved

    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved
