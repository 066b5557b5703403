"""Path utilities centralising naming decisions."""

from __future__ import annotations

import os
from pathlib import Path


def absolute_path(path: str | Path) -> Path:
    """Return the absolute, normalised form of `path` without resolving symlinks."""
    return Path(os.path.abspath(Path(path).expanduser()))


def output_dir_from_config(directory: str | Path) -> Path:
    """Return the resolved manifest output directory."""
    return Path(directory).expanduser().resolve()


def slash_basename(path: str | Path) -> str:
    """Return the last element of `path` as given, with separators normalised to ``/``.

    Trailing separators are ignored and an empty path yields ``"."``.
    """
    raw = os.fspath(path)
    base = os.path.basename(os.path.normpath(raw)) if raw else "."
    return (base or raw).replace(os.sep, "/")


__all__ = ["absolute_path", "output_dir_from_config", "slash_basename"]
