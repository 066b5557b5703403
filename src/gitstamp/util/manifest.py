"""Manifest file helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from gitstamp.errors import ManifestWriteError

MANIFEST_NAME_PATTERN = "manifest_{epoch}.json"


def manifest_path_for(epoch_time: int, *, dest_dir: Path) -> Path:
    """Return where the manifest for `epoch_time` is written."""
    return dest_dir / MANIFEST_NAME_PATTERN.format(epoch=epoch_time)


def render_manifest(payload: Mapping[str, Any], *, indent: int = 4) -> str:
    """Return the manifest text: indented JSON followed by exactly one newline."""
    return json.dumps(payload, indent=indent) + "\n"


def write_manifest(payload: Mapping[str, Any], *, dest_dir: Path, epoch_time: int, indent: int = 4) -> Path:
    """Write `payload` to ``manifest_<epoch>.json`` under `dest_dir`.

    The text goes to a temporary sibling first and is moved into place, so a
    failed write leaves no partial manifest behind.
    """

    dest = manifest_path_for(epoch_time, dest_dir=dest_dir)
    tmp_path = dest.with_suffix(dest.suffix + ".tmp")
    text = render_manifest(payload, indent=indent)
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(dest)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise ManifestWriteError(f"Unable to write manifest {dest}: {exc}") from exc
    return dest


__all__ = ["MANIFEST_NAME_PATTERN", "manifest_path_for", "render_manifest", "write_manifest"]
