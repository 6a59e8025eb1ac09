"""Output file naming for rendered gifs."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from packages.render.errors import PathResolutionFailed

OUTPUT_EXTENSION = ".gif"
FALLBACK_NAME = "out"


def _keep(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def sanitize_filename(caption: str) -> str:
    """Turn caption text into a safe gif file name.

    Whitespace becomes `_`, ASCII letters, digits and underscores are kept,
    anything else is dropped. Falls back to `out.gif` when nothing survives.
    """
    chars = []
    for ch in caption:
        if ch.isspace():
            chars.append("_")
        elif _keep(ch):
            chars.append(ch)
    base = "".join(chars) or FALLBACK_NAME
    return base + OUTPUT_EXTENSION


def resolve_output_path(caption: str, directory: Optional[Path] = None) -> Path:
    """Absolute path of the output gif inside directory (default: cwd)."""
    name = sanitize_filename(caption)
    try:
        base = Path(directory) if directory is not None else Path.cwd()
        return Path(os.path.abspath(base / name))
    except OSError as exc:
        raise PathResolutionFailed(f"failed to get absolute path: {exc}") from exc


__all__ = ["sanitize_filename", "resolve_output_path", "OUTPUT_EXTENSION", "FALLBACK_NAME"]
