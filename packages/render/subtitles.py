from __future__ import annotations

import os
from pathlib import Path

# One cue spanning an hour, longer than any bundled loop.
SUBTITLE_END = "01:00:00,000"
FILE_MODE = 0o600


def build_subtitle(text: str) -> str:
    """Return a single-cue SubRip track showing text from 0s to 1h."""
    return f"1\n00:00:00,000 --> {SUBTITLE_END}\n{text}\n\n"


def write_private_file(path: Path, content: bytes) -> None:
    """Write content to path, readable by the owner only."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(content)


def write_subtitle(text: str, path: Path) -> Path:
    write_private_file(path, build_subtitle(text).encode("utf-8"))
    return path


__all__ = ["build_subtitle", "write_subtitle", "write_private_file", "SUBTITLE_END"]
