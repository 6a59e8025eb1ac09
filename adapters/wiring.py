"""
Adapter wiring factory.

Single place to build the configured encoder (respecting DRY_RUN and the
FFMPEG_BIN setting) for use by the CLI and tests.
"""
from __future__ import annotations

from typing import Optional

from adapters.ffmpeg_adapter import FFmpegAdapter
from packages.utils.config import Settings, get_settings


def build_encoder(settings: Optional[Settings] = None) -> FFmpegAdapter:
    """Construct an ffmpeg adapter respecting DRY_RUN."""
    settings = settings or get_settings()
    return FFmpegAdapter(binary=settings.ffmpeg_bin, dry_run=settings.dry_run)
