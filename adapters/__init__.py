"""Integration adapters for external tools."""
from .ffmpeg_adapter import FFmpegAdapter

__all__ = ["FFmpegAdapter"]
