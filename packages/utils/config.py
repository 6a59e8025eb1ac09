"""
Configuration for the skill-issue tool.

Settings come from environment variables with fallbacks, so the tool runs
with no configuration at all.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_CAPTION = "Skill Issue"
DEFAULT_FONT_NAME = "Impact"
DEFAULT_FONT_SIZE = 50
# ASS numpad alignment (1-9): 2 is bottom centre, 6 is top centre.
DEFAULT_ALIGNMENT = 2


@dataclass(frozen=True)
class Settings:
    """Tool settings with environment variable fallbacks."""

    ffmpeg_bin: str = "ffmpeg"
    font_name: str = DEFAULT_FONT_NAME
    font_size: int = DEFAULT_FONT_SIZE
    alignment: int = DEFAULT_ALIGNMENT

    # Caller overrides beat sidecar values; 0 means unset
    font_size_override: int = 0
    alignment_override: int = 0

    assets_dir: Optional[Path] = None
    dry_run: bool = False
    log_level: str = "INFO"


def _as_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    v = value.strip().lower()
    return v in {"1", "true", "t", "yes", "y"}


def _as_int(value: Optional[str], default: int, low: int, high: Optional[int] = None) -> int:
    """Parse an int in [low, high]; anything else falls back to default."""
    if value is None or not value.strip():
        return default
    try:
        number = int(value.strip())
    except ValueError:
        return default
    if number < low or (high is not None and number > high):
        return default
    return number


def get_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Load settings from environment variables with fallbacks.

    Args:
        env: mapping to read instead of ``os.environ`` (used by tests)

    Returns:
        Settings: configuration object for one invocation
    """
    env = os.environ if env is None else env
    assets_dir = env.get("SKILL_ISSUE_ASSETS_DIR")
    return Settings(
        ffmpeg_bin=env.get("FFMPEG_BIN") or "ffmpeg",
        font_name=env.get("SKILL_ISSUE_FONT") or DEFAULT_FONT_NAME,
        font_size=_as_int(env.get("SKILL_ISSUE_FONT_SIZE"), DEFAULT_FONT_SIZE, 1),
        alignment=_as_int(env.get("SKILL_ISSUE_ALIGNMENT"), DEFAULT_ALIGNMENT, 1, 9),
        font_size_override=_as_int(env.get("SKILL_ISSUE_FONT_SIZE_OVERRIDE"), 0, 0),
        alignment_override=_as_int(env.get("SKILL_ISSUE_ALIGNMENT_OVERRIDE"), 0, 0, 9),
        assets_dir=Path(assets_dir) if assets_dir else None,
        dry_run=_as_bool(env.get("DRY_RUN")),
        log_level=env.get("LOG_LEVEL", "INFO"),
    )


__all__ = ["Settings", "get_settings", "DEFAULT_CAPTION", "DEFAULT_FONT_NAME", "DEFAULT_FONT_SIZE", "DEFAULT_ALIGNMENT"]
