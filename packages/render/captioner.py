"""
Caption renderer: burn a caption into a gif using ffmpeg.

Design goals:
- Pure ffmpeg invocation (no network)
- One private working directory per render, removed on every exit path
- Overwrite protection is left to ffmpeg (-n), no separate existence check
"""
from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from adapters.ffmpeg_adapter import FFmpegAdapter
from packages.assets.catalog import Asset
from packages.render.errors import (
    AssetExtractFailed,
    AssetWriteFailed,
    CleanupFailed,
    SubtitleWriteFailed,
    TempDirCreateFailed,
)
from packages.render.schemas import RenderOptions
from packages.render.subtitles import write_private_file, write_subtitle
from packages.utils.logging import get_logger

WORKDIR_PREFIX = "skill-issue"
SUBTITLE_NAME = "sub.srt"
INTERMEDIATE_NAME = "captioned.mkv"
PALETTE_NAME = "palette.png"

_log = get_logger("skill_issue.render")


@dataclass(frozen=True)
class RenderRequest:
    asset: Asset
    caption_text: str
    options: RenderOptions
    output_path: Path
    overwrite: bool = False


def _make_workdir() -> Path:
    try:
        # mkdtemp creates the directory with mode 0700
        return Path(tempfile.mkdtemp(prefix=WORKDIR_PREFIX))
    except OSError as exc:
        raise TempDirCreateFailed(f"failed to create temp dir: {exc}") from exc


def _extract_asset(asset: Asset, workdir: Path) -> str:
    if not asset.data:
        raise AssetExtractFailed(f"failed to extract gif: {asset.path} is empty")
    target = workdir / Path(asset.path).name
    try:
        write_private_file(target, asset.data)
    except OSError as exc:
        raise AssetWriteFailed(f"failed to write gif: {exc}") from exc
    return target.name


def _run_steps(request: RenderRequest, encoder: FFmpegAdapter, workdir: Path) -> None:
    try:
        write_subtitle(request.caption_text, workdir / SUBTITLE_NAME)
    except OSError as exc:
        raise SubtitleWriteFailed(f"failed to write subtitle: {exc}") from exc

    source = _extract_asset(request.asset, workdir)

    encoder.burn_subtitles(source, SUBTITLE_NAME, request.options, INTERMEDIATE_NAME, cwd=workdir)
    encoder.generate_palette(INTERMEDIATE_NAME, PALETTE_NAME, cwd=workdir)
    encoder.compose(
        INTERMEDIATE_NAME,
        PALETTE_NAME,
        str(request.output_path),
        request.overwrite,
        cwd=workdir,
    )


def render_caption(request: RenderRequest, encoder: FFmpegAdapter) -> Path:
    """Render request.caption_text onto request.asset at request.output_path.

    Returns the output path on success. Any step failure propagates as a
    SkillIssueError subclass; the working directory is removed either way and
    a cleanup error never hides the original failure.
    """
    workdir = _make_workdir()
    try:
        _run_steps(request, encoder, workdir)
    except BaseException:
        shutil.rmtree(workdir, ignore_errors=True)
        raise

    try:
        shutil.rmtree(workdir)
    except OSError as exc:
        raise CleanupFailed(f"failed to remove {workdir}: {exc}") from exc

    _log.info(
        "render.complete",
        extra={"data": {"asset": request.asset.path, "output": str(request.output_path), "dry_run": encoder.dry_run}},
    )
    return request.output_path


__all__ = ["RenderRequest", "render_caption", "SUBTITLE_NAME", "INTERMEDIATE_NAME", "PALETTE_NAME"]
