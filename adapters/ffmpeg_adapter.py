"""
FFmpeg adapter for the three-step caption encode.

Steps, all run inside the render working directory:
- burn: draw the subtitle track onto the source gif (lossless intermediate)
- palette: build a 256-colour palette from the intermediate
- compose: re-encode the intermediate against that palette into the final gif

Encoder output is not captured; ffmpeg talks to the user's terminal directly.
"""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from packages.render.errors import EncodeStepFailed
from packages.render.schemas import RenderOptions
from packages.utils.logging import get_logger

STAGE_BURN = "subtitle burn-in"
STAGE_PALETTE = "palette generation"
STAGE_COMPOSE = "final composition"

_log = get_logger("skill_issue.ffmpeg")


class FFmpegAdapter:
    def __init__(self, binary: str = "ffmpeg", dry_run: bool = False) -> None:
        self.binary = binary
        self.dry_run = dry_run

    def burn_command(self, source: str, subtitle: str, options: RenderOptions, output: str) -> List[str]:
        vf = f"subtitles={subtitle}:force_style='{options.force_style()}'"
        return [
            self.binary,
            "-i",
            source,
            "-vf",
            vf,
            # ffv1 keeps every pixel format and odd frame sizes the gif may have
            "-c:v",
            "ffv1",
            output,
        ]

    def palette_command(self, source: str, output: str) -> List[str]:
        return [self.binary, "-i", source, "-vf", "palettegen", output]

    def compose_command(self, source: str, palette: str, output: str, overwrite: bool) -> List[str]:
        return [
            self.binary,
            "-y" if overwrite else "-n",
            "-i",
            source,
            "-i",
            palette,
            "-lavfi",
            "paletteuse",
            output,
        ]

    def run(self, stage: str, cmd: Sequence[str], cwd: Optional[Path] = None) -> None:
        _log.info("encoder.step", extra={"data": {"stage": stage, "cmd": list(cmd), "dry_run": self.dry_run}})
        if self.dry_run:
            return
        try:
            subprocess.run(list(cmd), cwd=cwd, check=True)
        except FileNotFoundError as exc:
            raise EncodeStepFailed(stage, f"encoder not found: {self.binary}") from exc
        except subprocess.CalledProcessError as exc:
            raise EncodeStepFailed(stage, f"{self.binary} exited with status {exc.returncode}") from exc
        except OSError as exc:
            raise EncodeStepFailed(stage, str(exc)) from exc

    def burn_subtitles(self, source: str, subtitle: str, options: RenderOptions, output: str, cwd: Path) -> None:
        self.run(STAGE_BURN, self.burn_command(source, subtitle, options, output), cwd=cwd)

    def generate_palette(self, source: str, output: str, cwd: Path) -> None:
        self.run(STAGE_PALETTE, self.palette_command(source, output), cwd=cwd)

    def compose(self, source: str, palette: str, output: str, overwrite: bool, cwd: Path) -> None:
        self.run(STAGE_COMPOSE, self.compose_command(source, palette, output, overwrite), cwd=cwd)


__all__ = ["FFmpegAdapter", "STAGE_BURN", "STAGE_PALETTE", "STAGE_COMPOSE"]
