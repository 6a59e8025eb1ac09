"""
skill-issue CLI: caption a random bundled gif.

Usage: skill-issue [-y] [-f SUBSTRING] CAPTION WORDS...
"""

from __future__ import annotations

import random
from typing import List, Optional

import typer

from adapters.wiring import build_encoder
from apps.core.arguments import parse_cli_tokens
from apps.core.output_path import resolve_output_path
from packages.assets.catalog import bundled_catalog, select_asset
from packages.render.captioner import RenderRequest, render_caption
from packages.render.errors import SkillIssueError
from packages.render.schemas import resolve_render_options
from packages.utils.config import get_settings
from packages.utils.logging import get_logger

_log = get_logger("skill_issue.cli")

app = typer.Typer(
    name="skill-issue",
    help="Caption a random gif with your text",
    add_completion=False,
)


def _rng() -> random.Random:
    return random.Random()


@app.command(
    # Every token is a caption word, --help included
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": True, "help_option_names": []},
)
def main(
    words: Optional[List[str]] = typer.Argument(
        None,
        help="Caption words; -y allows overwriting, -f SUBSTRING filters gifs by name",
        show_default=False,
    ),
) -> None:
    """Burn the caption into a random gif and write <caption>.gif to the current directory."""

    settings = get_settings()
    get_logger("skill_issue", level=settings.log_level)
    args = parse_cli_tokens(words or [])

    try:
        catalog = bundled_catalog(settings.assets_dir)
        asset = select_asset(catalog.filter(args.filter), rng=_rng(), filter_text=args.filter)
        output_path = resolve_output_path(args.caption_text)
        options = resolve_render_options(
            asset.sidecar,
            font_size=settings.font_size,
            alignment=settings.alignment,
            font_name=settings.font_name,
            font_size_override=settings.font_size_override,
            alignment_override=settings.alignment_override,
        )
        request = RenderRequest(
            asset=asset,
            caption_text=args.caption_text,
            options=options,
            output_path=output_path,
            overwrite=args.overwrite,
        )
        encoder = build_encoder(settings)
        render_caption(request, encoder)
    except SkillIssueError as exc:
        _log.error("render.failed", extra={"data": {"code": exc.code, "error": str(exc)}})
        typer.echo(f"❌ Failed to create gif: {exc}", err=True)
        raise typer.Exit(code=1)

    if encoder.dry_run:
        typer.echo(f"🧪 Dry run, nothing written: {output_path}")
        return
    typer.echo(f"✅ Created gif: {output_path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
