"""
Pydantic schemas for render options.

SidecarOptions mirrors the optional ``<name>.json`` file shipped next to a
bundled gif. RenderOptions is the resolved set handed to the encoder.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationError


class SidecarOptions(BaseModel):
    """Per-asset overrides. Zero means "not set"."""

    font_size: int = Field(0, description="Subtitle font size", ge=0)
    alignment: int = Field(0, description="ASS numpad alignment code", ge=0, le=9)

    model_config = {
        "frozen": True,
        "json_schema_extra": {"example": {"font_size": 40, "alignment": 6}},
    }


class RenderOptions(BaseModel):
    """Resolved font settings used for subtitle burn-in."""

    font_size: int = Field(..., description="Subtitle font size", gt=0)
    alignment: int = Field(..., description="ASS numpad alignment code", ge=1, le=9)
    font_name: str = Field("Impact", description="Subtitle font family", min_length=1)

    model_config = {"frozen": True}

    def force_style(self) -> str:
        return f"Fontname={self.font_name},Fontsize={self.font_size},Alignment={self.alignment}"


def parse_sidecar(content: bytes) -> Optional[SidecarOptions]:
    """Parse sidecar JSON, returning None when it is malformed."""
    try:
        return SidecarOptions.model_validate_json(content)
    except ValidationError:
        return None


def resolve_render_options(
    sidecar: Optional[SidecarOptions],
    *,
    font_size: int,
    alignment: int,
    font_name: str = "Impact",
    font_size_override: int = 0,
    alignment_override: int = 0,
) -> RenderOptions:
    """Layer defaults, sidecar values and caller overrides (non-zero wins)."""
    size = font_size
    align = alignment
    if sidecar is not None:
        size = sidecar.font_size or size
        align = sidecar.alignment or align
    size = font_size_override or size
    align = alignment_override or align
    return RenderOptions(font_size=size, alignment=align, font_name=font_name)


__all__ = ["SidecarOptions", "RenderOptions", "parse_sidecar", "resolve_render_options"]
