"""Spec extraction and rendering: Figma node -> FrameSpec -> markdown."""

from figsync.specs.extractor import extract_spec, rgb_to_hex, round_half_up
from figsync.specs.models import (
    ColorSpec,
    FrameSpec,
    SizeSpec,
    SpacingSpec,
    TypographySpec,
)
from figsync.specs.renderer import format_number, render_spec

__all__ = [
    "ColorSpec",
    "FrameSpec",
    "SizeSpec",
    "SpacingSpec",
    "TypographySpec",
    "extract_spec",
    "format_number",
    "render_spec",
    "rgb_to_hex",
    "round_half_up",
]
