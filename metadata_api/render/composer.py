"""
SVG badge rendering.

Layout (500x500, fixed):
  - background image layer, picked by the name's first seed sample
  - logo overlay
  - opaque footer band across the middle
  - centered `<name>.<suffix>` text, font shrinking with name length
  - optional smaller score label under the name
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from html import escape
from typing import Optional, Sequence

from .tier import ScoreTier, TierPalette
from ..core.errors import ConfigurationError, InvalidInputError
from ..core.utils import svg_to_data_uri

BACKGROUND_COUNT = 7
CANVAS = 500
BASE_FONT_PX = 80
FONT_DECAY = 0.95
SCORE_FONT_PX = 48
FOOTER_FILL = "#111111"
FONT_FAMILY = "Helvetica, sans-serif"
DEFAULT_LOGO_SVG = '<svg height="100%" fill="rgb(0,0,0,0.6)" version="1" viewBox="100 -50 1280 1280"></svg>'


@dataclass(frozen=True)
class RenderConfig:
    """Static render inputs, loaded once at startup and shared read-only."""

    backgrounds: tuple[str, ...]
    palette: TierPalette = field(default_factory=TierPalette)
    suffix: str = "beb"
    score_label: str = "BEB Score"
    logo_svg: str = DEFAULT_LOGO_SVG

    def __post_init__(self):
        if len(self.backgrounds) < BACKGROUND_COUNT:
            raise ConfigurationError(
                f"expected {BACKGROUND_COUNT} background assets, got {len(self.backgrounds)}"
            )

    @classmethod
    def from_settings(cls, settings) -> "RenderConfig":
        return cls(
            backgrounds=tuple(settings.background_assets()),
            suffix=settings.DOMAIN_SUFFIX,
            score_label=settings.SCORE_LABEL,
        )


@dataclass(frozen=True)
class RenderParameters:
    background_index: int
    font_size_px: int
    text_color: str
    display_tier: ScoreTier


@dataclass(frozen=True)
class RenderedImage:
    svg: str
    data_uri: str


def background_index(samples: Sequence[float]) -> int:
    return int(math.floor(samples[0] % BACKGROUND_COUNT))


def font_size_for(display_len: int) -> int:
    return int(BASE_FONT_PX * FONT_DECAY ** display_len)


def build_parameters(
    samples: Sequence[float], display_len: int, tier: ScoreTier, palette: TierPalette
) -> RenderParameters:
    if not samples:
        raise InvalidInputError("at least one seed sample is required")
    return RenderParameters(
        background_index=background_index(samples),
        font_size_px=font_size_for(display_len),
        text_color=palette.color_for(tier),
        display_tier=tier,
    )


def _text(y: int, size_px: int, color: str, weight: int, content: str) -> str:
    return (
        f'<text x="{CANVAS // 2}" y="{y}" font-size="{size_px}px" font-family="{FONT_FAMILY}" '
        f'fill="{escape(color)}" text-anchor="middle" '
        f'style="font-weight: {weight}; text-shadow: 2px 2px {FOOTER_FILL};">{escape(content, quote=False)}</text>'
    )


class ImageComposer:
    def __init__(self, config: RenderConfig):
        self.config = config

    def compose(self, name: str, params: RenderParameters, score: Optional[int] = None) -> RenderedImage:
        if not name:
            raise InvalidInputError("name must not be empty")
        background = self.config.backgrounds[params.background_index]

        parts = [
            f'<svg width="{CANVAS}" height="{CANVAS}" xmlns="http://www.w3.org/2000/svg">',
            f'<svg width="{CANVAS}" height="{CANVAS}">'
            f'<image href="{escape(background)}" width="100%" height="100%" '
            f'preserveAspectRatio="xMidYMid slice"></image></svg>',
            self.config.logo_svg,
            f'<rect x="0" y="195" height="155" width="{CANVAS}" fill="{FOOTER_FILL}"></rect>',
            _text(255, params.font_size_px, params.text_color, 800, f"{name}.{self.config.suffix}"),
        ]
        if score is not None:
            parts.append(_text(325, SCORE_FONT_PX, params.text_color, 600, f"{self.config.score_label}: {score}"))
        parts.append("</svg>")

        svg = "".join(parts)
        return RenderedImage(svg=svg, data_uri=svg_to_data_uri(svg))
