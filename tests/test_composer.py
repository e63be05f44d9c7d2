"""SVG composition and data-URI encoding."""

from __future__ import annotations

import pytest

from metadata_api.core.errors import ConfigurationError, InvalidInputError
from metadata_api.core.utils import svg_to_data_uri
from metadata_api.render.composer import (
    ImageComposer,
    RenderConfig,
    RenderParameters,
    background_index,
    build_parameters,
    font_size_for,
)
from metadata_api.render.tier import ScoreTier, TierPalette

from conftest import BACKGROUNDS


def _params(index: int = 3, tier: ScoreTier = ScoreTier.PLATINUM, size: int = 61) -> RenderParameters:
    return RenderParameters(
        background_index=index,
        font_size_px=size,
        text_color=TierPalette().color_for(tier),
        display_tier=tier,
    )


def test_font_size_shrinks_with_length() -> None:
    assert font_size_for(0) == 80
    assert font_size_for(5) == 61  # int(80 * 0.95**5) = int(61.90...)
    sizes = [font_size_for(n) for n in range(1, 40)]
    assert sizes == sorted(sizes, reverse=True)


@pytest.mark.parametrize("first,expected", [(0.0, 0), (14.5, 0), (20.0, 6), (299.0, 5)])
def test_background_index_uses_first_sample_mod_seven(first, expected) -> None:
    assert background_index([first, 123.0]) == expected


def test_build_parameters() -> None:
    params = build_parameters([20.0], 5, ScoreTier.GOLD, TierPalette())

    assert params == RenderParameters(
        background_index=6, font_size_px=61, text_color="#D4AF37", display_tier=ScoreTier.GOLD
    )


def test_build_parameters_needs_a_sample() -> None:
    with pytest.raises(InvalidInputError):
        build_parameters([], 5, ScoreTier.GOLD, TierPalette())


def test_fewer_than_seven_backgrounds_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        RenderConfig(backgrounds=BACKGROUNDS[:6])


def test_layout_with_score(render_config) -> None:
    image = ImageComposer(render_config).compose("nova9", _params(), score=550)

    assert image.svg.startswith('<svg width="500" height="500" xmlns="http://www.w3.org/2000/svg">')
    assert f'href="{BACKGROUNDS[3]}"' in image.svg
    assert '<rect x="0" y="195" height="155" width="500" fill="#111111"></rect>' in image.svg
    assert 'font-size="61px"' in image.svg
    assert ">nova9.beb</text>" in image.svg
    assert ">BEB Score: 550</text>" in image.svg
    assert image.svg.count('fill="#E3C2C0"') == 2


def test_layout_without_score_has_no_label(render_config) -> None:
    image = ImageComposer(render_config).compose("nova9", _params(tier=ScoreTier.FREE))

    assert "BEB Score" not in image.svg
    assert image.svg.count("<text") == 1


def test_text_is_escaped(render_config) -> None:
    image = ImageComposer(render_config).compose("a<b>&c", _params())

    assert "a&lt;b&gt;&amp;c.beb" in image.svg
    assert "<b>" not in image.svg


def test_empty_name_rejected(render_config) -> None:
    with pytest.raises(InvalidInputError):
        ImageComposer(render_config).compose("", _params())


def test_compose_is_deterministic(render_config) -> None:
    composer = ImageComposer(render_config)

    assert composer.compose("alice", _params(), score=700) == composer.compose("alice", _params(), score=700)


def test_data_uri_is_compact(render_config) -> None:
    image = ImageComposer(render_config).compose("nova9", _params(), score=550)

    assert image.data_uri.startswith("data:image/svg+xml,%3csvg width='500'")
    assert '"' not in image.data_uri
    assert "%23E3C2C0" in image.data_uri
    assert "base64" not in image.data_uri


def test_svg_to_data_uri_reference() -> None:
    svg = '<svg a="b">\n   x   y</svg>'

    assert svg_to_data_uri(svg) == "data:image/svg+xml,%3csvg a='b'%3e x y%3c/svg%3e"


def test_svg_to_data_uri_strips_bom() -> None:
    assert svg_to_data_uri("\ufeff<svg/>") == "data:image/svg+xml,%3csvg/%3e"
