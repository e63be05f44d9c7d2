"""Score → tier mapping and display length."""

from __future__ import annotations

import pytest

from metadata_api.core.errors import InvalidInputError
from metadata_api.render.tier import (
    DEFAULT_COLORS,
    ScoreTier,
    TierPalette,
    display_length,
    map_tier,
)

ORDER = [ScoreTier.FREE, ScoreTier.GOLD, ScoreTier.PLATINUM, ScoreTier.NOVA]


@pytest.mark.parametrize(
    "score,expected",
    [
        (None, ScoreTier.FREE),
        (1, ScoreTier.GOLD),
        (500, ScoreTier.GOLD),
        (501, ScoreTier.PLATINUM),
        (550, ScoreTier.PLATINUM),
        (650, ScoreTier.PLATINUM),
        (651, ScoreTier.NOVA),
        (900, ScoreTier.NOVA),
    ],
)
def test_short_name_thresholds(score, expected) -> None:
    assert map_tier(score, 5) is expected


@pytest.mark.parametrize("length", [10, 11, 32, 64])
@pytest.mark.parametrize("score", [None, 100, 550, 700])
def test_long_names_always_free(score, length) -> None:
    assert map_tier(score, length) is ScoreTier.FREE


def test_tiers_never_drop_as_score_rises() -> None:
    ranks = [ORDER.index(map_tier(score, 9)) for score in range(0, 651)]

    assert ranks == sorted(ranks)


def test_display_length_counts_code_points() -> None:
    assert display_length("nova9") == 5
    assert display_length("🚀") == 2  # one code point, non-ASCII → doubled


def test_non_ascii_names_are_doubled() -> None:
    assert display_length("café") == 8
    assert display_length("名前") == 4
    # Five CJK characters already hit the long-name tier
    assert map_tier(700, display_length("名前名前名")) is ScoreTier.FREE


@pytest.mark.parametrize("score,length", [("550", 5), (5.5, 5), (True, 5), (550, -1)])
def test_rejects_bad_types(score, length) -> None:
    with pytest.raises(InvalidInputError):
        map_tier(score, length)


def test_palette_colors() -> None:
    palette = TierPalette()

    assert palette.color_for(ScoreTier.FREE) == "#5C9135"
    assert palette.color_for(ScoreTier.PLATINUM) == "#E3C2C0"
    with pytest.raises(TypeError):
        DEFAULT_COLORS[ScoreTier.NOVA] = "#000"  # read-only configuration
