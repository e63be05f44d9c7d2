from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional
from ..core.errors import InvalidInputError
from ..core.utils import is_ascii

class ScoreTier(str, Enum):
    FREE = "free"
    GOLD = "gold"
    PLATINUM = "platinum"
    NOVA = "nova"

DEFAULT_COLORS = MappingProxyType({
    ScoreTier.FREE: "#5C9135",
    ScoreTier.GOLD: "#D4AF37",
    ScoreTier.PLATINUM: "#E3C2C0",
    ScoreTier.NOVA: "#fff",
})

# Names this long (in display units) always render in the baseline tier
LONG_NAME_LENGTH = 10

@dataclass(frozen=True)
class TierPalette:
    colors: Mapping[ScoreTier, str] = field(default_factory=lambda: DEFAULT_COLORS)

    def color_for(self, tier: ScoreTier) -> str:
        return self.colors[tier]

def display_length(name: str) -> int:
    """
    Code points, doubled when any code point is non-ASCII.
    The doubling shrinks the font for non-Latin scripts and also pushes them
    into the long-name tier sooner; kept as-is pending product review.
    """
    length = len(name)
    if not is_ascii(name):
        length *= 2
    return length

def map_tier(score: Optional[int], display_len: int) -> ScoreTier:
    if score is not None and (isinstance(score, bool) or not isinstance(score, int)):
        raise InvalidInputError(f"score must be an int or None, got {type(score).__name__}")
    if isinstance(display_len, bool) or not isinstance(display_len, int) or display_len < 0:
        raise InvalidInputError("display length must be a non-negative int")

    if score is None or display_len >= LONG_NAME_LENGTH:
        return ScoreTier.FREE
    if score <= 500:
        return ScoreTier.GOLD
    if score <= 650:
        return ScoreTier.PLATINUM
    return ScoreTier.NOVA
