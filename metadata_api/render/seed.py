from typing import Protocol
from ..core.errors import InvalidInputError
from ..core.utils import fnv1a_32, seeded_rand

DEFAULT_UPPER_BOUND = 300

class SeedSource(Protocol):
    def derive(self, raw_name: str, count: int, upper_bound: int = DEFAULT_UPPER_BOUND) -> tuple[float, ...]: ...

class SeedGenerator(SeedSource):
    """
    Reproducible samples in [0, upper_bound) for a name.

    The hash and generator are pinned here rather than borrowed from a
    library default: changing either silently changes every image already
    minted, so `algorithm` must only ever change together with a migration.
    """
    algorithm = "fnv1a32+mulberry32/v1"

    def derive(self, raw_name: str, count: int, upper_bound: int = DEFAULT_UPPER_BOUND) -> tuple[float, ...]:
        if not raw_name:
            raise InvalidInputError("name must not be empty")
        if count < 1:
            raise InvalidInputError("count must be positive")
        if upper_bound <= 0:
            raise InvalidInputError("upper_bound must be positive")
        samples = seeded_rand(fnv1a_32(raw_name), count)
        return tuple(s * upper_bound for s in samples)
