from typing import Protocol, Optional
from dataclasses import dataclass

# ----- Data shapes (thin & explicit) -----

@dataclass(frozen=True)
class NameRecord:
    raw_name: str          # e.g. "alice" (no suffix)
    canonical_uri: str     # keccak256(raw_name) as 0x + 64 hex, the token id

@dataclass(frozen=True)
class ScoreResult:
    address: str
    score: Optional[int] = None  # None when the upstream has no usable score

# ----- Protocols (interfaces) -----

class NameResolver(Protocol):
    async def get_owner(self, name: str) -> Optional[str]: ...

class ReputationClient(Protocol):
    # Raises UpstreamDegradedError on network or payload problems.
    async def get_score(self, address: str) -> ScoreResult: ...

class ModerationClassifier(Protocol):
    async def is_disallowed(self, name: str) -> bool: ...

class NameRecordStore(Protocol):
    def get_by_uri(self, canonical_uri: str) -> Optional[NameRecord]: ...
    def get_or_create(self, raw_name: str) -> tuple[NameRecord, bool]: ...
