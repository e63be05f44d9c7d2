from typing import Optional
from .base import NameRecord, NameRecordStore
from ..core.cache import Cache
from ..core.utils import keccak_hex

class CachedRecordStore(NameRecordStore):
    """
    NameRecords keyed by canonical uri on top of the Cache abstraction
    (Redis or in-process). Records never expire and are written set-if-absent,
    so there is exactly one record per raw name.
    """
    def __init__(self, cache: Cache | None = None):
        self.cache = cache or Cache(ttl_seconds=None)

    @staticmethod
    def _key(canonical_uri: str) -> str:
        return f"name-record:{canonical_uri}"

    def get_by_uri(self, canonical_uri: str) -> Optional[NameRecord]:
        raw_name = self.cache.get(self._key(canonical_uri))
        if raw_name is None:
            return None
        return NameRecord(raw_name=raw_name, canonical_uri=canonical_uri)

    def get_or_create(self, raw_name: str) -> tuple[NameRecord, bool]:
        uri = keccak_hex(raw_name)
        created = self.cache.add(self._key(uri), raw_name)
        if not created:
            # Someone (maybe a concurrent request) already owns this uri
            raw_name = self.cache.get(self._key(uri)) or raw_name
        return NameRecord(raw_name=raw_name, canonical_uri=uri), created
