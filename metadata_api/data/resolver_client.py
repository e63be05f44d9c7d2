from urllib.parse import quote
from typing import Optional
from .base import NameResolver
from ..core.config import settings
from ..core.utils import keccak_hex
import httpx

class MockResolver(NameResolver):
    """
    Mock ownership lookup. Every name resolves to a stable synthetic
    address derived from its hash, unless `owners` pins it (None = unregistered).
    Entirely deterministic and free of external dependencies.
    """
    def __init__(self, owners: dict[str, Optional[str]] | None = None):
        self.owners = dict(owners or {})

    async def get_owner(self, name: str) -> Optional[str]:
        if name in self.owners:
            return self.owners[name]
        return "0x" + keccak_hex(f"owner:{name}")[-40:]

class HttpResolver(NameResolver):
    """
    Client for the registrar/ownership service.
    Expects GET {base}/owner/{name} -> {"owner": "0x..." | null}.
    """
    def __init__(self, base_url: str, timeout: float = 3.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport  # injectable for tests

    async def get_owner(self, name: str) -> Optional[str]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.get(f"{self.base_url}/owner/{quote(name, safe='')}")
            if r.status_code == 404:
                return None
            r.raise_for_status()
            return r.json().get("owner") or None

def resolver_client() -> NameResolver:
    """
    Factory picks mock or http based on env flags.
    """
    if settings.RESOLVER_PROVIDER == "http" and settings.RESOLVER_BASE_URL:
        return HttpResolver(settings.RESOLVER_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT_SECONDS)
    return MockResolver()
