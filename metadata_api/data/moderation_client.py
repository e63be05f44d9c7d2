from typing import Iterable
from .base import ModerationClassifier
from ..core.config import settings
import httpx

class WordListModeration(ModerationClassifier):
    """
    Flags a name when any blocked term appears in it (case-insensitive substring).
    The term list itself is deployment configuration.
    """
    def __init__(self, blocked_terms: Iterable[str] = ()):
        self.blocked_terms = frozenset(t.strip().lower() for t in blocked_terms if t.strip())

    async def is_disallowed(self, name: str) -> bool:
        lowered = name.lower()
        return any(term in lowered for term in self.blocked_terms)

class HttpModeration(ModerationClassifier):
    """
    Delegates to an external classifier.
    GET {base}/classify?name=... -> {"disallowed": true|false}
    """
    def __init__(self, base_url: str, timeout: float = 3.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport  # injectable for tests

    async def is_disallowed(self, name: str) -> bool:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.get(f"{self.base_url}/classify", params={"name": name})
            r.raise_for_status()
            return bool(r.json().get("disallowed", False))

def moderation_client() -> ModerationClassifier:
    if settings.MODERATION_PROVIDER == "http" and settings.MODERATION_BASE_URL:
        return HttpModeration(settings.MODERATION_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT_SECONDS)
    return WordListModeration(settings.MODERATION_BLOCKLIST.split(","))
