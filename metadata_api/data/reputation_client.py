from urllib.parse import quote
from .base import ReputationClient, ScoreResult
from ..core.config import settings
from ..core.errors import UpstreamDegradedError
from ..core.utils import fnv1a_32, seeded_rand
import httpx

def parse_score(raw) -> int | None:
    """
    Scores arrive as ints or numeric strings. Missing, zero and
    unparseable values all mean "no score".
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        score = int(str(raw).strip().split(".")[0])
    except ValueError:
        return None
    return score or None

class MockReputation(ReputationClient):
    """
    Synthetic score in 300..850 seeded by the address. Plausible but fake.
    """
    async def get_score(self, address: str) -> ScoreResult:
        seed = fnv1a_32(address.lower())
        return ScoreResult(address=address, score=300 + int(seeded_rand(seed, 1)[0] * 551))

class HttpReputation(ReputationClient):
    """
    Client for the reputation score API.
    GET {base}/score/{address}?nft=true -> {"score": 612}
    """
    def __init__(self, base_url: str, timeout: float = 3.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport  # injectable for tests

    async def get_score(self, address: str) -> ScoreResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(f"{self.base_url}/score/{quote(address, safe='')}", params={"nft": "true"})
                r.raise_for_status()
                body = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamDegradedError(f"score fetch failed for {address}: {exc}") from exc
        if not isinstance(body, dict):
            raise UpstreamDegradedError(f"malformed score payload for {address}")
        return ScoreResult(address=address, score=parse_score(body.get("score")))

def reputation_client() -> ReputationClient:
    if settings.SCORE_PROVIDER == "http" and settings.SCORE_BASE_URL:
        return HttpReputation(settings.SCORE_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT_SECONDS)
    return MockReputation()
