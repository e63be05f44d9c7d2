import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    MODE: str = os.getenv("MODE", "hosted")  # hosted | self-hosted (self-hosted disables moderation)
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "43200"))

    # Naming & document text
    DOMAIN_SUFFIX: str = os.getenv("DOMAIN_SUFFIX", "beb")
    EXTERNAL_URL_TEMPLATE: str = os.getenv("EXTERNAL_URL_TEMPLATE", "https://{name}.beb.xyz")
    ANIMATION_URL_TEMPLATE: str = os.getenv("ANIMATION_URL_TEMPLATE", "https://beb.domains/metadata/{token_id}")
    DESCRIPTION_TEMPLATE: str = os.getenv(
        "DESCRIPTION_TEMPLATE",
        "{domain} was registered on beb.domains! Learn about BEB Scores at: beb.xyz/reputation",
    )
    HIDDEN_DESCRIPTION: str = os.getenv(
        "HIDDEN_DESCRIPTION",
        "This domain is hidden, see beb.xyz/guidelines for more details!",
    )
    HOST_URL: str | None = os.getenv("HOST_URL")  # optional "host" field on documents
    SCORE_LABEL: str = os.getenv("SCORE_LABEL", "BEB Score")

    # Render assets (seven background layers, comma-separated references)
    BACKGROUND_ASSETS: str | None = os.getenv("BACKGROUND_ASSETS")
    BACKGROUND_ASSET_BASE_URL: str = os.getenv("BACKGROUND_ASSET_BASE_URL", "https://beb.domains/assets/metadata")

    # Data providers
    RESOLVER_PROVIDER: str = os.getenv("RESOLVER_PROVIDER", "mock")        # mock | http
    RESOLVER_BASE_URL: str | None = os.getenv("RESOLVER_BASE_URL")
    SCORE_PROVIDER: str = os.getenv("SCORE_PROVIDER", "mock")              # mock | http
    SCORE_BASE_URL: str | None = os.getenv("SCORE_BASE_URL")
    MODERATION_PROVIDER: str = os.getenv("MODERATION_PROVIDER", "wordlist")  # wordlist | http
    MODERATION_BASE_URL: str | None = os.getenv("MODERATION_BASE_URL")
    MODERATION_BLOCKLIST: str = os.getenv("MODERATION_BLOCKLIST", "")
    UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "3"))

    # Rate limiting (per client IP)
    RATE_LIMIT_MAX: int = int(os.getenv("RATE_LIMIT_MAX", "1"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "1"))

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Cache / record store
    USE_REDIS: bool = os.getenv("USE_REDIS", "false").lower() == "true"
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

    @property
    def moderation_enabled(self) -> bool:
        return self.MODE != "self-hosted"

    def background_assets(self) -> list[str]:
        if self.BACKGROUND_ASSETS:
            return [a.strip() for a in self.BACKGROUND_ASSETS.split(",") if a.strip()]
        base = self.BACKGROUND_ASSET_BASE_URL.rstrip("/")
        return [f"{base}/planet{i}.png" for i in range(1, 8)]

settings = Settings()
