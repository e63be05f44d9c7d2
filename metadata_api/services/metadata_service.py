import asyncio
import logging
from enum import Enum
from typing import Optional, Union

from ..core.config import Settings, settings as default_settings
from ..core.errors import (
    InvalidInputError,
    MetadataError,
    NotFoundError,
    RenderError,
)
from ..core.metrics import RENDER_COUNT, SCORE_DEGRADED
from ..core.utils import token_uri
from ..data.base import (
    ModerationClassifier,
    NameRecord,
    NameRecordStore,
    NameResolver,
    ReputationClient,
)
from ..data.moderation_client import moderation_client
from ..data.record_store import CachedRecordStore
from ..data.reputation_client import reputation_client
from ..data.resolver_client import resolver_client
from ..render.composer import ImageComposer, RenderConfig, build_parameters
from ..render.seed import SeedGenerator, SeedSource
from ..render.tier import display_length, map_tier
from ..schemas import DomainRecordResponse, ErrorBody, HiddenDocument, MetadataDocument

logger = logging.getLogger(__name__)

SEED_SAMPLES = 7
MAX_DOMAIN_LENGTH = 32

Document = Union[MetadataDocument, HiddenDocument]

class Stage(str, Enum):
    RESOLVING_NAME = "resolving_name"
    RESOLVING_SCORE = "resolving_score"
    RENDERING = "rendering"
    APPLYING_MODERATION = "applying_moderation"
    DONE = "done"
    FAILED = "failed"

def moderate(document: Document, disallowed: bool, suffix: str, description: str) -> Document:
    """Swap a flagged document for the reduced placeholder. Idempotent."""
    if not disallowed:
        return document
    return HiddenDocument(name=f"hidden_domain.{suffix}", description=description)

def error_body(exc: Exception) -> ErrorBody:
    if isinstance(exc, MetadataError):
        return ErrorBody(code=exc.code, message=exc.message)
    return ErrorBody(message=str(exc) or exc.__class__.__name__)

class MetadataAssembler:
    """
    Orchestrates:
      token id → name record → owner → seed → score → tier → image → moderation
    Every step but the owner and score lookups is a pure function of its inputs,
    so identical upstream state yields byte-identical documents. No state is
    kept between calls; one instance is safe to share across requests.
    """
    def __init__(
        self,
        records: NameRecordStore,
        resolver: NameResolver,
        reputation: ReputationClient,
        moderation: ModerationClassifier,
        render_config: RenderConfig,
        settings: Settings = default_settings,
        seeds: Optional[SeedSource] = None,
    ):
        self.records = records
        self.resolver = resolver
        self.reputation = reputation
        self.moderation = moderation
        self.render_config = render_config
        self.composer = ImageComposer(render_config)
        self.settings = settings
        self.seeds = seeds or SeedGenerator()

    def _enter(self, stage: Stage, token_id: str) -> Stage:
        logger.debug("metadata %s", token_id, extra={"stage": stage.value})
        return stage

    async def _resolve(self, uri: str) -> tuple[NameRecord, str]:
        record = self.records.get_by_uri(uri)
        if record is None:
            raise NotFoundError("Domain does not exist!")
        owner = await asyncio.wait_for(
            self.resolver.get_owner(record.raw_name), timeout=self.settings.UPSTREAM_TIMEOUT_SECONDS
        )
        if not owner:
            raise NotFoundError("Domain does not exist!")
        return record, owner

    async def _score(self, owner: str) -> Optional[int]:
        # Score is cosmetic: any upstream problem degrades to no score.
        try:
            result = await asyncio.wait_for(
                self.reputation.get_score(owner), timeout=self.settings.UPSTREAM_TIMEOUT_SECONDS
            )
        except asyncio.TimeoutError:
            SCORE_DEGRADED.inc()
            logger.warning("Could not get score data for %s: timeout", owner)
            return None
        except Exception as exc:
            # UpstreamDegradedError from our clients, or anything a custom client lets escape
            SCORE_DEGRADED.inc()
            logger.warning("Could not get score data for %s: %s", owner, str(exc) or exc.__class__.__name__)
            return None
        return result.score

    def _render(self, record: NameRecord, owner: str, score: Optional[int], token_id: str) -> MetadataDocument:
        name = record.raw_name
        try:
            samples = self.seeds.derive(name, SEED_SAMPLES)
            length = display_length(name)
            tier = map_tier(score, length)
            params = build_parameters(samples, length, tier, self.render_config.palette)
            image = self.composer.compose(name, params, score=score)
        except Exception as exc:
            raise RenderError(f"could not render {name!r}: {exc}") from exc

        domain = f"{name}.{self.render_config.suffix}"
        return MetadataDocument(
            name=domain,
            owner=owner,
            external_url=self.settings.EXTERNAL_URL_TEMPLATE.format(name=name, domain=domain),
            description=self.settings.DESCRIPTION_TEMPLATE.format(name=name, domain=domain),
            animation_url=self.settings.ANIMATION_URL_TEMPLATE.format(token_id=token_id, uri=record.canonical_uri),
            image=image.data_uri,
            score=score,
            host=self.settings.HOST_URL,
        )

    async def assemble(self, token_id: str) -> Document:
        """Run the pipeline; raises MetadataError subclasses on failure."""
        stage = Stage.RESOLVING_NAME
        try:
            self._enter(stage, token_id)
            if not token_id or not token_id.strip():
                raise InvalidInputError("uri invalid!")
            try:
                uri = token_uri(token_id)
            except ValueError as exc:
                raise InvalidInputError(f"uri invalid! {exc}") from exc
            record, owner = await self._resolve(uri)

            stage = self._enter(Stage.RESOLVING_SCORE, token_id)
            score = await self._score(owner)

            stage = self._enter(Stage.RENDERING, token_id)
            document: Document = self._render(record, owner, score, token_id)

            stage = self._enter(Stage.APPLYING_MODERATION, token_id)
            if self.settings.moderation_enabled:
                disallowed = await self.moderation.is_disallowed(record.raw_name)
                document = moderate(
                    document, disallowed, self.render_config.suffix, self.settings.HIDDEN_DESCRIPTION
                )
        except MetadataError as exc:
            self._enter(Stage.FAILED, token_id)
            logger.warning("metadata for %s failed at %s: %s", token_id, stage.value, exc.message)
            RENDER_COUNT.labels(outcome="error").inc()
            raise
        except Exception:
            self._enter(Stage.FAILED, token_id)
            logger.exception("metadata synthesis crashed at %s for %s", stage.value, token_id)
            RENDER_COUNT.labels(outcome="error").inc()
            raise

        self._enter(Stage.DONE, token_id)
        RENDER_COUNT.labels(outcome="hidden" if isinstance(document, HiddenDocument) else "ok").inc()
        return document

    async def metadata_for_token(self, token_id: str) -> Union[Document, ErrorBody]:
        """Result handed to the HTTP boundary: a document or an error-shaped body."""
        try:
            return await self.assemble(token_id)
        except Exception as exc:
            return error_body(exc)

def validate_domain(input_domain: str, suffix: str) -> str:
    """
    Accepts `label` or `label.<suffix>` (lowercase, 1-32 chars, no other dots)
    and returns the bare label.
    """
    if not input_domain or len(input_domain) > MAX_DOMAIN_LENGTH or input_domain.lower() != input_domain:
        raise InvalidInputError("inputDomain invalid!")
    ext = f".{suffix}"
    if ext in input_domain:
        if input_domain.count(".") != 1:
            raise InvalidInputError("inputDomain cannot contain subdomains!")
        if not input_domain.endswith(ext):
            raise InvalidInputError("inputDomain extension incorrect!")
        raw = input_domain[: -len(ext)]
    elif "." in input_domain:
        raise InvalidInputError("inputDomain does not have correct extension!")
    else:
        raw = input_domain
    if not raw:
        raise InvalidInputError("inputDomain invalid!")
    return raw

class DomainRegistry:
    """Looks up or creates the NameRecord behind a human-readable domain."""
    def __init__(self, records: NameRecordStore, suffix: str):
        self.records = records
        self.suffix = suffix

    def register(self, input_domain: str) -> DomainRecordResponse:
        raw = validate_domain(input_domain, self.suffix)
        record, created = self.records.get_or_create(raw)
        if created:
            logger.info("created name record %s -> %s", record.raw_name, record.canonical_uri)
        return DomainRecordResponse(created=created, domain=record.raw_name, uri=record.canonical_uri)

    def lookup_or_create(self, input_domain: str) -> Union[DomainRecordResponse, ErrorBody]:
        try:
            return self.register(input_domain)
        except MetadataError as exc:
            logger.warning("domain rejected %r: %s", input_domain, exc.message)
            return error_body(exc)
        except Exception as exc:
            logger.exception("domain record lookup failed for %r", input_domain)
            return error_body(exc)

def build_assembler(records: NameRecordStore, settings: Settings = default_settings) -> MetadataAssembler:
    """Wire the assembler from env-selected providers."""
    return MetadataAssembler(
        records=records,
        resolver=resolver_client(),
        reputation=reputation_client(),
        moderation=moderation_client(),
        render_config=RenderConfig.from_settings(settings),
        settings=settings,
    )

def default_record_store() -> CachedRecordStore:
    return CachedRecordStore()
