from functools import lru_cache
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from ..core.config import settings
from ..core.security import rate_limit
from ..data.record_store import CachedRecordStore
from ..services.metadata_service import (
    DomainRegistry,
    MetadataAssembler,
    build_assembler,
    default_record_store,
)

router = APIRouter(dependencies=[Depends(rate_limit)])

# Built once: render config and clients are read-only and shared by all requests.
@lru_cache(maxsize=1)
def record_store_dep() -> CachedRecordStore:
    return default_record_store()

@lru_cache(maxsize=1)
def assembler_dep() -> MetadataAssembler:
    return build_assembler(record_store_dep(), settings)

def registry_dep() -> DomainRegistry:
    return DomainRegistry(record_store_dep(), settings.DOMAIN_SUFFIX)

# Both routes answer 200 even on failure; callers inspect `success`/`code`.

@router.get("/uri/{token_id}")
async def get_token_metadata(token_id: str, svc: MetadataAssembler = Depends(assembler_dep)):
    result = await svc.metadata_for_token(token_id)
    return JSONResponse(content=result.to_wire())

@router.get("/domain/{domain}")
def get_domain_record(domain: str, registry: DomainRegistry = Depends(registry_dep)):
    result = registry.lookup_or_create(domain)
    return JSONResponse(content=result.to_wire())
