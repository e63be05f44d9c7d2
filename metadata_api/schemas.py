from pydantic import BaseModel

class MetadataDocument(BaseModel):
    """Marketplace-facing metadata for one name. Field names are the wire contract."""
    name: str
    owner: str
    external_url: str
    description: str
    animation_url: str
    image: str
    score: int | None = None
    host: str | None = None

    def to_wire(self) -> dict:
        # `score` is always present (null allowed); `host` only when configured
        return self.model_dump(exclude={"host"} if self.host is None else set())

class HiddenDocument(BaseModel):
    """Reduced placeholder returned for moderated names."""
    name: str
    description: str

    def to_wire(self) -> dict:
        return self.model_dump()

class ErrorBody(BaseModel):
    code: str = "500"
    success: bool = False
    message: str

    def to_wire(self) -> dict:
        return self.model_dump()

class DomainRecordResponse(BaseModel):
    created: bool
    domain: str
    uri: str

    def to_wire(self) -> dict:
        return self.model_dump()
