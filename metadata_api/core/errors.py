class MetadataError(Exception):
    """
    Base for every failure the metadata pipeline reports to callers.
    The boundary renders these as an error-shaped body, never an HTTP error.
    """
    code = "500"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class InvalidInputError(MetadataError):
    """Malformed name or token id. Not retried."""

class NotFoundError(MetadataError):
    """No record or owner for the requested name."""

class ConfigurationError(MetadataError):
    """Required static assets are missing or malformed."""

class RenderError(MetadataError):
    """Image composition failed; no partial output is returned."""

class UpstreamDegradedError(MetadataError):
    """A cosmetic upstream (reputation score) failed. Absorbed, never surfaced."""
