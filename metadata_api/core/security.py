import time
from fastapi import HTTPException, Request
from starlette.status import HTTP_429_TOO_MANY_REQUESTS
from .config import settings
from .cache import cache

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

def rate_limit(request: Request):
    """
    Fixed-window limiter: RATE_LIMIT_MAX requests per RATE_LIMIT_WINDOW_SECONDS
    per client IP. Uses Redis if enabled else in-process.
    A non-positive RATE_LIMIT_MAX disables the limiter.
    """
    limit = settings.RATE_LIMIT_MAX
    if limit <= 0:
        return
    window = max(1, settings.RATE_LIMIT_WINDOW_SECONDS)
    client_ip = request.client.host if request.client else "unknown"
    bucket = int(time.time()) // window
    key = f"rate:{client_ip}:{bucket}"

    count = cache.incr(key, ttl_seconds=window * 2)
    if count > limit:
        raise HTTPException(status_code=HTTP_429_TOO_MANY_REQUESTS, detail=RATE_LIMIT_MESSAGE)
