from fastapi import Header, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_429_TOO_MANY_REQUESTS
from datetime import datetime, timezone
from cachetools import TTLCache
from .config import settings

try:
    import redis  # Optional dependency
except ImportError:
    redis = None

class RateCounter:
    """
    Per-minute request counters. Redis when enabled (shared across workers),
    otherwise in-process.
    """
    def __init__(self):
        self.backend = None
        self._local = TTLCache(maxsize=10_000, ttl=60)
        if settings.USE_REDIS and redis is not None:
            self.backend = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)

    def incr(self, key: str) -> int:
        if self.backend:
            # INCR + EXPIRE is atomic enough for a minute bucket
            count = self.backend.incr(key)
            if count == 1:
                self.backend.expire(key, 60)
            return int(count)
        count = self._local.get(key, 0) + 1
        self._local[key] = count
        return count

    def reset(self) -> None:
        self._local.clear()

counter = RateCounter()

def require_api_key(x_api_key: str | None = Header(default=None, alias="x-api-key")):
    """
    Simple header-based API key check.
    """
    if not settings.API_KEY:
        # If unset, we allow requests (dev convenience).
        return
    if x_api_key != settings.API_KEY:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid API key")

def rate_limit(request: Request):
    """
    Basic RPM limiter.
    Keyed by API key (if present) or client IP to discourage abuse.
    """
    rpm = max(1, settings.RATE_LIMIT_RPM)
    client_ip = request.client.host if request.client else "unknown"
    api_key = request.headers.get("x-api-key") or "anon"
    minute_bucket = datetime.now(timezone.utc).strftime("%Y%m%d%H%M")
    key = f"rate:{api_key}:{client_ip}:{minute_bucket}"

    if counter.incr(key) > rpm:
        raise HTTPException(status_code=HTTP_429_TOO_MANY_REQUESTS, detail="Rate limit exceeded")
