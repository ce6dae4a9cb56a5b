import hashlib
import json
from typing import Any

def canonical_json(payload: Any) -> str:
    """
    Order-independent JSON encoding:
    - object keys sorted
    - sets/frozensets encoded as sorted lists
    - no whitespace
    """
    def _default(obj):
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=_default)

def search_cache_key(params: dict) -> str:
    """Cache key for a search; None values carry no meaning and are dropped."""
    cleaned = {k: v for k, v in params.items() if v is not None}
    return f"property_search:{canonical_json(cleaned)}"

def fnv1a_32(s: str) -> int:
    """Deterministic, fast hash for stable listing ids."""
    h = 0x811c9dc5
    for c in s.encode("utf-8"):
        h ^= c
        h = (h * 0x01000193) & 0xFFFFFFFF
    return h

def weak_etag(payload_bytes: bytes) -> str:
    """Weak ETag for client-side conditional requests."""
    h = hashlib.sha256(payload_bytes).hexdigest()[:24]
    return f'W/"{h}"'

def wire_number(value: float | None) -> float | int | None:
    """Send whole numbers as ints so upstreams see 300000, not 300000.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value

def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """Weak comparison against an If-None-Match list, honouring "*"."""
    if not if_none_match:
        return False
    def _opaque(tag: str) -> str:
        tag = tag.strip()
        return tag[2:] if tag.startswith("W/") else tag
    candidates = [c.strip() for c in if_none_match.split(",") if c.strip()]
    return "*" in candidates or _opaque(etag) in {_opaque(c) for c in candidates}
