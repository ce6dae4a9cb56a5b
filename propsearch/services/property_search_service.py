import logging
from typing import List, Sequence, Tuple

from ..core.cache import PropertyCache
from ..core.config import Settings, settings as default_settings
from ..core.errors import ProvidersUnavailableError
from ..core.metrics import CACHE_LOOKUPS, PROVIDER_REQUESTS
from ..core.utils import search_cache_key
from ..data.base import ListingProvider, PropertySearchResult
from ..data.realtymole_client import realtymole_client
from ..data.rentspree_client import rentspree_client
from ..schemas import SearchParams

logger = logging.getLogger(__name__)

class PropertySearchService:
    """
    Orchestrates:
      params → cache key → cache hit? → provider[0] → provider[1] → ... → cache + return

    Providers are tried strictly one after another in priority order; a later
    provider is only called when every earlier one failed. Any provider
    failure (missing key, bad status, bad body, network) moves on to the next.
    When all fail the caller gets ProvidersUnavailableError and nothing is cached.
    """
    def __init__(self, providers: Sequence[ListingProvider], cache: PropertyCache):
        if not providers:
            raise ValueError("at least one listing provider is required")
        self.providers = list(providers)
        self.cache = cache

    @classmethod
    def from_settings(cls, cfg: Settings = default_settings) -> "PropertySearchService":
        return cls(
            providers=[realtymole_client(cfg), rentspree_client(cfg)],
            cache=PropertyCache(ttl_seconds=cfg.CACHE_TTL_SECONDS),
        )

    async def search_properties(self, params: SearchParams) -> PropertySearchResult:
        result, _ = await self.lookup(params)
        return result

    async def lookup(self, params: SearchParams) -> Tuple[PropertySearchResult, bool]:
        """Same as search_properties, also reporting whether the cache answered."""
        cache_key = search_cache_key(params.cache_fields())
        cached = self.cache.get(cache_key)
        if cached is not None:
            CACHE_LOOKUPS.labels(result="hit").inc()
            return cached, True
        CACHE_LOOKUPS.labels(result="miss").inc()

        failures: List[Tuple[str, Exception]] = []
        for provider in self.providers:
            try:
                result = await provider.fetch(params)
            except Exception as exc:
                PROVIDER_REQUESTS.labels(provider=provider.name, outcome="failure").inc()
                logger.warning("Listing provider %s failed: %s", provider.name, exc)
                failures.append((provider.name, exc))
                continue
            PROVIDER_REQUESTS.labels(provider=provider.name, outcome="success").inc()
            logger.info(
                "Listing provider %s returned %d properties for %s",
                provider.name, result.total_count, params.zip_code,
            )
            self.cache.set(cache_key, result)
            return result, False

        logger.error("All listing providers failed for %s", params.zip_code)
        raise ProvidersUnavailableError(failures)
