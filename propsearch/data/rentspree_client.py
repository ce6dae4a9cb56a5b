import httpx

from .base import ListingProvider, PropertySearchResult
from ..core.config import Settings, settings as default_settings
from ..core.errors import ProviderConfigurationError, UpstreamError
from ..core.utils import wire_number
from ..schemas import SearchParams
from ..services.normalize import standardize_rentspree

class RentSpreeClient(ListingProvider):
    """
    Fallback listings source. POST /listings with a JSON filter body, bearer auth.
    """
    name = "rentspree"

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        limit: int = 50,
        stable_ids: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.limit = limit
        self.stable_ids = stable_ids
        self.transport = transport

    def _body(self, params: SearchParams) -> dict:
        body = {"location": params.zip_code, "limit": self.limit}
        optional = {
            "price_min": params.min_price,
            "price_max": params.max_price,
            "size_min": params.min_sqft,
            "size_max": params.max_sqft,
        }
        body.update({k: wire_number(v) for k, v in optional.items() if v is not None})
        return body

    async def fetch(self, params: SearchParams) -> PropertySearchResult:
        if not self.api_key:
            raise ProviderConfigurationError("RentSpree API key not configured", provider=self.name)

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                r = await client.post(
                    f"{self.base_url}/listings",
                    json=self._body(params),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"RentSpree request failed: {exc}", provider=self.name) from exc

        if not r.is_success:
            raise UpstreamError(
                f"RentSpree API error: {r.status_code}", provider=self.name, status_code=r.status_code
            )
        try:
            data = r.json()
        except ValueError as exc:
            raise UpstreamError(
                "RentSpree returned malformed JSON", provider=self.name, status_code=r.status_code
            ) from exc
        return standardize_rentspree(data, stable_ids=self.stable_ids)

def rentspree_client(cfg: Settings = default_settings, **kwargs) -> RentSpreeClient:
    return RentSpreeClient(
        api_key=cfg.RENTSPREE_API_KEY,
        base_url=cfg.RENTSPREE_BASE_URL,
        limit=cfg.RENTSPREE_LIMIT,
        stable_ids=cfg.STABLE_LISTING_IDS,
        **kwargs,
    )
