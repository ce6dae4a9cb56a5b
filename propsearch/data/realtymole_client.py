import httpx

from .base import ListingProvider, PropertySearchResult
from ..core.config import Settings, settings as default_settings
from ..core.errors import ProviderConfigurationError, UpstreamError
from ..core.utils import wire_number
from ..schemas import SearchParams
from ..services.normalize import standardize_realtymole

class RealtyMoleClient(ListingProvider):
    """
    Primary listings source. GET /listings with query filters, key in X-API-Key.
    """
    name = "realtymole"

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        stable_ids: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.stable_ids = stable_ids
        self.transport = transport

    def _query(self, params: SearchParams) -> dict:
        query = {"zipcode": params.zip_code}
        optional = {
            "price_min": params.min_price,
            "price_max": params.max_price,
            "sqft_min": params.min_sqft,
            "sqft_max": params.max_sqft,
        }
        query.update({k: wire_number(v) for k, v in optional.items() if v is not None})
        return query

    async def fetch(self, params: SearchParams) -> PropertySearchResult:
        if not self.api_key:
            raise ProviderConfigurationError("RealtyMole API key not configured", provider=self.name)

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                r = await client.get(
                    f"{self.base_url}/listings",
                    params=self._query(params),
                    headers={"X-API-Key": self.api_key, "Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"RealtyMole request failed: {exc}", provider=self.name) from exc

        if not r.is_success:
            raise UpstreamError(
                f"RealtyMole API error: {r.status_code}", provider=self.name, status_code=r.status_code
            )
        try:
            data = r.json()
        except ValueError as exc:
            raise UpstreamError(
                "RealtyMole returned malformed JSON", provider=self.name, status_code=r.status_code
            ) from exc
        return standardize_realtymole(data, stable_ids=self.stable_ids)

def realtymole_client(cfg: Settings = default_settings, **kwargs) -> RealtyMoleClient:
    return RealtyMoleClient(
        api_key=cfg.REALTYMOLE_API_KEY,
        base_url=cfg.REALTYMOLE_BASE_URL,
        stable_ids=cfg.STABLE_LISTING_IDS,
        **kwargs,
    )
