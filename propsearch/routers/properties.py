import json

from fastapi import APIRouter, Depends, Header, HTTPException, Response, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from ..schemas import SearchParams, PropertySearchResponse
from ..services.property_search_service import PropertySearchService
from ..core.errors import ProvidersUnavailableError
from ..core.security import require_api_key, rate_limit
from ..core.utils import etag_matches, weak_etag

router = APIRouter()

def service_dep(request: Request) -> PropertySearchService:
    # Built once in create_app so every request shares the same cache
    return request.app.state.property_search

async def _search(svc: PropertySearchService, params: SearchParams, response: Response, if_none_match: str | None):
    try:
        result, from_cache = await svc.lookup(params)
    except ProvidersUnavailableError as exc:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)

    payload = result.to_dict()
    etag = weak_etag(json.dumps(payload, separators=(',',':')).encode("utf-8"))
    if etag_matches(if_none_match, etag):
        return Response(status_code=304, headers={"ETag": etag})
    payload["cached"] = from_cache
    payload["etag"] = etag
    response.headers["ETag"] = etag
    return payload

@router.post("/search-properties", response_model=PropertySearchResponse, response_model_exclude_none=True)
async def post_search_properties(
    body: SearchParams,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="if-none-match"),
    _auth = Depends(require_api_key),     # API key guard
    _lim  = Depends(rate_limit),          # Rate limiting
    svc: PropertySearchService = Depends(service_dep),
):
    return await _search(svc, body, response, if_none_match)

@router.get("/properties", response_model=PropertySearchResponse, response_model_exclude_none=True)
async def get_properties(
    response: Response,
    zip_code: str = Query(..., alias="zipCode"),
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
    min_sqft: float | None = Query(default=None, alias="minSqft"),
    max_sqft: float | None = Query(default=None, alias="maxSqft"),
    max_days_on_market: int | None = Query(default=None, alias="maxDaysOnMarket"),
    property_types: list[str] | None = Query(default=None, alias="propertyTypes"),
    renovation_potential: str | None = Query(default=None, alias="renovationPotential"),
    if_none_match: str | None = Header(default=None, alias="if-none-match"),
    _auth = Depends(require_api_key),
    _lim  = Depends(rate_limit),
    svc: PropertySearchService = Depends(service_dep),
):
    try:
        params = SearchParams(
            zip_code=zip_code,
            min_price=min_price,
            max_price=max_price,
            min_sqft=min_sqft,
            max_sqft=max_sqft,
            max_days_on_market=max_days_on_market,
            property_types=frozenset(property_types) if property_types else None,
            renovation_potential=renovation_potential,
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False, include_context=False))
    return await _search(svc, params, response, if_none_match)
