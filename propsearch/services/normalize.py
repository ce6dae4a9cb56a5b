"""Map provider payloads onto one listing shape and summarize the market.

Every core field has a default, so a listing that omits price, photos,
bedrooms etc. still comes out fully populated.
"""

import random
import time
from statistics import median
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..core.utils import fnv1a_32
from ..data.base import MarketSummary, PropertySearchResult, StandardizedProperty

HIGH_INVENTORY_THRESHOLD = 30
MODERATE_INVENTORY_THRESHOLD = 15


def _number(value: Any, default: float = 0) -> float:
    if not value:
        return default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _optional_number(value: Any) -> Optional[float]:
    # 0 is a valid coordinate or lot size
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_year(value: Any) -> Optional[int]:
    number = _optional_number(value)
    if number is None or not float(number).is_integer():
        return None
    return int(number)


def _text(value: Any, default: str = "") -> str:
    return str(value) if value else default


def _photos(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(url) for url in value if url]


def synthesize_id(prefix: str, prop: StandardizedProperty, stable: bool = False) -> str:
    """Id for a listing the provider did not label.

    The default is unique within one result set only: the same listing gets a
    new id on every fetch. ``stable=True`` hashes address, price and sqft
    instead, so repeated fetches agree.
    """
    if stable:
        digest = fnv1a_32(f"{prop.address}|{prop.price}|{prop.sqft}")
        return f"{prefix}_{digest:08x}"
    return f"{prefix}_{int(time.time() * 1000)}_{random.random()}"


def inventory_level(count: int) -> str:
    if count > HIGH_INVENTORY_THRESHOLD:
        return "High"
    if count > MODERATE_INVENTORY_THRESHOLD:
        return "Moderate"
    return "Low"


def summarize_market(properties: List[StandardizedProperty]) -> MarketSummary:
    """Sum then divide; an empty set yields zeros and "Low"."""
    count = len(properties)
    total_price = sum(p.price for p in properties)
    total_sqft = sum(p.sqft for p in properties)
    weighted = sum(p.price * p.sqft for p in properties)
    days = [p.days_on_market for p in properties]

    return MarketSummary(
        average_price=total_price / max(count, 1),
        price_per_sqft=weighted / total_sqft if total_sqft > 0 else 0,
        median_days_on_market=median(days) if days else 0,
        inventory_level=inventory_level(count),
    )


def _listings(payload: Any) -> Iterable[Dict[str, Any]]:
    listings = payload.get("listings") if isinstance(payload, dict) else None
    if not isinstance(listings, list):
        return []
    return [item for item in listings if isinstance(item, dict)]


def _standardize(
    payload: Any,
    prefix: str,
    to_property: Callable[[Dict[str, Any]], StandardizedProperty],
    stable_ids: bool,
) -> PropertySearchResult:
    properties = []
    for listing in _listings(payload):
        prop = to_property(listing)
        if not prop.id:
            prop.id = synthesize_id(prefix, prop, stable=stable_ids)
        properties.append(prop)
    return PropertySearchResult(properties=properties, market_summary=summarize_market(properties))


def _realtymole_property(listing: Dict[str, Any]) -> StandardizedProperty:
    state_zip = " ".join(_text(listing.get(k)) for k in ("state", "zipcode") if listing.get(k))
    parts = [_text(listing.get("address")), _text(listing.get("city")), state_zip]
    return StandardizedProperty(
        id=_text(listing.get("id")),
        address=", ".join(p for p in parts if p),
        price=_number(listing.get("price")),
        sqft=_number(listing.get("sqft")),
        bedrooms=_number(listing.get("bedrooms")),
        bathrooms=_number(listing.get("bathrooms")),
        property_type=_text(listing.get("property_type"), "Single Family"),
        days_on_market=_number(listing.get("days_on_market")),
        photos=_photos(listing.get("photos")),
        description=_text(listing.get("description")),
        status=_text(listing.get("status"), "active"),
        mls_id=_text(listing.get("mls_id")) or None,
        lot_size=_optional_number(listing.get("lot_size")),
        year_built=_optional_year(listing.get("year_built")),
        latitude=_optional_number(listing.get("latitude")),
        longitude=_optional_number(listing.get("longitude")),
    )


def _rentspree_property(listing: Dict[str, Any]) -> StandardizedProperty:
    # Rentals report "rent" where sales listings report "price"
    return StandardizedProperty(
        id=_text(listing.get("id")),
        address=_text(listing.get("full_address") or listing.get("address")),
        price=_number(listing.get("rent") or listing.get("price")),
        sqft=_number(listing.get("square_feet")),
        bedrooms=_number(listing.get("bedrooms")),
        bathrooms=_number(listing.get("bathrooms")),
        property_type=_text(listing.get("property_type"), "Single Family"),
        days_on_market=_number(listing.get("days_on_market")),
        photos=_photos(listing.get("photos")),
        description=_text(listing.get("description")),
        status=_text(listing.get("status"), "active"),
        latitude=_optional_number(listing.get("latitude")),
        longitude=_optional_number(listing.get("longitude")),
    )


def standardize_realtymole(payload: Any, stable_ids: bool = False) -> PropertySearchResult:
    return _standardize(payload, "rm", _realtymole_property, stable_ids)


def standardize_rentspree(payload: Any, stable_ids: bool = False) -> PropertySearchResult:
    return _standardize(payload, "rs", _rentspree_property, stable_ids)
